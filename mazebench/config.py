"""
Mazebench Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

GENERATOR_SCHEMES = ("corridor", "trap_removal")


class Config:
    """Benchmark configuration loaded from environment variables."""

    # Seeds are counter + offset, so the offset pins the whole benchmark set
    SEED_OFFSET: int = int(os.getenv("MAZEBENCH_SEED_OFFSET", "12345"))
    RUNS_PER_CONFIG: int = int(os.getenv("MAZEBENCH_RUNS_PER_CONFIG", "1"))

    # Step budget enforced by run recorders, never by the environment itself
    MAX_STEPS: int = int(os.getenv("MAZEBENCH_MAX_STEPS", "200"))

    # Which difficulty table tier names resolve against
    GENERATOR_SCHEME: str = os.getenv("MAZEBENCH_GENERATOR_SCHEME", "corridor")

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    RESULTS_DIR: Path = Path(os.getenv("MAZEBENCH_RESULTS_DIR", "results"))
    SUITES_DIR: Path = Path(
        os.getenv("MAZEBENCH_SUITES_DIR", str(PROJECT_ROOT / "suites"))
    )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.GENERATOR_SCHEME not in GENERATOR_SCHEMES:
            raise ValueError(
                f"MAZEBENCH_GENERATOR_SCHEME must be one of {GENERATOR_SCHEMES}, "
                f"got '{cls.GENERATOR_SCHEME}'"
            )

        if cls.RUNS_PER_CONFIG < 1:
            raise ValueError("MAZEBENCH_RUNS_PER_CONFIG must be at least 1")

        if cls.MAX_STEPS < 1:
            raise ValueError("MAZEBENCH_MAX_STEPS must be at least 1")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Mazebench Configuration:",
            f"  Generator Scheme: {cls.GENERATOR_SCHEME}",
            f"  Seed Offset: {cls.SEED_OFFSET}",
            f"  Runs Per Config: {cls.RUNS_PER_CONFIG}",
            f"  Max Steps: {cls.MAX_STEPS}",
            f"  Results Dir: {cls.RESULTS_DIR}",
            f"  Suites Dir: {cls.SUITES_DIR}",
        ]
        return "\n".join(lines)
