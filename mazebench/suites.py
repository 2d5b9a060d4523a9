"""
Benchmark suite loading for JSON-defined maze sets.

A suite names an ordered list of benchmark configs plus the replica count and
seed offset used to turn them into mazes. The built-in ``default`` suite is the
24-config matrix below; other suites live as JSON files:

```json
{
  "id": "quick",
  "name": "Quick check",
  "description": "...",
  "runs_per_config": 2,
  "seed_offset": 12345,
  "configs": [
    {"width": 5, "height": 5, "difficulty": "simple", "observation_mode": "local"}
  ]
}
```

Config entries also accept the older ``complexity`` / ``vision`` keys.

Usage:
    loader = SuiteLoader()
    suite = loader.load("quick")
    mazes = generate_mazes_for_suite(suite)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .benchmark import build_benchmark_set
from .config import Config
from .maze import Difficulty
from .schemas import BenchmarkConfig, MazeRecord, ObservationMode


def _matrix(sizes: List[int], difficulties: List[Difficulty]) -> List[BenchmarkConfig]:
    configs: List[BenchmarkConfig] = []
    for size in sizes:
        for mode in (ObservationMode.LOCAL, ObservationMode.GLOBAL):
            for difficulty in difficulties:
                configs.append(
                    BenchmarkConfig(
                        width=size,
                        height=size,
                        difficulty=difficulty,
                        observation_mode=mode,
                    )
                )
    return configs


# Tiny sanity checks up to serious 31x31 mazes; local before global per size.
DEFAULT_BENCHMARK_CONFIGS: List[BenchmarkConfig] = _matrix(
    [5, 11, 21, 31],
    [Difficulty.SIMPLE, Difficulty.COMPLEX, Difficulty.EXTREME],
)


class BenchmarkSuite(BaseModel):
    """A named, reproducible benchmark maze set definition."""

    id: str
    name: str
    description: str = ""
    configs: List[BenchmarkConfig] = Field(..., min_length=1)
    runs_per_config: int = Field(1, ge=1)
    seed_offset: int = Field(12345)


DEFAULT_SUITE = BenchmarkSuite(
    id="default",
    name="Default mazes",
    description="Shared 24-config matrix, one maze per config",
    configs=DEFAULT_BENCHMARK_CONFIGS,
)


class SuiteLoader:
    """Load and validate benchmark suites from JSON files.

    Directory structure:
    - Default: ``Config.SUITES_DIR`` ({PROJECT_ROOT}/suites unless overridden)
    - Suite files: {suite_id}.json; files starting with ``_`` are ignored

    Validation:
    - Required fields: name, configs (non-empty)
    - Raises ValueError for missing fields and pydantic ValidationError for
      malformed values
    """

    def __init__(self, suites_dir: Optional[Path] = None):
        self.suites_dir = Path(suites_dir) if suites_dir else Config.SUITES_DIR

    def load(self, suite_id: str) -> BenchmarkSuite:
        """Load a suite by id.

        ``default`` resolves to the built-in suite unless a ``default.json``
        file overrides it.

        Raises:
            FileNotFoundError: If no suite file exists for ``suite_id``
            ValueError: If required fields are missing
        """
        suite_path = self.suites_dir / f"{suite_id}.json"

        if not suite_path.exists():
            if suite_id == DEFAULT_SUITE.id:
                return DEFAULT_SUITE
            raise FileNotFoundError(f"Suite '{suite_id}' not found at {suite_path}")

        data = json.loads(suite_path.read_text())
        self._validate_suite(data)
        data.setdefault("id", suite_id)
        data.setdefault("seed_offset", Config.SEED_OFFSET)
        return BenchmarkSuite.model_validate(data)

    def _validate_suite(self, data: Dict[str, Any]) -> None:
        required = ["name", "configs"]
        missing = [field for field in required if field not in data]

        if missing:
            raise ValueError(f"Suite missing required fields: {missing}")

        if not data["configs"]:
            raise ValueError("Suite must have at least one config")

    def list_suites(self) -> List[str]:
        """List available suite ids, the built-in default included."""
        names = {DEFAULT_SUITE.id}
        if self.suites_dir.exists():
            names.update(
                f.stem for f in self.suites_dir.glob("*.json")
                if not f.name.startswith("_")
            )
        return sorted(names)

    def get_suite_info(self, suite_id: str) -> Dict[str, Any]:
        """Summary of a suite without generating any mazes."""
        suite = self.load(suite_id)
        return {
            "id": suite.id,
            "name": suite.name,
            "description": suite.description or "No description",
            "num_configs": len(suite.configs),
            "num_mazes": len(suite.configs) * suite.runs_per_config,
        }


def get_suites(loader: Optional[SuiteLoader] = None) -> List[BenchmarkSuite]:
    loader = loader or SuiteLoader()
    return [loader.load(suite_id) for suite_id in loader.list_suites()]


def generate_mazes_for_suite(suite: BenchmarkSuite, *, verbose: bool = False) -> List[MazeRecord]:
    """Build the suite's maze set with its own replica count and seed offset."""
    return build_benchmark_set(
        suite.configs,
        suite.runs_per_config,
        seed_offset=suite.seed_offset,
        verbose=verbose,
    )
