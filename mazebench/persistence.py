"""
ArchiveStrategy interface for storing benchmark sets and run reports.

Archiving is optional: everything in the maze engine works on in-memory
values. Archives exist so a benchmark set can be frozen once and reused, and
so run reports can be loaded back for optimal-path analysis.

Two implementations:
1. InMemoryArchive - dict-based, lost on exit (tests, notebooks)
2. JsonArchive - human-readable JSON files on disk

Usage pattern:
    archive = JsonArchive("results")
    await archive.initialize()
    await archive.save_maze_set("default", records)
    await archive.save_report("gpt-5-nano", report)
    reports = await archive.load_reports()
    await archive.close()
"""

import asyncio
import json
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from mazebench.logging_utils import log_error
from mazebench.schemas import BenchmarkReport, MazeRecord

_UNSAFE_NAME = re.compile(r"[^A-Za-z0-9._\-\[\]]+")


def safe_filename(name: str) -> str:
    """Make a report or suite name usable as a file stem."""
    cleaned = _UNSAFE_NAME.sub("_", name).strip("._")
    return cleaned or "unnamed"


class ArchiveStrategy(ABC):
    """Abstract base class for benchmark archives.

    Method categories:
    1. Lifecycle: initialize(), close()
    2. Maze sets: save_maze_set(), load_maze_set(), list_maze_sets()
    3. Reports: save_report(), load_reports()
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (create directories, open handles)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        pass

    @abstractmethod
    async def save_maze_set(self, suite: str, records: List[MazeRecord]) -> None:
        """Store a benchmark set under a suite name, replacing any previous one."""
        pass

    @abstractmethod
    async def load_maze_set(self, suite: str) -> Optional[List[MazeRecord]]:
        """Return the stored set for ``suite`` in build order, or None."""
        pass

    @abstractmethod
    async def list_maze_sets(self) -> List[str]:
        pass

    @abstractmethod
    async def save_report(self, name: str, report: BenchmarkReport) -> None:
        pass

    @abstractmethod
    async def load_reports(self, name_filter: Optional[str] = None) -> Dict[str, BenchmarkReport]:
        """Return stored reports keyed by name, optionally only names containing ``name_filter``."""
        pass


class InMemoryArchive(ArchiveStrategy):
    """Dict-backed archive. Data is lost when the process exits."""

    def __init__(self):
        self.maze_sets: Dict[str, List[MazeRecord]] = {}
        self.reports: Dict[str, BenchmarkReport] = {}

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def save_maze_set(self, suite: str, records: List[MazeRecord]) -> None:
        self.maze_sets[suite] = list(records)

    async def load_maze_set(self, suite: str) -> Optional[List[MazeRecord]]:
        records = self.maze_sets.get(suite)
        return list(records) if records is not None else None

    async def list_maze_sets(self) -> List[str]:
        return sorted(self.maze_sets)

    async def save_report(self, name: str, report: BenchmarkReport) -> None:
        self.reports[name] = report.model_copy(deep=True)

    async def load_reports(self, name_filter: Optional[str] = None) -> Dict[str, BenchmarkReport]:
        return {
            name: report.model_copy(deep=True)
            for name, report in self.reports.items()
            if name_filter is None or name_filter in name
        }


class JsonArchive(ArchiveStrategy):
    """File-based archive using pretty-printed JSON.

    Directory structure:
    ```
    {base_path}/
      mazes/
        default.json        # List[MazeRecord] in build order
      reports/
        gpt-5-nano.json     # BenchmarkReport
    ```

    All file I/O runs in a thread (asyncio.to_thread). Report files that fail
    to parse or validate are skipped with an error line rather than aborting
    the whole load.
    """

    def __init__(self, base_path: Path | str = "results"):
        self.base_path = Path(base_path)

    @property
    def mazes_dir(self) -> Path:
        return self.base_path / "mazes"

    @property
    def reports_dir(self) -> Path:
        return self.base_path / "reports"

    async def initialize(self) -> None:
        await asyncio.to_thread(self.mazes_dir.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(self.reports_dir.mkdir, parents=True, exist_ok=True)

    async def close(self) -> None:
        # Nothing to clean up for JSON archives
        return None

    async def save_maze_set(self, suite: str, records: List[MazeRecord]) -> None:
        path = self.mazes_dir / f"{safe_filename(suite)}.json"
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        payload = [record.model_dump(mode="json") for record in records]
        await asyncio.to_thread(
            path.write_text, json.dumps(payload, indent=2), "utf-8"
        )

    async def load_maze_set(self, suite: str) -> Optional[List[MazeRecord]]:
        path = self.mazes_dir / f"{safe_filename(suite)}.json"
        if not path.exists():
            return None

        def _read() -> list:
            return json.loads(path.read_text("utf-8"))

        payload = await asyncio.to_thread(_read)
        return [MazeRecord.model_validate(item) for item in payload]

    async def list_maze_sets(self) -> List[str]:
        if not self.mazes_dir.exists():
            return []
        return sorted(path.stem for path in self.mazes_dir.glob("*.json"))

    async def save_report(self, name: str, report: BenchmarkReport) -> None:
        path = self.reports_dir / f"{safe_filename(name)}.json"
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        payload = report.model_dump(mode="json")
        await asyncio.to_thread(
            path.write_text, json.dumps(payload, indent=2), "utf-8"
        )

    async def load_reports(self, name_filter: Optional[str] = None) -> Dict[str, BenchmarkReport]:
        if not self.reports_dir.exists():
            return {}

        def _read_all() -> Dict[str, str]:
            return {
                path.stem: path.read_text("utf-8")
                for path in sorted(self.reports_dir.glob("*.json"))
                if name_filter is None or name_filter in path.stem
            }

        raw = await asyncio.to_thread(_read_all)
        reports: Dict[str, BenchmarkReport] = {}
        for name, text in raw.items():
            try:
                reports[name] = BenchmarkReport.model_validate_json(text)
            except ValidationError as exc:
                log_error(f"Skipping report {name}: {exc.error_count()} validation error(s)")
        return reports
