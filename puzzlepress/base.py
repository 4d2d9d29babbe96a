"""Shared scaffolding for puzzle generators that write images and metadata."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

from .random_source import default_random_source

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")


class PuzzleGenerationError(RuntimeError):
    """A single puzzle could not be produced from the given inputs."""


class AbstractPuzzleGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that emit puzzle records."""

    def __init__(self, output_dir: PathLike, *, seed: Optional[int] = None) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.seed = seed
        self._rng = default_random_source(seed)

        self.puzzle_dir = self.output_dir / "puzzles"
        self.solution_dir = self.output_dir / "solutions"
        for directory in (self.puzzle_dir, self.solution_dir):
            directory.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_puzzle(self, *args, **kwargs) -> RecordT:
        """Create a puzzle from the provided resources."""

    @abstractmethod
    def create_random_puzzle(self) -> RecordT:
        """Create a single randomized puzzle instance."""

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        """Generate a batch of puzzles and optionally persist metadata.

        Puzzles that fail with :class:`PuzzleGenerationError` are skipped, so
        the batch may hold fewer than ``count`` records.
        """

        records: List[RecordT] = []
        for index in range(count):
            try:
                records.append(self.create_random_puzzle())
            except PuzzleGenerationError as exc:
                logger.warning("Skipping puzzle %d of %d: %s", index + 1, count, exc)
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Serialize puzzle records to JSON, appending if requested."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
        payload = [self.record_to_dict(record) for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")
        logger.info("Wrote %d records to %s", len(payload), path)

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        """Dictionary serialization hook for puzzle records."""

        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Puzzle record must implement to_dict() or override record_to_dict() in the generator."
        )

    def relativize_path(self, path: Path) -> str:
        """Map an absolute path into the generator output directory when possible."""

        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


__all__ = [
    "AbstractPuzzleGenerator",
    "PathLike",
    "PuzzleGenerationError",
]
