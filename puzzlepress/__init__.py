"""Procedural puzzle synthesis: word/number search grids and perfect mazes."""

__all__ = [
    "AbstractPuzzleGenerator",
    "PuzzleGenerationError",
    "RandomSource",
    "default_random_source",
    "WordGrid",
    "PlacementFailure",
    "build_grid",
    "WordSearchGenerator",
    "WordSearchPuzzleRecord",
    "MazeCell",
    "MazeGrid",
    "MazeBuildResult",
    "MazeInvariantError",
    "generate_maze",
    "solve_maze",
    "MazeGenerator",
    "MazePuzzleRecord",
]

from .base import AbstractPuzzleGenerator, PuzzleGenerationError
from .random_source import RandomSource, default_random_source
from .wordsearch import (
    WordGrid,
    PlacementFailure,
    build_grid,
    WordSearchGenerator,
    WordSearchPuzzleRecord,
)
from .maze import (
    MazeCell,
    MazeGrid,
    MazeBuildResult,
    MazeInvariantError,
    generate_maze,
    solve_maze,
    MazeGenerator,
    MazePuzzleRecord,
)
