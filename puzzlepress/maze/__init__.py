"""Maze puzzle generation package."""

__all__ = [
    "MazeCell",
    "MazeGrid",
    "MazeBuildResult",
    "MazeInvariantError",
    "generate_maze",
    "solve_maze",
    "MazeGenerator",
    "MazePuzzleRecord",
]

from .engine import (
    MazeCell,
    MazeGrid,
    MazeBuildResult,
    MazeInvariantError,
    generate_maze,
    solve_maze,
)
from .generator import MazeGenerator, MazePuzzleRecord
