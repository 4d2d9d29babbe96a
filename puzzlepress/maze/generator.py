"""Maze puzzle generator: wall mazes with a start-to-exit solution overlay."""

from __future__ import annotations

import argparse
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from ..base import AbstractPuzzleGenerator, PathLike
from .engine import Coord, MazeGrid, generate_maze

logger = logging.getLogger(__name__)

WALL_COLOR = (0, 0, 0)
BACKGROUND_COLOR = (255, 255, 255)
START_COLOR = (112, 255, 112)
GOAL_COLOR = (112, 112, 255)
LINE_COLOR = (255, 112, 112)
MARGIN = 2


@dataclass
class MazePuzzleRecord:
    id: str
    title: str
    grid_size: Tuple[int, int]
    cell_size: int
    walls: List[List[List[bool]]]
    start: Tuple[int, int]
    goal: Tuple[int, int]
    solution: List[Tuple[int, int]]
    puzzle_image_path: str
    solution_image_path: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "grid_size": list(self.grid_size),
            "cell_size": self.cell_size,
            "walls": self.walls,
            "start": list(self.start),
            "goal": list(self.goal),
            "solution": [list(coord) for coord in self.solution],
            "puzzle_image_path": self.puzzle_image_path,
            "solution_image_path": self.solution_image_path,
        }


class MazeGenerator(AbstractPuzzleGenerator[MazePuzzleRecord]):
    """Generate rectangular perfect mazes from the top-left to the bottom-right cell."""

    def __init__(
        self,
        output_dir: PathLike = "data/maze",
        *,
        rows: int = 25,
        cols: int = 18,
        cell_size: int = 20,
        title: str = "Maze",
        seed: Optional[int] = None,
    ) -> None:
        if rows < 1 or cols < 1:
            raise ValueError("rows and cols must be at least 1")
        if cell_size < 4:
            raise ValueError("cell_size must be at least 4")
        super().__init__(output_dir, seed=seed)
        self.rows = rows
        self.cols = cols
        self.cell_size = cell_size
        self.title = title
        self._count = 0

    def create_puzzle(
        self,
        *,
        puzzle_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> MazePuzzleRecord:
        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        self._count += 1
        maze = generate_maze(self.rows, self.cols, self._rng)

        puzzle_image = self._render_maze(maze.grid, path=None)
        solution_image = self._render_maze(maze.grid, path=maze.solution)

        puzzle_path = self.puzzle_dir / f"{puzzle_uuid}_puzzle.png"
        solution_path = self.solution_dir / f"{puzzle_uuid}_solution.png"
        puzzle_image.save(puzzle_path)
        solution_image.save(solution_path)
        logger.debug("Saved maze %s to %s", puzzle_uuid, puzzle_path)

        return MazePuzzleRecord(
            id=puzzle_uuid,
            title=title or f"{self.title} {self._count}",
            grid_size=(self.rows, self.cols),
            cell_size=self.cell_size,
            walls=maze.grid.to_dict()["walls"],
            start=maze.solution[0],
            goal=maze.solution[-1],
            solution=list(maze.solution),
            puzzle_image_path=self.relativize_path(puzzle_path),
            solution_image_path=self.relativize_path(solution_path),
        )

    def create_random_puzzle(self) -> MazePuzzleRecord:
        return self.create_puzzle()

    # ------------------------------------------------------------------

    def _cell_center(self, coord: Coord) -> Tuple[float, float]:
        r, c = coord
        return (
            MARGIN + c * self.cell_size + self.cell_size / 2,
            MARGIN + r * self.cell_size + self.cell_size / 2,
        )

    def _render_maze(
        self,
        grid: MazeGrid,
        *,
        path: Optional[Sequence[Coord]],
    ) -> Image.Image:
        size = self.cell_size
        canvas_dims = (grid.cols * size + 2 * MARGIN, grid.rows * size + 2 * MARGIN)
        canvas = Image.new("RGB", canvas_dims, BACKGROUND_COLOR)
        draw = ImageDraw.Draw(canvas)

        radius = size / 3.5
        for coord, color in (((0, 0), START_COLOR), ((grid.rows - 1, grid.cols - 1), GOAL_COLOR)):
            x, y = self._cell_center(coord)
            draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=color)

        if path and len(path) >= 2:
            points = [self._cell_center(coord) for coord in path]
            draw.line(points, fill=LINE_COLOR, width=max(1, int(size / 4.5)), joint="curve")

        thickness = max(1, size // 12)
        for row in grid.cells:
            for cell in row:
                x = MARGIN + cell.col * size
                y = MARGIN + cell.row * size
                if cell.top:
                    draw.line((x, y, x + size, y), fill=WALL_COLOR, width=thickness)
                if cell.right:
                    draw.line((x + size, y, x + size, y + size), fill=WALL_COLOR, width=thickness)
                if cell.bottom:
                    draw.line((x, y + size, x + size, y + size), fill=WALL_COLOR, width=thickness)
                if cell.left:
                    draw.line((x, y, x, y + size), fill=WALL_COLOR, width=thickness)
        return canvas


__all__ = ["MazeGenerator", "MazePuzzleRecord"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate printable maze puzzles")
    parser.add_argument("count", type=int, help="Number of puzzles to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save assets")
    parser.add_argument("--rows", type=int, default=25)
    parser.add_argument("--cols", type=int, default=18)
    parser.add_argument("--cell-size", type=int, default=20)
    parser.add_argument("--title", type=str, default="Maze")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    generator = MazeGenerator(
        output_dir=args.output_dir,
        rows=args.rows,
        cols=args.cols,
        cell_size=args.cell_size,
        title=args.title,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    generator.generate_dataset(args.count, metadata_path=metadata_path)


if __name__ == "__main__":
    main()
