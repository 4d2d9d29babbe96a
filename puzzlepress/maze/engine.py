"""Perfect maze generation and solving over a rectangular cell grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from ..random_source import RandomSource

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

TOP, RIGHT, BOTTOM, LEFT = range(4)

# (row delta, col delta, wall on this side, wall on the neighbour's side)
_SIDES = {
    TOP: (-1, 0, TOP, BOTTOM),
    RIGHT: (0, 1, RIGHT, LEFT),
    BOTTOM: (1, 0, BOTTOM, TOP),
    LEFT: (0, -1, LEFT, RIGHT),
}
# down, right, up, left
SOLVE_ORDER = (BOTTOM, RIGHT, TOP, LEFT)


class MazeInvariantError(RuntimeError):
    """The generated maze is not a spanning tree."""


@dataclass(frozen=True)
class MazeCell:
    row: int
    col: int
    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True

    @property
    def walls(self) -> Tuple[bool, bool, bool, bool]:
        return (self.top, self.right, self.bottom, self.left)

    def has_wall(self, side: int) -> bool:
        return self.walls[side]


@dataclass(frozen=True)
class MazeGrid:
    rows: int
    cols: int
    cells: Tuple[Tuple[MazeCell, ...], ...]

    def cell(self, row: int, col: int) -> MazeCell:
        return self.cells[row][col]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_open(self, a: Coord, b: Coord) -> bool:
        """True when ``a`` and ``b`` are 4-adjacent with no wall between them."""

        (r, c), (nr, nc) = a, b
        if not (self.in_bounds(r, c) and self.in_bounds(nr, nc)):
            return False
        for side, (dr, dc, _, _) in _SIDES.items():
            if (r + dr, c + dc) == (nr, nc):
                return not self.cells[r][c].has_wall(side)
        return False

    def open_neighbors(self, coord: Coord) -> Iterator[Coord]:
        """Reachable neighbours of ``coord`` in down, right, up, left order."""

        r, c = coord
        cell = self.cells[r][c]
        for side in SOLVE_ORDER:
            dr, dc, _, _ = _SIDES[side]
            if not cell.has_wall(side) and self.in_bounds(r + dr, c + dc):
                yield (r + dr, c + dc)

    def removed_wall_count(self) -> int:
        """Number of open passages between adjacent cells."""

        count = 0
        for r in range(self.rows):
            for c in range(self.cols):
                cell = self.cells[r][c]
                if c < self.cols - 1 and not cell.right:
                    count += 1
                if r < self.rows - 1 and not cell.bottom:
                    count += 1
        return count

    def to_dict(self) -> dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "walls": [[list(cell.walls) for cell in row] for row in self.cells],
        }


@dataclass(frozen=True)
class MazeBuildResult:
    grid: MazeGrid
    solution: Tuple[Coord, ...]

    def to_dict(self) -> dict:
        payload = self.grid.to_dict()
        payload["solution"] = [list(coord) for coord in self.solution]
        return payload


def _carve(rows: int, cols: int, rng: RandomSource) -> List[List[List[bool]]]:
    walls = [[[True, True, True, True] for _ in range(cols)] for _ in range(rows)]
    # Only needed while carving; thrown away with this frame.
    visited = [[False for _ in range(cols)] for _ in range(rows)]

    visited[0][0] = True
    stack: List[Coord] = [(0, 0)]
    while stack:
        r, c = stack[-1]
        candidates = []
        for side in (TOP, RIGHT, BOTTOM, LEFT):
            dr, dc, mine, theirs = _SIDES[side]
            nr, nc = r + dr, c + dc
            if 0 <= nr < rows and 0 <= nc < cols and not visited[nr][nc]:
                candidates.append((nr, nc, mine, theirs))
        if not candidates:
            stack.pop()
            continue
        rng.shuffle(candidates)
        nr, nc, mine, theirs = candidates[0]
        walls[r][c][mine] = False
        walls[nr][nc][theirs] = False
        visited[nr][nc] = True
        stack.append((nr, nc))
    return walls


def solve_maze(grid: MazeGrid) -> Tuple[Coord, ...]:
    """Return the path from the top-left to the bottom-right cell.

    Depth-first with an explicit stack; dead ends are popped off the path.
    Raises :class:`MazeInvariantError` when the exit is unreachable, which
    can only happen if ``grid`` is not a spanning tree.
    """

    start: Coord = (0, 0)
    goal: Coord = (grid.rows - 1, grid.cols - 1)
    path: List[Coord] = [start]
    pending: List[Iterator[Coord]] = [grid.open_neighbors(start)]
    seen = {start}

    while path:
        if path[-1] == goal:
            return tuple(path)
        nxt: Optional[Coord] = next((n for n in pending[-1] if n not in seen), None)
        if nxt is None:
            path.pop()
            pending.pop()
            continue
        seen.add(nxt)
        path.append(nxt)
        pending.append(grid.open_neighbors(nxt))

    logger.error("No path from %s to %s in %dx%d maze", start, goal, grid.rows, grid.cols)
    raise MazeInvariantError(f"Maze has no path from {start} to {goal}")


def generate_maze(rows: int, cols: int, rng: RandomSource) -> MazeBuildResult:
    """Carve a perfect maze with the recursive backtracker and solve it."""

    if rows < 1 or cols < 1:
        raise ValueError("rows and cols must be at least 1")
    walls = _carve(rows, cols, rng)
    cells = tuple(
        tuple(MazeCell(r, c, *walls[r][c]) for c in range(cols))
        for r in range(rows)
    )
    grid = MazeGrid(rows=rows, cols=cols, cells=cells)
    solution = solve_maze(grid)
    logger.debug("Generated %dx%d maze, solution length %d", rows, cols, len(solution))
    return MazeBuildResult(grid=grid, solution=solution)


__all__ = [
    "BOTTOM",
    "Coord",
    "LEFT",
    "MazeBuildResult",
    "MazeCell",
    "MazeGrid",
    "MazeInvariantError",
    "RIGHT",
    "TOP",
    "generate_maze",
    "solve_maze",
]
