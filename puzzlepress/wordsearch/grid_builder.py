"""Word and number search grid construction.

Items are laid along straight lines in any of the eight compass directions.
Cells may be shared between items only where their characters agree. The
search is a bounded-attempt heuristic: a failed item throws away the whole
attempt and the next attempt starts from an empty grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..random_source import RandomSource

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"
FILL_ALPHABETS: Mapping[str, str] = MappingProxyType({"letters": LETTERS, "digits": DIGITS})

MAX_ATTEMPTS = 400
BLANK = " "

# (row delta, col delta)
DIRECTIONS: Tuple[Coord, ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)


@dataclass(frozen=True)
class WordGrid:
    """A completed grid and where each item ended up."""

    cells: Tuple[Tuple[str, ...], ...]
    positions: Mapping[str, Tuple[Coord, ...]]
    attempts: int = 1

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def char_at(self, row: int, col: int) -> str:
        return self.cells[row][col]

    def read(self, coords: Sequence[Coord]) -> str:
        """Concatenate the characters found at ``coords`` in order."""

        return "".join(self.cells[r][c] for r, c in coords)

    def rows_as_strings(self) -> List[str]:
        return ["".join(row) for row in self.cells]

    def to_dict(self) -> dict:
        return {
            "grid": self.rows_as_strings(),
            "positions": {
                item: [list(coord) for coord in coords]
                for item, coords in self.positions.items()
            },
            "attempts": self.attempts,
        }


@dataclass(frozen=True)
class PlacementFailure:
    """Returned by :func:`build_grid` when every attempt was used up."""

    items: Tuple[str, ...]
    rows: int
    cols: int
    attempts: int
    unplaceable: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        text = (
            f"Failed to build a {self.rows}x{self.cols} grid after {self.attempts} attempts "
            f"with {len(self.items)} items"
        )
        if self.unplaceable:
            text += f" ({len(self.unplaceable)} longer than any line: {', '.join(self.unplaceable)})"
        return text

    def __bool__(self) -> bool:
        return False


GridBuildResult = Union[WordGrid, PlacementFailure]


def resolve_alphabet(fill: str, alphabet: Optional[str] = None) -> str:
    """Return the filler alphabet.

    ``fill`` must name one of :data:`FILL_ALPHABETS`. A custom ``alphabet``
    overrides it; it must be non-empty and may not contain :data:`BLANK`.
    """

    if alphabet is None:
        try:
            return FILL_ALPHABETS[fill]
        except KeyError as exc:
            raise ValueError(
                f"Unknown fill {fill!r}; expected one of {', '.join(FILL_ALPHABETS)}"
            ) from exc
    if not alphabet:
        raise ValueError("fill alphabet must not be empty")
    if BLANK in alphabet:
        raise ValueError("fill alphabet must not contain the blank character")
    return alphabet


def _blank_grid(rows: int, cols: int) -> List[List[str]]:
    return [[BLANK for _ in range(cols)] for _ in range(rows)]


def _fits(grid: List[List[str]], item: str, r0: int, c0: int, dr: int, dc: int) -> Optional[List[Coord]]:
    rows = len(grid)
    cols = len(grid[0])
    coords: List[Coord] = []
    for k, ch in enumerate(item):
        r = r0 + dr * k
        c = c0 + dc * k
        if r < 0 or c < 0 or r >= rows or c >= cols:
            return None
        current = grid[r][c]
        if current != BLANK and current != ch:
            return None
        coords.append((r, c))
    return coords


def place_item(grid: List[List[str]], item: str, rng: RandomSource) -> Optional[List[Coord]]:
    """Write ``item`` into ``grid`` at the first compatible run found.

    Directions and start cells are both shuffled; every direction is tried
    against every start cell before giving up. Returns the coordinates used,
    or ``None`` when the item cannot go anywhere.
    """

    rows = len(grid)
    cols = len(grid[0])
    directions = list(DIRECTIONS)
    rng.shuffle(directions)
    starts = [(r, c) for r in range(rows) for c in range(cols)]
    rng.shuffle(starts)

    for dr, dc in directions:
        for r0, c0 in starts:
            coords = _fits(grid, item, r0, c0, dr, dc)
            if coords is None:
                continue
            for (r, c), ch in zip(coords, item):
                grid[r][c] = ch
            return coords
    return None


def fill_blanks(grid: List[List[str]], alphabet: str, rng: RandomSource) -> None:
    for row in grid:
        for i, value in enumerate(row):
            if value == BLANK:
                row[i] = alphabet[rng.randint(0, len(alphabet) - 1)]


def build_grid(
    items: Sequence[str],
    rows: int,
    cols: int,
    rng: RandomSource,
    fill: str = "letters",
    *,
    max_attempts: int = MAX_ATTEMPTS,
    alphabet: Optional[str] = None,
) -> GridBuildResult:
    """Place every item into a ``rows`` x ``cols`` grid and fill the rest.

    Returns a :class:`WordGrid` on success and a :class:`PlacementFailure`
    once ``max_attempts`` full attempts have failed. Items are placed longest
    first. A single item that cannot be placed restarts the attempt from an
    empty grid; partially built grids are never repaired.

    ``fill`` selects the filler alphabet by name; pass ``alphabet`` to use a
    custom one instead.
    """

    if rows < 1 or cols < 1:
        raise ValueError("rows and cols must be at least 1")
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    alphabet = resolve_alphabet(fill, alphabet)

    to_place = [item for item in items if item and item.strip()]
    # sorted() is stable, so equal lengths keep their input order
    to_place = sorted(to_place, key=len, reverse=True)

    for attempt in range(1, max_attempts + 1):
        grid = _blank_grid(rows, cols)
        positions: Dict[str, Tuple[Coord, ...]] = {}
        placed_all = True
        for item in to_place:
            coords = place_item(grid, item, rng)
            if coords is None:
                placed_all = False
                break
            positions[item] = tuple(coords)

        if placed_all:
            fill_blanks(grid, alphabet, rng)
            logger.debug("Built %dx%d grid with %d items on attempt %d", rows, cols, len(to_place), attempt)
            return WordGrid(
                cells=tuple(tuple(row) for row in grid),
                positions=MappingProxyType(positions),
                attempts=attempt,
            )

    longest_line = max(rows, cols)
    failure = PlacementFailure(
        items=tuple(to_place),
        rows=rows,
        cols=cols,
        attempts=max_attempts,
        unplaceable=tuple(item for item in to_place if len(item) > longest_line),
    )
    logger.warning(failure.message)
    return failure


__all__ = [
    "BLANK",
    "Coord",
    "DIGITS",
    "DIRECTIONS",
    "FILL_ALPHABETS",
    "GridBuildResult",
    "LETTERS",
    "MAX_ATTEMPTS",
    "PlacementFailure",
    "WordGrid",
    "build_grid",
    "fill_blanks",
    "place_item",
    "resolve_alphabet",
]
