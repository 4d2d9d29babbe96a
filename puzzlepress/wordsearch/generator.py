"""Word and number search puzzle generator.

Four puzzle modes share the same grid builder:

* ``words``: the hidden words are listed as-is.
* ``anagram``: each hidden phrase is listed with its letters scrambled.
* ``cipher``: each hidden phrase is listed encrypted with a keyword
  substitution cipher.
* ``numbers``: digit grids; each hidden number is listed as an arithmetic
  clue that evaluates to it.
"""

from __future__ import annotations

import argparse
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..base import AbstractPuzzleGenerator, PathLike, PuzzleGenerationError
from .grid_builder import MAX_ATTEMPTS, Coord, WordGrid, build_grid
from .items import (
    DIFFICULTIES,
    calculation_clue,
    cipher_alphabet,
    encrypt,
    random_number_string,
    sanitize_digits,
    sanitize_for_grid,
    scramble_phrase,
)

logger = logging.getLogger(__name__)

MODES = ("words", "anagram", "cipher", "numbers")
MODE_TITLES = {
    "words": "Word Search",
    "anagram": "Anagram Word Search",
    "cipher": "Cipher Word Search",
    "numbers": "Number Search",
}

TEXT_COLOR = (0, 0, 0)
GRID_LINE_COLOR = (204, 204, 204)
BACKGROUND_COLOR = (255, 255, 255)
HIGHLIGHT_COLOR = (255, 215, 0)
HIGHLIGHT_WIDTH_FACTOR = 0.5


@dataclass
class WordSearchPuzzleRecord:
    """One generated puzzle.

    ``items`` holds the distinct strings hidden in the grid, in input order,
    and ``positions`` has exactly one entry per item. ``answers`` and
    ``clues`` run parallel to ``items``.
    """

    id: str
    title: str
    mode: str
    fill: str
    grid_size: Tuple[int, int]
    cell_size: int
    items: List[str]
    answers: List[str]
    clues: List[str]
    grid: List[str]
    positions: Dict[str, List[Tuple[int, int]]]
    attempts: int
    puzzle_image_path: str
    solution_image_path: str
    keyword: Optional[str] = None
    cipher_alphabet: Optional[str] = None
    difficulty: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "mode": self.mode,
            "fill": self.fill,
            "grid_size": list(self.grid_size),
            "cell_size": self.cell_size,
            "items": list(self.items),
            "answers": list(self.answers),
            "clues": list(self.clues),
            "grid": list(self.grid),
            "positions": {
                item: [list(coord) for coord in coords]
                for item, coords in self.positions.items()
            },
            "attempts": self.attempts,
            "keyword": self.keyword,
            "cipher_alphabet": self.cipher_alphabet,
            "difficulty": self.difficulty,
            "puzzle_image_path": self.puzzle_image_path,
            "solution_image_path": self.solution_image_path,
        }


class WordSearchGenerator(AbstractPuzzleGenerator[WordSearchPuzzleRecord]):
    """Generate letter grids hiding words or phrases, or digit grids hiding numbers."""

    def __init__(
        self,
        output_dir: PathLike = "data/wordsearch",
        *,
        mode: str = "words",
        words: Sequence[str] = (),
        keyword: Optional[str] = None,
        difficulty: str = "easy",
        rows: int = 15,
        cols: int = 15,
        words_per_puzzle: int = 10,
        min_number_length: int = 3,
        max_number_length: int = 6,
        cell_size: int = 32,
        max_attempts: int = MAX_ATTEMPTS,
        title: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        if mode not in MODES:
            raise ValueError(f"mode must be one of {', '.join(MODES)}")
        if rows < 1 or cols < 1:
            raise ValueError("rows and cols must be at least 1")
        if words_per_puzzle < 1:
            raise ValueError("words_per_puzzle must be at least 1")
        if min_number_length < 1 or max_number_length < min_number_length:
            raise ValueError("number lengths must satisfy 1 <= min <= max")
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
        if mode == "cipher" and not sanitize_for_grid(keyword or ""):
            raise ValueError("cipher mode needs a keyword with at least one letter")
        super().__init__(output_dir, seed=seed)
        self.mode = mode
        self.fill = "digits" if mode == "numbers" else "letters"
        self.words = [w.strip() for w in words if sanitize_for_grid(w)]
        self.keyword = sanitize_for_grid(keyword) if mode == "cipher" else None
        self.cipher_alphabet = cipher_alphabet(self.keyword) if self.keyword else None
        self.difficulty = difficulty
        self.rows = rows
        self.cols = cols
        self.words_per_puzzle = words_per_puzzle
        self.min_number_length = min_number_length
        self.max_number_length = max_number_length
        self.cell_size = cell_size
        self.max_attempts = max_attempts
        self.title = title or MODE_TITLES[mode]
        self._count = 0

    def prepare_items(self, items: Sequence[str]) -> List[Tuple[str, str]]:
        """Pair each distinct grid string with the answer text it came from."""

        clean = sanitize_digits if self.fill == "digits" else sanitize_for_grid
        prepared: Dict[str, str] = {}
        for raw in items:
            item = clean(raw)
            if item and item not in prepared:
                prepared[item] = " ".join(raw.upper().split())
        return list(prepared.items())

    def make_clues(self, pairs: Sequence[Tuple[str, str]]) -> List[str]:
        if self.mode == "anagram":
            return [scramble_phrase(answer, self._rng) for _, answer in pairs]
        if self.mode == "cipher":
            return [encrypt(answer, self.cipher_alphabet) for _, answer in pairs]
        if self.mode == "numbers":
            clues = []
            previous: Optional[int] = None
            for item, _ in pairs:
                calc = calculation_clue(int(item), self.difficulty, self._rng, previous)
                clues.append(calc.clue)
                if self.difficulty == "hard":
                    previous = calc.answer
            return clues
        return [answer for _, answer in pairs]

    def create_puzzle(
        self,
        items: Sequence[str],
        *,
        puzzle_id: Optional[str] = None,
        title: Optional[str] = None,
    ) -> WordSearchPuzzleRecord:
        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        self._count += 1
        pairs = self.prepare_items(items)
        if not pairs:
            raise PuzzleGenerationError("No usable items after sanitizing input")
        clues = self.make_clues(pairs)
        grid_items = [item for item, _ in pairs]

        result = build_grid(
            grid_items,
            self.rows,
            self.cols,
            self._rng,
            self.fill,
            max_attempts=self.max_attempts,
        )
        if not isinstance(result, WordGrid):
            raise PuzzleGenerationError(result.message)

        puzzle_image = self._render_grid(result, highlights=None)
        solution_image = self._render_grid(result, highlights=list(result.positions.values()))

        puzzle_path = self.puzzle_dir / f"{puzzle_uuid}_puzzle.png"
        solution_path = self.solution_dir / f"{puzzle_uuid}_solution.png"
        puzzle_image.save(puzzle_path)
        solution_image.save(solution_path)

        return WordSearchPuzzleRecord(
            id=puzzle_uuid,
            title=title or f"{self.title} {self._count}",
            mode=self.mode,
            fill=self.fill,
            grid_size=(self.rows, self.cols),
            cell_size=self.cell_size,
            items=grid_items,
            answers=[answer for _, answer in pairs],
            clues=clues,
            grid=result.rows_as_strings(),
            positions={item: list(result.positions[item]) for item in grid_items},
            attempts=result.attempts,
            puzzle_image_path=self.relativize_path(puzzle_path),
            solution_image_path=self.relativize_path(solution_path),
            keyword=self.keyword,
            cipher_alphabet=self.cipher_alphabet,
            difficulty=self.difficulty if self.mode == "numbers" else None,
        )

    def create_random_puzzle(self) -> WordSearchPuzzleRecord:
        if self.mode == "numbers":
            items = [
                random_number_string(self._rng, self.min_number_length, self.max_number_length)
                for _ in range(self.words_per_puzzle)
            ]
        else:
            if not self.words:
                raise ValueError(f"A word list is required for {self.mode} puzzles")
            pool = list(self.words)
            self._rng.shuffle(pool)
            items = pool[: self.words_per_puzzle]
        return self.create_puzzle(items)

    # ------------------------------------------------------------------

    def _render_grid(
        self,
        grid: WordGrid,
        *,
        highlights: Optional[Sequence[Sequence[Coord]]],
    ) -> Image.Image:
        size = self.cell_size
        canvas = Image.new("RGB", (grid.cols * size, grid.rows * size), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(canvas)
        font = ImageFont.load_default()

        if highlights:
            width = max(1, int(size * HIGHLIGHT_WIDTH_FACTOR))
            for coords in highlights:
                if len(coords) < 2:
                    continue
                (r1, c1), (r2, c2) = coords[0], coords[-1]
                draw.line(
                    (
                        c1 * size + size / 2,
                        r1 * size + size / 2,
                        c2 * size + size / 2,
                        r2 * size + size / 2,
                    ),
                    fill=HIGHLIGHT_COLOR,
                    width=width,
                )

        for r, row in enumerate(grid.cells):
            for c, char in enumerate(row):
                left, top = c * size, r * size
                draw.rectangle((left, top, left + size - 1, top + size - 1), outline=GRID_LINE_COLOR)
                x0, y0, x1, y1 = draw.textbbox((0, 0), char, font=font)
                draw.text(
                    (left + (size - (x1 - x0)) / 2 - x0, top + (size - (y1 - y0)) / 2 - y0),
                    char,
                    fill=TEXT_COLOR,
                    font=font,
                )
        return canvas


__all__ = ["WordSearchGenerator", "WordSearchPuzzleRecord"]


def _read_words(path: Path) -> List[str]:
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate word, anagram, cipher or number search puzzles")
    parser.add_argument("count", type=int, help="Number of puzzles to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/wordsearch"), help="Where to save assets")
    parser.add_argument("--mode", choices=MODES, default="words")
    parser.add_argument("--words", type=Path, default=None, help="Text file with one word or phrase per line")
    parser.add_argument("--keyword", type=str, default=None, help="Cipher keyword (cipher mode)")
    parser.add_argument("--difficulty", choices=DIFFICULTIES, default="easy", help="Clue difficulty (numbers mode)")
    parser.add_argument("--rows", type=int, default=15)
    parser.add_argument("--cols", type=int, default=15)
    parser.add_argument("--words-per-puzzle", type=int, default=10)
    parser.add_argument("--min-number-length", type=int, default=3)
    parser.add_argument("--max-number-length", type=int, default=6)
    parser.add_argument("--cell-size", type=int, default=32)
    parser.add_argument("--max-attempts", type=int, default=MAX_ATTEMPTS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    args = parser.parse_args(argv)
    if args.mode != "numbers" and args.words is None:
        parser.error(f"--words is required in {args.mode} mode")
    if args.mode == "cipher" and not sanitize_for_grid(args.keyword or ""):
        parser.error("--keyword with at least one letter is required in cipher mode")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    words = _read_words(args.words) if args.words is not None else []
    generator = WordSearchGenerator(
        output_dir=args.output_dir,
        mode=args.mode,
        words=words,
        keyword=args.keyword,
        difficulty=args.difficulty,
        rows=args.rows,
        cols=args.cols,
        words_per_puzzle=args.words_per_puzzle,
        min_number_length=args.min_number_length,
        max_number_length=args.max_number_length,
        cell_size=args.cell_size,
        max_attempts=args.max_attempts,
        seed=args.seed,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    generator.generate_dataset(args.count, metadata_path=metadata_path)


if __name__ == "__main__":
    main()
