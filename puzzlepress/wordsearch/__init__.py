"""Word and number search grid toolkit."""

__all__ = [
    "WordGrid",
    "PlacementFailure",
    "build_grid",
    "sanitize_for_grid",
    "random_number_string",
    "scramble_phrase",
    "cipher_alphabet",
    "encrypt",
    "CalculationClue",
    "calculation_clue",
    "evaluate_clue",
    "WordSearchGenerator",
    "WordSearchPuzzleRecord",
]

from .grid_builder import WordGrid, PlacementFailure, build_grid
from .items import (
    sanitize_for_grid,
    random_number_string,
    scramble_phrase,
    cipher_alphabet,
    encrypt,
    CalculationClue,
    calculation_clue,
    evaluate_clue,
)
from .generator import WordSearchGenerator, WordSearchPuzzleRecord
