import random
import unittest

from puzzlepress.wordsearch.grid_builder import (
    BLANK,
    DIGITS,
    LETTERS,
    PlacementFailure,
    WordGrid,
    build_grid,
    resolve_alphabet,
)

from tests.helpers import FixedRandom


class BuildGridTests(unittest.TestCase):
    def assert_consistent(self, grid: WordGrid) -> None:
        for item, coords in grid.positions.items():
            self.assertEqual(grid.read(coords), item)
        for row in grid.cells:
            self.assertEqual(len(row), grid.cols)
            for char in row:
                self.assertNotEqual(char, BLANK)

    def test_two_words_in_small_grid(self) -> None:
        result = build_grid(["CAT", "DOG"], 5, 5, random.Random(7), "letters")
        self.assertIsInstance(result, WordGrid)
        self.assertEqual((result.rows, result.cols), (5, 5))
        coords = result.positions["CAT"]
        self.assertEqual(len(coords), 3)
        self.assertEqual(result.read(coords), "CAT")
        steps = {(b[0] - a[0], b[1] - a[1]) for a, b in zip(coords, coords[1:])}
        self.assertEqual(len(steps), 1)
        (dr, dc), = steps
        self.assertTrue(abs(dr) <= 1 and abs(dc) <= 1 and (dr, dc) != (0, 0))
        self.assert_consistent(result)

    def test_item_longer_than_any_line_fails(self) -> None:
        result = build_grid(["A" * 30], 3, 3, random.Random(1), "letters")
        self.assertIsInstance(result, PlacementFailure)
        self.assertFalse(result)
        self.assertEqual(result.attempts, 400)
        self.assertEqual(result.unplaceable, ("A" * 30,))
        self.assertIn("400 attempts", result.message)

    def test_attempt_budget_is_configurable(self) -> None:
        result = build_grid(["ABCD"], 2, 2, random.Random(1), max_attempts=3)
        self.assertIsInstance(result, PlacementFailure)
        self.assertEqual(result.attempts, 3)

    def test_many_seeds_stay_consistent(self) -> None:
        words = ["PYTHON", "GRID", "MAZE", "SEARCH", "WORD", "LETTER", "CELL", "PATH"]
        for seed in range(25):
            result = build_grid(words, 10, 10, random.Random(seed))
            self.assertIsInstance(result, WordGrid)
            self.assertEqual(set(result.positions), set(words))
            self.assert_consistent(result)
            shared = {}
            for item, coords in result.positions.items():
                for coord, char in zip(coords, item):
                    self.assertEqual(shared.setdefault(coord, char), char)

    def test_digit_fill_uses_digits_only(self) -> None:
        result = build_grid(["12345", "9876"], 6, 6, random.Random(3), "digits")
        self.assertIsInstance(result, WordGrid)
        for row in result.cells:
            for char in row:
                self.assertIn(char, DIGITS)
        self.assert_consistent(result)

    def test_same_seed_gives_same_grid(self) -> None:
        words = ["ALPHA", "BETA", "GAMMA", "DELTA"]
        first = build_grid(words, 8, 8, random.Random(42))
        second = build_grid(words, 8, 8, random.Random(42))
        self.assertEqual(first.cells, second.cells)
        self.assertEqual(dict(first.positions), dict(second.positions))
        self.assertEqual(first.attempts, second.attempts)

    def test_fixed_random_places_longest_first(self) -> None:
        result = build_grid(["AB", "XYZ"], 3, 3, FixedRandom())
        self.assertEqual(result.positions["XYZ"], ((0, 0), (1, 0), (2, 0)))
        self.assertEqual(result.positions["AB"], ((0, 1), (1, 1)))
        self.assertEqual(result.rows_as_strings(), ["XAA", "YBA", "ZAA"])
        self.assertEqual(result.attempts, 1)

    def test_duplicate_and_overlapping_items_share_cells(self) -> None:
        result = build_grid(["AAA", "AAA", "AA"], 3, 3, FixedRandom())
        self.assertIsInstance(result, WordGrid)
        self.assertEqual(result.positions["AAA"], ((0, 0), (1, 0), (2, 0)))
        self.assertEqual(result.positions["AA"], ((0, 0), (1, 0)))
        self.assert_consistent(result)

    def test_exact_fit_fills_whole_grid(self) -> None:
        result = build_grid(["ABC", "DEF", "GHI"], 3, 3, random.Random(5))
        self.assertIsInstance(result, WordGrid)
        letters = sorted(char for row in result.cells for char in row)
        self.assertEqual(letters, sorted("ABCDEFGHI"))

    def test_blank_items_are_skipped(self) -> None:
        result = build_grid(["", "  ", "OK"], 2, 2, random.Random(0))
        self.assertIsInstance(result, WordGrid)
        self.assertEqual(list(result.positions), ["OK"])

    def test_result_is_read_only(self) -> None:
        result = build_grid(["CAT"], 4, 4, random.Random(0))
        with self.assertRaises(TypeError):
            result.positions["DOG"] = ((0, 0),)
        with self.assertRaises(AttributeError):
            result.attempts = 5

    def test_to_dict_is_json_ready(self) -> None:
        result = build_grid(["CAT"], 4, 4, FixedRandom())
        payload = result.to_dict()
        self.assertEqual(payload["grid"][0][0], "C")
        self.assertEqual(payload["positions"]["CAT"], [[0, 0], [1, 0], [2, 0]])

    def test_invalid_arguments_raise(self) -> None:
        with self.assertRaises(ValueError):
            build_grid(["CAT"], 0, 5, random.Random(0))
        with self.assertRaises(ValueError):
            build_grid(["CAT"], 5, 5, random.Random(0), max_attempts=0)
        with self.assertRaises(ValueError):
            build_grid(["CAT"], 5, 5, random.Random(0), alphabet="")

    def test_resolve_alphabet(self) -> None:
        self.assertEqual(resolve_alphabet("letters"), LETTERS)
        self.assertEqual(resolve_alphabet("digits"), DIGITS)
        self.assertEqual(resolve_alphabet("letters", "XO"), "XO")

    def test_unknown_fill_name_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            resolve_alphabet("letter")
        with self.assertRaises(ValueError):
            build_grid(["AB"], 3, 3, random.Random(0), "XO")

    def test_alphabet_with_blank_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_grid(["AB"], 3, 3, random.Random(0), alphabet=" ")
        with self.assertRaises(ValueError):
            resolve_alphabet("letters", "X O")

    def test_custom_alphabet_fills_every_blank(self) -> None:
        result = build_grid(["AB"], 3, 3, random.Random(0), alphabet="XO")
        self.assertIsInstance(result, WordGrid)
        filler = [
            char
            for r, row in enumerate(result.cells)
            for c, char in enumerate(row)
            if (r, c) not in result.positions["AB"]
        ]
        self.assertEqual(len(filler), 7)
        self.assertTrue(set(filler) <= {"X", "O"})


if __name__ == "__main__":
    unittest.main()
