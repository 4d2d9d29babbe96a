import random
import unittest

from puzzlepress.wordsearch.items import (
    calculation_clue,
    cipher_alphabet,
    encrypt,
    evaluate_clue,
    random_number_string,
    sanitize_digits,
    sanitize_for_grid,
    scramble_phrase,
)

from tests.helpers import FixedRandom


class ItemPreparationTests(unittest.TestCase):
    def test_sanitize_for_grid(self) -> None:
        self.assertEqual(sanitize_for_grid("Ice-cream cone 2!"), "ICECREAMCONE")
        self.assertEqual(sanitize_for_grid(None), "")

    def test_sanitize_digits(self) -> None:
        self.assertEqual(sanitize_digits("1,024"), "1024")

    def test_number_strings_respect_length_and_leading_digit(self) -> None:
        rng = random.Random(3)
        for _ in range(200):
            value = random_number_string(rng, 2, 5)
            self.assertTrue(2 <= len(value) <= 5)
            self.assertTrue(value.isdigit())
            self.assertNotEqual(value[0], "0")

    def test_leading_zero_is_redrawn(self) -> None:
        # FixedRandom draws 0 for every digit, then 1 for the replacement
        self.assertEqual(random_number_string(FixedRandom(), 3, 6), "100")
        self.assertEqual(random_number_string(FixedRandom(), 1, 1), "0")

    def test_number_string_rejects_bad_lengths(self) -> None:
        with self.assertRaises(ValueError):
            random_number_string(random.Random(0), 0, 2)
        with self.assertRaises(ValueError):
            random_number_string(random.Random(0), 4, 2)

    def test_scramble_keeps_letters_per_word(self) -> None:
        phrase = "PUZZLE BOOK"
        scrambled = scramble_phrase(phrase, random.Random(1))
        words = scrambled.split(" ")
        self.assertEqual([sorted(w) for w in words], [sorted(w) for w in phrase.split()])


class CipherTests(unittest.TestCase):
    def test_keyword_letters_come_first_without_repeats(self) -> None:
        self.assertEqual(cipher_alphabet("Zebra"), "ZEBRACDFGHIJKLMNOPQSTUVWXY")
        self.assertEqual(cipher_alphabet("balloon!"), "BALONCDEFGHIJKMPQRSTUVWXYZ")
        self.assertEqual(cipher_alphabet(""), "ABCDEFGHIJKLMNOPQRSTUVWXYZ")

    def test_encrypt_substitutes_letters_only(self) -> None:
        key = cipher_alphabet("ZEBRA")
        self.assertEqual(encrypt("Hi, a!", key), "FG, Z!")

    def test_encrypt_rejects_bad_alphabet(self) -> None:
        with self.assertRaises(ValueError):
            encrypt("HELLO", "ABC")


class CalculationClueTests(unittest.TestCase):
    def test_clues_evaluate_to_target(self) -> None:
        rng = random.Random(21)
        for difficulty in ("easy", "medium", "hard"):
            previous = None
            for target in list(range(0, 30)) + [97, 128, 1000, 54321]:
                calc = calculation_clue(target, difficulty, rng, previous)
                self.assertEqual(calc.answer, target)
                self.assertEqual(evaluate_clue(calc.clue, previous), target, calc.clue)
                if difficulty == "hard":
                    previous = target

    def test_easy_clue_with_fixed_random(self) -> None:
        self.assertEqual(calculation_clue(10, "easy", FixedRandom()).clue, "9 + 1")

    def test_medium_clue_with_fixed_random(self) -> None:
        self.assertEqual(calculation_clue(50, "medium", FixedRandom()).clue, "(1 + 1) + 48")

    def test_hard_clue_chains_on_previous_answer(self) -> None:
        calc = calculation_clue(12, "hard", FixedRandom(), previous=5)
        self.assertEqual(calc.clue, "PREV_ANS + 7")
        self.assertEqual(evaluate_clue(calc.clue, 5), 12)

    def test_evaluate_clue_is_exact(self) -> None:
        self.assertEqual(evaluate_clue("(48 / 6) * 3"), 24)
        self.assertEqual(evaluate_clue("PREV_ANS - 2", -3), -5)
        with self.assertRaises(ValueError):
            evaluate_clue("__import__('os')")

    def test_invalid_arguments_raise(self) -> None:
        with self.assertRaises(ValueError):
            calculation_clue(5, "extreme", random.Random(0))
        with self.assertRaises(ValueError):
            calculation_clue(-1, "easy", random.Random(0))


if __name__ == "__main__":
    unittest.main()
