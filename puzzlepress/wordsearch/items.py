"""Helpers that turn user input into strings the grid builder can place,
plus the clue text shown next to a grid."""

from __future__ import annotations

import ast
import logging
import operator
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional

from ..random_source import RandomSource
from .grid_builder import LETTERS

logger = logging.getLogger(__name__)

_NON_ALPHA_RE = re.compile(r"[^A-Z]")
_NON_DIGIT_RE = re.compile(r"[^0-9]")

DIFFICULTIES = ("easy", "medium", "hard")
PREVIOUS_TOKEN = "PREV_ANS"
_OPERATIONS = ("+", "-", "*", "/")
_BIN_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}


def sanitize_for_grid(text: str) -> str:
    """Uppercase ``text`` and drop everything that is not A-Z."""

    if not isinstance(text, str):
        return ""
    return _NON_ALPHA_RE.sub("", text.upper())


def sanitize_digits(text: str) -> str:
    if not isinstance(text, str):
        return ""
    return _NON_DIGIT_RE.sub("", text)


def random_number_string(rng: RandomSource, min_length: int, max_length: int) -> str:
    """Draw a digit string whose length lies in ``[min_length, max_length]``.

    Multi-digit results never start with ``0``.
    """

    if min_length < 1 or max_length < min_length:
        raise ValueError("lengths must satisfy 1 <= min_length <= max_length")
    length = rng.randint(min_length, max_length)
    digits = [str(rng.randint(0, 9)) for _ in range(length)]
    if length > 1 and digits[0] == "0":
        digits[0] = str(rng.randint(1, 9))
    return "".join(digits)


def scramble_phrase(phrase: str, rng: RandomSource) -> str:
    """Anagram clue: shuffle the letters inside each word, keep word order."""

    scrambled = []
    for word in phrase.split():
        letters = list(word)
        rng.shuffle(letters)
        scrambled.append("".join(letters))
    return " ".join(scrambled)


# ----------------------------------------------------------------------
# Keyword substitution cipher


def cipher_alphabet(keyword: str) -> str:
    """Keyword letters (first occurrence only) followed by the rest of A-Z."""

    seen = []
    for char in sanitize_for_grid(keyword) + LETTERS:
        if char not in seen:
            seen.append(char)
    return "".join(seen)


def encrypt(plaintext: str, key_alphabet: str) -> str:
    """Substitute each A-Z letter of ``plaintext``; other characters pass through."""

    if sorted(key_alphabet) != sorted(LETTERS):
        raise ValueError("cipher alphabet must be a permutation of A-Z")
    return plaintext.upper().translate(str.maketrans(LETTERS, key_alphabet))


# ----------------------------------------------------------------------
# Arithmetic clues for number searches


@dataclass(frozen=True)
class CalculationClue:
    clue: str
    answer: int

    def to_dict(self) -> dict:
        return {"clue": self.clue, "answer": self.answer}


def _eval_node(node: ast.AST) -> Fraction:
    if isinstance(node, ast.BinOp) and type(node.op) in _BIN_OPS:
        return _BIN_OPS[type(node.op)](_eval_node(node.left), _eval_node(node.right))
    if isinstance(node, ast.UnaryOp) and isinstance(node.op, ast.USub):
        return -_eval_node(node.operand)
    if isinstance(node, ast.Constant) and type(node.value) is int:
        return Fraction(node.value)
    raise ValueError(f"Unsupported clue element: {ast.dump(node)}")


def evaluate_clue(clue: str, previous: Optional[int] = None) -> Fraction:
    """Exact value of an arithmetic clue; ``PREV_ANS`` reads as ``previous``."""

    text = clue.replace(PREVIOUS_TOKEN, f"({previous if previous is not None else 0})")
    return _eval_node(ast.parse(text, mode="eval").body)


def _chance(rng: RandomSource, percent: int) -> bool:
    return rng.randint(1, 100) <= percent


def _chained_clue(target: int, previous: int, rng: RandomSource) -> str:
    if not _chance(rng, 70):
        return ""
    op = _OPERATIONS[rng.randint(0, len(_OPERATIONS) - 1)]
    if op == "+" and target != previous:
        step = target - previous
        return f"{PREVIOUS_TOKEN} + {step}" if step > 0 else f"{PREVIOUS_TOKEN} - {-step}"
    if op == "-":
        if _chance(rng, 50):
            step = previous - target
            return f"{PREVIOUS_TOKEN} - {step}" if step > 0 else f"{PREVIOUS_TOKEN} + {-step}"
        if target + previous != 0:
            return f"{target + previous} - {PREVIOUS_TOKEN}"
        return ""
    if op == "*" and target % previous == 0 and target // previous not in (0, 1):
        return f"{PREVIOUS_TOKEN} * {target // previous}"
    if op == "/":
        if target != 0 and previous % target == 0 and previous // target > 1 and _chance(rng, 50):
            return f"{PREVIOUS_TOKEN} / {previous // target}"
        if previous > 1 and 0 < target * previous < 1_000_000:
            return f"{target * previous} / {PREVIOUS_TOKEN}"
    return ""


def _medium_clue(target: int, rng: RandomSource) -> str:
    op_a = _OPERATIONS[rng.randint(0, len(_OPERATIONS) - 1)]
    op_b = _OPERATIONS[rng.randint(0, len(_OPERATIONS) - 1)]
    part1 = rng.randint(1, 50)
    part2 = rng.randint(1, 30)

    if op_a == "/" and part1 % part2 != 0:
        op_a = "+"
    if op_a == "+":
        inner = part1 + part2
    elif op_a == "-":
        inner = part1 - part2
    elif op_a == "*":
        inner = part1 * part2
    else:
        inner = part1 // part2

    part3 = 0
    if op_b == "*":
        if inner != 0 and target % inner == 0 and target // inner > 0:
            part3 = target // inner
        else:
            op_b = "+"
    elif op_b == "/":
        if target != 0 and inner % target == 0 and inner // target > 0:
            part3 = inner // target
        else:
            op_b = "-"
    if op_b == "+":
        part3 = target - inner
    elif op_b == "-":
        part3 = inner - target

    if abs(part3) > 100:
        return ""
    if op_b in ("+", "-") and part3 < 0:
        op_b = "-" if op_b == "+" else "+"
        part3 = -part3
    return f"({part1} {op_a} {part2}) {op_b} {part3}"


def _easy_clue(target: int, rng: RandomSource) -> str:
    max_operand = max(10, target * 2)
    if rng.randint(0, 1) == 0:
        addend = rng.randint(1, 20) if target == 0 else rng.randint(1, max(1, target - 1))
        base = target - addend
        if 0 <= base <= max_operand and addend <= max_operand:
            return f"{base} + {addend}"
    else:
        subtrahend = rng.randint(1, max(1, target + 20))
        base = target + subtrahend
        if base <= max_operand and subtrahend <= max_operand * 1.5:
            return f"{base} - {subtrahend}"

    addend = rng.randint(0, max(1, target))
    if target == 0 and addend == 0 and _chance(rng, 50):
        addend = rng.randint(1, 10)
    base = target - addend
    if base >= 0:
        return f"{base} + {addend}"
    return f"{target} * 1"


def calculation_clue(
    target: int,
    difficulty: str,
    rng: RandomSource,
    previous: Optional[int] = None,
) -> CalculationClue:
    """Build an arithmetic expression that evaluates to ``target``.

    ``easy`` uses one addition or subtraction, ``medium`` a bracketed
    two-step expression. ``hard`` chains on the previous answer through
    ``PREV_ANS`` when it can and otherwise behaves like ``medium``. Every clue
    is evaluated before it is returned; a clue that does not hit ``target``
    is replaced with a plain sum.
    """

    if difficulty not in DIFFICULTIES:
        raise ValueError(f"difficulty must be one of {', '.join(DIFFICULTIES)}")
    if target < 0:
        raise ValueError("target must be non-negative")

    clue = ""
    if difficulty == "hard" and previous is not None and previous != 0 and target != previous:
        clue = _chained_clue(target, previous, rng)
    if not clue and difficulty in ("medium", "hard"):
        clue = _medium_clue(target, rng)
    if not clue:
        clue = _easy_clue(target, rng)

    try:
        value: Optional[Fraction] = evaluate_clue(clue, previous)
    except (ValueError, ZeroDivisionError, SyntaxError):
        value = None
    if value != target:
        logger.warning("Clue %r does not evaluate to %d; using a plain sum", clue, target)
        step = rng.randint(1, 10)
        if target == 0:
            clue = f"{step} - {step}"
        elif target >= step:
            clue = f"{target - step} + {step}"
        else:
            clue = f"{target + step} - {step}"
    return CalculationClue(clue=clue, answer=target)


__all__ = [
    "CalculationClue",
    "DIFFICULTIES",
    "PREVIOUS_TOKEN",
    "calculation_clue",
    "cipher_alphabet",
    "encrypt",
    "evaluate_clue",
    "random_number_string",
    "sanitize_digits",
    "sanitize_for_grid",
    "scramble_phrase",
]
