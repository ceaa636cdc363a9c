"""
answer_validator.py

SymPy-based checking of a learner response against a generated answer key
entry. It understands every answer format the generators write: whole
numbers, decimals, fractions and mixed numbers, equivalent-form chains
("6/15 = 2/5"), quotients with remainders ("7 R 3"), measurements with
units, fraction comparisons, solved variables ("x = 4", "x = 2 or x = 3",
"x = 1, y = -2") and shape names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sympy import Expr, Rational, sympify
from sympy.core.sympify import SympifyError

UNIT_SUFFIX = re.compile(r"\s*\b(cubic units|square units|units)\s*$", re.IGNORECASE)
NUMBER = re.compile(r"^-?\d+(\.\d+)?(\s*/\s*-?\d+)?$")
MIXED_NUMBER = re.compile(r"^(-?)(\d+)\s+(\d+)\s*/\s*(\d+)$")
REMAINDER = re.compile(r"^(-?\d+)\s*r\s*(\d+)$", re.IGNORECASE)
RELATION = re.compile(r"^(.+?)\s*([<>=])\s*(.+)$")
PLAIN_FRACTION = re.compile(r"^(\d+)/(\d+)$")
ASSIGNMENT = re.compile(r"\b([a-z])\s*=\s*([^,]+?)\s*(?=,|\bor\b|\band\b|$)", re.IGNORECASE)
LIST_SEPARATOR = re.compile(r"\s*(?:,|\bor\b|\band\b)\s*", re.IGNORECASE)
FLIPPED = {"<": ">", ">": "<", "=": "="}


@dataclass
class ValidationResult:
    """
    Represents the outcome of a single validation attempt.
    """

    correct: bool
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


def _clean(text: str) -> str:
    return " ".join(str(text).replace("−", "-").split())


class AnswerValidator:
    """
    Usage:
        validator = AnswerValidator()
        result = validator.check("6/15 = 2/5", "0.4")
        if result.correct:
            ...
    """

    def __init__(self, *, tolerance: float = 1e-6):
        self.tolerance = tolerance

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def check(
        self,
        answer_text: str,
        response: str,
        *,
        question_text: Optional[str] = None,
    ) -> ValidationResult:
        """
        Compares a learner `response` with a generated `answer_text`.

        `"1/2 = 2/4"` is a comparison key while `"6/15 = 2/5"` is an
        equivalent-form chain. Passing the `question_text` settles which one
        is meant; without it, a key whose right side is the lowest-terms form
        of its left side is read as a chain.
        """

        expected = _clean(answer_text)
        actual = _clean(response)
        if not actual:
            return ValidationResult(correct=False, message="No answer given.")

        if ASSIGNMENT.search(expected):
            return self._check_assignments(expected, actual)
        if REMAINDER.match(expected):
            return self._check_remainder(expected, actual)
        relation = RELATION.match(expected)
        if relation and self._is_comparison(relation, question_text):
            return self._check_comparison(relation, actual)
        if relation and actual == "=" and question_text is None and self._fraction_sides(relation):
            return self._check_comparison(relation, actual)
        return self._check_value(expected, actual)

    def validate(self, expected: Any, actual: Any) -> ValidationResult:
        """
        Compares `actual` against `expected`, where `expected` is a single
        value or a sequence of acceptable values. Two strings are treated as
        an answer key entry and a learner response.
        """

        if isinstance(expected, str) and isinstance(actual, str):
            return self.check(expected, actual)
        if isinstance(expected, Sequence) and not isinstance(expected, (str, bytes)):
            return self._validate_sequence(expected, actual)
        return self._validate_leaf(expected, actual)

    # ------------------------------------------------------------------ #
    # Answer formats
    # ------------------------------------------------------------------ #

    def _check_value(self, expected: str, actual: str) -> ValidationResult:
        expected_value, expected_unit = self._split_unit(expected)
        actual_value, actual_unit = self._split_unit(actual)
        if actual_unit and expected_unit and actual_unit != expected_unit:
            return ValidationResult(
                correct=False,
                message="Wrong units.",
                details={"expected_unit": expected_unit, "actual_unit": actual_unit},
            )

        options = [part.strip() for part in expected_value.split("=")]
        if all(self._is_number(option) for option in options):
            # A response may repeat the whole chain; every form it gives must hold.
            for part in actual_value.split("="):
                result = self.validate(options, part.strip())
                if not result.correct:
                    return result
            return result

        correct = expected_value.lower() == actual_value.lower()
        return ValidationResult(
            correct=correct,
            message="Answers match." if correct else "Answers differ.",
            details={"expected": expected_value, "actual": actual_value},
        )

    def _check_remainder(self, expected: str, actual: str) -> ValidationResult:
        want = REMAINDER.match(expected)
        got = REMAINDER.match(actual)
        if not got:
            return ValidationResult(
                correct=False,
                message="Give the quotient and remainder, e.g. '7 R 3'.",
                details={"actual": actual},
            )
        correct = (int(want.group(1)), int(want.group(2))) == (int(got.group(1)), int(got.group(2)))
        return ValidationResult(
            correct=correct,
            message="Quotient and remainder are correct." if correct else "Quotient or remainder differs.",
            details={"expected": expected, "actual": actual},
        )

    def _check_comparison(self, relation: "re.Match[str]", actual: str) -> ValidationResult:
        left, sign, right = relation.group(1), relation.group(2), relation.group(3)
        if actual in FLIPPED:
            correct = actual == sign
        else:
            given = RELATION.match(actual)
            correct = False
            if given:
                g_left, g_sign, g_right = given.group(1), given.group(2), given.group(3)
                if self._same_value(g_left, left) and self._same_value(g_right, right):
                    correct = g_sign == sign
                elif self._same_value(g_left, right) and self._same_value(g_right, left):
                    correct = g_sign == FLIPPED[sign]
        return ValidationResult(
            correct=correct,
            message="Comparison is correct." if correct else "Comparison is incorrect.",
            details={"expected": f"{left} {sign} {right}", "actual": actual},
        )

    def _check_assignments(self, expected: str, actual: str) -> ValidationResult:
        expected_values = self._parse_assignments(expected)
        if ASSIGNMENT.search(actual):
            actual_values = self._parse_assignments(actual)
        elif len(expected_values) == 1:
            variable = next(iter(expected_values))
            actual_values = {variable: [part for part in LIST_SEPARATOR.split(actual) if part]}
        else:
            return ValidationResult(
                correct=False,
                message=f"Give a value for each of {', '.join(sorted(expected_values))}.",
                details={"actual": actual},
            )

        missing = sorted(set(expected_values) - set(actual_values))
        if missing:
            return ValidationResult(
                correct=False,
                message=f"Missing value for {', '.join(missing)}.",
                details={"missing": missing},
            )

        component_results: Dict[str, bool] = {}
        for variable, wanted in expected_values.items():
            component_results[variable] = self._same_set(wanted, actual_values[variable])

        all_correct = all(component_results.values())
        return ValidationResult(
            correct=all_correct,
            message="All parts correct." if all_correct else "One or more parts incorrect.",
            details={"component_results": component_results},
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _fraction_sides(relation: "re.Match[str]"):
        left = PLAIN_FRACTION.match(relation.group(1))
        right = PLAIN_FRACTION.match(relation.group(3))
        if not (left and right):
            return None
        return (int(left.group(1)), int(left.group(2))), (int(right.group(1)), int(right.group(2)))

    def _is_comparison(self, relation: "re.Match[str]", question_text: Optional[str]) -> bool:
        if relation.group(2) in "<>":
            return True
        sides = self._fraction_sides(relation)
        if sides is None:
            return False
        if question_text is not None:
            return question_text.strip().lower().startswith("compare")
        (left_num, left_den), (right_num, right_den) = sides
        if left_den == 0 or right_den == 0:
            return False
        lowest = Rational(left_num, left_den)
        is_chain = (
            (left_num, left_den) != (right_num, right_den)
            and (right_num, right_den) == (int(lowest.p), int(lowest.q))
        )
        return not is_chain

    @staticmethod
    def _parse_assignments(text: str) -> Dict[str, List[str]]:
        values: Dict[str, List[str]] = {}
        for variable, value in ASSIGNMENT.findall(text):
            values.setdefault(variable.lower(), []).append(value.strip())
        return values

    @staticmethod
    def _split_unit(text: str):
        match = UNIT_SUFFIX.search(text)
        if not match:
            return text, None
        return text[: match.start()].strip(), match.group(1).lower()

    def _same_set(self, wanted: List[str], given: List[str]) -> bool:
        if len(wanted) != len(given):
            return False
        remaining = list(given)
        for value in wanted:
            for index, candidate in enumerate(remaining):
                if self._same_value(value, candidate):
                    del remaining[index]
                    break
            else:
                return False
        return True

    def _same_value(self, expected: str, actual: str) -> bool:
        return self._validate_leaf(expected, actual).correct

    def _is_number(self, text: str) -> bool:
        try:
            self._to_expr(text)
        except ValueError:
            return False
        return True

    def _validate_sequence(self, expected_options: Iterable[Any], actual: Any) -> ValidationResult:
        errors: List[str] = []
        for option in expected_options:
            result = self._validate_leaf(option, actual)
            if result.correct:
                result.message = "Matched one of the acceptable answers."
                return result
            errors.append(result.message)

        return ValidationResult(
            correct=False,
            message="Response did not match any acceptable answer.",
            details={"attempts": errors},
        )

    def _validate_leaf(self, expected: Any, actual: Any) -> ValidationResult:
        try:
            expected_expr = self._to_expr(expected)
            actual_expr = self._to_expr(actual)
        except ValueError as exc:
            return ValidationResult(
                correct=False,
                message=str(exc),
                details={"expected": expected, "actual": actual},
            )

        if self._expressions_match(expected_expr, actual_expr):
            return ValidationResult(
                correct=True,
                message="Answers are equivalent.",
                details={
                    "expected_expr": str(expected_expr),
                    "actual_expr": str(actual_expr),
                },
            )

        return ValidationResult(
            correct=False,
            message="Answers differ.",
            details={
                "expected_expr": str(expected_expr),
                "actual_expr": str(actual_expr),
            },
        )

    def _to_expr(self, value: Any) -> Expr:
        if isinstance(value, Expr):
            return value
        if isinstance(value, bool):
            return sympify(int(value))
        if isinstance(value, (int, float)):
            return sympify(value)
        if not isinstance(value, str):
            raise ValueError(f"Unsupported answer type: {type(value).__name__}")

        text = _clean(value)
        mixed = MIXED_NUMBER.match(text)
        if mixed:
            sign, whole, numerator, denominator = mixed.groups()
            magnitude = int(whole) + Rational(int(numerator), int(denominator))
            return -magnitude if sign else magnitude
        # Only plain numerals reach sympify; free text never gets evaluated.
        if not NUMBER.match(text):
            raise ValueError(f"Unable to parse number '{value}'.")
        try:
            return sympify(text.replace(" ", ""), rational=True)
        except (SympifyError, ZeroDivisionError) as exc:
            raise ValueError(f"Unable to parse number '{value}'.") from exc

    def _expressions_match(self, expected: Expr, actual: Expr) -> bool:
        expected_val = expected.evalf()
        actual_val = actual.evalf()
        if not (expected_val.is_finite and actual_val.is_finite):
            return False
        return abs(expected_val - actual_val) <= self.tolerance


def check_answer(
    answer_text: str,
    response: str,
    *,
    question_text: Optional[str] = None,
    tolerance: float = 1e-6,
) -> ValidationResult:
    """
    Convenience function for one-off checks.
    """

    return AnswerValidator(tolerance=tolerance).check(answer_text, response, question_text=question_text)


if __name__ == "__main__":
    validator = AnswerValidator()
    print(validator.check("6/15 = 2/5", "0.4"))
    print(validator.check("x = 2 or x = 3", "3, 2"))
