"""
fraction_problems.py

Fraction problems: identification, comparison, and the four operations.
Which operations a worksheet can draw from depends on grade (see the
`fractions` entry of the policy table). Every computed result is reduced to
lowest terms with `gcd`; improper sums become mixed numbers.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Callable, Dict, List, Tuple, Union

from core.difficulty_scaler import DifficultyScaler
from core.numeric import (
    RandomSource,
    check_count,
    format_equivalent,
    format_fraction,
    format_mixed_number,
    lcm,
    pick,
    random_int,
    reduce_fraction,
)
from schemas.worksheet import Question

Problem = Tuple[str, str, str]


def _reduced(numerator: int, denominator: int) -> str:
    numerator, denominator = reduce_fraction(numerator, denominator)
    if denominator == 1:
        return str(numerator)
    return format_fraction(numerator, denominator)


def _identify(rng: RandomSource) -> Problem:
    denominator = random_int(rng, 2, 12)
    numerator = random_int(rng, 1, denominator - 1)
    question = (
        "What fraction is represented by the shaded portion? "
        f"({numerator} parts out of {denominator} total parts)"
    )
    return question, f"{numerator}/{denominator}", ""


def _compare(rng: RandomSource) -> Problem:
    denom1 = random_int(rng, 2, 10)
    numer1 = random_int(rng, 1, denom1)
    denom2 = random_int(rng, 2, 10)
    numer2 = random_int(rng, 1, denom2)
    left, right = Fraction(numer1, denom1), Fraction(numer2, denom2)
    if left < right:
        sign = "<"
    elif left > right:
        sign = ">"
    else:
        sign = "="
    question = f"Compare the fractions {numer1}/{denom1} and {numer2}/{denom2} using <, >, or =."
    return question, f"{numer1}/{denom1} {sign} {numer2}/{denom2}", ""


def _add_same_denominator(rng: RandomSource) -> Problem:
    denominator = random_int(rng, 2, 12)
    numer1 = random_int(rng, 1, denominator - 1)
    numer2 = random_int(rng, 1, denominator - 1)
    total, reduced_den = reduce_fraction(numer1 + numer2, denominator)
    question = f"{numer1}/{denominator} + {numer2}/{denominator} = ?"
    return question, format_mixed_number(total, reduced_den), ""


def _subtract_same_denominator(rng: RandomSource) -> Problem:
    denominator = random_int(rng, 2, 12)
    numer1 = random_int(rng, 2, 12)
    numer2 = random_int(rng, 1, numer1)
    question = f"{numer1}/{denominator} - {numer2}/{denominator} = ?"
    return question, _reduced(numer1 - numer2, denominator), ""


def _two_unlike_fractions(rng: RandomSource) -> Tuple[int, int, int, int]:
    denom1 = random_int(rng, 2, 12)
    denom2 = random_int(rng, 2, 11)
    if denom2 >= denom1:
        denom2 += 1
    return random_int(rng, 1, denom1 - 1), denom1, random_int(rng, 1, denom2 - 1), denom2


def _add_different_denominator(rng: RandomSource) -> Problem:
    numer1, denom1, numer2, denom2 = _two_unlike_fractions(rng)
    common = lcm(denom1, denom2)
    scaled1, scaled2 = numer1 * common // denom1, numer2 * common // denom2
    total, reduced_den = reduce_fraction(scaled1 + scaled2, common)
    answer = format_mixed_number(total, reduced_den)
    question = f"Add the fractions: {numer1}/{denom1} + {numer2}/{denom2} = ?"
    explanation = (
        f"Rewrite over the common denominator {common}: "
        f"{scaled1}/{common} + {scaled2}/{common} = {scaled1 + scaled2}/{common}, so the answer is {answer}"
    )
    return question, answer, explanation


def _subtract_different_denominator(rng: RandomSource) -> Problem:
    numer1, denom1, numer2, denom2 = _two_unlike_fractions(rng)
    # Larger fraction first keeps the difference non-negative.
    if Fraction(numer1, denom1) < Fraction(numer2, denom2):
        numer1, denom1, numer2, denom2 = numer2, denom2, numer1, denom1
    common = lcm(denom1, denom2)
    scaled1, scaled2 = numer1 * common // denom1, numer2 * common // denom2
    answer = _reduced(scaled1 - scaled2, common)
    question = f"Subtract the fractions: {numer1}/{denom1} - {numer2}/{denom2} = ?"
    explanation = (
        f"Rewrite over the common denominator {common}: "
        f"{scaled1}/{common} - {scaled2}/{common} = {scaled1 - scaled2}/{common}, so the answer is {answer}"
    )
    return question, answer, explanation


def _multiply(rng: RandomSource) -> Problem:
    denom1 = random_int(rng, 2, 9)
    numer1 = random_int(rng, 1, denom1 - 1)
    denom2 = random_int(rng, 2, 9)
    numer2 = random_int(rng, 1, denom2 - 1)
    question = f"Multiply the fractions: {numer1}/{denom1} × {numer2}/{denom2} = ?"
    return question, format_equivalent(numer1 * numer2, denom1 * denom2), ""


def _divide(rng: RandomSource) -> Problem:
    denom1 = random_int(rng, 2, 9)
    numer1 = random_int(rng, 1, denom1 - 1)
    denom2 = random_int(rng, 2, 9)
    numer2 = random_int(rng, 1, denom2 - 1)
    question = f"Divide the fractions: {numer1}/{denom1} ÷ {numer2}/{denom2} = ?"
    explanation = (
        f"Multiply {numer1}/{denom1} by the reciprocal {denom2}/{numer2}"
    )
    return question, format_equivalent(numer1 * denom2, denom1 * numer2), explanation


FRACTION_OPERATIONS: Dict[str, Callable[[RandomSource], Problem]] = {
    "identify": _identify,
    "compare": _compare,
    "add-same-denominator": _add_same_denominator,
    "subtract-same-denominator": _subtract_same_denominator,
    "add-different-denominator": _add_different_denominator,
    "subtract-different-denominator": _subtract_different_denominator,
    "multiply": _multiply,
    "divide": _divide,
}


def generate_fraction_problems(
    grade: Union[int, str],
    count: int,
    difficulty: str,
    rng: RandomSource,
) -> List[Question]:
    check_count(count)
    operations = DifficultyScaler(grade, difficulty).operations("fractions")
    questions: List[Question] = []
    for _ in range(count):
        operation = pick(rng, operations)
        question, answer, explanation = FRACTION_OPERATIONS[operation](rng)
        questions.append(
            Question(
                question_text=question,
                answer_text=answer,
                explanation=explanation or (
                    f"Follow the rules for {operation.replace('-', ' ')} fractions to get {answer}"
                ),
                topic="fractions",
            )
        )
    return questions
