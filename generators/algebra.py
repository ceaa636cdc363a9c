"""
algebra.py

Solve-for-the-unknown problems. Before grade 6 the worksheet asks for a
missing factor; from grade 6 it mixes linear equations, 2x2 linear systems
and factorable quadratics. Every equation is built backwards from its
integer solution, so answers are always exact.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple, Union

from core.difficulty_scaler import DifficultyScaler
from core.numeric import (
    RandomSource,
    check_count,
    join_terms,
    pick,
    random_int,
    signed_term,
)
from schemas.worksheet import Question

Problem = Tuple[str, str, str]


def _missing_factor(rng: RandomSource) -> Problem:
    a = random_int(rng, 1, 10)
    c = a * random_int(rng, 1, 5)
    x = c // a
    return (
        f"Find the value of x: {a} × x = {c}",
        f"x = {x}",
        f"Divide both sides by {a} to get x = {x}",
    )


def _linear_equation(rng: RandomSource, a_range, b_range, x_range) -> Problem:
    a = random_int(rng, *a_range)
    b = random_int(rng, *b_range)
    x = random_int(rng, *x_range)
    c = a * x + b
    return (
        f"Solve for x: {a}x + {b} = {c}",
        f"x = {x}",
        f"Subtract {b} from both sides, then divide by {a} to get x = {x}",
    )


def _linear(rng: RandomSource) -> Problem:
    return _linear_equation(rng, (2, 10), (1, 20), (-10, 10))


def _two_step(rng: RandomSource) -> Problem:
    return _linear_equation(rng, (2, 5), (5, 15), (-5, 5))


def _equation_line(a: int, b: int, c: int) -> str:
    left = join_terms([signed_term(a, "x", leading=True), signed_term(b, "y", leading=False)])
    return f"{left} = {c}"


def _system(rng: RandomSource) -> Problem:
    """
    Two equations in x and y with a unique integer solution: coefficients
    are redrawn until the determinant is non-zero.
    """

    x = random_int(rng, -5, 5)
    y = random_int(rng, -5, 5)
    while True:
        a1, b1 = random_int(rng, 1, 5), random_int(rng, 1, 5)
        a2, b2 = random_int(rng, 1, 5), -random_int(rng, 1, 5)
        if a1 * b2 - a2 * b1 != 0:
            break
    c1 = a1 * x + b1 * y
    c2 = a2 * x + b2 * y
    question = "Solve the system:\n" + _equation_line(a1, b1, c1) + "\n" + _equation_line(a2, b2, c2)
    return (
        question,
        f"x = {x}, y = {y}",
        "Eliminate one variable by combining the equations, then substitute back",
    )


def _quadratic(rng: RandomSource) -> Problem:
    """x² + bx + c = 0 built from two distinct integer roots."""

    root1 = random_int(rng, -9, 9)
    root2 = random_int(rng, -9, 8)
    if root2 >= root1:
        root2 += 1
    low, high = sorted((root1, root2))
    b = -(low + high)
    c = low * high
    terms = [
        "x²",
        signed_term(b, "x", leading=False),
        signed_term(c, "", leading=False),
    ]
    return (
        f"Solve: {join_terms(terms)} = 0",
        f"x = {low} or x = {high}",
        f"Factor as {_factor(low)}{_factor(high)} = 0 and set each factor to zero",
    )


def _factor(root: int) -> str:
    if root == 0:
        return "x"
    return f"(x - {root})" if root > 0 else f"(x + {-root})"


ALGEBRA_TEMPLATES: Dict[str, Callable[[RandomSource], Problem]] = {
    "missing-factor": _missing_factor,
    "linear": _linear,
    "two-step": _two_step,
    "system": _system,
    "quadratic": _quadratic,
}


def generate_algebra_problems(
    grade: Union[int, str],
    count: int,
    difficulty: str,
    rng: RandomSource,
) -> List[Question]:
    check_count(count)
    templates = DifficultyScaler(grade, difficulty).operations("algebra")
    questions: List[Question] = []
    for _ in range(count):
        question, answer, explanation = ALGEBRA_TEMPLATES[pick(rng, templates)](rng)
        questions.append(
            Question(
                question_text=question,
                answer_text=answer,
                explanation=explanation,
                topic="algebra",
            )
        )
    return questions
