"""
arithmetic.py

Whole-number addition, subtraction, multiplication and division problems.
Operand ranges come from the policy table through `DifficultyScaler`; the
constraints that keep answers grade-appropriate (non-negative differences,
exact quotients) are enforced at sampling time rather than by rejection.
"""

from __future__ import annotations

from typing import List, Union

from core.difficulty_scaler import DifficultyScaler
from core.numeric import RandomSource, check_count, random_int
from schemas.worksheet import Question

Grade = Union[int, str]


def generate_addition_problems(
    grade: Grade,
    count: int,
    difficulty: str,
    rng: RandomSource,
) -> List[Question]:
    check_count(count)
    scaler = DifficultyScaler(grade, difficulty)
    questions: List[Question] = []
    for _ in range(count):
        ceiling = scaler.ceiling("addition", scaler.level_for(rng))
        num1 = random_int(rng, 1, ceiling)
        num2 = random_int(rng, 1, ceiling)
        answer = num1 + num2
        questions.append(
            Question(
                question_text=f"{num1} + {num2} = ?",
                answer_text=str(answer),
                explanation=f"Add {num1} and {num2} to get {answer}",
                topic="addition",
            )
        )
    return questions


def generate_subtraction_problems(
    grade: Grade,
    count: int,
    difficulty: str,
    rng: RandomSource,
) -> List[Question]:
    """
    Through grade 3, and on easy at any grade, the subtrahend is drawn from
    [1, minuend] so the difference is never negative. Above that both operands
    are independent and negative answers are expected.
    """

    check_count(count)
    scaler = DifficultyScaler(grade, difficulty)
    questions: List[Question] = []
    for _ in range(count):
        level = scaler.level_for(rng)
        ceiling = scaler.ceiling("subtraction", level)
        num1 = random_int(rng, 1, ceiling)
        if scaler.keeps_differences_non_negative(level):
            num2 = random_int(rng, 1, num1)
        else:
            num2 = random_int(rng, 1, ceiling)
        answer = num1 - num2
        questions.append(
            Question(
                question_text=f"{num1} - {num2} = ?",
                answer_text=str(answer),
                explanation=f"Subtract {num2} from {num1} to get {answer}",
                topic="subtraction",
            )
        )
    return questions


def generate_multiplication_problems(
    grade: Grade,
    count: int,
    difficulty: str,
    rng: RandomSource,
) -> List[Question]:
    check_count(count)
    scaler = DifficultyScaler(grade, difficulty)
    questions: List[Question] = []
    for _ in range(count):
        ceiling = scaler.ceiling("multiplication", scaler.level_for(rng))
        num1 = random_int(rng, 1, ceiling)
        num2 = random_int(rng, 1, ceiling)
        answer = num1 * num2
        questions.append(
            Question(
                question_text=f"{num1} × {num2} = ?",
                answer_text=str(answer),
                explanation=f"Multiply {num1} by {num2} to get {answer}",
                topic="multiplication",
            )
        )
    return questions


def generate_division_problems(
    grade: Grade,
    count: int,
    difficulty: str,
    rng: RandomSource,
) -> List[Question]:
    """
    Without remainders the dividend is built as divisor × quotient, so the
    division is always exact. With remainders the dividend ranges up to
    ceiling² and a non-zero remainder is written `"<quotient> R <remainder>"`.
    """

    check_count(count)
    scaler = DifficultyScaler(grade, difficulty)
    questions: List[Question] = []
    for _ in range(count):
        level = scaler.level_for(rng)
        ceiling = scaler.ceiling("division", level)

        if scaler.allows_remainders(level):
            dividend = random_int(rng, 1, ceiling * ceiling)
            divisor = random_int(rng, 1, ceiling)
            quotient, remainder = divmod(dividend, divisor)
            if remainder == 0:
                question = f"{dividend} ÷ {divisor} = ?"
                answer = str(quotient)
            else:
                question = f"{dividend} ÷ {divisor} = ? (Give quotient and remainder)"
                answer = f"{quotient} R {remainder}"
        else:
            divisor = random_int(rng, 1, ceiling)
            quotient = random_int(rng, 1, ceiling)
            dividend = divisor * quotient
            question = f"{dividend} ÷ {divisor} = ?"
            answer = str(quotient)

        questions.append(
            Question(
                question_text=question,
                answer_text=answer,
                explanation=f"Divide {dividend} by {divisor} to get {answer}",
                topic="division",
            )
        )
    return questions
