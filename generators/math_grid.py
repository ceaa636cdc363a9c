"""
math_grid.py

Drill-style grids: a flat list of single-operation problems within a fixed
number range. No topics, no shuffling; problems come back in generation
order.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Tuple, Union

from loguru import logger

from core.errors import InvalidConfiguration
from core.numeric import RandomSource, pick, random_int
from core.settings import Settings, get_settings
from generators.worksheet_assembler import make_rng
from schemas.worksheet import GridProblem, GridWorksheetOptions, parse_model

SYMBOLS = {
    "addition": "+",
    "subtraction": "-",
    "multiplication": "×",
    "division": "÷",
}

MAX_QUOTIENT = 10


def _division_operands(options: GridWorksheetOptions, rng: RandomSource) -> Tuple[int, int]:
    """
    Divisor from [1, max - 1], then a quotient small enough that
    divisor × quotient stays within `max_number`. Every grid division is
    therefore exact and its dividend never exceeds the configured maximum.
    """

    if options.max_number < 1:
        return random_int(rng, options.min_number, options.max_number), 1
    divisor = random_int(rng, 1, max(1, options.max_number - 1))
    quotient = random_int(rng, 1, min(MAX_QUOTIENT, options.max_number // divisor))
    return divisor * quotient, divisor


class MathGridGenerator:
    def __init__(self, options: GridWorksheetOptions):
        self.options = options

    def operation_for(self, index: int, rng: RandomSource) -> str:
        operations = self.options.operations
        if self.options.mixed_operations:
            return pick(rng, operations)
        return operations[index % len(operations)]

    def problem(self, index: int, rng: RandomSource) -> GridProblem:
        options = self.options
        operation = self.operation_for(index, rng)

        num1 = random_int(rng, options.min_number, options.max_number)
        if operation == "division":
            num1, num2 = _division_operands(options, rng)
        elif operation == "subtraction" and not options.allow_negatives:
            num2 = random_int(rng, 0, num1)
        else:
            num2 = random_int(rng, options.min_number, options.max_number)

        if operation == "addition":
            answer = num1 + num2
        elif operation == "subtraction":
            answer = num1 - num2
        elif operation == "multiplication":
            answer = num1 * num2
        else:
            answer = num1 // num2

        return GridProblem(question=f"{num1} {SYMBOLS[operation]} {num2} =", answer=str(answer))

    def generate(self, rng: RandomSource) -> List[GridProblem]:
        return [self.problem(index, rng) for index in range(self.options.num_problems)]


def generate_math_grid_worksheet(
    grid_config: Union[GridWorksheetOptions, Mapping[str, Any]],
    *,
    rng: Optional[RandomSource] = None,
    settings: Optional[Settings] = None,
) -> List[GridProblem]:
    """
    Entry point for drill grids. `grid_config` may be a parsed
    `GridWorksheetOptions` or the raw mapping the UI posts.
    """

    settings = settings or get_settings()
    options = parse_model(GridWorksheetOptions, grid_config)
    if options.num_problems > settings.max_grid_problems:
        raise InvalidConfiguration(
            f"num_problems {options.num_problems} exceeds the limit of {settings.max_grid_problems}."
        )

    problems = MathGridGenerator(options).generate(rng or make_rng(options.seed, settings))
    logger.debug(
        "Generated {} grid problems ({}, range {}-{})",
        len(problems),
        "/".join(options.operations),
        options.min_number,
        options.max_number,
    )
    return problems
