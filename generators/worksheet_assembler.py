"""
worksheet_assembler.py

Facade that turns a `MathGenerationOptions` request into a finished
`Worksheet`: the planner splits the question count across topics, each topic
generator fills its share, and the combined list is optionally shuffled
before the answer key is derived from it.
"""

from __future__ import annotations

import random
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from loguru import logger

from core.errors import InvalidConfiguration
from core.grade_progression import grade_label
from core.numeric import RandomSource, shuffle
from core.problem_planner import ProblemPlanner, TopicAllocation
from core.settings import Settings, get_settings
from generators.algebra import generate_algebra_problems
from generators.arithmetic import (
    generate_addition_problems,
    generate_division_problems,
    generate_multiplication_problems,
    generate_subtraction_problems,
)
from generators.fraction_problems import generate_fraction_problems
from generators.geometry import generate_geometry_problems
from schemas.worksheet import MathGenerationOptions, Question, Worksheet, parse_model

TOPIC_GENERATORS: Dict[str, Callable[..., List[Question]]] = {
    "addition": generate_addition_problems,
    "subtraction": generate_subtraction_problems,
    "multiplication": generate_multiplication_problems,
    "division": generate_division_problems,
    "fractions": generate_fraction_problems,
    "geometry": generate_geometry_problems,
    "algebra": generate_algebra_problems,
}


def make_rng(seed: Optional[int] = None, settings: Optional[Settings] = None) -> random.Random:
    """
    A private random source for one request. Falls back to the configured
    seed, and to OS entropy when neither is set.
    """

    settings = settings or get_settings()
    return random.Random(seed if seed is not None else settings.seed)


def default_copyright(holder: str) -> str:
    return f"© {date.today().year} {holder}. All rights reserved."


class WorksheetAssembler:
    """
    Usage:
        assembler = WorksheetAssembler()
        worksheet = assembler.assemble(options, "Practice", "Show your work.")
    """

    def __init__(self, planner: Optional[ProblemPlanner] = None, settings: Optional[Settings] = None):
        self.planner = planner or ProblemPlanner()
        self.settings = settings or get_settings()

    def assemble(
        self,
        options: MathGenerationOptions,
        title: str,
        instructions: str,
        special_message: Optional[str] = None,
        *,
        rng: Optional[RandomSource] = None,
    ) -> Worksheet:
        if options.question_count > self.settings.max_questions:
            raise InvalidConfiguration(
                f"question_count {options.question_count} exceeds the limit of "
                f"{self.settings.max_questions}."
            )
        rng = rng or make_rng(options.seed, self.settings)

        allocations = self.planner.allocate(options.topics, options.question_count)
        questions: List[Question] = []
        for allocation in allocations:
            questions.extend(self._run_generator(allocation, options, rng))

        if len(allocations) > 1 or options.difficulty == "mixed":
            questions = shuffle(questions, rng)

        logger.debug(
            "Assembled worksheet '{}' with {} questions from {} topic(s) (grade {}, {})",
            title,
            len(questions),
            len(allocations),
            grade_label(options.grade),
            options.difficulty,
        )

        return parse_model(
            Worksheet,
            {
                "title": title,
                "instructions": instructions,
                "special_message": special_message,
                "questions": tuple(questions),
                "grade": grade_label(options.grade),
                "subject": "Mathematics",
                "copyright": options.copyright or default_copyright(self.settings.copyright_holder),
            },
        )

    @staticmethod
    def _run_generator(
        allocation: TopicAllocation,
        options: MathGenerationOptions,
        rng: RandomSource,
    ) -> List[Question]:
        generator = TOPIC_GENERATORS[allocation.generator]
        kwargs: Dict[str, Any] = {}
        if allocation.generator == "geometry":
            kwargs = {
                "include_shapes": options.include_geometric_shapes,
                "include_3d": options.include_3d_figures,
            }
        return generator(options.grade, allocation.count, options.difficulty, rng, **kwargs)


def generate_math_worksheet(
    config: Union[MathGenerationOptions, Mapping[str, Any]],
    title: str,
    instructions: str,
    special_message: Optional[str] = None,
    *,
    rng: Optional[RandomSource] = None,
) -> Worksheet:
    """
    Entry point used by the worksheet UI. `config` may be a parsed
    `MathGenerationOptions` or the raw mapping the UI posts (camelCase keys
    accepted). Invalid configuration raises `InvalidConfiguration`.
    """

    options = parse_model(MathGenerationOptions, config)
    return WorksheetAssembler().assemble(options, title, instructions, special_message, rng=rng)


if __name__ == "__main__":
    sample = generate_math_worksheet(
        {"grade": "4", "difficulty": "medium", "topics": ["addition", "fractions", "geometry"],
         "questionCount": 10},
        "Practice",
        "Show your work.",
    )
    for number, question in enumerate(sample.questions, start=1):
        print(number, question.question_text, "->", sample.answer_key[number])
