"""
generate_worksheet_tool.py

Plain-dict entry points that the web surface (or a CLI) can call. Each one
accepts the payload the UI posts, camelCase or snake_case, and returns a
JSON-serializable dict.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Mapping, Optional

from generators.math_grid import generate_math_grid_worksheet
from generators.worksheet_assembler import generate_math_worksheet
from schemas.worksheet import AnswerCheckRequest, parse_model
from validators.answer_validator import AnswerValidator

DEFAULT_TITLE = "Math Practice"
DEFAULT_INSTRUCTIONS = "Solve each problem. Show your work."


def run_generate_worksheet(
    config: Mapping[str, Any],
    *,
    title: Optional[str] = None,
    instructions: Optional[str] = None,
    special_message: Optional[str] = None,
) -> Dict[str, Any]:
    worksheet = generate_math_worksheet(
        config,
        title or DEFAULT_TITLE,
        instructions or DEFAULT_INSTRUCTIONS,
        special_message,
    )
    serializable = worksheet.model_dump(mode="json", by_alias=True)
    serializable["numQuestions"] = worksheet.num_questions
    return serializable


def run_generate_grid(grid_config: Mapping[str, Any]) -> Dict[str, Any]:
    problems = generate_math_grid_worksheet(grid_config)
    return {
        "numProblems": len(problems),
        "problems": [problem.model_dump(mode="json", by_alias=True) for problem in problems],
    }


def run_check_answer(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    `payload` carries `expected` (an answer key entry), `actual` and,
    optionally, the `question` text it was generated for.
    """

    request = parse_model(AnswerCheckRequest, payload)
    result = AnswerValidator().check(request.expected, request.actual, question_text=request.question)
    return asdict(result)


if __name__ == "__main__":
    sample = run_generate_worksheet(
        {"grade": 3, "topics": ["multiplication", "fractions"], "questionCount": 4, "seed": 7}
    )
    for number, question in enumerate(sample["questions"], start=1):
        print(number, question["questionText"], "->", sample["answerKey"][str(number)])
    print(run_check_answer({"expected": sample["answerKey"]["1"], "actual": sample["answerKey"]["1"]}))
