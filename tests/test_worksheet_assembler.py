import random

import pytest

from core.errors import InvalidConfiguration
from core.settings import Settings
from generators.arithmetic import generate_addition_problems
from generators.worksheet_assembler import WorksheetAssembler, generate_math_worksheet
from schemas.worksheet import MathGenerationOptions, Worksheet


def _config(**overrides):
    config = {"grade": 4, "difficulty": "medium", "topics": ["addition"], "question_count": 5, "seed": 5}
    config.update(overrides)
    return config


def test_answer_key_mirrors_questions():
    worksheet = generate_math_worksheet(
        _config(topics=["addition", "fractions", "geometry", "algebra"], question_count=12),
        "Practice",
        "Show your work.",
    )
    assert worksheet.num_questions == 12
    assert set(worksheet.answer_key) == set(range(1, 13))
    for number, question in enumerate(worksheet.questions, start=1):
        assert worksheet.answer_key[number] == question.answer_text


def test_topic_counts_follow_allocation():
    worksheet = generate_math_worksheet(
        _config(topics=["addition", "fractions", "geometry"], question_count=10), "T", "I"
    )
    topics = [question.topic for question in worksheet.questions]
    assert (topics.count("addition"), topics.count("fractions"), topics.count("geometry")) == (4, 3, 3)


def test_single_topic_keeps_generation_order():
    worksheet = generate_math_worksheet(_config(grade=3), "T", "I")
    expected = generate_addition_problems(3, 5, "medium", random.Random(5))
    assert list(worksheet.questions) == expected


def test_same_seed_same_worksheet():
    config = _config(topics=["division", "algebra"], question_count=8, difficulty="mixed", seed=99)
    first = generate_math_worksheet(config, "T", "I")
    second = generate_math_worksheet(config, "T", "I")
    assert first.questions == second.questions


def test_empty_worksheets():
    assert generate_math_worksheet(_config(topics=[]), "T", "I").questions == ()
    assert generate_math_worksheet(_config(question_count=0), "T", "I").questions == ()


def test_unknown_topics_are_skipped():
    worksheet = generate_math_worksheet(_config(topics=["calculus", "addition"], question_count=4), "T", "I")
    assert [question.topic for question in worksheet.questions] == ["addition"] * 4


def test_worksheet_metadata():
    worksheet = generate_math_worksheet(_config(grade="K"), "Counting", "Add.", "Great job!")
    assert worksheet.title == "Counting"
    assert worksheet.special_message == "Great job!"
    assert worksheet.grade == "K"
    assert worksheet.subject == "Mathematics"
    assert worksheet.copyright.endswith("All rights reserved.")
    custom = generate_math_worksheet(_config(copyright="© Ms. Rivera"), "T", "I")
    assert custom.copyright == "© Ms. Rivera"


def test_camel_case_payload_and_serialization():
    worksheet = generate_math_worksheet(
        {"grade": "5", "topics": ["geometry"], "questionCount": 3, "includeGeometricShapes": True, "seed": 1},
        "T",
        "I",
    )
    assert all(question.figure for question in worksheet.questions)
    payload = worksheet.model_dump(by_alias=True)
    assert payload["answerKey"][1] == payload["questions"][0]["answerText"]
    assert "questionText" in payload["questions"][0]


def test_answer_key_cannot_be_set():
    worksheet = Worksheet(title="T", instructions="I", answer_key={1: "wrong"})
    assert worksheet.answer_key == {}


@pytest.mark.parametrize(
    "overrides",
    [
        {"grade": 13},
        {"grade": "first"},
        {"difficulty": "extreme"},
        {"question_count": -1},
    ],
)
def test_invalid_configuration(overrides):
    with pytest.raises(InvalidConfiguration):
        generate_math_worksheet(_config(**overrides), "T", "I")


def test_question_limit_comes_from_settings():
    assembler = WorksheetAssembler(settings=Settings(max_questions=3))
    options = MathGenerationOptions(**_config(question_count=4))
    with pytest.raises(InvalidConfiguration):
        assembler.assemble(options, "T", "I")


def test_non_text_title_is_invalid_configuration():
    with pytest.raises(InvalidConfiguration):
        generate_math_worksheet(_config(), 5, "I")
    with pytest.raises(InvalidConfiguration):
        generate_math_worksheet(_config(), "T", "I", special_message=["hi"])
