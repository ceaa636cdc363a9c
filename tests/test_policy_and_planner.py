import pytest

from core.difficulty_scaler import DifficultyScaler, normalize_difficulty
from core.errors import InvalidConfiguration
from core.grade_progression import grade_label, normalize_grade, resolve_topic
from core.problem_planner import ProblemPlanner


def test_grade_labels():
    assert normalize_grade("K") == 0
    assert normalize_grade("k") == 0
    assert normalize_grade("7") == 7
    assert normalize_grade(12) == 12
    assert grade_label(0) == "K"
    for bad in ("13", "first", -1, True):
        with pytest.raises(InvalidConfiguration):
            normalize_grade(bad)


def test_difficulty_normalization():
    assert normalize_difficulty(" Hard ") == "hard"
    with pytest.raises(InvalidConfiguration):
        normalize_difficulty("extreme")


def test_ceilings_follow_grade_bands():
    assert DifficultyScaler("K", "easy").ceiling("addition", "easy") == 10
    assert DifficultyScaler(3, "hard").ceiling("subtraction", "hard") == 500
    assert DifficultyScaler(9, "hard").ceiling("addition", "hard") == 10000
    assert DifficultyScaler(3, "medium").ceiling("multiplication", "medium") == 10
    assert DifficultyScaler(5, "hard").ceiling("division", "hard") == 30


def test_remainder_policy():
    assert not DifficultyScaler(2, "hard").allows_remainders("hard")
    assert DifficultyScaler(3, "hard").allows_remainders("hard")
    assert not DifficultyScaler(3, "medium").allows_remainders("medium")
    assert not DifficultyScaler(4, "easy").allows_remainders("easy")
    assert DifficultyScaler(4, "medium").allows_remainders("medium")
    assert DifficultyScaler(6, "easy").allows_remainders("easy")


def test_mixed_resolves_to_concrete_levels(rng):
    scaler = DifficultyScaler(4, "mixed")
    levels = {scaler.level_for(rng) for _ in range(100)}
    assert levels == {"easy", "medium", "hard"}
    with pytest.raises(InvalidConfiguration):
        scaler.ceiling("addition", "mixed")


def test_geometry_operations_unlock_3d():
    assert "identify-3d" not in DifficultyScaler(4).operations("geometry")
    assert "identify-3d" in DifficultyScaler(4).operations("geometry", include_3d=True)
    assert DifficultyScaler(8).operations("geometry", include_3d=True) == [
        "area-complex", "perimeter-complex", "volume-complex", "surface-area",
    ]


def test_topic_aliases():
    assert resolve_topic("pre_algebra") == "algebra"
    assert resolve_topic("Expressions") == "algebra"
    assert resolve_topic("calculus") is None


def test_allocation_spreads_remainder_to_first_topics():
    plan = ProblemPlanner().allocate(["addition", "fractions", "geometry"], 10)
    assert [(a.topic, a.count) for a in plan] == [("addition", 4), ("fractions", 3), ("geometry", 3)]


def test_allocation_skips_unknown_and_duplicate_topics():
    plan = ProblemPlanner().allocate(["addition", "calculus", "addition", "pre_algebra"], 5)
    assert [(a.topic, a.generator, a.count) for a in plan] == [
        ("addition", "addition", 3),
        ("pre_algebra", "algebra", 2),
    ]


def test_allocation_edge_cases():
    planner = ProblemPlanner()
    assert planner.allocate([], 10) == []
    assert [a.count for a in planner.allocate(["addition", "division"], 0)] == [0, 0]
    with pytest.raises(InvalidConfiguration):
        planner.allocate(["addition"], -1)
