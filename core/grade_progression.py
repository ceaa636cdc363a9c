"""
grade_progression.py

This file defines the number ranges, remainder rules and problem types for
every worksheet topic from Kindergarten through grade 12. It acts as the
*policy backbone* for the generators: nothing downstream branches on grade
directly, it asks this table.

Each banded entry is a list of `(max_grade, value)` pairs read top-down; the
first band whose `max_grade` is >= the requested grade wins and `None` closes
the table for every grade above.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

from core.errors import InvalidConfiguration

T = TypeVar("T")

Band = Tuple[Optional[int], T]

KINDERGARTEN = 0
MAX_GRADE = 12
GRADE_LABELS = ("K",) + tuple(str(grade) for grade in range(1, MAX_GRADE + 1))

DIFFICULTY_LEVELS = ("easy", "medium", "hard")
DIFFICULTY_CHOICES = DIFFICULTY_LEVELS + ("mixed",)

SHAPES_2D = ["square", "rectangle", "triangle", "circle", "pentagon", "hexagon"]
SHAPES_3D = ["cube", "rectangular prism", "sphere", "cylinder", "cone", "pyramid"]

SIDE_COUNTS = {
    "triangle": 3,
    "square": 4,
    "rectangle": 4,
    "pentagon": 5,
    "hexagon": 6,
    "circle": 0,
}

_ADD_SUB_CEILINGS: List[Band] = [
    (1, {"easy": 10, "medium": 20, "hard": 30}),
    (2, {"easy": 20, "medium": 50, "hard": 100}),
    (3, {"easy": 50, "medium": 100, "hard": 500}),
    (4, {"easy": 100, "medium": 500, "hard": 1000}),
    (None, {"easy": 500, "medium": 1000, "hard": 10000}),
]

TOPIC_POLICIES: Dict[str, Dict[str, Any]] = {
    "addition": {
        "description": "Two-addend sums within a grade-scaled ceiling.",
        "ceilings": _ADD_SUB_CEILINGS,
    },
    "subtraction": {
        "description": "Differences; non-negative through grade 3 and on easy.",
        "ceilings": _ADD_SUB_CEILINGS,
        "non_negative_through_grade": 3,
    },
    "multiplication": {
        "description": "Times-table style products.",
        "ceilings": [
            (2, {"easy": 5, "medium": 5, "hard": 10}),
            (3, {"easy": 5, "medium": 10, "hard": 12}),
            (4, {"easy": 10, "medium": 12, "hard": 15}),
            (5, {"easy": 12, "medium": 15, "hard": 20}),
            (None, {"easy": 15, "medium": 20, "hard": 30}),
        ],
    },
    "division": {
        "description": "Exact quotients, with remainders at higher levels.",
        "ceilings": [
            (2, {"easy": 5, "medium": 5, "hard": 10}),
            (3, {"easy": 5, "medium": 10, "hard": 12}),
            (4, {"easy": 10, "medium": 12, "hard": 15}),
            (None, {"easy": 12, "medium": 20, "hard": 30}),
        ],
        "remainders": [
            (2, ()),
            (3, ("hard",)),
            (4, ("medium", "hard")),
            (None, DIFFICULTY_LEVELS),
        ],
    },
    "fractions": {
        "description": "Identify, compare and operate on fractions.",
        "operations": [
            (3, ["identify", "compare"]),
            (4, ["identify", "compare", "add-same-denominator", "subtract-same-denominator"]),
            (5, [
                "add-same-denominator",
                "subtract-same-denominator",
                "add-different-denominator",
                "subtract-different-denominator",
            ]),
            (None, ["add-different-denominator", "subtract-different-denominator", "multiply", "divide"]),
        ],
    },
    "geometry": {
        "description": "Shape recognition, perimeter, area and volume.",
        "operations": [
            (2, ["identify-2d", "count-sides"]),
            (4, ["identify-2d", "count-sides", "perimeter", "area-rectangle"]),
            (6, ["perimeter", "area-rectangle", "area-triangle"]),
            (None, ["area-complex", "perimeter-complex"]),
        ],
        "operations_3d": [
            (2, []),
            (4, ["identify-3d"]),
            (6, ["identify-3d", "volume-cube"]),
            (None, ["volume-complex", "surface-area"]),
        ],
    },
    "algebra": {
        "description": "Solve for an unknown; systems and quadratics from grade 6.",
        "operations": [
            (5, ["missing-factor"]),
            (None, ["linear", "two-step", "system", "quadratic"]),
        ],
    },
}

# Identifiers the worksheet UI sends that share a generator.
TOPIC_ALIASES = {
    "pre_algebra": "algebra",
    "expressions": "algebra",
}


def normalize_grade(grade: Union[int, str]) -> int:
    """
    Accepts "K", "k", 0..12 or their string forms and returns the ordinal
    grade (Kindergarten is 0).
    """

    if isinstance(grade, bool):
        raise InvalidConfiguration(f"Invalid grade: {grade!r}.")
    if isinstance(grade, str):
        text = grade.strip().upper()
        if text in ("K", "KINDERGARTEN"):
            return KINDERGARTEN
        if not text.isdigit():
            raise InvalidConfiguration(f"Invalid grade: {grade!r}. Use K or 1-{MAX_GRADE}.")
        grade = int(text)
    if not KINDERGARTEN <= grade <= MAX_GRADE:
        raise InvalidConfiguration(f"Invalid grade: {grade}. Must be between K and {MAX_GRADE}.")
    return grade


def grade_label(grade: int) -> str:
    return GRADE_LABELS[grade]


def band_value(bands: Sequence[Band], grade: int) -> Any:
    for max_grade, value in bands:
        if max_grade is None or grade <= max_grade:
            return value
    raise InvalidConfiguration(f"No policy band covers grade {grade}.")


def resolve_topic(topic: str) -> Optional[str]:
    """Canonical generator name for a topic identifier, or None if unknown."""

    key = topic.strip().lower()
    key = TOPIC_ALIASES.get(key, key)
    return key if key in TOPIC_POLICIES else None


def get_topic_policy(topic: str) -> Dict[str, Any]:
    canonical = resolve_topic(topic)
    if canonical is None:
        raise InvalidConfiguration(f"Unknown topic: {topic!r}.")
    return TOPIC_POLICIES[canonical]
