"""
difficulty_scaler.py

Single place the generators ask "how hard should this next problem be?".
The scaler binds a grade and a requested difficulty, resolves `mixed` into a
concrete level per problem, and reads numeric ceilings and problem-type sets
out of the policy table in `core.grade_progression`.
"""

from __future__ import annotations

from typing import List, Union

from core.errors import InvalidConfiguration
from core.grade_progression import (
    DIFFICULTY_CHOICES,
    DIFFICULTY_LEVELS,
    band_value,
    get_topic_policy,
    normalize_grade,
)
from core.numeric import RandomSource, pick


def normalize_difficulty(difficulty: str) -> str:
    value = (difficulty or "").strip().lower()
    if value not in DIFFICULTY_CHOICES:
        raise InvalidConfiguration(
            f"Invalid difficulty: {difficulty!r}. Expected one of {', '.join(DIFFICULTY_CHOICES)}."
        )
    return value


class DifficultyScaler:
    """
    Computes per-problem parameters anchored to grade-level expectations.

    Usage:
        scaler = DifficultyScaler(grade=4, difficulty="mixed")
        level = scaler.level_for(rng)            # "easy" | "medium" | "hard"
        ceiling = scaler.ceiling("division", level)
    """

    def __init__(self, grade: Union[int, str], difficulty: str = "medium"):
        self.grade = normalize_grade(grade)
        self.difficulty = normalize_difficulty(difficulty)

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #

    @property
    def is_mixed(self) -> bool:
        return self.difficulty == "mixed"

    def level_for(self, rng: RandomSource) -> str:
        """Concrete level for one problem; `mixed` draws a fresh one each time."""

        if self.is_mixed:
            return pick(rng, DIFFICULTY_LEVELS)
        return self.difficulty

    def ceiling(self, topic: str, level: str) -> int:
        bands = get_topic_policy(topic).get("ceilings")
        if bands is None:
            raise InvalidConfiguration(f"Topic {topic!r} has no numeric ceiling policy.")
        return band_value(bands, self.grade)[self._check_level(level)]

    def allows_remainders(self, level: str) -> bool:
        bands = get_topic_policy("division")["remainders"]
        return self._check_level(level) in band_value(bands, self.grade)

    def keeps_differences_non_negative(self, level: str) -> bool:
        limit = get_topic_policy("subtraction")["non_negative_through_grade"]
        return self.grade <= limit or self._check_level(level) == "easy"

    def operations(self, topic: str, *, include_3d: bool = False) -> List[str]:
        policy = get_topic_policy(topic)
        operations = list(band_value(policy["operations"], self.grade))
        if include_3d and "operations_3d" in policy:
            operations.extend(band_value(policy["operations_3d"], self.grade))
        return operations

    # --------------------------------------------------------------------- #
    # Internal helpers
    # --------------------------------------------------------------------- #

    @staticmethod
    def _check_level(level: str) -> str:
        if level not in DIFFICULTY_LEVELS:
            raise InvalidConfiguration(f"Unresolved difficulty level: {level!r}.")
        return level
