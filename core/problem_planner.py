"""
problem_planner.py

Turns the topic list from the worksheet form into a concrete allocation: which
generator runs, and how many questions it owes. The assembler consumes the
resulting `TopicAllocation`s in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from loguru import logger

from core.errors import InvalidConfiguration
from core.grade_progression import resolve_topic


@dataclass(frozen=True)
class TopicAllocation:
    """One selected topic and its share of the worksheet."""

    topic: str
    generator: str
    count: int


class ProblemPlanner:
    """
    Typical usage:
        planner = ProblemPlanner()
        plan = planner.allocate(["addition", "fractions", "geometry"], 10)
        # -> addition: 4, fractions: 3, geometry: 3
    """

    def normalize_topics(self, topics: Sequence[str]) -> List[str]:
        """
        Drops duplicates (first occurrence wins) and identifiers no generator
        understands. Unknown identifiers are skipped with a warning rather than
        failing the whole worksheet.
        """

        selected: List[str] = []
        for topic in topics:
            identifier = topic.strip().lower()
            if identifier in selected:
                continue
            if resolve_topic(identifier) is None:
                logger.warning("Skipping unknown worksheet topic '{}'", topic)
                continue
            selected.append(identifier)
        return selected

    def allocate(self, topics: Sequence[str], question_count: int) -> List[TopicAllocation]:
        if question_count < 0:
            raise InvalidConfiguration(f"question_count must be >= 0, got {question_count}.")

        selected = self.normalize_topics(topics)
        if not selected:
            return []

        base, extra = divmod(question_count, len(selected))
        allocations = []
        for index, topic in enumerate(selected):
            allocations.append(
                TopicAllocation(
                    topic=topic,
                    generator=resolve_topic(topic),
                    count=base + (1 if index < extra else 0),
                )
            )
        return allocations


if __name__ == "__main__":
    planner = ProblemPlanner()
    for allocation in planner.allocate(["addition", "fractions", "geometry"], 10):
        print(allocation)
