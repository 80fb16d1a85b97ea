"""
Scenario summary.

Aggregates resolved groups into four recommendation categories with the
number of groups and enrolled students (total and per provider).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from coursesynergy.model import (
    OPTIMAL,
    OVERFLOW,
    PERMUTED,
    REFERENCE_POTENTIAL,
    REFERENCE_UNLIKELY,
    SOURCE_A,
    SOURCE_B,
    Entry,
    SynergyGroup,
)


# (key, label, scenarios), fixed display order
CATEGORIES: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("recommended", "Recommended", (OPTIMAL, PERMUTED)),
    ("possible", "Possible", (REFERENCE_POTENTIAL,)),
    ("unlikely", "Unlikely", (REFERENCE_UNLIKELY,)),
    ("not_recommended", "Not recommended", (OVERFLOW,)),
)


@dataclass
class CategorySummary:
    key: str
    label: str
    scenarios: tuple[str, ...]
    group_count: int = 0
    total_students: int = 0
    students_a: int = 0
    students_b: int = 0


def summarize(entries: Iterable[Entry], source_a: str = SOURCE_A, source_b: str = SOURCE_B) -> list[CategorySummary]:
    """
    One CategorySummary per category, in CATEGORIES order. Singletons are ignored.
    """
    summaries = [CategorySummary(key, label, scenarios) for key, label, scenarios in CATEGORIES]
    by_scenario = {s: summary for summary in summaries for s in summary.scenarios}

    for entry in entries:
        if not isinstance(entry, SynergyGroup):
            continue
        summary = by_scenario.get(entry.scenario_type)
        if summary is None:
            continue
        summary.group_count += 1
        for course in entry.members:
            n = max(0, course.enrolled_count)
            summary.total_students += n
            if course.source == source_a:
                summary.students_a += n
            elif course.source == source_b:
                summary.students_b += n

    return summaries
