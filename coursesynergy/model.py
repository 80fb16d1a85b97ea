"""
Central data model definitions used across the project.

This module defines the canonical structure of the objects the engine passes
around so that:
- all modules share the same field names
- course records stay immutable once loaded
- matching results and resolved groups have one well-known shape
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, List, Union


# Provider tags. The engine treats them as opaque labels.
SOURCE_A = "A"
SOURCE_B = "B"

# Capacity scenarios
OPTIMAL = "optimal"
PERMUTED = "permuted"
REFERENCE_POTENTIAL = "reference_potential"
REFERENCE_UNLIKELY = "reference_unlikely"
OVERFLOW = "overflow"

SCENARIOS = (OPTIMAL, PERMUTED, REFERENCE_POTENTIAL, REFERENCE_UNLIKELY, OVERFLOW)


@dataclass(frozen=True)
class Course:
    """
    Represents one scheduled course as produced by the record loader.

    enrolled may be None when the provider export does not carry it;
    enrolled_count then derives it from the seat numbers.
    """

    id: str
    source: str
    title: str
    location: Optional[str]
    start_date: Optional[date]
    total_seats: int = 0
    available_seats: int = 0
    enrolled: Optional[int] = None

    @property
    def enrolled_count(self) -> int:
        if self.enrolled is not None:
            return self.enrolled
        return max(0, self.total_seats - self.available_seats)


@dataclass(frozen=True)
class Tag:
    """
    Topic label derived from a title. weight >= 2 marks a specific topic,
    weight 1 a generic one.
    """

    label: str
    weight: int = 1


@dataclass(frozen=True)
class CandidatePair:
    """
    Two courses, one per provider, that passed the matching rules.
    course_a always comes from the first provider list given to the matcher.
    """

    course_a: Course
    course_b: Course
    date_distance_days: int
    match_score: float


@dataclass
class SynergyGroup:
    """
    Resolved output unit: a matched pair classified into a capacity scenario.

    members is host-first whenever the scenario designates a host.
    """

    members: List[Course]
    scenario_type: str
    host: Optional[Course] = None
    feeder: Optional[Course] = None
    students_to_move: int = 0
    match_score: float = 0
    date_distance_days: int = 0

    @property
    def group_id(self) -> str:
        ids = sorted(c.id for c in self.members)
        return "group-" + "-".join(ids)

    @property
    def earliest_start(self) -> Optional[date]:
        dates = [c.start_date for c in self.members if c.start_date is not None]
        return min(dates) if dates else None


@dataclass
class MatchResult:
    """
    Output of the candidate matcher: accepted pairs plus every course that
    did not end up in a pair (ineligible ones included).
    """

    pairs: List[CandidatePair] = field(default_factory=list)
    unmatched: List[Course] = field(default_factory=list)


Entry = Union[SynergyGroup, Course]
