"""
Group assembly.

Runs matcher + capacity resolver and merges the resolved groups and the
remaining single courses into one list ordered by start date.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from coursesynergy.capacity import resolve
from coursesynergy.matcher import GREEDY, CandidateMatcher
from coursesynergy.model import SOURCE_A, SOURCE_B, Course, Entry, SynergyGroup


def _start_key(entry: Entry) -> tuple[bool, date]:
    # undated entries go last
    start: Optional[date]
    if isinstance(entry, SynergyGroup):
        start = entry.earliest_start
    else:
        start = entry.start_date
    return (start is None, start or date.max)


def assemble(
    all_courses: Sequence[Course],
    match_mode: str = GREEDY,
    matcher: Optional[CandidateMatcher] = None,
    source_a: str = SOURCE_A,
    source_b: str = SOURCE_B,
) -> list[Entry]:
    """
    Build the ordered presentation list (groups + singletons).

    Courses of any other source never match and are kept as singletons.
    """
    if matcher is None:
        matcher = CandidateMatcher(mode=match_mode)

    courses_a = [c for c in all_courses if c.source == source_a]
    courses_b = [c for c in all_courses if c.source == source_b]

    result = matcher.match(courses_a, courses_b)
    groups = [resolve(pair) for pair in result.pairs]

    grouped = {(c.source, c.id) for g in groups for c in g.members}
    singles = [c for c in all_courses if (c.source, c.id) not in grouped]

    entries: list[Entry] = [*groups, *singles]
    # sorted() is stable: equal dates keep groups before singles, each in match/input order
    return sorted(entries, key=_start_key)


def flatten(entries: Iterable[Entry]) -> list[Course]:
    """
    Expand groups into their members (presentation and export helper).
    """
    out: list[Course] = []
    for entry in entries:
        if isinstance(entry, SynergyGroup):
            out.extend(entry.members)
        else:
            out.append(entry)
    return out


def groups_only(entries: Iterable[Entry]) -> list[SynergyGroup]:
    return [e for e in entries if isinstance(e, SynergyGroup)]
