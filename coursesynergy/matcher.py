"""
Candidate matching.

Finds 1:1 pairs of courses across the two providers. A pair is only possible if:
- both courses are eligible (known location AND start date)
- locations are equal (exact string equality)
- start dates are at most MAX_DATE_DISTANCE_DAYS apart
- titles are similar (permissive or strict, depending on the mode)

Modes:
- greedy: walk all courses by start date; each unmatched course takes the
  best unmatched counterpart (score = BASE_SCORE - day distance)
- global: score every cross pair by shared tag weight, then assign in
  descending score order across the whole corpus

Tie-breaks are explicit (by id) so that results never depend on input order.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Optional, Sequence, TypeVar

from coursesynergy.model import CandidatePair, Course, MatchResult
from coursesynergy.similarity import TitleSimilarityJudge


GREEDY = "greedy"
GLOBAL = "global"
MODES = (GREEDY, GLOBAL)

MAX_DATE_DISTANCE_DAYS = 15
BASE_SCORE = 100

# Loader placeholders for unresolved locations; never matchable
UNKNOWN_LOCATIONS = frozenset({"unknown", "desconocida"})

T = TypeVar("T")


def is_eligible(course: Course) -> bool:
    """
    A course takes part in matching only with a resolved location and a start date.
    """
    if course.start_date is None:
        return False
    loc = (course.location or "").strip()
    return bool(loc) and loc.lower() not in UNKNOWN_LOCATIONS


def assign_globally(
    candidates: Iterable[T],
    left_key: Callable[[T], Hashable],
    right_key: Callable[[T], Hashable],
    sort_key: Callable[[T], object],
) -> list[T]:
    """
    Greedy 1:1 assignment in global sort order.

    Candidates are visited in sort_key order; a candidate is taken only if
    neither of its two sides has been used by an earlier one.
    """
    used_left: set[Hashable] = set()
    used_right: set[Hashable] = set()
    chosen: list[T] = []
    for cand in sorted(candidates, key=sort_key):
        left = left_key(cand)
        right = right_key(cand)
        if left in used_left or right in used_right:
            continue
        used_left.add(left)
        used_right.add(right)
        chosen.append(cand)
    return chosen


class CandidateMatcher:
    def __init__(
        self,
        mode: str = GREEDY,
        judge: Optional[TitleSimilarityJudge] = None,
        max_days: int = MAX_DATE_DISTANCE_DAYS,
    ) -> None:
        if mode not in MODES:
            raise ValueError(f"Unknown match mode: {mode!r} (expected one of {', '.join(MODES)})")
        self.mode = mode
        self.judge = judge if judge is not None else TitleSimilarityJudge()
        self.max_days = max_days

    def _distance(self, a: Course, b: Course) -> Optional[int]:
        """
        Day distance of two eligible courses, or None if location/date rule fails.
        """
        if a.location != b.location:
            return None
        assert a.start_date is not None and b.start_date is not None
        days = abs((a.start_date - b.start_date).days)
        if days > self.max_days:
            return None
        return days

    def match(self, courses_a: Sequence[Course], courses_b: Sequence[Course]) -> MatchResult:
        """
        Pair courses of provider A with courses of provider B.

        Every input course ends up either in exactly one pair or in unmatched.
        """
        eligible_a = [c for c in courses_a if is_eligible(c)]
        eligible_b = [c for c in courses_b if is_eligible(c)]

        if self.mode == GLOBAL:
            pairs = self._match_global(eligible_a, eligible_b)
        else:
            pairs = self._match_greedy(eligible_a, eligible_b)

        used_a = {p.course_a.id for p in pairs}
        used_b = {p.course_b.id for p in pairs}
        unmatched = [c for c in courses_a if c.id not in used_a]
        unmatched.extend(c for c in courses_b if c.id not in used_b)
        return MatchResult(pairs=pairs, unmatched=unmatched)

    def _match_greedy(self, eligible_a: list[Course], eligible_b: list[Course]) -> list[CandidatePair]:
        pool = [("a", c) for c in eligible_a] + [("b", c) for c in eligible_b]
        pool.sort(key=lambda item: (item[1].start_date, item[1].id, item[0]))

        matched: set[tuple[str, str]] = set()
        pairs: list[CandidatePair] = []

        # O(n^2) is fine for a few hundred courses per provider
        for side, course in pool:
            if (side, course.id) in matched:
                continue
            other_side = "b" if side == "a" else "a"
            others = eligible_b if side == "a" else eligible_a

            best: Optional[Course] = None
            best_score = 0
            best_days = 0
            for other in others:
                if (other_side, other.id) in matched:
                    continue
                days = self._distance(course, other)
                if days is None:
                    continue
                if not self.judge.are_similar(course.title, other.title):
                    continue
                score = BASE_SCORE - days
                if best is None or score > best_score or (score == best_score and other.id < best.id):
                    best, best_score, best_days = other, score, days

            if best is None:
                continue

            matched.add((side, course.id))
            matched.add((other_side, best.id))
            if side == "a":
                pairs.append(CandidatePair(course, best, best_days, best_score))
            else:
                pairs.append(CandidatePair(best, course, best_days, best_score))

        return pairs

    def _match_global(self, eligible_a: list[Course], eligible_b: list[Course]) -> list[CandidatePair]:
        candidates: list[CandidatePair] = []
        for a in eligible_a:
            for b in eligible_b:
                days = self._distance(a, b)
                if days is None:
                    continue
                result = self.judge.match_score(a.title, b.title)
                if result.score <= 0:
                    continue
                candidates.append(CandidatePair(a, b, days, result.score))

        return assign_globally(
            candidates,
            left_key=lambda p: p.course_a.id,
            right_key=lambda p: p.course_b.id,
            sort_key=lambda p: (-p.match_score, p.date_distance_days, p.course_a.id, p.course_b.id),
        )
