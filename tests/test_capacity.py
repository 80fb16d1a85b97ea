"""
Unit tests for capacity resolution.

Scenario order:
- both sides empty -> reference_unlikely
- one side empty -> reference_potential
- host (more students) can absorb feeder -> optimal (boundary inclusive)
- swapped roles fit -> permuted
- otherwise -> overflow
"""

import itertools
import unittest
from datetime import date

from coursesynergy.capacity import resolve
from coursesynergy.model import (
    OPTIMAL,
    OVERFLOW,
    PERMUTED,
    REFERENCE_POTENTIAL,
    REFERENCE_UNLIKELY,
    SCENARIOS,
    SOURCE_A,
    SOURCE_B,
    CandidatePair,
    Course,
)


def _course(cid, source, enrolled, available, total=20, day=2):
    return Course(
        id=cid,
        source=source,
        title="Trabajos en altura",
        location="Madrid",
        start_date=date(2026, 3, day),
        total_seats=total,
        available_seats=available,
        enrolled=enrolled,
    )


def _pair(a, b):
    return CandidatePair(a, b, date_distance_days=3, match_score=97)


class TestCapacityResolver(unittest.TestCase):
    def test_optimal(self) -> None:
        a = _course("A1", SOURCE_A, enrolled=5, available=3)
        b = _course("B1", SOURCE_B, enrolled=2, available=10, day=5)
        g = resolve(_pair(a, b))
        self.assertEqual(g.scenario_type, OPTIMAL)
        self.assertIs(g.host, a)
        self.assertIs(g.feeder, b)
        self.assertEqual(g.members, [a, b])
        self.assertEqual(g.students_to_move, 2)
        self.assertEqual(g.match_score, 97)
        self.assertEqual(g.date_distance_days, 3)

    def test_optimal_boundary_inclusive(self) -> None:
        a = _course("A1", SOURCE_A, enrolled=2, available=9)
        b = _course("B1", SOURCE_B, enrolled=4, available=2)
        g = resolve(_pair(a, b))
        # host is B (4 > 2); B.available == A.enrolled
        self.assertEqual(g.scenario_type, OPTIMAL)
        self.assertIs(g.host, b)
        self.assertEqual(g.members, [b, a])
        self.assertEqual(g.students_to_move, 2)

    def test_tie_keeps_first_course_as_host(self) -> None:
        a = _course("A1", SOURCE_A, enrolled=3, available=5)
        b = _course("B1", SOURCE_B, enrolled=3, available=5)
        g = resolve(_pair(a, b))
        self.assertIs(g.host, a)
        self.assertEqual(g.scenario_type, OPTIMAL)

    def test_permuted(self) -> None:
        a = _course("A1", SOURCE_A, enrolled=6, available=1)
        b = _course("B1", SOURCE_B, enrolled=2, available=10)
        g = resolve(_pair(a, b))
        self.assertEqual(g.scenario_type, PERMUTED)
        self.assertIs(g.host, b)
        self.assertIs(g.feeder, a)
        self.assertEqual(g.members, [b, a])
        self.assertEqual(g.students_to_move, 6)

    def test_overflow(self) -> None:
        host = _course("A1", SOURCE_A, enrolled=10, available=0)
        feeder = _course("B1", SOURCE_B, enrolled=8, available=1)
        g = resolve(_pair(feeder, host))
        self.assertEqual(g.scenario_type, OVERFLOW)
        self.assertIs(g.host, host)
        self.assertIs(g.feeder, feeder)
        self.assertEqual(g.members, [host, feeder])
        self.assertEqual(g.students_to_move, 0)

    def test_reference_unlikely(self) -> None:
        a = _course("A1", SOURCE_A, enrolled=0, available=20, day=9)
        b = _course("B1", SOURCE_B, enrolled=0, available=0, day=4)
        g = resolve(_pair(a, b))
        self.assertEqual(g.scenario_type, REFERENCE_UNLIKELY)
        self.assertIsNone(g.host)
        self.assertIsNone(g.feeder)
        self.assertEqual(g.students_to_move, 0)
        # no host: earliest course first
        self.assertEqual(g.members, [b, a])

    def test_reference_potential(self) -> None:
        a = _course("A1", SOURCE_A, enrolled=0, available=20)
        b = _course("B1", SOURCE_B, enrolled=4, available=0)
        g = resolve(_pair(a, b))
        self.assertEqual(g.scenario_type, REFERENCE_POTENTIAL)
        self.assertIs(g.host, b)
        self.assertIsNone(g.feeder)
        self.assertEqual(g.members, [b, a])
        self.assertEqual(g.students_to_move, 0)

    def test_enrolled_derived_from_seats(self) -> None:
        a = _course("A1", SOURCE_A, enrolled=None, available=7, total=10)
        b = _course("B1", SOURCE_B, enrolled=None, available=18, total=20)
        g = resolve(_pair(a, b))
        self.assertEqual(a.enrolled_count, 3)
        self.assertIs(g.host, a)
        self.assertEqual(g.scenario_type, OPTIMAL)
        self.assertEqual(g.students_to_move, 2)

    def test_total_over_inconsistent_numbers(self) -> None:
        values = (-1, 0, 1, 1000)
        for ea, aa, eb, ab in itertools.product(values, repeat=4):
            a = _course("A1", SOURCE_A, enrolled=ea, available=aa)
            b = _course("B1", SOURCE_B, enrolled=eb, available=ab)
            g = resolve(_pair(a, b))
            self.assertIn(g.scenario_type, SCENARIOS)
            self.assertGreaterEqual(g.students_to_move, 0)
            self.assertEqual(len(g.members), 2)


if __name__ == "__main__":
    unittest.main()
