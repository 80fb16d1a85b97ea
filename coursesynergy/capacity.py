"""
Capacity resolution.

Classifies a matched pair into one of five scenarios, evaluated in order:

1. both sides without students          -> reference_unlikely (no host)
2. exactly one side without students    -> reference_potential (host = the side with students, no transfer)
3. host = side with more students (tie: course_a), feeder = the other
4. host has room for all feeder students -> optimal
5. swapped roles fit better             -> permuted (feeder becomes host)
6. otherwise                            -> overflow (original host first, nothing moves)

resolve is total: any integer input gives a scenario, never an exception.
"""

from __future__ import annotations

from coursesynergy.model import (
    OPTIMAL,
    OVERFLOW,
    PERMUTED,
    REFERENCE_POTENTIAL,
    REFERENCE_UNLIKELY,
    CandidatePair,
    Course,
    SynergyGroup,
)


def _by_date(a: Course, b: Course) -> list[Course]:
    """
    Display order for groups without a host: earliest start first, then id.
    """
    def key(c: Course) -> tuple:
        return (c.start_date is None, c.start_date or 0, c.id)

    return sorted([a, b], key=key)


def resolve(pair: CandidatePair) -> SynergyGroup:
    a, b = pair.course_a, pair.course_b
    enrolled_a = a.enrolled_count
    enrolled_b = b.enrolled_count

    def group(members: list[Course], scenario: str, host=None, feeder=None, moved: int = 0) -> SynergyGroup:
        return SynergyGroup(
            members=members,
            scenario_type=scenario,
            host=host,
            feeder=feeder,
            students_to_move=max(0, moved),
            match_score=pair.match_score,
            date_distance_days=pair.date_distance_days,
        )

    if enrolled_a == 0 and enrolled_b == 0:
        return group(_by_date(a, b), REFERENCE_UNLIKELY)

    if enrolled_a == 0 or enrolled_b == 0:
        # host only marks the side that has students; no transfer is computed
        host, other = (b, a) if enrolled_a == 0 else (a, b)
        return group([host, other], REFERENCE_POTENTIAL, host=host)

    if enrolled_b > enrolled_a:
        host, feeder = b, a
    else:
        host, feeder = a, b

    if host.available_seats >= feeder.enrolled_count:
        return group([host, feeder], OPTIMAL, host=host, feeder=feeder, moved=feeder.enrolled_count)

    if feeder.available_seats > host.available_seats and feeder.available_seats >= host.enrolled_count:
        return group([feeder, host], PERMUTED, host=feeder, feeder=host, moved=host.enrolled_count)

    return group([host, feeder], OVERFLOW, host=host, feeder=feeder)
