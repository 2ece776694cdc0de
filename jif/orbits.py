"""Object orbits: the closed paths individual props take through a pattern."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from jif.errors import ConsistencyError
from jif.trace import TraceSink, logging_trace
from jif.types import Pattern, Throw
from jif.wrap import wrap_limb


LOGGER = logging.getLogger("jif.orbits")

ThrowsTable = List[List[Optional[Throw]]]
Orbit = List[Throw]


def _empty_table(rows: int, period: int) -> ThrowsTable:
    return [[None] * max(period, 0) for _ in range(rows)]


def _in_period(thrw: Throw, period: int) -> bool:
    if 0 <= thrw.time < period:
        return True
    LOGGER.warning(
        "Skipping throw at time %s outside of period %s.",
        thrw.time,
        period,
        extra={"beat": thrw.time, "limb": thrw.from_limb},
    )
    return False


def throws_table_by_juggler(pattern: Pattern) -> ThrowsTable:
    """Throws indexed by ``[juggler][beat]``.

    If a juggler throws more than once on a beat, a warning is logged and the
    later throw wins.
    """
    period = pattern.period
    table = _empty_table(len(pattern.jugglers), period)
    for thrw in pattern.throws:
        if not _in_period(thrw, period):
            continue
        juggler = pattern.juggler_of_limb(thrw.from_limb)
        if table[juggler][thrw.time] is not None:
            LOGGER.warning(
                "More than 1 throw detected by juggler %s at time %s.",
                pattern.jugglers[juggler].label,
                thrw.time,
                extra={"juggler": juggler, "beat": thrw.time},
            )
        table[juggler][thrw.time] = thrw
    return table


def throws_table_by_limb(pattern: Pattern) -> ThrowsTable:
    """Throws indexed by ``[limb][beat]``, with the same duplicate policy."""
    period = pattern.period
    table = _empty_table(len(pattern.limbs), period)
    for thrw in pattern.throws:
        if not _in_period(thrw, period):
            continue
        limb = pattern.limb(thrw.from_limb)
        if table[thrw.from_limb][thrw.time] is not None:
            LOGGER.warning(
                "More than 1 throw detected by limb %s at time %s.",
                limb.label,
                thrw.time,
                extra={"limb": thrw.from_limb, "beat": thrw.time},
            )
        table[thrw.from_limb][thrw.time] = thrw
    return table


def calculate_orbits(pattern: Pattern, trace: Optional[TraceSink] = None) -> List[Orbit]:
    """Partition the throws of ``pattern`` into orbits.

    Cells ``(limb, beat)`` are visited limb by limb. From each unclaimed cell
    the walk follows each throw to where it lands until it reaches a claimed
    cell, which must belong to the orbit being walked. Each orbit is rotated
    to start at its earliest throw.
    """
    trace = trace or logging_trace(LOGGER)
    table = throws_table_by_limb(pattern)
    limb_count = len(pattern.limbs)
    period = pattern.period

    orbits: List[Orbit] = []
    claims: Dict[Tuple[int, int], int] = {}
    for start_limb in range(limb_count):
        for start_beat in range(period):
            if table[start_limb][start_beat] is None or (start_limb, start_beat) in claims:
                continue

            orbit_index = len(orbits)
            trace("orbit.start", {"orbit": orbit_index, "limb": start_limb, "beat": start_beat})
            orbit: Orbit = []
            limb, beat = start_limb, start_beat
            while (limb, beat) not in claims:
                thrw = table[limb][beat]
                if thrw is None:
                    raise ConsistencyError(
                        f"Arrived at limb {limb} at beat {beat} that has no outgoing throw."
                    )
                if not 0 <= thrw.to_limb < limb_count:
                    raise ConsistencyError(
                        f"Throw from limb {thrw.from_limb} at beat {thrw.time} lands on "
                        f"unknown limb {thrw.to_limb}."
                    )
                orbit.append(thrw)
                claims[(limb, beat)] = orbit_index

                beat, limb = wrap_limb(beat + thrw.duration, thrw.to_limb, pattern)

            if claims[(limb, beat)] != orbit_index:
                raise ConsistencyError(
                    f"Orbit {orbit_index} ran into orbit {claims[(limb, beat)]} "
                    f"at limb {limb}, beat {beat}."
                )

            start = min(
                range(len(orbit)),
                key=lambda i: orbit[i].time * limb_count + orbit[i].from_limb,
            )
            orbit = orbit[start:] + orbit[:start]
            trace("orbit.closed", {"orbit": orbit_index, "length": len(orbit)})
            orbits.append(orbit)
    return orbits
