"""Translate (time, index) pairs across period boundaries."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

from jif.errors import ConsistencyError
from jif.types import JugglerId, LimbId, Pattern, Repetition


def _inverse(permutation: Sequence[int], index: int, what: str) -> int:
    for position, value in enumerate(permutation):
        if value == index:
            return position
    raise ConsistencyError(f"{what} {index} has no predecessor in the relabeling.")


def _wrap(time: int, index: int, period: int, permutation: Sequence[int], what: str) -> Tuple[int, int]:
    if period <= 0:
        return time, index
    # Loop instead of modulo so that every period applies the relabeling once.
    while time >= period:
        time -= period
        index = permutation[index]
    while time < 0:
        time += period
        index = _inverse(permutation, index, what)
    return time, index


def wrap_limb(time: int, limb: LimbId, pattern: Union[Pattern, Repetition]) -> Tuple[int, LimbId]:
    """Map ``(time, limb)`` into ``[0, period)`` following the limb permutation."""
    repetition = pattern.repetition if isinstance(pattern, Pattern) else pattern
    new_time, new_limb = _wrap(
        time, limb, repetition.period, repetition.limb_permutation, "Limb"
    )
    return new_time, LimbId(new_limb)


def wrap_juggler(time: int, juggler: JugglerId, pattern: Pattern) -> Tuple[int, JugglerId]:
    """Map ``(time, juggler)`` into ``[0, period)`` following ``becomes``."""
    becomes = [j.becomes for j in pattern.jugglers]
    new_time, new_juggler = _wrap(time, juggler, pattern.period, becomes, "Juggler")
    return new_time, JugglerId(new_juggler)
