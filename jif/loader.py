"""Fill in defaults for partially specified patterns.

Everything a pattern author may leave out is decided here: juggler labels and
relabeling, the limb layout, throw timing and hands, the period and the limb
permutation that continues the pattern into the next period.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional, Sequence

from jif.errors import ConsistencyError, ParseError
from jif.types import (
    LIMB_LABELS_BY_KIND,
    Juggler,
    JugglerId,
    Limb,
    LimbId,
    LimbKind,
    PartialPattern,
    Pattern,
    Repetition,
    Throw,
    ThrowInput,
)


LOGGER = logging.getLogger("jif.loader")

DEFAULT_THROW_DURATION = 3


def index_to_juggler_name(index: int) -> str:
    """Default juggler label: 0 -> "A", 1 -> "B", ..."""
    return chr(ord("A") + index)


def infer_period(throws: Sequence[ThrowInput]) -> int:
    """One more than the highest throw time, or 0 without throws."""
    if not throws:
        return 0
    return max(thrw.get("time", index) for index, thrw in enumerate(throws)) + 1


def infer_is_synchronous_pattern(pattern: Pattern) -> bool:
    """Guess whether jugglers throw on the same beats.

    Solo patterns count as synchronous. Otherwise a pattern is synchronous
    as soon as some beat carries more than one throw.
    """
    if len(pattern.jugglers) < 2:
        return True
    throws_per_beat = Counter(thrw.time for thrw in pattern.throws)
    return any(count > 1 for count in throws_per_beat.values())


def _default_limb_kind(index: int, juggler_count: int) -> LimbKind:
    if index < juggler_count:
        return "right_hand"
    if index < juggler_count * 2:
        return "left_hand"
    return "other"


def _parity_limb_permutation(
    jugglers: Sequence[Juggler],
    limbs: Sequence[Limb],
    period: int,
) -> List[LimbId]:
    switch_handedness = period % 2 == 1
    permutation: List[LimbId] = []
    for index, limb in enumerate(limbs):
        target_juggler = jugglers[limb.juggler].becomes
        partner: Optional[LimbId] = None
        for other_index, other in enumerate(limbs):
            same_kind = other.kind == limb.kind
            if other.juggler == target_juggler and same_kind != switch_handedness:
                partner = LimbId(other_index)
                break
        if partner is None:
            LOGGER.warning(
                "No partner limb for limb %s; continuing with itself.",
                index,
                extra={"limb": index, "juggler": limb.juggler},
            )
            partner = LimbId(index)
        permutation.append(partner)
    return permutation


def _shifted_limb_permutation(limb_count: int, period: int) -> List[LimbId]:
    return [LimbId((index - period) % limb_count) for index in range(limb_count)]


def _check_index(value: int, count: int, what: str) -> None:
    if not 0 <= value < count:
        raise ParseError(f"{what} is {value}, but only 0 to {count - 1} are valid.")


def _check_limb_permutation(permutation: Sequence[LimbId], limb_count: int) -> None:
    if sorted(permutation) != list(range(limb_count)):
        raise ConsistencyError(
            f"Limb permutation {list(permutation)} is not a permutation of {limb_count} limbs."
        )


def load_with_defaults(
    partial: PartialPattern,
    limb_permutation: Optional[Sequence[LimbId]] = None,
) -> Pattern:
    """Return a fully specified Pattern for ``partial``.

    Missing jugglers, limbs, throw fields and repetition values are filled in,
    and every juggler and limb index is checked against the pattern.
    A ``limbPermutation`` given in the input is ignored: it is always derived
    from ``jugglers[].becomes`` so the two cannot disagree. Code that edits an
    already loaded pattern passes the permutation it kept up to date as
    ``limb_permutation`` instead; it is checked and used as is.
    """
    raw_jugglers = partial.get("jugglers")
    if raw_jugglers is None:
        raw_jugglers = [{}]
    if not raw_jugglers:
        raise ParseError("A pattern needs at least one juggler.")
    juggler_count = len(raw_jugglers)
    jugglers = tuple(
        Juggler(
            label=raw.get("label", index_to_juggler_name(index)),
            becomes=JugglerId(raw.get("becomes", index)),
        )
        for index, raw in enumerate(raw_jugglers)
    )
    for index, juggler in enumerate(jugglers):
        _check_index(juggler.becomes, juggler_count, f"jugglers[{index}].becomes")
    if len({juggler.becomes for juggler in jugglers}) != juggler_count:
        raise ParseError(
            f"jugglers[].becomes {[j.becomes for j in jugglers]} must name every juggler exactly once."
        )

    raw_limbs = partial.get("limbs")
    if raw_limbs is None:
        raw_limbs = [{} for _ in range(juggler_count * 2)]
    limbs_list: List[Limb] = []
    for index, raw in enumerate(raw_limbs):
        kind: LimbKind = raw.get("kind", _default_limb_kind(index, juggler_count))
        if kind not in LIMB_LABELS_BY_KIND:
            raise ParseError(f"limbs[{index}].kind {kind!r} is not a known limb kind.")
        owner = raw.get("juggler", index % juggler_count)
        _check_index(owner, juggler_count, f"limbs[{index}].juggler")
        limbs_list.append(
            Limb(
                juggler=JugglerId(owner),
                kind=kind,
                label=raw.get("label", LIMB_LABELS_BY_KIND[kind]),
            )
        )
    limbs = tuple(limbs_list)
    limb_count = len(limbs)

    raw_throws = partial.get("throws") or []
    throws_list: List[Throw] = []
    for index, raw in enumerate(raw_throws):
        time = raw.get("time", index)
        duration = raw.get("duration", DEFAULT_THROW_DURATION)
        if limb_count == 0 and ("from" not in raw or "to" not in raw):
            raise ParseError(f"Throw {index} needs explicit limbs: the pattern has none.")
        thrw = Throw(
            time=time,
            duration=duration,
            from_limb=LimbId(raw["from"] if "from" in raw else time % limb_count),
            to_limb=LimbId(raw["to"] if "to" in raw else (time + duration) % limb_count),
            is_manipulated=raw.get("isManipulated", False),
        )
        _check_index(thrw.from_limb, limb_count, f"throws[{index}].from")
        _check_index(thrw.to_limb, limb_count, f"throws[{index}].to")
        throws_list.append(thrw)
    throws = tuple(throws_list)

    raw_repetition = partial.get("repetition") or {}
    period = raw_repetition.get("period")
    if period is None:
        period = infer_period(raw_throws)
    if raw_repetition.get("limbPermutation") is not None:
        LOGGER.warning(
            "Ignoring repetition.limbPermutation; it is derived from jugglers[].becomes."
        )

    pattern = Pattern(
        jugglers=jugglers,
        limbs=limbs,
        throws=throws,
        repetition=Repetition(period=period, limb_permutation=()),
    )
    if limb_permutation is not None:
        _check_limb_permutation(limb_permutation, limb_count)
    elif infer_is_synchronous_pattern(pattern):
        limb_permutation = _parity_limb_permutation(jugglers, limbs, period)
    else:
        limb_permutation = _shifted_limb_permutation(limb_count, period)

    return Pattern(
        jugglers=jugglers,
        limbs=limbs,
        throws=throws,
        repetition=Repetition(period=period, limb_permutation=tuple(limb_permutation)),
    )


resolve_defaults = load_with_defaults
