"""Insert manipulators into a pattern.

A manipulator is an extra juggler who takes over selected throws of the
others. ``substitute`` replaces a single throw by a relay through the
manipulator. ``intercept1b`` and ``intercept2b`` catch a pass meant for
another juggler, who then carries for one or two beats and afterwards takes
over the manipulator's role; the two swap their relabeling.

All edits go through PatternBuilder; the input Pattern is never changed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from jif.errors import ConsistencyError, PatternLookupError
from jif.loader import infer_is_synchronous_pattern, load_with_defaults
from jif.notation import parse_manipulator
from jif.orbits import calculate_orbits
from jif.trace import TraceSink, logging_trace
from jif.types import (
    LIMB_LABELS_BY_KIND,
    OPPOSITE_HAND,
    Juggler,
    JugglerId,
    Limb,
    LimbId,
    LimbKind,
    ManipulatorInstruction,
    PartialPattern,
    Pattern,
    Repetition,
    Throw,
)
from jif.wrap import wrap_limb


LOGGER = logging.getLogger("jif.manipulation")

_MANIPULATOR_LABEL = re.compile(r"^M(\d+)?$")


class PatternBuilder:
    """Mutable working copy of a Pattern.

    The builder owns copies of every sequence, so nothing done here is
    visible through the Pattern it was created from. Every edit keeps the
    limb permutation up to date; ``build`` hands it to load_with_defaults
    instead of deriving it again from the edited throws.
    """

    def __init__(self, pattern: Pattern):
        self.jugglers: List[Juggler] = list(pattern.jugglers)
        self.limbs: List[Limb] = list(pattern.limbs)
        self.throws: List[Throw] = list(pattern.throws)
        self.period = pattern.period
        self.limb_permutation: List[LimbId] = list(pattern.repetition.limb_permutation)

    @property
    def repetition(self) -> Repetition:
        return Repetition(period=self.period, limb_permutation=tuple(self.limb_permutation))

    def append_juggler(self, label: str) -> JugglerId:
        """Add a juggler who becomes themselves."""
        juggler = JugglerId(len(self.jugglers))
        self.jugglers.append(Juggler(label=label, becomes=juggler))
        return juggler

    def rename_juggler(self, juggler: JugglerId, label: str) -> None:
        self.jugglers[juggler] = replace(self.jugglers[juggler], label=label)

    def append_limb(self, juggler: JugglerId, kind: LimbKind) -> LimbId:
        """Add a limb whose permutation entry is itself."""
        limb = LimbId(len(self.limbs))
        self.limbs.append(Limb(juggler=juggler, kind=kind, label=LIMB_LABELS_BY_KIND[kind]))
        self.limb_permutation.append(limb)
        return limb

    def set_permutation(self, limb: LimbId, target: LimbId) -> None:
        self.limb_permutation[limb] = target

    def add_throw(self, thrw: Throw) -> int:
        self.throws.append(thrw)
        return len(self.throws) - 1

    def replace_throw(self, index: int, **changes) -> Throw:
        self.throws[index] = replace(self.throws[index], **changes)
        return self.throws[index]

    def juggler_of_limb(self, limb: LimbId) -> JugglerId:
        if not 0 <= limb < len(self.limbs):
            raise PatternLookupError(f"No limb with index {limb}.")
        return self.limbs[limb].juggler

    def limb_of_juggler(self, juggler: JugglerId, kind: LimbKind) -> LimbId:
        for index, limb in enumerate(self.limbs):
            if limb.juggler == juggler and limb.kind == kind:
                return LimbId(index)
        raise PatternLookupError(f"Juggler {juggler} has no limb of kind {kind!r}.")

    def predecessor(self, juggler: JugglerId) -> JugglerId:
        """The juggler who becomes ``juggler`` after one period."""
        for index, other in enumerate(self.jugglers):
            if other.becomes == juggler:
                return JugglerId(index)
        raise PatternLookupError(f"No juggler becomes juggler {juggler}.")

    def find_throw_from_juggler(self, juggler: JugglerId, time: int) -> Optional[int]:
        """Index of the first throw by ``juggler`` at ``time``, if any."""
        for index, thrw in enumerate(self.throws):
            if thrw.time == time and self.juggler_of_limb(thrw.from_limb) == juggler:
                return index
        return None

    def swap_roles(self, first: JugglerId, second: JugglerId) -> None:
        """Swap ``becomes`` and the hand permutation entries of two jugglers."""
        first_becomes = self.jugglers[first].becomes
        self.jugglers[first] = replace(self.jugglers[first], becomes=self.jugglers[second].becomes)
        self.jugglers[second] = replace(self.jugglers[second], becomes=first_becomes)
        for kind in ("right_hand", "left_hand"):
            first_limb = self.limb_of_juggler(first, kind)
            second_limb = self.limb_of_juggler(second, kind)
            permutation = self.limb_permutation
            permutation[first_limb], permutation[second_limb] = (
                permutation[second_limb],
                permutation[first_limb],
            )

    def shift(self, delta: int) -> None:
        """Move every throw by ``delta`` beats, wrapping with the current permutation."""
        repetition = self.repetition
        shifted: List[Throw] = []
        for thrw in self.throws:
            new_time = thrw.time + delta
            time, from_limb = wrap_limb(new_time, thrw.from_limb, repetition)
            _, to_limb = wrap_limb(new_time, thrw.to_limb, repetition)
            shifted.append(replace(thrw, time=time, from_limb=from_limb, to_limb=to_limb))
        self.throws = shifted

    def to_partial(self) -> PartialPattern:
        return {
            "jugglers": [juggler.to_dict() for juggler in self.jugglers],
            "limbs": [
                {"juggler": limb.juggler, "kind": limb.kind, "label": limb.label}
                for limb in self.limbs
            ],
            "throws": [thrw.to_dict() for thrw in self.throws],
            "repetition": {"period": self.period},
        }

    def build(self) -> Pattern:
        return load_with_defaults(self.to_partial(), limb_permutation=self.limb_permutation)


def causal_offset(pattern: Pattern) -> int:
    """Beats between a throw and the throw it causes: 2 when synchronous, else 4."""
    return 2 if infer_is_synchronous_pattern(pattern) else 4


def shift_pattern_by(pattern: Pattern, delta: int) -> Pattern:
    """Return ``pattern`` moved by ``delta`` beats (may be negative)."""
    builder = PatternBuilder(pattern)
    builder.shift(delta)
    return builder.build()


def _next_manipulator_label(builder: PatternBuilder) -> str:
    """Label for a new manipulator: M first, later a plain M becomes M1 and M2, M3, ... follow."""
    numbers: List[int] = []
    found = False
    for index, juggler in enumerate(builder.jugglers):
        match = _MANIPULATOR_LABEL.match(juggler.label)
        if match is None:
            continue
        found = True
        if match.group(1) is None:
            builder.rename_juggler(JugglerId(index), "M1")
        else:
            numbers.append(int(match.group(1)))
    if not found:
        return "M"
    return f"M{max(numbers + [1]) + 1}"


def _check_single_throw_per_limb(pattern: Pattern) -> None:
    seen = set()
    for thrw in pattern.throws:
        key = (thrw.from_limb, thrw.time)
        if key in seen:
            raise ConsistencyError(
                f"Limb {thrw.from_limb} throws more than once at beat {thrw.time}."
            )
        seen.add(key)


def _fill_manipulator_throws(
    builder: PatternBuilder,
    start: int,
    stop: int,
    manipulator: JugglerId,
    shifted_beats: int,
    trace: TraceSink,
) -> None:
    """Add 1-beat self throws for the manipulator on beats ``[start, stop)``."""
    for time in range(start, stop):
        if builder.find_throw_from_juggler(manipulator, time) is not None:
            raise ConsistencyError(
                f"Cannot fill manipulator throw at beat {time}: juggler "
                f"{builder.jugglers[manipulator].label} already throws there."
            )
        # Offset by the shift so the hands alternate as in the unshifted pattern.
        from_kind: LimbKind = "right_hand" if (time + shifted_beats) % 2 == 0 else "left_hand"
        builder.add_throw(
            Throw(
                time=time,
                duration=1,
                from_limb=builder.limb_of_juggler(manipulator, from_kind),
                to_limb=builder.limb_of_juggler(manipulator, OPPOSITE_HAND[from_kind]),
            )
        )
    if stop > start:
        trace("manipulator.fill", {"juggler": manipulator, "beat": start, "stop": stop})


def _check_result_landings(pattern: Pattern, trace: TraceSink) -> None:
    """Walk the orbits of a manipulated asynchronous pattern.

    The intercept rules assume the intercepted juggler throws on every beat,
    so on asynchronous patterns their result can leave a hand catching
    without throwing.
    """
    try:
        calculate_orbits(pattern, trace=trace)
    except ConsistencyError as exc:
        raise ConsistencyError(
            f"Manipulator instructions do not fit this asynchronous pattern: {exc}"
        ) from exc


def add_manipulator(
    pattern: Pattern,
    instructions: Sequence[ManipulatorInstruction],
    trace: Optional[TraceSink] = None,
) -> Pattern:
    """Return a copy of ``pattern`` with one more juggler performing ``instructions``."""
    trace = trace or logging_trace(LOGGER)
    _check_single_throw_per_limb(pattern)
    period = pattern.period
    for instruction in instructions:
        if not 0 <= instruction.source_juggler < len(pattern.jugglers):
            raise PatternLookupError(
                f"Manipulator instruction at beat {instruction.beat} names juggler "
                f"{instruction.source_juggler}, but the pattern has {len(pattern.jugglers)}."
            )
        if not 0 <= instruction.beat < period:
            raise PatternLookupError(
                f"Manipulator instruction at beat {instruction.beat} for juggler "
                f"{instruction.source_juggler} lies outside the period of {period}."
            )
    synchronous = infer_is_synchronous_pattern(pattern)
    offset = causal_offset(pattern)

    builder = PatternBuilder(pattern)
    manipulator = builder.append_juggler(_next_manipulator_label(builder))
    manip_limb = builder.append_limb(manipulator, "right_hand")
    manip_alt_limb = builder.append_limb(manipulator, "left_hand")
    if period % 2 == 1:
        builder.set_permutation(manip_limb, manip_alt_limb)
        builder.set_permutation(manip_alt_limb, manip_limb)
    trace(
        "manipulator.added",
        {"juggler": manipulator, "label": builder.jugglers[manipulator].label},
    )

    # Shift so that no intercept and its carry crosses the period boundary.
    pending = list(instructions)
    intercept_beats = [i.beat for i in pending if i.is_intercept]
    shifted_beats = min(intercept_beats) if intercept_beats else 0
    if shifted_beats:
        builder.shift(-shifted_beats)
        pending = [
            replace(
                instruction,
                beat=(instruction.beat - shifted_beats + period) % period,
                source_juggler=(
                    builder.predecessor(instruction.source_juggler)
                    if instruction.beat < shifted_beats
                    else instruction.source_juggler
                ),
            )
            for instruction in pending
        ]
    pending.sort(key=lambda instruction: instruction.beat)

    last_manipulated = -1
    for position in range(len(pending)):
        instruction = pending[position]
        beat = instruction.beat
        _fill_manipulator_throws(
            builder, last_manipulated + 1, beat, manipulator, shifted_beats, trace
        )

        index = builder.find_throw_from_juggler(instruction.source_juggler, beat)
        if index is None:
            raise PatternLookupError(
                f"No throw for manipulation at beat {(beat + shifted_beats) % period} "
                f"from juggler {builder.jugglers[instruction.source_juggler].label}."
            )
        trace(
            "manipulator.instruction",
            {
                "instruction": instruction.type,
                "beat": beat,
                "juggler": instruction.source_juggler,
            },
        )
        thrw = builder.replace_throw(index, is_manipulated=True)

        if instruction.type == "substitute":
            from_kind = builder.limbs[thrw.from_limb].kind
            if builder.find_throw_from_juggler(manipulator, beat) is not None:
                raise ConsistencyError(
                    f"Cannot substitute at beat {beat}: juggler "
                    f"{builder.jugglers[manipulator].label} already throws there."
                )
            builder.add_throw(
                Throw(
                    time=beat,
                    duration=thrw.duration,
                    from_limb=manip_limb if from_kind == "right_hand" else manip_alt_limb,
                    to_limb=thrw.to_limb,
                    is_manipulated=True,
                )
            )
            # The manipulator throws on one beat later, so it catches in the other hand.
            builder.replace_throw(
                index,
                to_limb=manip_alt_limb if from_kind == "right_hand" else manip_limb,
                duration=1,
            )
            last_manipulated = beat
            continue

        late_carry = instruction.type == "intercept2b"
        intercepted = builder.juggler_of_limb(thrw.to_limb)
        # First beat on which the intercepted juggler misses the caught prop.
        threshold = beat + thrw.duration - offset

        for other_index, other in enumerate(list(builder.throws)):
            from_juggler = builder.juggler_of_limb(other.from_limb)
            to_juggler = builder.juggler_of_limb(other.to_limb)
            causal_time = other.time + other.duration - offset
            changes = {}

            if to_juggler == intercepted and causal_time >= threshold:
                if causal_time == threshold and other_index != index:
                    raise ConsistencyError(
                        f"Throw from limb {other.from_limb} at beat {other.time} lands "
                        f"together with the intercepted throw at beat {beat}."
                    )
                to_kind = builder.limbs[other.to_limb].kind
                changes["to_limb"] = manip_limb if to_kind == "right_hand" else manip_alt_limb

            if from_juggler == intercepted:
                delta = other.time - threshold
                from_kind = builder.limbs[other.from_limb].kind
                if late_carry and delta == 1:
                    changes["is_manipulated"] = True
                if delta > 1 or (not late_carry and delta == 1):
                    changes["from_limb"] = (
                        manip_limb if from_kind == "right_hand" else manip_alt_limb
                    )
                elif delta == 0:
                    if late_carry:
                        # Hold here; the throw itself moves one beat later to the manipulator.
                        builder.add_throw(
                            Throw(
                                time=other.time,
                                duration=2,
                                from_limb=other.from_limb,
                                to_limb=other.from_limb,
                            )
                        )
                        changes["time"] = other.time + 1
                        changes["duration"] = other.duration - 1
                        changes["from_limb"] = (
                            manip_alt_limb if from_kind == "right_hand" else manip_limb
                        )
                    else:
                        changes["is_manipulated"] = True

            if changes:
                builder.replace_throw(other_index, **changes)

        _fill_manipulator_throws(
            builder, beat, threshold + 1, manipulator, shifted_beats, trace
        )

        builder.swap_roles(manipulator, intercepted)
        trace("manipulator.swap", {"juggler": intercepted, "beat": beat})
        for later in range(position + 1, len(pending)):
            if pending[later].source_juggler == intercepted:
                pending[later] = replace(pending[later], source_juggler=manipulator)
        manip_limb = builder.limb_of_juggler(intercepted, "right_hand")
        manip_alt_limb = builder.limb_of_juggler(intercepted, "left_hand")
        manipulator = intercepted

        last_manipulated = threshold + 1 if late_carry else threshold

    _fill_manipulator_throws(
        builder, last_manipulated + 1, period, manipulator, shifted_beats, trace
    )

    if shifted_beats:
        builder.shift(shifted_beats)

    result = builder.build()
    if not synchronous:
        _check_result_landings(result, trace)
    return result


def apply_manipulators(
    pattern: Pattern,
    lines: Iterable[str],
    trace: Optional[TraceSink] = None,
) -> Pattern:
    """Parse each line as one manipulator and add them in order."""
    for line in lines:
        pattern = add_manipulator(pattern, parse_manipulator(line), trace=trace)
    return pattern
