"""Type definitions for juggling patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, NewType, Optional, Tuple, TypedDict

from jif.errors import PatternLookupError


# Indices into Pattern.jugglers and Pattern.limbs
JugglerId = NewType("JugglerId", int)
LimbId = NewType("LimbId", int)

LimbKind = Literal["right_hand", "left_hand", "other"]

# Limb kinds as spelled by Passist
PassistLimbType = Literal["right hand", "left hand", "other"]

InstructionType = Literal["substitute", "intercept1b", "intercept2b"]


LIMB_LABELS_BY_KIND: Dict[LimbKind, str] = {
    "right_hand": "R",
    "left_hand": "L",
    "other": "O",
}

LIMB_TYPES_BY_KIND: Dict[LimbKind, PassistLimbType] = {
    "right_hand": "right hand",
    "left_hand": "left hand",
    "other": "other",
}

OPPOSITE_HAND: Dict[LimbKind, LimbKind] = {
    "right_hand": "left_hand",
    "left_hand": "right_hand",
    "other": "other",
}


# Raw, JSON-shaped input. Every key is optional; see jif.loader.load_with_defaults.


class JugglerInput(TypedDict, total=False):
    label: str
    becomes: int


class LimbInput(TypedDict, total=False):
    juggler: int
    label: str
    kind: LimbKind


ThrowInput = TypedDict(
    "ThrowInput",
    {
        "time": int,
        "duration": int,
        "from": int,
        "to": int,
        "isManipulated": bool,
    },
    total=False,
)


class RepetitionInput(TypedDict, total=False):
    period: int
    limbPermutation: List[int]


class PartialPattern(TypedDict, total=False):
    jugglers: List[JugglerInput]
    limbs: List[LimbInput]
    throws: List[ThrowInput]
    repetition: RepetitionInput


@dataclass(frozen=True)
class Juggler:
    """A named role in the pattern."""

    label: str
    # Role this juggler's owner takes on after one period.
    becomes: JugglerId

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "becomes": self.becomes}


@dataclass(frozen=True)
class Limb:
    """A throwing and catching point owned by one juggler."""

    juggler: JugglerId
    kind: LimbKind
    label: str

    @property
    def type(self) -> PassistLimbType:
        return LIMB_TYPES_BY_KIND[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "juggler": self.juggler,
            "kind": self.kind,
            "label": self.label,
            "type": self.type,
        }


@dataclass(frozen=True)
class Throw:
    """One scheduled throw within a period."""

    time: int
    duration: int
    from_limb: LimbId
    to_limb: LimbId
    is_manipulated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "duration": self.duration,
            "from": self.from_limb,
            "to": self.to_limb,
            "isManipulated": self.is_manipulated,
        }


@dataclass(frozen=True)
class Repetition:
    """How the pattern continues after one period."""

    period: int
    limb_permutation: Tuple[LimbId, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "limbPermutation": list(self.limb_permutation),
        }


@dataclass(frozen=True)
class Pattern:
    """A fully specified pattern, as produced by load_with_defaults."""

    jugglers: Tuple[Juggler, ...]
    limbs: Tuple[Limb, ...]
    throws: Tuple[Throw, ...]
    repetition: Repetition

    @property
    def period(self) -> int:
        return self.repetition.period

    def juggler(self, juggler_id: JugglerId) -> Juggler:
        """Return the juggler at ``juggler_id``, raising PatternLookupError if out of range."""
        if not 0 <= juggler_id < len(self.jugglers):
            raise PatternLookupError(
                f"No juggler with index {juggler_id} (pattern has {len(self.jugglers)})."
            )
        return self.jugglers[juggler_id]

    def limb(self, limb_id: LimbId) -> Limb:
        """Return the limb at ``limb_id``, raising PatternLookupError if out of range."""
        if not 0 <= limb_id < len(self.limbs):
            raise PatternLookupError(
                f"No limb with index {limb_id} (pattern has {len(self.limbs)})."
            )
        return self.limbs[limb_id]

    def juggler_of_limb(self, limb_id: LimbId) -> JugglerId:
        return self.limb(limb_id).juggler

    def limb_of_juggler(self, juggler_id: JugglerId, kind: LimbKind) -> LimbId:
        """Return the first limb of the given kind owned by ``juggler_id``."""
        found = self.find_limb_of_juggler(juggler_id, kind)
        if found is None:
            raise PatternLookupError(
                f"Juggler {juggler_id} has no limb of kind {kind!r}."
            )
        return found

    def find_limb_of_juggler(self, juggler_id: JugglerId, kind: LimbKind) -> Optional[LimbId]:
        for index, limb in enumerate(self.limbs):
            if limb.juggler == juggler_id and limb.kind == kind:
                return LimbId(index)
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON pattern format."""
        return {
            "jugglers": [juggler.to_dict() for juggler in self.jugglers],
            "limbs": [limb.to_dict() for limb in self.limbs],
            "throws": [thrw.to_dict() for thrw in self.throws],
            "repetition": self.repetition.to_dict(),
        }


@dataclass(frozen=True)
class ManipulatorInstruction:
    """One parsed token of a manipulator line."""

    type: InstructionType
    beat: int
    source_juggler: JugglerId

    @property
    def is_intercept(self) -> bool:
        return self.type != "substitute"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "beat": self.beat,
            "sourceJuggler": self.source_juggler,
        }
