"""Parsers for the compact text notations.

Three notations are understood:

* prechac, one line per juggler, e.g. ``["3B 3 3", "3A 3 3"]``;
* vanilla siteswap shared round-robin between jugglers, e.g. ``"7a666"``;
* manipulator instruction lines, e.g. ``"- - sA - i2C -"``.

Prechac and siteswap produce a PartialPattern that still has to go through
jif.loader.load_with_defaults.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from jif.errors import ParseError
from jif.loader import index_to_juggler_name
from jif.types import (
    InstructionType,
    JugglerId,
    JugglerInput,
    LimbInput,
    LimbKind,
    ManipulatorInstruction,
    PartialPattern,
    ThrowInput,
)


# Example: "3B" is a single pass to juggler B.
_PRECHAC_TOKEN = re.compile(r"^([0-9a-z])([a-z])?$", re.IGNORECASE)
_RELABEL_SUFFIX = re.compile(r"(?:->|=>)\s*(\S*)\s*$")
_MANIPULATOR_TOKEN = re.compile(r"^(s|i1|i2|i)([a-z])$")
_PLACEHOLDER = re.compile(r"^-+$")
_WHITESPACE = re.compile(r"\s+")
_NON_ALPHANUMERIC = re.compile(r"[^0-9a-zA-Z]")

_INSTRUCTION_TYPES: Dict[str, InstructionType] = {
    "s": "substitute",
    "i": "intercept2b",
    "i2": "intercept2b",
    "i1": "intercept1b",
}

MANIPULATOR_GRAMMAR_HINT = (
    'Expected something like "sA", "iA", "i1A" or "i2A", with - as placeholder.'
)

PrechacNotation = Sequence[str]


def juggler_index_from_letter(letter: str) -> int:
    """0-based juggler index for a letter, case-insensitive."""
    return ord(letter.upper()) - ord("A")


def _parse_duration(symbol: str) -> int:
    return int(symbol, 36)


def _limb_of_juggler(juggler: int, hand: int) -> int:
    # Prechac limbs are juggler-major: 2j is the right hand, 2j + 1 the left.
    return 2 * juggler + hand


def _split_prechac_line(line: str) -> Tuple[Optional[str], List[str], Optional[str]]:
    label: Optional[str] = None
    target: Optional[str] = None
    body = line
    colon_index = body.find(":")
    if colon_index != -1:
        label = body[:colon_index].strip()
        body = body[colon_index + 1:]
    relabel = _RELABEL_SUFFIX.search(body)
    if relabel is not None:
        target = relabel.group(1)
        if not target:
            raise ParseError(f"Missing relabeling target in line {line!r}.")
        body = body[: relabel.start()]
    body = body.strip()
    tokens = _WHITESPACE.split(body) if body else []
    return label, tokens, target


def _resolve_label(target: str, labels: Sequence[str], line: str) -> int:
    for index, label in enumerate(labels):
        if label == target:
            return index
    lowered = target.lower()
    for index, label in enumerate(labels):
        if label.lower() == lowered:
            return index
    raise ParseError(
        f"Unknown relabeling target {target!r} in line {line!r}; "
        f"known jugglers are {', '.join(labels)}."
    )


def prechac_to_pattern(prechac: PrechacNotation) -> PartialPattern:
    """Convert prechac notation, one line per juggler, to a PartialPattern.

    Throws of 10 and up are written as letters (base 36). A pass carries the
    target juggler's letter as suffix, e.g. ``3B``. A line may start with
    ``label:`` and end with ``-> X`` (or ``=> X``) to say which juggler this
    one becomes after a period; without any such suffix juggler ``j``
    becomes ``j + 1``.
    """
    lines = list(prechac)
    if not lines:
        raise ParseError("Prechac notation needs at least one line.")

    juggler_count = len(lines)
    parsed = [_split_prechac_line(line) for line in lines]

    period: Optional[int] = None
    throws: List[ThrowInput] = []
    for juggler, (line, (_, tokens, _)) in enumerate(zip(lines, parsed)):
        if not tokens:
            raise ParseError(f"Prechac line {juggler + 1} is empty: {line!r}.")
        if period is not None and len(tokens) != period:
            raise ParseError(
                f"Prechac lines must all have the same length: line {juggler + 1} "
                f"has {len(tokens)} throws, expected {period}."
            )
        period = len(tokens)
        for time, token in enumerate(tokens):
            match = _PRECHAC_TOKEN.match(token)
            if match is None:
                raise ParseError(
                    f"Invalid prechac throw {token!r} in line {juggler + 1}: expected a "
                    "single digit or letter, optionally followed by a pass target letter."
                )
            duration = _parse_duration(match.group(1))
            target = juggler
            if match.group(2):
                target = juggler_index_from_letter(match.group(2))
                if target >= juggler_count:
                    raise ParseError(
                        f"Pass target {match.group(2)!r} in throw {token!r} does not "
                        f"name one of the {juggler_count} jugglers."
                    )
            throws.append(
                {
                    "time": time,
                    "duration": duration,
                    # Even beats are thrown by the right hand, odd beats by the left.
                    "from": _limb_of_juggler(juggler, time % 2),
                    "to": _limb_of_juggler(target, (time + duration) % 2),
                }
            )

    labels = [
        label if label else index_to_juggler_name(index)
        for index, (label, _, _) in enumerate(parsed)
    ]
    explicit_relabeling = any(target is not None for _, _, target in parsed)
    jugglers: List[JugglerInput] = []
    for index, (line, (_, _, target)) in enumerate(zip(lines, parsed)):
        if not explicit_relabeling:
            becomes = (index + 1) % juggler_count
        elif target is None:
            becomes = index
        else:
            becomes = _resolve_label(target, labels, line)
        jugglers.append({"label": labels[index], "becomes": becomes})

    limbs: List[LimbInput] = []
    for limb in range(juggler_count * 2):
        kind: LimbKind = "right_hand" if limb % 2 == 0 else "left_hand"
        limbs.append({"juggler": limb // 2, "kind": kind})

    return {"jugglers": jugglers, "limbs": limbs, "throws": throws}


def siteswap_to_pattern(siteswap: str, jugglers: int = 2) -> PartialPattern:
    """Convert a vanilla siteswap to a PartialPattern for ``jugglers`` jugglers.

    Throws go round-robin through all hands, so only the durations and the
    relabeling are emitted; everything else comes from the defaults.
    """
    if jugglers < 1:
        raise ParseError(f"Siteswap needs at least one juggler, got {jugglers}.")
    symbols = _NON_ALPHANUMERIC.sub("", siteswap)
    if not symbols:
        raise ParseError(f"Siteswap {siteswap!r} contains no throws.")
    period = len(symbols)
    return {
        "jugglers": [{"becomes": (j + period) % jugglers} for j in range(jugglers)],
        "throws": [{"duration": _parse_duration(symbol)} for symbol in symbols],
    }


def parse_manipulator(instructions: str) -> List[ManipulatorInstruction]:
    """Parse the instruction line of a single manipulator.

    Each whitespace-separated token is one beat; ``-`` is a placeholder.
    """
    tokens = instructions.split()
    if not tokens:
        raise ParseError("Manipulator instructions must not be empty.")
    manipulator: List[ManipulatorInstruction] = []
    for beat, token in enumerate(tokens):
        if _PLACEHOLDER.match(token):
            continue
        match = _MANIPULATOR_TOKEN.match(token.lower())
        if match is None:
            raise ParseError(
                f"Invalid manipulator instruction: {token}\n{MANIPULATOR_GRAMMAR_HINT}"
            )
        manipulator.append(
            ManipulatorInstruction(
                type=_INSTRUCTION_TYPES[match.group(1)],
                beat=beat,
                source_juggler=JugglerId(juggler_index_from_letter(match.group(2))),
            )
        )
    return manipulator


def parse_manipulators(text: str) -> List[List[ManipulatorInstruction]]:
    """One instruction list per non-blank line, each line a separate manipulator."""
    return [parse_manipulator(line) for line in text.splitlines() if line.strip()]


def is_siteswap(text: str) -> bool:
    return _WHITESPACE.search(text.strip()) is None


def parse_notation(text: str, jugglers: int = 2) -> PartialPattern:
    """Parse ``text`` as siteswap if it has no whitespace, else as prechac lines."""
    if is_siteswap(text):
        return siteswap_to_pattern(text.strip(), jugglers)
    lines = [line for line in text.splitlines() if line.strip()]
    return prechac_to_pattern(lines)
