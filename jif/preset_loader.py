"""Turn preset catalog entries into patterns."""

from __future__ import annotations

from typing import Optional

from jif.errors import PatternLookupError
from jif.loader import load_with_defaults
from jif.manipulation import apply_manipulators
from jif.notation import parse_notation
from jif.presets import find_preset_by_slug
from jif.trace import TraceSink
from jif.types import Pattern


DEFAULT_SITESWAP_JUGGLERS = 2


def load_preset(
    preset: dict,
    jugglers: int = DEFAULT_SITESWAP_JUGGLERS,
    trace: Optional[TraceSink] = None,
) -> Pattern:
    """Load a preset and apply its manipulators in order.

    Instructions without whitespace are a siteswap shared by ``jugglers``
    jugglers; anything else is prechac, one line per juggler.
    """
    pattern = load_with_defaults(parse_notation(preset["instructions"], jugglers))
    return apply_manipulators(pattern, preset.get("manipulators") or [], trace=trace)


def load_preset_by_slug(
    slug: str,
    jugglers: int = DEFAULT_SITESWAP_JUGGLERS,
    trace: Optional[TraceSink] = None,
) -> Pattern:
    preset = find_preset_by_slug(slug)
    if preset is None:
        raise PatternLookupError(f"Preset not found: {slug}")
    return load_preset(preset, jugglers=jugglers, trace=trace)
