"""
Juggling pattern pipeline.

Parses passing-pattern notations into a periodic throw graph, fills in
defaults, computes orbits and relabeling cycles, and inserts manipulators.
"""

from jif.errors import ConsistencyError, ParseError, PatternError, PatternLookupError
from jif.types import (
    Juggler,
    JugglerId,
    Limb,
    LimbId,
    ManipulatorInstruction,
    PartialPattern,
    Pattern,
    Repetition,
    Throw,
)
from jif.loader import (
    index_to_juggler_name,
    infer_is_synchronous_pattern,
    infer_period,
    load_with_defaults,
    resolve_defaults,
)
from jif.notation import (
    parse_manipulator,
    parse_manipulators,
    parse_notation,
    prechac_to_pattern,
    siteswap_to_pattern,
)
from jif.wrap import wrap_juggler, wrap_limb
from jif.cycles import compute_cycle, get_juggler_cycle, get_limb_cycle
from jif.orbits import calculate_orbits, throws_table_by_juggler, throws_table_by_limb
from jif.manipulation import (
    PatternBuilder,
    add_manipulator,
    apply_manipulators,
    causal_offset,
    shift_pattern_by,
)

__all__ = [
    "ConsistencyError",
    "ParseError",
    "PatternError",
    "PatternLookupError",
    "Juggler",
    "JugglerId",
    "Limb",
    "LimbId",
    "ManipulatorInstruction",
    "PartialPattern",
    "Pattern",
    "Repetition",
    "Throw",
    "index_to_juggler_name",
    "infer_is_synchronous_pattern",
    "infer_period",
    "load_with_defaults",
    "resolve_defaults",
    "parse_manipulator",
    "parse_manipulators",
    "parse_notation",
    "prechac_to_pattern",
    "siteswap_to_pattern",
    "wrap_juggler",
    "wrap_limb",
    "compute_cycle",
    "get_juggler_cycle",
    "get_limb_cycle",
    "calculate_orbits",
    "throws_table_by_juggler",
    "throws_table_by_limb",
    "PatternBuilder",
    "add_manipulator",
    "apply_manipulators",
    "causal_offset",
    "shift_pattern_by",
]
