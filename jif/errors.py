"""Error types raised by the pattern pipeline."""

from __future__ import annotations


class PatternError(Exception):
    """Base class for all errors raised while building or analysing a pattern."""

    pass


class ParseError(PatternError, ValueError):
    """Raised when notation text or a raw pattern payload is malformed."""

    pass


class PatternLookupError(PatternError, LookupError):
    """Raised when an index or (beat, juggler) reference does not resolve to anything."""

    pass


class ConsistencyError(PatternError, RuntimeError):
    """Raised when a pattern violates a structural invariant.

    This covers orbit traversals that run into a cell claimed by another orbit,
    manipulator throws that collide with existing ones, and input patterns with
    more than one throw from the same limb at the same beat.
    """

    pass
