"""Relabeling cycles of jugglers and limbs."""

from __future__ import annotations

from typing import List, Optional, Sequence, Set

from jif.types import Pattern


def compute_cycle(permutation: Sequence[int], labels: Sequence[str]) -> Optional[List[str]]:
    """Follow ``permutation`` from index 0 and return the visited labels.

    The first label is repeated at the end, e.g. ``["A", "B", "C", "A"]``.
    Returns None unless the permutation is one single cycle through every index.
    """
    if not permutation:
        return None
    cycle: List[str] = []
    visited: Set[int] = set()
    current = 0
    while current not in visited:
        visited.add(current)
        cycle.append(labels[current])
        current = permutation[current]

    if len(cycle) != len(permutation):
        return None
    cycle.append(labels[0])
    return cycle


def get_juggler_cycle(pattern: Pattern) -> Optional[List[str]]:
    """Cycle of juggler labels along ``becomes``."""
    permutation = [juggler.becomes for juggler in pattern.jugglers]
    labels = [juggler.label for juggler in pattern.jugglers]
    return compute_cycle(permutation, labels)


def get_limb_cycle(pattern: Pattern) -> Optional[List[str]]:
    """Cycle of limb indices (as strings) along the limb permutation."""
    labels = [str(index) for index in range(len(pattern.limbs))]
    return compute_cycle(pattern.repetition.limb_permutation, labels)
