#!/usr/bin/env python3
"""Verify that every preset loads and that its orbits can be calculated."""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from jif.cycles import get_juggler_cycle
from jif.errors import PatternError
from jif.orbits import calculate_orbits
from jif.preset_loader import load_preset
from jif.presets import PRESETS, find_preset_by_slug


def verify_preset(preset):
    """Load a preset and calculate its orbits."""
    try:
        pattern = load_preset(preset)
    except PatternError as exc:
        return False, f"Loading failed: {exc}"

    try:
        orbits = calculate_orbits(pattern)
    except PatternError as exc:
        return False, f"Orbits failed: {exc}"

    cycle = get_juggler_cycle(pattern)
    cycle_text = " ".join(cycle) if cycle else "none"
    return True, (
        f"{len(pattern.jugglers)} jugglers, period {pattern.period}, "
        f"{len(orbits)} orbits, juggler cycle: {cycle_text}"
    )


def main(argv=None):
    """Verify the given presets, or all of them."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("slugs", nargs="*", help="Preset ids or names to check (default: all).")
    args = parser.parse_args(argv)

    presets = []
    for slug in args.slugs:
        preset = find_preset_by_slug(slug)
        if preset is None:
            print(f"Unknown preset: {slug}")
            return 1
        presets.append(preset)
    if not presets:
        presets = PRESETS

    print("=" * 80)
    print("PRESET VERIFICATION")
    print("=" * 80)
    print()

    all_valid = True

    for preset in presets:
        preset_name = preset.get("name", preset.get("id"))
        print(preset_name)
        print("-" * len(preset_name))

        valid, message = verify_preset(preset)

        if valid:
            print(f"OK   {message}")
        else:
            print(f"FAIL {message}")
            if preset.get("warningNote"):
                print(f"     Note: {preset['warningNote']}")
            all_valid = False

        print()

    print("=" * 80)

    if all_valid:
        print("All presets load and produce orbits.")
        print("=" * 80)
        return 0
    else:
        print("Some presets failed.")
        print("=" * 80)
        return 1


if __name__ == "__main__":
    sys.exit(main())
