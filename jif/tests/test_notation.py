"""Tests for the prechac, siteswap and manipulator parsers."""

import pytest

from jif.errors import ParseError
from jif.notation import (
    parse_manipulator,
    parse_manipulators,
    parse_notation,
    prechac_to_pattern,
    siteswap_to_pattern,
)
from jif.types import ManipulatorInstruction


def test_prechac_three_count_structure():
    partial = prechac_to_pattern(["3B 3 3", "3A 3 3"])

    assert partial["jugglers"] == [
        {"label": "A", "becomes": 1},
        {"label": "B", "becomes": 0},
    ]
    assert partial["limbs"] == [
        {"juggler": 0, "kind": "right_hand"},
        {"juggler": 0, "kind": "left_hand"},
        {"juggler": 1, "kind": "right_hand"},
        {"juggler": 1, "kind": "left_hand"},
    ]
    assert partial["throws"][:3] == [
        {"time": 0, "duration": 3, "from": 0, "to": 3},
        {"time": 1, "duration": 3, "from": 1, "to": 0},
        {"time": 2, "duration": 3, "from": 0, "to": 1},
    ]
    assert partial["throws"][3] == {"time": 0, "duration": 3, "from": 2, "to": 1}


def test_prechac_default_relabeling_rotates_jugglers():
    partial = prechac_to_pattern(["3 3", "3 3", "3 3"])

    assert [j["becomes"] for j in partial["jugglers"]] == [1, 2, 0]


def test_prechac_custom_labels():
    partial = prechac_to_pattern(["Ann: 3B 3 3", "Bob:3A 3 3"])

    assert [j["label"] for j in partial["jugglers"]] == ["Ann", "Bob"]
    assert len(partial["throws"]) == 6


def test_prechac_explicit_relabeling():
    partial = prechac_to_pattern(["3B 3 3 -> B", "3A 3 3 => A"])

    assert [j["becomes"] for j in partial["jugglers"]] == [1, 0]


def test_prechac_explicit_relabeling_to_self():
    partial = prechac_to_pattern(
        [
            "3B 3C 3 3B 3C 3 3C 3B 3 3C 3B 3 -> A",
            "3A 3  3 3A 3  3 3  3A 3 3  3A 3 -> B",
            "3  3A 3 3  3A 3 3A 3  3 3A 3  3 -> C",
        ]
    )

    assert [j["becomes"] for j in partial["jugglers"]] == [0, 1, 2]
    assert len(partial["throws"]) == 36


def test_prechac_relabeling_lines_without_target_become_themselves():
    partial = prechac_to_pattern(["3B 3 3 -> b", "3A 3 3"])

    assert [j["becomes"] for j in partial["jugglers"]] == [1, 1]


def test_prechac_relabeling_uses_custom_labels():
    partial = prechac_to_pattern(["x: 3B 3 3 -> y", "y: 3A 3 3 -> x"])

    assert [j["becomes"] for j in partial["jugglers"]] == [1, 0]


def test_prechac_unknown_relabeling_target():
    with pytest.raises(ParseError, match="Unknown relabeling target 'Z'"):
        prechac_to_pattern(["3B 3 3 -> Z", "3A 3 3"])


def test_prechac_base36_durations():
    partial = prechac_to_pattern(["a 3B", "3 aA"])

    assert [t["duration"] for t in partial["throws"]] == [10, 3, 3, 10]
    assert partial["throws"][3]["to"] == 1


def test_prechac_ragged_lines():
    with pytest.raises(ParseError, match="same length"):
        prechac_to_pattern(["3B 3 3", "3A 3"])


def test_prechac_invalid_token():
    with pytest.raises(ParseError, match="'3BB'"):
        prechac_to_pattern(["3BB 3 3"])


def test_prechac_pass_target_out_of_range():
    with pytest.raises(ParseError, match="Pass target 'C'"):
        prechac_to_pattern(["3C 3 3", "3A 3 3"])


def test_prechac_empty_input():
    with pytest.raises(ParseError):
        prechac_to_pattern([])
    with pytest.raises(ParseError, match="empty"):
        prechac_to_pattern(["3 3", "   "])


def test_siteswap_holy_grail():
    partial = siteswap_to_pattern("975", 2)

    assert [t["duration"] for t in partial["throws"]] == [9, 7, 5]
    assert [j["becomes"] for j in partial["jugglers"]] == [1, 0]
    assert set(partial) == {"jugglers", "throws"}


def test_siteswap_strips_separators_and_reads_letters():
    partial = siteswap_to_pattern("7 a-6,6.6", 2)

    assert [t["duration"] for t in partial["throws"]] == [7, 10, 6, 6, 6]


def test_siteswap_relabeling_depends_on_period():
    partial = siteswap_to_pattern("777777", 4)

    assert [j["becomes"] for j in partial["jugglers"]] == [2, 3, 0, 1]


def test_siteswap_rejects_bad_input():
    with pytest.raises(ParseError, match="no throws"):
        siteswap_to_pattern("--", 2)
    with pytest.raises(ParseError, match="at least one juggler"):
        siteswap_to_pattern("3", 0)


def test_parse_manipulator_substitute():
    assert parse_manipulator("- - sA") == [
        ManipulatorInstruction(type="substitute", beat=2, source_juggler=0)
    ]


def test_parse_manipulator_intercepts():
    instructions = parse_manipulator("i2B - - - sC -")

    assert [(i.type, i.beat, i.source_juggler) for i in instructions] == [
        ("intercept2b", 0, 1),
        ("substitute", 4, 2),
    ]
    assert parse_manipulator("iA")[0].type == "intercept2b"
    assert parse_manipulator("-- i1a")[0] == ManipulatorInstruction(
        type="intercept1b", beat=1, source_juggler=0
    )
    assert parse_manipulator("SB")[0].source_juggler == 1


def test_parse_manipulator_rejects_malformed_tokens():
    with pytest.raises(ParseError, match="Invalid manipulator instruction: xA"):
        parse_manipulator("- xA")
    with pytest.raises(ParseError, match="i1A"):
        parse_manipulator("s")


def test_parse_manipulator_rejects_empty_line():
    with pytest.raises(ParseError, match="must not be empty"):
        parse_manipulator("   ")


def test_parse_manipulators_one_list_per_line():
    manipulators = parse_manipulators("sA - -\n\n - sB\n")

    assert len(manipulators) == 2
    assert manipulators[1][0].beat == 1
    assert manipulators[1][0].source_juggler == 1


def test_instruction_to_dict():
    instruction = parse_manipulator("- i1C")[0]

    assert instruction.is_intercept
    assert instruction.to_dict() == {"type": "intercept1b", "beat": 1, "sourceJuggler": 2}


def test_parse_notation_detects_format():
    siteswap = parse_notation("975")
    prechac = parse_notation("3B 3 3\n3A 3 3\n")

    assert len(siteswap["jugglers"]) == 2
    assert "limbs" not in siteswap
    assert len(prechac["jugglers"]) == 2
    assert len(prechac["limbs"]) == 4
    assert len(parse_notation("  975  ", 3)["jugglers"]) == 3
