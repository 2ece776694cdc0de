from __future__ import annotations

import re
from typing import Optional

RAW_DATA_3_COUNT_PASSING = [
    "3B 3  3",
    "3A 3  3",
]
RAW_DATA_3_COUNT_PASSING_2X = [
    "3B 3  3  3B 3  3",
    "3A 3  3  3A 3  3",
]
RAW_DATA_4_COUNT_PASSING = [
    "3B 3  3  3",
    "3A 3  3  3",
]
RAW_DATA_4_COUNT_PASSING_2X = [
    "3B 3  3  3  3B 3  3  3",
    "3A 3  3  3  3A 3  3  3",
]
RAW_DATA_PASS_PASS_SELF = ["3B 3B 3", "3A 3A 3"]
RAW_DATA_PASS_PASS_SELF_2X = [
    "3B 3B 3  3B 3B 3",
    "3A 3A 3  3A 3A 3",
]
RAW_DATA_PASS_PASS_SELF_3X = [
    "3B 3B 3  3B 3B 3  3B 3B 3",
    "3A 3A 3  3A 3A 3  3A 3A 3",
]
# 9-club walking feed, base pattern of the scrambleds
RAW_DATA_WALKING_FEED_9C = [
    "3B 3  3C 3  3B 3 ",
    "3A 3  3  3  3A 3 ",
    "3  3  3A 3  3  3 ",
]
RAW_DATA_WALKING_FEED_9C_2X = [
    "3B 3  3C 3  3B 3  3C 3  3  3  3C 3",
    "3A 3  3  3  3A 3  3  3  3C 3  3  3",
    "3  3  3A 3  3  3  3A 3  3B 3  3A 3",
]
# 10-club walking feed, base pattern of the ambleds
RAW_DATA_WALKING_FEED_10C = [
    "4B 3  4C 3  4B 3  4C",
    "3  4A 3  3  3  4A 4 ",
    "2  3  3  4A 3  3  3 ",
]


def _lines(lines: list[str]) -> str:
    return "\n".join(lines)


PRESETS: list[dict] = [
    {
        "id": "solo-self-substitute",
        "name": "Solo Self Substitute",
        "instructions": "3 3 3 3 3 3 3 3",
        "manipulators": ["- - sA"],
        "category": "Tool Demonstrations",
    },
    {
        "id": "happy-holds",
        "name": "Happy Holds",
        "instructions": _lines(["2 2 2 2 2 2", "2 2 2 2 2 2"]),
        "category": "Tool Demonstrations",
    },
    {
        "id": "3-count",
        "name": "3-count",
        "instructions": _lines(RAW_DATA_3_COUNT_PASSING),
        "category": "2 Person Base Patterns",
    },
    {
        "id": "3-count-2x",
        "name": "3-count 2x",
        "instructions": _lines(RAW_DATA_3_COUNT_PASSING_2X),
        "category": "2 Person Base Patterns",
    },
    {
        "id": "pass-pass-self",
        "name": "Pass Pass Self",
        "instructions": _lines(RAW_DATA_PASS_PASS_SELF),
        "category": "2 Person Base Patterns",
    },
    {
        "id": "pass-pass-self-2x",
        "name": "Pass Pass Self 2x",
        "instructions": _lines(RAW_DATA_PASS_PASS_SELF_2X),
        "category": "2 Person Base Patterns",
    },
    {
        "id": "pass-pass-self-3x",
        "name": "Pass Pass Self 3x",
        "instructions": _lines(RAW_DATA_PASS_PASS_SELF_3X),
        "category": "2 Person Base Patterns",
    },
    {
        "id": "phoenician-waltz",
        "name": "Phoenician Waltz",
        "instructions": _lines(RAW_DATA_PASS_PASS_SELF_3X),
        "manipulators": ["sA - - sA - - i1A - -"],
        "category": "Manipulation Patterns",
    },
    {
        "id": "goettinger-opernball",
        "name": "Göttinger Opernball",
        "instructions": _lines(
            [
                "3B 3B  3  3B 3B  3  3B 3B  3",
                "3A 3A  3  3A 3A  3  3A 3A  3",
            ]
        ),
        "manipulators": [
            "sA - - sA - - i1A - -",
            "sB - - i1B - - sA - -",
            "i1A - - sB - - sB - -",
        ],
        "category": "Manipulation Patterns",
    },
    {
        "id": "4-count",
        "name": "4-count",
        "instructions": _lines(RAW_DATA_4_COUNT_PASSING),
        "category": "2 Person Base Patterns",
    },
    {
        "id": "4-count-2x",
        "name": "4-count 2x",
        "instructions": _lines(RAW_DATA_4_COUNT_PASSING_2X),
        "category": "2 Person Base Patterns",
    },
    {
        "id": "3-count-roundabout",
        "name": "3-count Roundabout",
        "instructions": _lines(RAW_DATA_3_COUNT_PASSING_2X),
        "manipulators": ["- - - sa - i1b"],
        "category": "Manipulation Patterns",
    },
    {
        "id": "4-count-roundabout",
        "name": "4-count Roundabout",
        "instructions": _lines(RAW_DATA_4_COUNT_PASSING_2X),
        "manipulators": ["sa - sb - ia -"],
        "category": "Manipulation Patterns",
    },
    {
        "id": "ronjabout",
        "name": "Ronjabout",
        "instructions": _lines(
            [
                "4B 3  5  3  4B 3  5  3  4B",
                "3  4A 3  3  3  4A 3  3  3",
            ]
        ),
        "manipulators": ["sa - - sb - ia - - -"],
        "category": "Manipulation Patterns",
    },
    {
        "id": "walking-feed-9c",
        "name": "Walking feed 9c",
        "instructions": _lines(RAW_DATA_WALKING_FEED_9C),
        "category": "3 Person Base Patterns",
    },
    {
        "id": "walking-feed-9c-2x",
        "name": "Walking feed 9c 2x",
        "instructions": _lines(RAW_DATA_WALKING_FEED_9C_2X),
        "category": "3 Person Base Patterns",
    },
    {
        "id": "scrambled-b",
        "name": "Scrambled - iB cB sA - B",
        "instructions": _lines(RAW_DATA_WALKING_FEED_9C),
        "manipulators": ["i2A - - - sB -"],
        "category": "Scrambled",
    },
    {
        "id": "ivy",
        "name": "Scrambled - iA cC sC - Ivy",
        "instructions": _lines(RAW_DATA_WALKING_FEED_9C),
        "manipulators": ["i2B - - - sC -"],
        "category": "Scrambled",
    },
    {
        "id": "postmen",
        "name": "Scrambled - cB sC iC - Postmen",
        "instructions": _lines(RAW_DATA_WALKING_FEED_9C),
        "manipulators": ["- - sA - i2C -"],
        "category": "Scrambled",
    },
    {
        "id": "toast",
        "name": "Scrambled - cB sB iC - Toast",
        "instructions": _lines(RAW_DATA_WALKING_FEED_9C),
        "manipulators": ["sA - i2A - - -"],
        "category": "Scrambled",
    },
    {
        "id": "v",
        "name": "Scrambled - cB sB iC - V",
        "instructions": _lines(RAW_DATA_WALKING_FEED_9C),
        "manipulators": ["- - sB - i2C -"],
        "category": "Scrambled",
    },
    {
        "id": "walking-feed-10c",
        "name": "Walking feed 10c",
        "instructions": _lines(RAW_DATA_WALKING_FEED_10C),
        "category": "3 Person Base Patterns",
    },
    {
        "id": "choptopus",
        "name": "Ambled - Choptopus",
        "instructions": _lines(RAW_DATA_WALKING_FEED_10C),
        "manipulators": ["- sB - i2c - - -"],
        "category": "Ambled",
    },
    {
        "id": "7-club-pps-about",
        "name": "7-club PPS-about",
        "instructions": _lines(
            [
                "4b 4b 3 4b 4b 3 4b 4b 3 4b 4b 3 -> A",
                "3 3a 4a 3 3a 4a 3 3a 4a 3 3a 4a -> B",
            ]
        ),
        "manipulators": ["- iA - - - - - iB"],
        "category": "Manipulation Patterns",
    },
    {
        "id": "5-count-popcorn",
        "name": "5-count popcorn",
        "instructions": "7a666",
        "category": "2 Person Asynchronous Patterns",
    },
    {
        "id": "7-club-one-count",
        "name": "7-club one-count",
        "instructions": "777777777",
        "category": "2 Person Asynchronous Patterns",
    },
    {
        "id": "french-3-count",
        "name": "786 - French 3-count",
        "instructions": "786786786",
        "category": "2 Person Asynchronous Patterns",
    },
    {
        "id": "period-6-example",
        "name": "777786 - Example of Period 6",
        "instructions": "777786777786",
        "category": "2 Person Asynchronous Patterns",
    },
    {
        "id": "holy-grail",
        "name": "975 - Holy Grail",
        "instructions": "975975975",
        "category": "2 Person Asynchronous Patterns",
    },
    {
        "id": "muckabout",
        "name": "Muckabout",
        "instructions": _lines(["3 3c 3 3 3b 3", "3 3 3 3 3a 3", "3 3a 3 3 3 3"]),
        "manipulators": ["- sa - i2c - -", "i2b - - - sb -"],
        "warningNote": "Instructions for this pattern are unfinished / unverified.",
        "category": "Manipulation Patterns",
    },
    {
        "id": "dolby-5-1",
        "name": "Dolby 5.1",
        "instructions": _lines(["3B 3  3  3  3", "3A 3  3  3  3"]),
        "manipulators": ["sA i2B -  -  -"],
        "warningNote": "The carry is crossing, which the orbits calculation does not handle yet!",
        "category": "Manipulation Patterns",
    },
    {
        "id": "dolby-5-1-doppelganger",
        "name": "Dolby 5.1 with Doppelgänger",
        "instructions": _lines(["3B 3  3  3  3", "3A 3  3  3  3"]),
        "manipulators": ["sA i2B -  -  -", "sB i2A -  -  -"],
        "warningNote": "The carry is crossing, which the orbits calculation does not handle yet!",
        "category": "Manipulation Patterns",
    },
    {
        "id": "dumb-ways-to-die",
        "name": "Dumb Ways to Die",
        "instructions": _lines(
            [
                "3B 3C 3 3B 3C 3 3C 3B 3 3C 3B 3 -> A",
                "3A 3  3 3A 3  3 3  3A 3 3  3A 3 -> B",
                "3  3A 3 3  3A 3 3A 3  3 3A 3  3 -> C",
            ]
        ),
        "manipulators": ["- i1A - - - i2B - - - i1C - -"],
        "category": "Manipulation Patterns",
    },
]

PRESETS_BY_ID = {preset["id"]: preset for preset in PRESETS}


def sanitize_name(name: str) -> str:
    """Lower-case slug of a preset name, e.g. "3-count 2x" -> "3-count-2x"."""
    return re.sub(r"[^a-zA-Z0-9]+", "-", name).strip("-").lower()


def find_preset_by_slug(slug: str) -> Optional[dict]:
    """Look a preset up by its id, falling back to its sanitized name."""
    preset = PRESETS_BY_ID.get(slug)
    if preset is not None:
        return preset
    for candidate in PRESETS:
        if sanitize_name(candidate["name"]) == slug:
            return candidate
    return None
