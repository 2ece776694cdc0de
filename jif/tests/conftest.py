"""Pytest configuration and shared fixtures for pattern tests."""

import json
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(ROOT))

from jif.loader import load_with_defaults
from jif.notation import prechac_to_pattern, siteswap_to_pattern
from jif.presets import RAW_DATA_3_COUNT_PASSING, RAW_DATA_WALKING_FEED_9C


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def three_count():
    """2-person 3-count, the pass on beat 0."""
    return load_with_defaults(prechac_to_pattern(RAW_DATA_3_COUNT_PASSING))


@pytest.fixture
def solo_cascade():
    """8 beats of a solo 3-ball cascade."""
    return load_with_defaults(prechac_to_pattern(["3 3 3 3 3 3 3 3"]))


@pytest.fixture
def walking_feed_9c():
    """9-club walking feed for three jugglers."""
    return load_with_defaults(prechac_to_pattern(RAW_DATA_WALKING_FEED_9C))


@pytest.fixture
def popcorn():
    """5-count popcorn as a siteswap for two jugglers."""
    return load_with_defaults(siteswap_to_pattern("7a666", 2))


@pytest.fixture
def schema_dir(temp_dir):
    """Create temporary schema directory with a test schema."""
    schema_path = temp_dir / "schemas"
    schema_path.mkdir()

    test_schema = {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "period": {"type": "integer"},
            "name": {"type": "string"}
        },
        "required": ["period", "name"]
    }

    with open(schema_path / "test.schema.json", "w") as f:
        json.dump(test_schema, f)

    return schema_path
