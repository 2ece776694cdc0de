"""Tests for schema_validator.py"""

import pytest

from jif.errors import ParseError
from jif.schema_validator import PATTERN_SCHEMA, SCHEMA_DIR, SchemaValidator, validate_pattern


def test_schema_validator_init(schema_dir):
    """Test SchemaValidator initialization."""
    validator = SchemaValidator(schema_dir)
    assert validator.base_dir == schema_dir
    assert validator._schema_cache == {}


def test_schema_validator_defaults_to_shipped_schemas():
    validator = SchemaValidator()
    assert validator.base_dir == SCHEMA_DIR
    assert (SCHEMA_DIR / PATTERN_SCHEMA).is_file()


def test_schema_validator_loads_schema(schema_dir):
    """Test that schemas are loaded correctly."""
    validator = SchemaValidator(schema_dir)
    schema = validator._load_schema("test.schema.json")

    assert schema["type"] == "object"
    assert "period" in schema["properties"]
    assert "name" in schema["properties"]


def test_schema_validator_caches_schemas(schema_dir):
    """Test that schemas are cached after first load."""
    validator = SchemaValidator(schema_dir)

    schema1 = validator._load_schema("test.schema.json")
    schema2 = validator._load_schema("test.schema.json")

    assert schema1 is schema2
    assert "test.schema.json" in validator._schema_cache


def test_validate_valid_data(schema_dir):
    """Test validation with valid data."""
    validator = SchemaValidator(schema_dir)

    # Should not raise
    validator.validate({"period": 3, "name": "3-count"}, "test.schema.json")


def test_validate_missing_required_field(schema_dir):
    """Test validation fails with missing required field."""
    validator = SchemaValidator(schema_dir)

    with pytest.raises(ParseError) as exc_info:
        validator.validate({"period": 3}, "test.schema.json")

    assert "Schema validation failed" in str(exc_info.value)
    assert "name" in str(exc_info.value).lower()


def test_validate_reports_every_violation(schema_dir):
    validator = SchemaValidator(schema_dir)

    with pytest.raises(ParseError) as exc_info:
        validator.validate({"period": "three", "name": 123}, "test.schema.json")

    message = str(exc_info.value)
    assert "At 'name'" in message
    assert "At 'period'" in message
    assert message.index("At 'name'") < message.index("At 'period'")


def test_parse_error_is_a_value_error(schema_dir):
    validator = SchemaValidator(schema_dir)

    with pytest.raises(ValueError):
        validator.validate({}, "test.schema.json")


def test_validate_nonexistent_schema(schema_dir):
    """Test validation with nonexistent schema file."""
    validator = SchemaValidator(schema_dir)

    with pytest.raises(ParseError) as exc_info:
        validator.validate({"period": 3, "name": "x"}, "nonexistent.schema.json")

    assert "Schema file not found" in str(exc_info.value)


def test_validate_invalid_json_schema(schema_dir):
    """Test handling of invalid JSON in schema file."""
    with open(schema_dir / "invalid.schema.json", "w") as f:
        f.write("{invalid json}")

    validator = SchemaValidator(schema_dir)

    with pytest.raises(ParseError) as exc_info:
        validator.validate({"period": 3, "name": "x"}, "invalid.schema.json")

    assert "Invalid JSON in schema" in str(exc_info.value)


def test_validate_pattern_accepts_partial_and_full_patterns(three_count):
    validate_pattern({})
    validate_pattern({"throws": [{}, {"duration": 5}]})
    validate_pattern(three_count.to_dict())


def test_validate_pattern_rejects_bad_fields():
    with pytest.raises(ParseError, match="At 'limbs.0.kind'"):
        validate_pattern({"limbs": [{"kind": "foot"}]})
    with pytest.raises(ParseError, match="At 'throws.0.time'"):
        validate_pattern({"throws": [{"time": -1}]})
    with pytest.raises(ParseError, match="At 'jugglers'"):
        validate_pattern({"jugglers": []})
    with pytest.raises(ParseError, match="At 'root'"):
        validate_pattern([1, 2])
