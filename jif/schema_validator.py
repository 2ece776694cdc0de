"""JSON Schema validation of raw pattern payloads using the jsonschema library."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from jsonschema import Draft202012Validator

from jif.errors import ParseError


SCHEMA_DIR = Path(__file__).parent / "schemas"
PATTERN_SCHEMA = "pattern.schema.json"


class SchemaValidator:
    """Validates payloads against JSON schemas with caching for performance."""

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize validator with schema directory.

        Args:
            base_dir: Directory containing JSON schema files, defaults to the
                schemas shipped with this package
        """
        self.base_dir = base_dir if base_dir is not None else SCHEMA_DIR
        self._schema_cache: Dict[str, Dict[str, Any]] = {}

    def _load_schema(self, schema_name: str) -> Dict[str, Any]:
        """Load and cache a JSON schema."""
        if schema_name not in self._schema_cache:
            schema_path = self.base_dir / schema_name
            with schema_path.open("r", encoding="utf-8") as handle:
                self._schema_cache[schema_name] = json.load(handle)
        return self._schema_cache[schema_name]

    def validate(self, payload: Any, schema_name: str = PATTERN_SCHEMA) -> None:
        """
        Validate a payload against a named schema.

        Args:
            payload: Data to validate
            schema_name: Name of schema file (e.g., "pattern.schema.json")

        Raises:
            ParseError: If validation fails, listing every violation
        """
        try:
            schema = self._load_schema(schema_name)
        except FileNotFoundError as e:
            raise ParseError(f"Schema file not found: {schema_name}") from e
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in schema {schema_name}: {e}") from e

        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path])
        if not errors:
            return
        message_lines = [f"Schema validation failed ({schema_name}):"]
        for error in errors:
            error_path = ".".join(str(p) for p in error.path) if error.path else "root"
            message_lines.append(f"- At '{error_path}': {error.message}")
        raise ParseError("\n".join(message_lines)) from errors[0]


def validate_pattern(payload: Any) -> None:
    """Check a raw pattern against the shipped pattern schema."""
    _default_validator().validate(payload, PATTERN_SCHEMA)


_VALIDATOR: Optional[SchemaValidator] = None


def _default_validator() -> SchemaValidator:
    global _VALIDATOR
    if _VALIDATOR is None:
        _VALIDATOR = SchemaValidator()
    return _VALIDATOR
