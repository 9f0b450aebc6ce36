"""Shared schema validation utilities.

Configuration and persisted store files are validated with JSON Schema.
Schemas are bundled under ``coolplay/data/schemas/`` and may keep several
named shapes under ``definitions``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import jsonschema

from coolplay.data import read_json


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""


def load_schema(schema_name: str, definition: Optional[str] = None) -> Dict[str, Any]:
    """Load a bundled schema, optionally narrowed to one of its definitions.

    Args:
        schema_name: Schema file name without extension (e.g. "config").
        definition: Optional key under ``definitions`` to validate against.

    Raises:
        FileNotFoundError: If the schema file doesn't exist.
        KeyError: If ``definition`` is not declared in the schema.
    """
    schema = read_json("schemas", f"{schema_name}.schema.json")
    if definition is None:
        return schema
    definitions = schema.get("definitions") or {}
    if definition not in definitions:
        raise KeyError(f"Schema {schema_name!r} has no definition {definition!r}")
    return definitions[definition]


def validate_payload(payload: Any, schema_name: str, *, definition: Optional[str] = None) -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
    """
    schema = load_schema(schema_name, definition)
    try:
        jsonschema.validate(instance=payload, schema=schema)
    except jsonschema.ValidationError as exc:
        where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}' at {where}: {exc.message}"
        ) from exc


def validate_payload_safe(payload: Any, schema_name: str, *, definition: Optional[str] = None) -> List[str]:
    """Validate a payload and return list of error messages (empty if valid)."""
    try:
        schema = load_schema(schema_name, definition)
    except (FileNotFoundError, KeyError) as e:
        return [f"Schema loading failed: {e}"]

    validator = jsonschema.Draft7Validator(schema)
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: list(e.absolute_path)):
        where = "/".join(str(p) for p in error.absolute_path) or "<root>"
        errors.append(f"{where}: {error.message}")
    return errors


__all__ = ["SchemaValidationError", "load_schema", "validate_payload", "validate_payload_safe"]
