"""JSON Schema validation for configuration payloads.

Schemas are written in YAML and shipped in ``release_scholar.data`` under
``schemas/<name>.schema.yaml``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from release_scholar.core.exceptions import SchemaValidationError
from release_scholar.data import get_data_path, read_yaml

SCHEMA_SUFFIX = ".schema.yaml"


def _schema_filename(name: str) -> str:
    return name if name.lower().endswith((".yaml", ".yml")) else name + SCHEMA_SUFFIX


@lru_cache(maxsize=None)
def _validator(filename: str) -> Draft202012Validator:
    schema = read_yaml("schemas", filename)
    if not isinstance(schema, dict):
        raise ValueError(f"{filename} does not contain a mapping")
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Return a bundled schema by short name (``"config"``) or file name.

    Raises:
        FileNotFoundError: No such schema is bundled.
        ValueError: The file is not a YAML mapping.
    """
    filename = _schema_filename(schema_name)
    if not get_data_path("schemas", filename).is_file():
        raise FileNotFoundError(f"Schema not found: {filename}")
    return dict(_validator(filename).schema)


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Return the schema violations in ``payload``, each as ``"a.b: message"``.

    An empty list means the payload is valid.
    """
    load_schema(schema_name)
    validator = _validator(_schema_filename(schema_name))
    messages = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        where = ".".join(str(part) for part in error.path)
        messages.append(f"{where}: {error.message}" if where else error.message)
    return messages


def validate_payload(payload: Any, schema_name: str) -> None:
    """Raise SchemaValidationError when ``payload`` violates ``schema_name``."""
    errors = validate_payload_safe(payload, schema_name)
    if errors:
        raise SchemaValidationError(
            f"{schema_name} validation failed: {'; '.join(errors)}",
            context={"schema": schema_name, "errors": errors},
        )


__all__ = [
    "SCHEMA_SUFFIX",
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
]
