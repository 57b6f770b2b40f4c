"""Bundled JSON Schemas for configuration files and player snapshots."""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List

from jsonschema import Draft7Validator, ValidationError

logger = logging.getLogger(__name__)

_PKG = "dungeonites.schemas"


@lru_cache(maxsize=None)
def load_schema(name: str) -> Dict[str, Any]:
    """Load ``<name>.schema.json`` from this package. Cached; schemas are static."""
    resource = resources.files(_PKG).joinpath(f"{name}.schema.json")
    with resource.open("rb") as fh:
        schema = json.load(fh)
    logger.debug("Loaded schema '%s'", name)
    return schema


def make_validator(name: str) -> Draft7Validator:
    schema = load_schema(name)
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def validation_errors(name: str, data: Any) -> List[ValidationError]:
    """All validation errors of ``data`` against the named schema, ordered by path."""
    validator = make_validator(name)
    return sorted(validator.iter_errors(data), key=lambda e: list(e.path))


def format_errors(errors: List[ValidationError]) -> str:
    parts = []
    for e in errors:
        path = "/".join(str(p) for p in e.path) or "<root>"
        parts.append(f"at {path}: {e.message}")
    return "; ".join(parts)


__all__ = ["format_errors", "load_schema", "make_validator", "validation_errors"]
