"""
Value transformation stages applied before a formatter runs.

Every stage returns a new value and leaves its input untouched.
"""

import logging
from typing import Any

from pydantic import BaseModel

from eagle_eye.query import FilterEngine, compile_filter

logger = logging.getLogger(__name__)

# Decoded JSON: None, bool, int, float, str, list, dict
Value = Any


def to_value(data: Any) -> Value:
    """
    Convert command results into a plain Value.

    Pydantic models are dumped in JSON mode, tuples become lists and nested
    containers are converted recursively.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, dict):
        return {str(key): to_value(item) for key, item in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_value(item) for item in data]
    return data


def count_value(value: Value) -> int:
    """Number of records the value would print: arrays by length, null 0, else 1."""
    if isinstance(value, list):
        return len(value)
    if value is None:
        return 0
    return 1


def _project_object(record: dict[str, Any], wanted: set[str]) -> dict[str, Any]:
    return {key: item for key, item in record.items() if key in wanted}


def project_fields(value: Value, fields: tuple[str, ...] | list[str]) -> Value:
    """
    Restrict object(s) to the given field names.

    Arrays are projected element-wise, objects keep their own key order and
    drop absent fields silently. Other shapes are returned unchanged. An empty
    field list yields empty objects.
    """
    wanted = set(fields)
    if isinstance(value, list):
        return [_project_object(item, wanted) if isinstance(item, dict) else item for item in value]
    if isinstance(value, dict):
        return _project_object(value, wanted)
    return value


def apply_filter(value: Value, expression: str, engine: FilterEngine | None = None) -> list[Value]:
    """
    Evaluate a filter expression against a value.

    Args:
        value: Input value
        expression: Filter expression text
        engine: Engine to compile with (default: libjq)

    Returns:
        Ordered list of results (possibly empty)

    Raises:
        FilterError: On parse, compile or runtime failure
    """
    compiled = engine.compile(expression) if engine is not None else compile_filter(expression)
    results = compiled.run(value)
    logger.debug("Filter %r produced %d result(s)", expression, len(results))
    return results
