"""
Output rendering pipeline.

Turns decoded JSON values into one of several textual formats (JSON, compact,
NDJSON, table, CSV, id/path lines) with optional projection, counting and a
jq filter stage.
"""

from .config import OutputConfig, OutputFormat, is_tty, parse_fields, parse_format, resolve_config
from .errors import OutputError, SerializationError, WriteError
from .formatters import (
    CSVFormatter,
    FieldLinesFormatter,
    JSONFormatter,
    NDJSONFormatter,
    OutputFormatter,
    TableFormatter,
    get_formatter,
)
from .pipeline import output_error, render, render_lines, render_plain
from .stages import Value, apply_filter, count_value, project_fields, to_value

__all__ = [
    "CSVFormatter",
    "FieldLinesFormatter",
    "JSONFormatter",
    "NDJSONFormatter",
    "OutputConfig",
    "OutputError",
    "OutputFormat",
    "OutputFormatter",
    "SerializationError",
    "TableFormatter",
    "Value",
    "WriteError",
    "apply_filter",
    "count_value",
    "get_formatter",
    "is_tty",
    "output_error",
    "parse_fields",
    "parse_format",
    "project_fields",
    "render",
    "render_lines",
    "render_plain",
    "resolve_config",
    "to_value",
]
