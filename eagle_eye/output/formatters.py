"""
Output formatter implementations.

Each formatter turns a Value into the complete text for one render call:
- JSON / compact JSON
- NDJSON (one compact record per line)
- Table (aligned plain-text columns)
- CSV (RFC 4180 quoting)
- Field lines (`id` / `path`, newline or NUL delimited)

Usage:
    formatter = get_formatter(config)
    text = formatter.format_value(value)

Formatters never write; the pipeline owns the output stream.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

from .config import OutputConfig, OutputFormat
from .errors import SerializationError
from .stages import Value

# Widest a table cell may get before it is truncated
MAX_COLUMN_WIDTH = 60

TRUNCATION_MARKER = "~"


# =============================================================================
# Shared helpers
# =============================================================================


def dump_json(value: Value, pretty: bool = True) -> str:
    """
    Serialize a value as JSON text without a trailing newline.

    Raises:
        SerializationError: If the value is not representable as JSON
    """
    try:
        if pretty:
            return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot serialize output: {e}") from e


def format_cell(value: Value) -> str:
    """
    Stringify a value for a table or CSV cell.

    null is empty, strings are shown as-is, arrays are joined with ", " and
    objects are shown as compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(item if isinstance(item, str) else dump_json(item, pretty=False) for item in value)
    return dump_json(value, pretty=False)


def truncate_str(text: str, max_width: int) -> str:
    """Cut text to max_width characters, marking the cut with a trailing '~'."""
    if len(text) <= max_width:
        return text
    if max_width > 1:
        return text[: max_width - 1] + TRUNCATION_MARKER
    return TRUNCATION_MARKER


def csv_escape(field: str) -> str:
    """Quote a CSV field only if it contains a comma, a double quote or a newline."""
    if "," in field or '"' in field or "\n" in field:
        return '"' + field.replace('"', '""') + '"'
    return field


def _is_record_array(value: Value) -> bool:
    return isinstance(value, list) and len(value) > 0 and isinstance(value[0], dict)


def _record_rows(records: list[Any], columns: list[str]) -> list[list[str]]:
    # Columns come from the first record; later records map onto them
    rows = []
    for record in records:
        source = record if isinstance(record, dict) else {}
        rows.append([format_cell(source.get(column)) for column in columns])
    return rows


# =============================================================================
# Formatters
# =============================================================================


class OutputFormatter(ABC):
    """
    Base class for output formatters.

    Formatters are pure: `format_value` returns the exact text to write,
    including the final line terminator.
    """

    def __init__(self, config: OutputConfig | None = None):
        """
        Initialize formatter.

        Args:
            config: Output settings (headers, delimiters)
        """
        self.config = config or OutputConfig()

    @abstractmethod
    def format_value(self, value: Value) -> str:
        """
        Format a value for output.

        Args:
            value: Decoded JSON value

        Returns:
            Complete output text
        """
        pass

    def _fallback(self, value: Value) -> str:
        return dump_json(value, pretty=True) + "\n"


class JSONFormatter(OutputFormatter):
    """Pretty-printed (or compact) JSON followed by a newline."""

    def __init__(self, config: OutputConfig | None = None, compact: bool = False):
        super().__init__(config)
        self.compact = compact

    def format_value(self, value: Value) -> str:
        return dump_json(value, pretty=not self.compact) + "\n"


class NDJSONFormatter(OutputFormatter):
    """One compact JSON record per line; non-arrays become a single line."""

    def format_value(self, value: Value) -> str:
        records = value if isinstance(value, list) else [value]
        return "".join(dump_json(record, pretty=False) + "\n" for record in records)


class TableFormatter(OutputFormatter):
    """
    Aligned plain-text table.

    Arrays of objects become one row per element under upper-cased column
    headers; a single object becomes a KEY/VALUE table. Anything else falls
    back to pretty JSON.
    """

    separator = "  "

    def format_value(self, value: Value) -> str:
        if _is_record_array(value):
            return self._format_records(value)
        if isinstance(value, dict):
            return self._format_object(value)
        return self._fallback(value)

    def _line(self, cells: list[str], widths: list[int]) -> str:
        if not cells:
            return "\n"
        # The last column is not padded, so cell text is printed unchanged
        padded = [truncate_str(cell, width).ljust(width) for cell, width in zip(cells[:-1], widths)]
        padded.append(truncate_str(cells[-1], widths[-1]))
        return self.separator.join(padded) + "\n"

    def _format_records(self, records: list[Any]) -> str:
        columns = list(records[0].keys())
        rows = _record_rows(records, columns)

        widths = [len(column) for column in columns]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell))
        widths = [min(width, MAX_COLUMN_WIDTH) for width in widths]

        lines = []
        if not self.config.no_header:
            lines.append(self._line([column.upper() for column in columns], widths))
            lines.append(self._line(["-" * width for width in widths], widths))
        lines.extend(self._line(row, widths) for row in rows)
        return "".join(lines)

    def _format_object(self, record: dict[str, Any]) -> str:
        cells = [truncate_str(format_cell(item), MAX_COLUMN_WIDTH) for item in record.values()]
        widths = [
            max([3] + [len(key) for key in record]),
            max([5] + [len(cell) for cell in cells]),
        ]

        lines = []
        if not self.config.no_header:
            lines.append(self._line(["KEY", "VALUE"], widths))
            lines.append(self._line(["-" * width for width in widths], widths))
        lines.extend(self._line([key, cell], widths) for key, cell in zip(record, cells))
        return "".join(lines)


class CSVFormatter(OutputFormatter):
    """
    CSV with a header row of the literal column names.

    Uses the same column rule as the table: first element's keys, or a
    key,value pair per field for a single object.
    """

    def format_value(self, value: Value) -> str:
        if _is_record_array(value):
            columns = list(value[0].keys())
            header = columns
            rows = _record_rows(value, columns)
        elif isinstance(value, dict):
            header = ["key", "value"]
            rows = [[key, format_cell(item)] for key, item in value.items()]
        else:
            return self._fallback(value)

        lines = []
        if not self.config.no_header:
            lines.append(header)
        lines.extend(rows)
        return "".join(",".join(csv_escape(field) for field in line) + "\n" for line in lines)


class FieldLinesFormatter(OutputFormatter):
    """
    One line per record holding a single field (`id` or `path`).

    A record without the field yields an empty line so counts survive
    piping. Bare strings are written as-is.
    """

    def __init__(self, config: OutputConfig | None = None, field: str = "id"):
        super().__init__(config)
        self.field = field

    def _line(self, record: Value) -> str:
        if isinstance(record, dict):
            if self.field not in record:
                return ""
            item = record[self.field]
            return item if isinstance(item, str) else dump_json(item, pretty=False)
        if isinstance(record, str):
            return record
        return dump_json(record, pretty=False)

    def format_value(self, value: Value) -> str:
        records = value if isinstance(value, list) else [value]
        delimiter = self.config.delimiter
        return "".join(self._line(record) + delimiter for record in records)


def get_formatter(config: OutputConfig) -> OutputFormatter:
    """
    Factory function to get the formatter for a configuration.

    Args:
        config: Resolved output configuration

    Returns:
        OutputFormatter instance
    """
    formatters: dict[OutputFormat, OutputFormatter] = {
        OutputFormat.JSON: JSONFormatter(config),
        OutputFormat.COMPACT: JSONFormatter(config, compact=True),
        OutputFormat.NDJSON: NDJSONFormatter(config),
        OutputFormat.TABLE: TableFormatter(config),
        OutputFormat.CSV: CSVFormatter(config),
        OutputFormat.ID: FieldLinesFormatter(config, field="id"),
        OutputFormat.PATH: FieldLinesFormatter(config, field="path"),
    }
    return formatters.get(config.format, formatters[OutputFormat.JSON])
