"""
Render pipeline.

    value -> [filter] -> [count] -> [projection] -> formatter -> stdout

A filter expression is terminal: its results are always written as pretty
JSON and nothing else runs. Otherwise count is terminal. Otherwise the
projection (if fields were given) runs before the configured formatter.
"""

import logging
import sys
import threading
from collections.abc import Sequence
from typing import Any, TextIO

from .config import OutputConfig, OutputFormat
from .errors import WriteError
from .formatters import dump_json, get_formatter
from .stages import apply_filter, count_value, project_fields, to_value

logger = logging.getLogger(__name__)

# Held for one whole render call so a logical output unit is never split
_STDOUT_LOCK = threading.Lock()


def _write(text: str, out: TextIO | None = None) -> None:
    """Write and flush the complete output of one render call."""
    stream = out if out is not None else sys.stdout
    with _STDOUT_LOCK:
        try:
            stream.write(text)
            stream.flush()
        except OSError as e:
            raise WriteError(f"Failed to write output: {e}") from e


def _format_filter_results(results: list[Any]) -> str:
    return "".join(dump_json(result, pretty=True) + "\n" for result in results)


def render(value: Any, config: OutputConfig, out: TextIO | None = None) -> None:
    """
    Render a value according to the output configuration.

    Args:
        value: Command result (decoded JSON, or pydantic models)
        config: Resolved output configuration
        out: Stream to write to (default: sys.stdout at call time)

    Raises:
        FilterError: If the filter expression fails (usage error)
        SerializationError: If the value cannot be encoded
        WriteError: If writing to the stream fails
    """
    value = to_value(value)

    if config.jq is not None:
        results = apply_filter(value, config.jq)
        _write(_format_filter_results(results), out)
        return

    if config.count:
        _write(f"{count_value(value)}\n", out)
        return

    if config.fields is not None:
        value = project_fields(value, config.fields)

    logger.debug("Rendering %s output", config.format.value)
    _write(get_formatter(config).format_value(value), out)


def render_lines(lines: Sequence[str], config: OutputConfig, out: TextIO | None = None) -> None:
    """
    Render derived strings (paths, names) one per line.

    Count and NUL-delimiting apply as for values. An explicit JSON-family
    format serializes the list instead, and a filter expression sees the
    lines as an array of strings.
    """
    lines = list(lines)

    if config.jq is not None:
        _write(_format_filter_results(apply_filter(lines, config.jq)), out)
        return

    if config.count:
        _write(f"{len(lines)}\n", out)
        return

    if config.structured:
        if config.format == OutputFormat.NDJSON:
            text = "".join(dump_json(line, pretty=False) + "\n" for line in lines)
        else:
            text = dump_json(lines, pretty=config.format == OutputFormat.JSON) + "\n"
        _write(text, out)
        return

    delimiter = config.delimiter
    _write("".join(line + delimiter for line in lines), out)


def render_plain(text: str, out: TextIO | None = None) -> None:
    """Write a single line of plain text (versions, names, paths)."""
    _write(text + "\n", out)


def output_error(message: str, json_mode: bool = False, err: TextIO | None = None) -> None:
    """
    Print an error message to stderr.

    In JSON mode the message is wrapped as {"ok": false, "error": {...}};
    otherwise it is prefixed with "Error: ".
    """
    stream = err if err is not None else sys.stderr
    if json_mode:
        payload = dump_json({"ok": False, "error": {"message": message}}, pretty=False)
        stream.write(payload + "\n")
    else:
        stream.write(f"Error: {message}\n")
    stream.flush()
