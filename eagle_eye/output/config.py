"""
Output configuration.

`OutputConfig` is resolved once per invocation from the global CLI flags and
carried, unchanged, through every render call. The only environmental input
is whether standard output is attached to a terminal, and it is read here.
"""

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    COMPACT = "compact"
    NDJSON = "ndjson"
    TABLE = "table"
    CSV = "csv"
    ID = "id"
    PATH = "path"


# Formats that serialize the value itself rather than a view of it
STRUCTURED_FORMATS = frozenset({OutputFormat.JSON, OutputFormat.COMPACT, OutputFormat.NDJSON})


@dataclass(frozen=True)
class OutputConfig:
    """Immutable output settings for a single command invocation."""

    format: OutputFormat = OutputFormat.JSON
    # True when --json or --output was given, False when auto-detected
    explicit: bool = False
    fields: tuple[str, ...] | None = None
    count: bool = False
    no_header: bool = False
    print0: bool = False
    dry_run: bool = False
    quiet: bool = False
    jq: str | None = None

    @property
    def delimiter(self) -> str:
        """Line terminator for line-oriented formats."""
        return "\0" if self.print0 else "\n"

    @property
    def structured(self) -> bool:
        """Whether an explicit JSON-family format was requested."""
        return self.explicit and self.format in STRUCTURED_FORMATS


def is_tty(stream: TextIO | None = None) -> bool:
    """Return True if the stream (default stdout) is an interactive terminal."""
    stream = stream if stream is not None else sys.stdout
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        # Detached or closed streams
        return False


def parse_format(token: OutputFormat | str) -> OutputFormat:
    """
    Map a format token to an OutputFormat.

    Unrecognized tokens fall back to JSON.
    """
    if isinstance(token, OutputFormat):
        return token
    try:
        return OutputFormat(token.strip().lower())
    except ValueError:
        logger.debug("Unknown output format %r, using json", token)
        return OutputFormat.JSON


def parse_fields(fields: str | Sequence[str] | None) -> tuple[str, ...] | None:
    """
    Parse a comma-separated field list.

    Names are trimmed and blanks dropped, so "--fields ''" yields an empty
    projection rather than no projection.
    """
    if fields is None:
        return None
    parts = fields.split(",") if isinstance(fields, str) else list(fields)
    return tuple(name.strip() for name in parts if name.strip())


def resolve_config(
    json_flag: bool = False,
    output: OutputFormat | str | None = None,
    fields: str | Sequence[str] | None = None,
    count: bool = False,
    no_header: bool = False,
    print0: bool = False,
    dry_run: bool = False,
    quiet: bool = False,
    jq: str | None = None,
    stdout: TextIO | None = None,
) -> OutputConfig:
    """
    Build an OutputConfig from CLI flags.

    Precedence:
    1) --json
    2) --output FORMAT
    3) TTY auto-detection (terminal -> table, pipe -> json)

    Args:
        json_flag: Shorthand for --output json
        output: Explicit format token
        fields: Projection field list (comma-separated string or sequence)
        count: Print the record count instead of the data
        no_header: Omit table/CSV headers
        print0: NUL-delimit line-oriented output
        dry_run: Preview mutating commands without executing them
        quiet: Suppress non-essential stderr output
        jq: Filter expression that bypasses the rest of the pipeline
        stdout: Stream checked for a terminal (default sys.stdout)

    Returns:
        Resolved OutputConfig
    """
    explicit = json_flag or output is not None

    if json_flag:
        fmt = OutputFormat.JSON
    elif output is not None:
        fmt = parse_format(output)
    elif is_tty(stdout):
        fmt = OutputFormat.TABLE
    else:
        fmt = OutputFormat.JSON

    config = OutputConfig(
        format=fmt,
        explicit=explicit,
        fields=parse_fields(fields),
        count=count,
        no_header=no_header,
        print0=print0,
        dry_run=dry_run,
        quiet=quiet,
        jq=jq,
    )
    logger.debug("Resolved output config: %s", config)
    return config
