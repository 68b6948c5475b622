"""Process exit codes shared by the CLI and the output pipeline."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by every eagle-eye command."""

    SUCCESS = 0
    # Runtime failure, API error, general error
    ERROR = 1
    # Invalid arguments, bad filter expressions, unknown formats
    USAGE = 2
    # Eagle not running, connection refused, timeout
    CONNECTION = 3
    # Batch operation where only some items succeeded
    PARTIAL = 4
