"""
Read item IDs piped on standard input.

Accepts a JSON array of strings, or newline/NUL-delimited plain IDs, so the
output of `-o id` (with or without `--print0`) can be piped straight back.
"""

import json
import sys
from typing import TextIO

from eagle_eye.exit_codes import ExitCode


class IdInputError(Exception):
    """Piped ID input could not be parsed."""

    exit_code = int(ExitCode.USAGE)

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def parse_ids_input(raw: str) -> list[str]:
    """
    Parse IDs from raw text.

    Args:
        raw: JSON array of strings, or newline/NUL separated IDs

    Returns:
        List of IDs, blanks dropped

    Raises:
        IdInputError: If the input looks like JSON but is not an array of strings
    """
    raw = raw.strip()
    if not raw:
        return []

    if raw.startswith("["):
        try:
            ids = json.loads(raw)
        except json.JSONDecodeError as e:
            raise IdInputError(f"Invalid JSON ID list on stdin: {e}") from e
        if not isinstance(ids, list) or not all(isinstance(item, str) for item in ids):
            raise IdInputError("JSON ID list on stdin must be an array of strings")
        return ids

    normalized = raw.replace("\0", "\n")
    return [line.strip() for line in normalized.split("\n") if line.strip()]


def read_ids_from_stdin(stream: TextIO | None = None) -> list[str]:
    """Read and parse all of stdin (or the given stream)."""
    stream = stream if stream is not None else sys.stdin
    return parse_ids_input(stream.read())
