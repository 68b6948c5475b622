"""
Errors raised by the output pipeline.

Every error carries the exit code the CLI layer should terminate with.
"""

from eagle_eye.exit_codes import ExitCode


class OutputError(Exception):
    """Base exception for rendering failures."""

    def __init__(self, message: str, exit_code: int = ExitCode.ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = int(exit_code)

    def __str__(self) -> str:
        return self.message


class SerializationError(OutputError):
    """A value could not be encoded as JSON."""

    pass


class WriteError(OutputError):
    """Writing to the output stream failed."""

    pass
