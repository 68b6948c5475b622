"""
Filter expression errors.

All filter errors are usage errors: the expression came from the user.
"""

from eagle_eye.exit_codes import ExitCode


class FilterError(Exception):
    """Base exception for filter expression failures."""

    exit_code = int(ExitCode.USAGE)

    def __init__(self, message: str, expression: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.expression = expression

    def __str__(self) -> str:
        return self.message


class FilterParseError(FilterError):
    """The expression is not syntactically valid."""

    pass


class FilterCompileError(FilterError):
    """The expression references unknown functions or variables."""

    pass


class FilterRuntimeError(FilterError):
    """The expression failed while evaluating against a value."""

    pass
