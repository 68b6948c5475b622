"""
Filter engine entry points.

Expressions are full jq programs, compiled and run by libjq through the `jq`
package. The output pipeline only talks to `FilterEngine.compile` and
`CompiledFilter.run`, so the engine can be swapped without touching
rendering.
"""

import logging
import math
import sys
from typing import Any, Protocol

import jq

from .errors import FilterCompileError, FilterError, FilterParseError, FilterRuntimeError

logger = logging.getLogger(__name__)

# jq prints overflowing numbers as the largest finite double
MAX_NUMBER = sys.float_info.max


def _clean_message(raw: str) -> str:
    # libjq reports "jq: error: <message>\n<context>\njq: 1 compile error"
    first = raw.strip().splitlines()[0] if raw.strip() else "Invalid filter"
    for prefix in ("jq: error: ", "jq: error (at <unknown>): "):
        if first.startswith(prefix):
            return first[len(prefix) :]
    return first


def _finite(value: Any, expression: str) -> Any:
    """Clamp infinities like jq does; NaN has no JSON form and is an error."""
    if isinstance(value, float):
        if math.isnan(value):
            raise FilterRuntimeError("Filter produced NaN, which is not valid JSON", expression=expression)
        if math.isinf(value):
            return math.copysign(MAX_NUMBER, value)
        return value
    if isinstance(value, list):
        return [_finite(item, expression) for item in value]
    if isinstance(value, dict):
        return {key: _finite(item, expression) for key, item in value.items()}
    return value


class CompiledFilter:
    """A compiled filter expression, ready to run."""

    def __init__(self, expression: str, program: Any):
        self.expression = expression
        self._program = program

    def run(self, value: Any) -> list[Any]:
        """
        Evaluate the filter against a value.

        Returns:
            Every output of the expression, in order (possibly empty)

        Raises:
            FilterRuntimeError: If evaluation fails
        """
        try:
            results = self._program.input_value(value).all()
        except (ValueError, OverflowError) as e:
            raise FilterRuntimeError(_clean_message(str(e)), expression=self.expression) from e
        return [_finite(result, self.expression) for result in results]

    def __repr__(self) -> str:
        return f"CompiledFilter({self.expression!r})"


class FilterEngine(Protocol):
    """Anything that can turn an expression string into a CompiledFilter."""

    def compile(self, expression: str) -> CompiledFilter: ...


class JqEngine:
    """jq programs compiled by libjq."""

    def compile(self, expression: str) -> CompiledFilter:
        """
        Compile an expression. A blank expression is the identity filter.

        Raises:
            FilterParseError: On syntax errors
            FilterCompileError: On unknown functions or unbound variables
        """
        try:
            program = jq.compile(expression.strip() or ".")
        except ValueError as e:
            message = _clean_message(str(e))
            error_type: type[FilterError] = FilterCompileError if "is not defined" in message else FilterParseError
            raise error_type(message, expression=expression) from e
        logger.debug("Compiled filter %r", expression)
        return CompiledFilter(expression, program)


_default_engine = JqEngine()


def compile_filter(expression: str) -> CompiledFilter:
    """Compile an expression with the default engine."""
    return _default_engine.compile(expression)


def run_filter(value: Any, expression: str) -> list[Any]:
    """Compile and run an expression in one step."""
    return compile_filter(expression).run(value)
