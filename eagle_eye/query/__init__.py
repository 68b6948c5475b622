"""jq filter expressions evaluated against decoded JSON values."""

from .engine import CompiledFilter, FilterEngine, JqEngine, compile_filter, run_filter
from .errors import FilterCompileError, FilterError, FilterParseError, FilterRuntimeError

__all__ = [
    "CompiledFilter",
    "FilterEngine",
    "JqEngine",
    "compile_filter",
    "run_filter",
    "FilterError",
    "FilterParseError",
    "FilterCompileError",
    "FilterRuntimeError",
]
