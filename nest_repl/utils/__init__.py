"""Utility modules for nest-repl."""

from nest_repl.utils.exceptions import (
    NestReplError,
    ParseFailureError,
    ParserUnavailableError,
    QueryCompileError,
    ValidationError,
)

__all__ = [
    # Exceptions
    "NestReplError",
    "ParseFailureError",
    "ParserUnavailableError",
    "QueryCompileError",
    "ValidationError",
]
