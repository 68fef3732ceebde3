"""Custom exceptions for nest-repl."""

from typing import Any, Dict, Optional


class NestReplError(Exception):
    """Base exception for nest-repl errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class ParserUnavailableError(NestReplError):
    """No grammar is installed or loadable for a language."""

    def __init__(
        self,
        message: str,
        language: Optional[str] = None,
    ):
        super().__init__(message)
        if language:
            self.details["language"] = language


class ParseFailureError(NestReplError):
    """The parser produced no tree or no root node."""

    def __init__(
        self,
        message: str,
        language: Optional[str] = None,
        source_length: Optional[int] = None,
    ):
        super().__init__(message)
        if language:
            self.details["language"] = language
        if source_length is not None:
            self.details["source_length"] = source_length


class QueryCompileError(NestReplError):
    """A structural query pattern could not be compiled."""

    def __init__(
        self,
        message: str,
        pattern: Optional[str] = None,
        language: Optional[str] = None,
    ):
        super().__init__(message)
        if pattern:
            self.details["pattern"] = pattern
        if language:
            self.details["language"] = language


class ValidationError(NestReplError):
    """Data validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        super().__init__(message)
        if field:
            self.details["field"] = field
        if value is not None:
            self.details["value"] = value
