# src/semaudit/errors.py
from typing import Optional


class AuditError(Exception):
    """Base class for every error raised by the semantic audit pipeline."""


class ParseError(AuditError):
    """
    Raised when the input is not well-formed markup.

    Carries the source (file path or '<text>') and, when known, the 1-based
    line and column of the offending token.
    """

    def __init__(self, message: str, source: str = "<text>",
                 line: Optional[int] = None, column: Optional[int] = None):
        self.reason = message
        self.source = source
        self.line = line
        self.column = column
        super().__init__(self._render())

    @property
    def location(self) -> str:
        if self.line is None:
            return self.source
        if self.column is None:
            return f"{self.source}:{self.line}"
        return f"{self.source}:{self.line}:{self.column}"

    def _render(self) -> str:
        return f"{self.location}: {self.reason}"


class SourceReadError(AuditError, OSError):
    """Raised when the source document cannot be read from disk."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"Cannot read '{path}'"
        if isinstance(cause, OSError) and cause.strerror:
            message += f": {cause.strerror}"
        elif cause is not None:
            message += f": {cause}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class RuleError(AuditError):
    """
    Wraps an exception raised inside a rule implementation.
    The engine logs it and leaves the rule out of the report.
    """

    def __init__(self, rule_id: str, cause: BaseException):
        self.rule_id = rule_id
        self.cause = cause
        super().__init__(f"Rule '{rule_id}' failed: {type(cause).__name__}: {cause}")
