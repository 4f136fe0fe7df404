"""Error types for expression parsing and evaluation."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    syntax = "syntax"
    domain = "domain"
    capacity = "capacity"


class CalcError(Exception):
    """Base class for all calculator errors.

    Attributes:
        kind: Which family of failure this is.
        message: Human-readable description, shown to the user as-is.
        position: Character position where the error was detected, if known.
    """

    kind: ErrorKind = ErrorKind.syntax

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        super().__init__(message)


class CalcParseError(CalcError):
    """Malformed input: bad literal, invalid character or misplaced token."""

    kind = ErrorKind.syntax

    def __str__(self) -> str:
        if self.position is not None:
            return f"{self.message} (at position {self.position})"
        return self.message


class CalcDomainError(CalcError):
    """A mathematically undefined or unrepresentable operation.

    Attributes:
        operation: Name of the primitive that rejected its input.
    """

    kind = ErrorKind.domain

    def __init__(self, message: str, operation: str | None = None) -> None:
        self.operation = operation
        super().__init__(message)


class CalcCapacityError(CalcError):
    """The expression holds more operands or operators than allowed."""

    kind = ErrorKind.capacity

    def __init__(self, limit: int, what: str = "operands") -> None:
        self.limit = limit
        super().__init__(f"Expression too long: more than {limit} {what}")


ENGINE_ERRORS = (CalcParseError, CalcDomainError, CalcCapacityError)
