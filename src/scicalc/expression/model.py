"""Data model for one parsed input line and its outcome."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from scicalc.expression.errors import CalcCapacityError, CalcError, ErrorKind

DEFAULT_MAX_OPERANDS = 100

OperatorSymbol = Literal["+", "-", "*", "/", "^"]

OPERATOR_SYMBOLS: frozenset[str] = frozenset({"+", "-", "*", "/", "^"})


def format_result(value: float, precision: int = 2) -> str:
    """Fixed-point text for *value*, e.g. ``14.00``."""
    return f"{value:.{precision}f}"


class Expression(BaseModel):
    """Parallel operand/operator sequences for one input line.

    ``operators[i]`` sits between ``operands[i]`` and ``operands[i + 1]``.
    """

    operands: list[float] = Field(default_factory=list)
    operators: list[OperatorSymbol] = Field(default_factory=list)
    max_operands: int = DEFAULT_MAX_OPERANDS

    @property
    def operand_count(self) -> int:
        return len(self.operands)

    @property
    def operator_count(self) -> int:
        return len(self.operators)

    def add_operand(self, value: float) -> None:
        if len(self.operands) >= self.max_operands:
            raise CalcCapacityError(self.max_operands, "operands")
        self.operands.append(float(value))

    def add_operator(self, symbol: str) -> None:
        if symbol not in OPERATOR_SYMBOLS:
            raise ValueError(f"Unknown operator: {symbol!r}")
        # n operands need exactly n - 1 operators
        if len(self.operators) >= self.max_operands - 1:
            raise CalcCapacityError(self.max_operands - 1, "operators")
        self.operators.append(symbol)  # type: ignore[arg-type]

    def is_well_formed(self) -> bool:
        return bool(self.operands) and len(self.operands) == len(self.operators) + 1


class LineResult(BaseModel):
    """Outcome of calculating one line: a value or a tagged error."""

    ok: bool
    value: float | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None

    @classmethod
    def success(cls, value: float) -> LineResult:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: CalcError) -> LineResult:
        return cls(ok=False, error_kind=error.kind, message=str(error))

    def display(self, precision: int = 2) -> str:
        """Text shown to the user for this line."""
        if self.ok:
            return f"Result: {format_result(self.value, precision)}"
        return f"Error: {self.message}"
