"""Tiered reduction evaluator for parsed expressions.

Precedence is applied as three passes over the operator sequence:

1. ``^``        (left to right, so ``2^3^2`` is ``(2^3)^2``)
2. ``*`` ``/``  (left to right)
3. ``+`` ``-``  (left to right, accumulated into a scalar)

Each of the first two passes folds its operators into the operand to their
left and returns fresh, shorter sequences; the input expression is not
modified.
"""

from __future__ import annotations

import scicalc.functions  # noqa: F401
from scicalc.expression.errors import CalcError, CalcParseError
from scicalc.expression.model import (  # noqa: F401
    DEFAULT_MAX_OPERANDS,
    Expression,
    LineResult,
    format_result,
)
from scicalc.expression.parser import parse_expression
from scicalc.functions.registry import get_binary_fn

POWER_TIER = frozenset({"^"})
PRODUCT_TIER = frozenset({"*", "/"})
SUM_TIER = frozenset({"+", "-"})


def reduce_tier(
    operands: list[float],
    operators: list[str],
    tier: frozenset[str],
) -> tuple[list[float], list[str]]:
    """Fold every operator in *tier*, left to right.

    Args:
        operands: ``n`` values.
        operators: ``n - 1`` operator symbols between them.
        tier: The operator symbols reduced by this pass.

    Returns:
        New ``(operands, operators)`` with no operator from *tier* left.
    """
    out_operands = [operands[0]]
    out_operators: list[str] = []
    for op, rhs in zip(operators, operands[1:]):
        if op in tier:
            out_operands[-1] = get_binary_fn(op)(out_operands[-1], rhs)
        else:
            out_operators.append(op)
            out_operands.append(rhs)
    return out_operands, out_operators


def evaluate_expression(expr: Expression) -> float:
    """Reduce *expr* to a single number.

    Raises:
        CalcDomainError: Division by zero, square root of a negative number,
            or a power result beyond float range.
        CalcParseError: If *expr* is not well formed.
    """
    if not expr.is_well_formed():
        raise CalcParseError("Malformed expression")

    operands, operators = reduce_tier(list(expr.operands), list(expr.operators), POWER_TIER)
    operands, operators = reduce_tier(operands, operators, PRODUCT_TIER)

    result = operands[0]
    for op, rhs in zip(operators, operands[1:]):
        if op not in SUM_TIER:
            raise CalcParseError(f"Unexpected operator '{op}'")
        result = get_binary_fn(op)(result, rhs)
    return result


def calculate(line: str, max_operands: int = DEFAULT_MAX_OPERANDS) -> LineResult:
    """Parse and evaluate one line, capturing any calculator error.

    Args:
        line: Raw user input.
        max_operands: Capacity for the parsed expression.

    Returns:
        A successful :class:`LineResult` with the value, or a failed one
        carrying the error kind and message.
    """
    try:
        expr = parse_expression(line, max_operands=max_operands)
        return LineResult.success(evaluate_expression(expr))
    except CalcError as exc:
        return LineResult.failure(exc)
