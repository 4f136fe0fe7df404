"""Scientific expression parsing and evaluation.

Public API::

    from scicalc.expression import parse_expression, evaluate_expression, calculate
"""

from scicalc.expression.errors import (
    ENGINE_ERRORS,
    CalcCapacityError,
    CalcDomainError,
    CalcError,
    CalcParseError,
    ErrorKind,
)
from scicalc.expression.model import DEFAULT_MAX_OPERANDS, Expression, LineResult
from scicalc.expression.parser import parse_expression, scan_number, tokenize
from scicalc.expression.evaluator import (
    calculate,
    evaluate_expression,
    format_result,
    reduce_tier,
)

__all__ = [
    "DEFAULT_MAX_OPERANDS",
    "ENGINE_ERRORS",
    "CalcCapacityError",
    "CalcDomainError",
    "CalcError",
    "CalcParseError",
    "ErrorKind",
    "Expression",
    "LineResult",
    "calculate",
    "evaluate_expression",
    "format_result",
    "parse_expression",
    "reduce_tier",
    "scan_number",
    "tokenize",
]
