"""Binary arithmetic operations keyed by operator symbol."""

from __future__ import annotations

import math

from scicalc.expression.errors import CalcDomainError
from scicalc.functions.registry import get_unary_fn, register_binary
from scicalc.functions.scientific import require_finite

# Exponent that turns ``a ^ b`` into a square root.
SQRT_EXPONENT = 0.5

_FLOAT_MAX_EXP2 = 1024


@register_binary("+")
def arith_add(a: float, b: float) -> float:
    return a + b


@register_binary("-")
def arith_subtract(a: float, b: float) -> float:
    return a - b


@register_binary("*")
def arith_multiply(a: float, b: float) -> float:
    return a * b


@register_binary("/")
def arith_divide(a: float, b: float) -> float:
    """Divide a by b.

    Raises:
        CalcDomainError: If *b* is exactly zero.
    """
    if b == 0.0:
        raise CalcDomainError("Division by zero!", operation="/")
    return a / b


@register_binary("^")
def arith_power(a: float, b: float) -> float:
    """Raise a to the power b.

    An exponent of exactly 0.5 is a square root of *a*.  Any other exponent
    truncates both operands to integers first, so ``2.9 ^ 3.7`` is ``2 ^ 3``.

    Raises:
        CalcDomainError: Square root of a negative number, zero raised to a
            negative power, a non-finite operand, or a result beyond float
            range.
    """
    require_finite(a, "^")
    require_finite(b, "^")
    if b == SQRT_EXPONENT:
        return get_unary_fn("sqrt")(a)

    base = math.trunc(a)
    exponent = math.trunc(b)
    if base == 0 and exponent < 0:
        raise CalcDomainError("Cannot raise zero to a negative power", operation="^")
    if abs(base) > 1 and exponent > 0:
        if exponent * math.log2(abs(base)) >= _FLOAT_MAX_EXP2:
            raise CalcDomainError("Result is out of range", operation="^")
    return float(base**exponent)
