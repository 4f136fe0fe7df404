"""Built-in scientific functions.

Trigonometric functions take their argument in degrees.  Every function
checks its own domain and raises :class:`CalcDomainError` rather than
returning a special value.
"""

from __future__ import annotations

import math

from scicalc.expression.errors import CalcDomainError
from scicalc.functions.registry import register_unary

# Largest n whose factorial still fits in a float.
MAX_FACTORIAL_INPUT = 170


def require_finite(value: float, operation: str) -> None:
    """Reject infinite and NaN inputs, e.g. the result of ``exp1000``."""
    if not math.isfinite(value):
        raise CalcDomainError("Result is out of range", operation=operation)


@register_unary("sin")
def sci_sin(degrees: float) -> float:
    """Sine of an angle given in degrees."""
    require_finite(degrees, "sin")
    return math.sin(math.radians(degrees))


@register_unary("cos")
def sci_cos(degrees: float) -> float:
    """Cosine of an angle given in degrees."""
    require_finite(degrees, "cos")
    return math.cos(math.radians(degrees))


@register_unary("tan")
def sci_tan(degrees: float) -> float:
    """Tangent of an angle given in degrees.

    Raises:
        CalcDomainError: At the asymptotes (90, 270, ... degrees, either sign)
            or for a non-finite angle.
    """
    require_finite(degrees, "tan")
    if math.fmod(abs(degrees), 180.0) == 90.0:
        raise CalcDomainError("Tangent is undefined at 90/270 degrees", operation="tan")
    return math.tan(math.radians(degrees))


@register_unary("ln")
def sci_ln(value: float) -> float:
    """Natural logarithm.

    Raises:
        CalcDomainError: If *value* is zero or negative.
    """
    if value <= 0.0:
        raise CalcDomainError(
            "Logarithm is undefined for non-positive numbers", operation="ln"
        )
    return math.log(value)


@register_unary("exp")
def sci_exp(value: float) -> float:
    """e raised to *value*.  Defined everywhere; overflows to infinity."""
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


@register_unary("sqrt")
def sci_sqrt(value: float) -> float:
    if value < 0.0:
        raise CalcDomainError(
            "Cannot calculate square root of a negative number", operation="sqrt"
        )
    return math.sqrt(value)


@register_unary("factorial")
def sci_factorial(value: float) -> float:
    """Factorial of *value* truncated toward zero (``!5.9`` is ``!5``).

    Raises:
        CalcDomainError: For negative or non-finite input, or a result beyond
            float range.
    """
    require_finite(value, "factorial")
    n = math.trunc(value)
    if n < 0:
        raise CalcDomainError(
            "Factorial is undefined for negative numbers", operation="factorial"
        )
    if n > MAX_FACTORIAL_INPUT:
        raise CalcDomainError("Result is out of range", operation="factorial")
    return float(math.factorial(n))
