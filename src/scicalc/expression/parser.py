"""Lark-lexed, single-pass parser for calculator expressions.

Supports:
- Unsigned literals: ``12``, ``3.5``, ``.25``
- Signed literals where an operand is expected: ``-4``, ``2 * -3.5``
- Function keywords applied to an adjacent number, in degrees for trig:
  ``sin30``, ``cos60``, ``tan45``, ``ln2``, ``exp1``
- Prefix factorial: ``!5``
- Binary operators ``+ - * / ^``

Unary functions are evaluated while scanning, so the result of parsing is a
flat :class:`Expression` holding only numbers and binary operators.
"""

from __future__ import annotations

import math

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters

import scicalc.functions  # noqa: F401
from scicalc.expression.errors import CalcDomainError, CalcParseError
from scicalc.expression.model import DEFAULT_MAX_OPERANDS, Expression
from scicalc.functions.registry import get_unary_fn

# Keywords are matched case-sensitively: ``SIN30`` is invalid input.
# Spaces separate tokens; any other whitespace is invalid input.
GRAMMAR = r"""
start: _token*

_token: KEYWORD
    | BANG
    | LITERAL
    | OPERATOR

KEYWORD: "sin" | "cos" | "tan" | "ln" | "exp"
BANG: "!"
LITERAL: /[0-9.]+/
OPERATOR: "+" | "-" | "*" | "/" | "^"

SPACES: / +/
%ignore SPACES
"""

_lexer = Lark(GRAMMAR, parser="lalr", lexer="basic", start="start")

_DIGITS = "0123456789"

# Token text -> registered unary primitive.
_PREFIX_FUNCTIONS = {
    "sin": "sin",
    "cos": "cos",
    "tan": "tan",
    "ln": "ln",
    "exp": "exp",
    "!": "factorial",
}


def tokenize(text: str) -> list[Token]:
    """Split *text* into lark tokens.

    Raises:
        CalcParseError: On any character outside the expression alphabet.
    """
    try:
        return list(_lexer.lex(text))
    except UnexpectedCharacters as exc:
        pos = getattr(exc, "pos_in_stream", None)
        raise CalcParseError("Invalid input", position=pos) from exc


def scan_number(text: str, position: int = 0) -> float:
    """Accumulate a decimal literal digit by digit.

    The integer part is built as ``value * 10 + digit``; each digit after
    the decimal point is divided by a growing power of ten.  A lone ``.``
    scans as ``0.0``.

    Args:
        text: Digits and at most one ``.``.
        position: Offset of *text* in the input line, for error reporting.

    Raises:
        CalcParseError: On a second decimal point or a non-digit character.
        CalcDomainError: If the literal is too large to be a float.
    """
    value = 0.0
    decimal_found = False
    place = 1.0
    for offset, ch in enumerate(text):
        if ch == ".":
            if decimal_found:
                raise CalcParseError("Multiple decimal points", position=position + offset)
            decimal_found = True
            continue
        if ch not in _DIGITS:
            raise CalcParseError("Invalid input", position=position + offset)
        digit = _DIGITS.index(ch)
        if decimal_found:
            place *= 10.0
            value += digit / place
        else:
            value = value * 10.0 + digit
    if not math.isfinite(value):
        raise CalcDomainError("Number is out of range")
    return value


def _adjacent(tokens: list[Token], i: int, type_: str) -> bool:
    """True if ``tokens[i + 1]`` has *type_* and touches ``tokens[i]``."""
    if i + 1 >= len(tokens):
        return False
    nxt = tokens[i + 1]
    return nxt.type == type_ and nxt.start_pos == tokens[i].end_pos


def _scan_signed(tokens: list[Token], i: int) -> tuple[float, int] | None:
    """Scan a literal at ``tokens[i]``, optionally preceded by an adjacent ``-``.

    Returns:
        ``(value, next_index)``, or None if no number starts at *i*.
    """
    tok = tokens[i]
    if tok.type == "LITERAL":
        return scan_number(str(tok), tok.start_pos), i + 1
    if tok.type == "OPERATOR" and str(tok) == "-" and _adjacent(tokens, i, "LITERAL"):
        lit = tokens[i + 1]
        return -scan_number(str(lit), lit.start_pos), i + 2
    return None


def _scan_argument(tokens: list[Token], i: int) -> tuple[float, int]:
    """Scan the number that must touch the function token at ``tokens[i]``."""
    func = tokens[i]
    if i + 1 < len(tokens) and tokens[i + 1].start_pos == func.end_pos:
        scanned = _scan_signed(tokens, i + 1)
        if scanned is not None:
            return scanned
    raise CalcParseError(f"Expected a number after '{func}'", position=func.end_pos)


def parse_expression(text: str, max_operands: int = DEFAULT_MAX_OPERANDS) -> Expression:
    """Parse one input line into an :class:`Expression`.

    Args:
        text: The raw line, e.g. ``"-2.5 + 3 * sin30"``.
        max_operands: Capacity of the resulting expression.

    Returns:
        A well-formed expression: ``n`` operands and ``n - 1`` operators.

    Raises:
        CalcParseError: Invalid characters, malformed literals, or tokens in
            the wrong place (including a trailing operator).
        CalcDomainError: A function argument outside its domain, e.g. ``ln0``.
        CalcCapacityError: More than *max_operands* operands.
    """
    tokens = tokenize(text)
    if not tokens:
        raise CalcParseError("Empty expression", position=0)

    expr = Expression(max_operands=max_operands)
    expect_operand = True
    i = 0
    while i < len(tokens):
        tok = tokens[i]

        if tok.type in ("KEYWORD", "BANG"):
            if not expect_operand:
                raise CalcParseError(f"Missing operator before '{tok}'", position=tok.start_pos)
            arg, i = _scan_argument(tokens, i)
            fn = get_unary_fn(_PREFIX_FUNCTIONS[str(tok)])
            expr.add_operand(fn(arg))
            expect_operand = False
            continue

        if tok.type == "OPERATOR" and not expect_operand:
            expr.add_operator(str(tok))
            expect_operand = True
            i += 1
            continue

        if not expect_operand:
            raise CalcParseError("Missing operator before number", position=tok.start_pos)
        scanned = _scan_signed(tokens, i)
        if scanned is None:
            raise CalcParseError(f"Operator '{tok}' is in the wrong place", position=tok.start_pos)
        value, i = scanned
        expr.add_operand(value)
        expect_operand = False

    if expect_operand:
        last = tokens[-1]
        raise CalcParseError(f"Missing operand after '{last}'", position=last.end_pos)
    return expr
