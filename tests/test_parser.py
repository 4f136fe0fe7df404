"""Tests for expression lexing and parsing."""

from __future__ import annotations

import pytest

from scicalc.expression import (
    CalcCapacityError,
    CalcDomainError,
    CalcParseError,
    ErrorKind,
    Expression,
    parse_expression,
    scan_number,
    tokenize,
)


# ────────────────────────────────────────────────────────────────
# Tokenizer
# ────────────────────────────────────────────────────────────────


class TestTokenize:
    def test_token_types(self) -> None:
        tokens = tokenize("sin30 + 2")
        assert [t.type for t in tokens] == ["KEYWORD", "LITERAL", "OPERATOR", "LITERAL"]

    def test_spaces_ignored(self) -> None:
        assert [str(t) for t in tokenize("  1 +   2 ")] == ["1", "+", "2"]

    def test_empty(self) -> None:
        assert tokenize("") == []

    def test_invalid_character(self) -> None:
        with pytest.raises(CalcParseError, match="Invalid input") as exc_info:
            tokenize("2 & 3")
        assert exc_info.value.position == 2

    def test_keywords_are_case_sensitive(self) -> None:
        with pytest.raises(CalcParseError, match="Invalid input"):
            tokenize("SIN30")

    def test_tab_is_invalid(self) -> None:
        with pytest.raises(CalcParseError):
            tokenize("1\t+2")


# ────────────────────────────────────────────────────────────────
# Number scanning
# ────────────────────────────────────────────────────────────────


class TestScanNumber:
    def test_integer(self) -> None:
        assert scan_number("1234") == 1234.0

    def test_decimal(self) -> None:
        assert scan_number("3.25") == pytest.approx(3.25)

    def test_leading_dot(self) -> None:
        assert scan_number(".5") == pytest.approx(0.5)

    def test_trailing_dot(self) -> None:
        assert scan_number("7.") == 7.0

    def test_lone_dot_is_zero(self) -> None:
        assert scan_number(".") == 0.0

    def test_multiple_decimal_points(self) -> None:
        with pytest.raises(CalcParseError, match="Multiple decimal points") as exc_info:
            scan_number("1.2.3", position=4)
        assert exc_info.value.position == 7
        assert exc_info.value.kind == ErrorKind.syntax

    def test_non_digit(self) -> None:
        with pytest.raises(CalcParseError):
            scan_number("1x")

    def test_too_large_for_float(self) -> None:
        with pytest.raises(CalcDomainError, match="out of range") as exc_info:
            scan_number("9" * 400)
        assert exc_info.value.kind == ErrorKind.domain

    def test_long_fraction_is_finite(self) -> None:
        assert scan_number("0." + "1" * 400) == pytest.approx(1 / 9)


# ────────────────────────────────────────────────────────────────
# Parsing into operand / operator sequences
# ────────────────────────────────────────────────────────────────


class TestParseExpression:
    def test_flat_sequences(self) -> None:
        expr = parse_expression("2 + 3 * 4")
        assert expr.operands == [2.0, 3.0, 4.0]
        assert expr.operators == ["+", "*"]
        assert expr.operand_count == 3
        assert expr.operator_count == 2
        assert expr.is_well_formed()

    def test_single_operand(self) -> None:
        expr = parse_expression("42")
        assert expr.operands == [42.0]
        assert expr.operators == []

    def test_leading_signed_literal(self) -> None:
        expr = parse_expression("-2.5 + 3")
        assert expr.operands == [pytest.approx(-2.5), 3.0]
        assert expr.operators == ["+"]

    def test_signed_literal_after_operator(self) -> None:
        expr = parse_expression("3 * -4")
        assert expr.operands == [3.0, -4.0]
        assert expr.operators == ["*"]

    def test_minus_after_operand_is_binary(self) -> None:
        expr = parse_expression("3 -5")
        assert expr.operands == [3.0, 5.0]
        assert expr.operators == ["-"]

    def test_double_minus(self) -> None:
        expr = parse_expression("3--5")
        assert expr.operands == [3.0, -5.0]
        assert expr.operators == ["-"]

    def test_detached_minus_is_misplaced(self) -> None:
        with pytest.raises(CalcParseError, match="wrong place"):
            parse_expression("- 5")

    def test_leading_binary_operator(self) -> None:
        with pytest.raises(CalcParseError, match="wrong place"):
            parse_expression("*3")

    def test_trailing_operator(self) -> None:
        with pytest.raises(CalcParseError, match="Missing operand") as exc_info:
            parse_expression("3+")
        assert exc_info.value.position == 2

    def test_trailing_minus(self) -> None:
        with pytest.raises(CalcParseError, match="Missing operand"):
            parse_expression("3 -")

    def test_adjacent_operands(self) -> None:
        with pytest.raises(CalcParseError, match="Missing operator"):
            parse_expression("2 3")

    def test_empty_input(self) -> None:
        with pytest.raises(CalcParseError, match="Empty expression"):
            parse_expression("   ")

    def test_multiple_decimal_points(self) -> None:
        with pytest.raises(CalcParseError, match="Multiple decimal points"):
            parse_expression("1.2.3")

    def test_power_operator_is_stored(self) -> None:
        expr = parse_expression("4^0.5")
        assert expr.operands == [4.0, 0.5]
        assert expr.operators == ["^"]


# ────────────────────────────────────────────────────────────────
# Eager unary functions
# ────────────────────────────────────────────────────────────────


class TestEagerFunctions:
    def test_sin_becomes_one_operand(self) -> None:
        expr = parse_expression("sin90")
        assert expr.operands == [pytest.approx(1.0)]
        assert expr.operators == []

    def test_function_in_expression(self) -> None:
        expr = parse_expression("2 * cos60 + 1")
        assert expr.operands == [2.0, pytest.approx(0.5), 1.0]
        assert expr.operators == ["*", "+"]

    def test_factorial_is_never_an_operator(self) -> None:
        expr = parse_expression("!5 - 1")
        assert expr.operands == [120.0, 1.0]
        assert expr.operators == ["-"]

    def test_factorial_truncates(self) -> None:
        assert parse_expression("!4.9").operands == [24.0]

    def test_ln(self) -> None:
        assert parse_expression("ln1").operands == [0.0]

    def test_exp(self) -> None:
        assert parse_expression("exp0").operands == [1.0]

    def test_signed_argument(self) -> None:
        assert parse_expression("sin-30").operands == [pytest.approx(-0.5)]

    def test_ln_zero_is_domain_error(self) -> None:
        with pytest.raises(CalcDomainError, match="non-positive"):
            parse_expression("ln0")

    def test_ln_negative_is_domain_error(self) -> None:
        with pytest.raises(CalcDomainError):
            parse_expression("ln-5")

    def test_tan_asymptote(self) -> None:
        with pytest.raises(CalcDomainError, match="Tangent"):
            parse_expression("tan90")

    def test_keyword_needs_adjacent_number(self) -> None:
        with pytest.raises(CalcParseError, match="Expected a number after 'sin'"):
            parse_expression("sin 90")

    def test_keyword_without_number(self) -> None:
        with pytest.raises(CalcParseError, match="Expected a number after 'ln'"):
            parse_expression("2 + ln")

    def test_function_after_operand(self) -> None:
        with pytest.raises(CalcParseError, match="Missing operator"):
            parse_expression("2 sin30")

    def test_unknown_word(self) -> None:
        with pytest.raises(CalcParseError, match="Invalid input"):
            parse_expression("sqrt4")


# ────────────────────────────────────────────────────────────────
# Capacity
# ────────────────────────────────────────────────────────────────


class TestCapacity:
    def test_within_capacity(self) -> None:
        expr = parse_expression("1+2+3", max_operands=3)
        assert expr.operand_count == 3

    def test_exceeding_capacity(self) -> None:
        with pytest.raises(CalcCapacityError) as exc_info:
            parse_expression("1+2+3+4", max_operands=3)
        assert exc_info.value.kind == ErrorKind.capacity

    def test_default_capacity(self) -> None:
        line = "+".join(["1"] * 100)
        assert parse_expression(line).operand_count == 100
        with pytest.raises(CalcCapacityError):
            parse_expression(line + "+1")

    def test_model_rejects_extra_operand(self) -> None:
        expr = Expression(max_operands=1)
        expr.add_operand(1.0)
        with pytest.raises(CalcCapacityError, match="more than 1 operands"):
            expr.add_operand(2.0)
        assert expr.operands == [1.0]
