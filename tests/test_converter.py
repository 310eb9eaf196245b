"""Test class InfixToPostfixConverter."""
import pytest

from postfix_calculator.common.config import REFERENCE_SETTINGS, CalculatorSettings
from postfix_calculator.common.errors import (
    ConversionError,
    EmptyExpression,
    ExpressionTooLong,
    InvalidToken,
    UnbalancedBrackets,
)
from postfix_calculator.common.models import IntegerLiteral, Operator
from postfix_calculator.core.converter import InfixToPostfixConverter, to_postfix


def postfix_text(expr: str, settings: CalculatorSettings = None) -> str:
    return " ".join(str(token) for token in to_postfix(expr, settings))


@pytest.mark.parametrize("expr,expected", [
    ("3+4", "3 4 +"),
    ("3+4*2", "3 4 2 * +"),        # multiplication binds tighter
    ("(3+4)*2", "3 4 + 2 *"),
    ("10 / 2 - 1", "10 2 / 1 -"),
    ("10 - 2 - 3", "10 2 - 3 -"),  # left to right within a band
    ("8%3*2", "8 3 % 2 *"),
    ("2^3^2", "2 3 ^ 2 ^"),        # ^ is left-associative too
    ("1+2^3*4", "1 2 3 ^ 4 * +"),
    ("{[1+2]*(3-4)}", "1 2 + 3 4 - *"),
    ("12 * 345", "12 345 *"),
    ("((7))", "7"),
])
def test_to_postfix(expr, expected):
    """Infix expressions convert to the expected postfix order."""
    assert postfix_text(expr) == expected


def test_tokens_are_tagged():
    """Literals and operators come out as distinct token types."""
    tokens = to_postfix("12+3")
    assert tokens == (IntegerLiteral(digits="12"), IntegerLiteral(digits="3"), Operator(symbol="+"))
    assert isinstance(tokens, tuple)


def test_spaces_only_produce_no_tokens():
    """Whitespace is skipped entirely."""
    assert to_postfix("   ") == ()


def test_adjacent_literals_are_separate_tokens():
    """A space splits a digit run into two literals."""
    assert postfix_text("3 4") == "3 4"


def test_empty_expression():
    """The empty string is rejected."""
    with pytest.raises(EmptyExpression):
        to_postfix("")


def test_invalid_character():
    """Characters outside the alphabet are rejected even without prior validation."""
    with pytest.raises(InvalidToken) as exc_info:
        to_postfix("3 & 4")
    assert exc_info.value.token == "&"
    assert isinstance(exc_info.value, ConversionError)


@pytest.mark.parametrize("expr", ["1+2)", "(1+2", "(1+2]", "[(1+2])"])
def test_unbalanced_brackets(expr):
    """Bracket mismatches surface as UnbalancedBrackets instead of garbage output."""
    with pytest.raises(UnbalancedBrackets):
        to_postfix(expr)


def test_token_limit():
    """Emitting more tokens than allowed fails."""
    with pytest.raises(ExpressionTooLong) as exc_info:
        to_postfix("1+2+3", CalculatorSettings(max_tokens=3))
    assert exc_info.value.limit_name == "token"


def test_stack_limit():
    """Nesting deeper than the stack capacity fails."""
    with pytest.raises(ExpressionTooLong) as exc_info:
        to_postfix("((1+2))", CalculatorSettings(stack_capacity=2))
    assert exc_info.value.limit_name == "stack"


def test_reference_limits():
    """81 tokens exceed the reference buffer while the default settings are unbounded."""
    expr = "1" + "+1" * 40
    assert len(to_postfix(expr)) == 81
    with pytest.raises(ExpressionTooLong):
        to_postfix(expr, REFERENCE_SETTINGS)


def test_converter_does_not_modify_expression():
    """The converter keeps the input untouched."""
    converter = InfixToPostfixConverter("(3+4)*2")
    converter.convert()
    assert converter.expression == "(3+4)*2"
