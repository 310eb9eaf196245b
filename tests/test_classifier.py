"""Test character classification and validation."""
import pytest

from postfix_calculator.common.errors import ExpressionValidationError, InvalidToken
from postfix_calculator.core import classifier


@pytest.mark.parametrize("c,expected", [
    ("0", True),
    ("9", True),
    ("a", False),
    ("+", False),
    ("٣", False),  # Arabic-Indic digit three
    ("12", False),
    ("", False),
])
def test_is_digit(c, expected):
    """Only single ASCII digits are digits."""
    assert classifier.is_digit(c) == expected


@pytest.mark.parametrize("c", list("+-*/^%"))
def test_is_operator_true(c):
    """All six operators are recognised."""
    assert classifier.is_operator(c)


@pytest.mark.parametrize("c", ["&", "(", "1", " ", "**", ""])
def test_is_operator_false(c):
    """Anything else is not an operator."""
    assert not classifier.is_operator(c)


def test_bracket_families():
    """Opening and closing brackets are told apart and paired."""
    assert all(classifier.is_bracket(c) for c in "()[]{}")
    assert all(classifier.is_opening_bracket(c) for c in "([{")
    assert all(classifier.is_closing_bracket(c) for c in ")]}")
    assert not classifier.is_opening_bracket(")")
    assert not classifier.is_closing_bracket("<")
    assert classifier.matching_bracket(")") == "("
    assert classifier.matching_bracket("]") == "["
    assert classifier.matching_bracket("}") == "{"


def test_is_space_only_accepts_plain_space():
    """Tabs and newlines are not whitespace for the calculator."""
    assert classifier.is_space(" ")
    assert not classifier.is_space("\t")
    assert not classifier.is_space("\n")


@pytest.mark.parametrize("expr", ["", "3 + 4", "{[(1+2)*3]^4}%5", "10/2-1"])
def test_validate_accepts(expr):
    """Valid expressions pass without error."""
    classifier.validate(expr)


def test_validate_reports_first_invalid_character():
    """The first offending character and its position are reported."""
    with pytest.raises(InvalidToken) as exc_info:
        classifier.validate("3 & 4 $ 5")
    assert exc_info.value.token == "&"
    assert exc_info.value.position == 2
    assert isinstance(exc_info.value, ExpressionValidationError)


@pytest.mark.parametrize("expr", ["3\t+ 4", "1.5+2", "x+1", "3 + 4\n"])
def test_validate_rejects(expr):
    """Tabs, decimal points, letters and newlines are invalid."""
    with pytest.raises(InvalidToken):
        classifier.validate(expr)
