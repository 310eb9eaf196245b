"""Character classification and whole-expression validation."""
from postfix_calculator.common.errors import InvalidToken

OPERATORS = "+-*/^%"
OPENING_BRACKETS = "([{"
CLOSING_BRACKETS = ")]}"
BRACKETS = "()[]{}"
SPACE = " "
DIGITS = "0123456789"

# Closing bracket -> opening bracket of the same family
BRACKET_PAIRS: dict[str, str] = dict(zip(CLOSING_BRACKETS, OPENING_BRACKETS))


def is_digit(c: str) -> bool:
    # str.isdigit() would also accept non-ASCII digits such as "٣"
    return len(c) == 1 and c in DIGITS


def is_operator(c: str) -> bool:
    return len(c) == 1 and c in OPERATORS


def is_bracket(c: str) -> bool:
    return len(c) == 1 and c in BRACKETS


def is_opening_bracket(c: str) -> bool:
    return len(c) == 1 and c in OPENING_BRACKETS


def is_closing_bracket(c: str) -> bool:
    return len(c) == 1 and c in CLOSING_BRACKETS


def is_space(c: str) -> bool:
    return c == SPACE


def matching_bracket(closing: str) -> str:
    """
    Return the opening bracket that closes with ``closing``.

    :param str closing: One of ``)``, ``]``, ``}``

    :return: The matching opening bracket
    :rtype: str
    :raises KeyError: If ``closing`` is not a closing bracket
    """
    return BRACKET_PAIRS[closing]


def validate(expression: str) -> None:
    """
    Reject the expression if it contains anything other than digits, operators, brackets and spaces.

    :param str expression: Infix expression

    :raises InvalidToken: On the first character outside the accepted alphabet
    """
    for position, c in enumerate(expression):
        if not (is_digit(c) or is_operator(c) or is_bracket(c) or is_space(c)):
            raise InvalidToken(c, position)
