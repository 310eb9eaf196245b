"""Bracket balance check."""
from postfix_calculator.core.classifier import (
    is_closing_bracket,
    is_opening_bracket,
    matching_bracket,
)
from postfix_calculator.core.stack import BoundedStack


def check_balance(expression: str) -> bool:
    """
    Check that every bracket is closed by a bracket of the same family, correctly nested.

    Characters other than brackets are ignored. The empty string is balanced.

    :param str expression: Infix expression

    :return: True if the brackets are balanced
    :rtype: bool
    """
    openings: BoundedStack[str] = BoundedStack()
    for c in expression:
        if is_opening_bracket(c):
            openings.push(c)
        elif is_closing_bracket(c):
            if openings.is_empty():
                return False
            if openings.pop() != matching_bracket(c):
                return False
    return openings.is_empty()
