"""Infix to postfix conversion."""
from typing import List, Optional

from postfix_calculator.common.config import DEFAULT_SETTINGS, CalculatorSettings
from postfix_calculator.common.errors import (
    EmptyExpression,
    ExpressionTooLong,
    InvalidToken,
    StackOverflow,
    UnbalancedBrackets,
)
from postfix_calculator.common.logger import logger
from postfix_calculator.common.models import IntegerLiteral, Operator, PostfixSequence, PostfixToken
from postfix_calculator.core.classifier import (
    is_closing_bracket,
    is_digit,
    is_opening_bracket,
    is_operator,
    is_space,
    matching_bracket,
)
from postfix_calculator.core.priority import is_higher_priority
from postfix_calculator.core.stack import BoundedStack


class InfixToPostfixConverter:
    """
    Convert one infix expression into a postfix sequence.

    Shunting algorithm with a single operator/bracket stack:
        - Integer literals go straight to the output.
        - An operator is pushed once every operator of equal or higher priority
          above the nearest opening bracket has been moved to the output.
        - A closing bracket flushes operators down to its opening bracket.
        - Remaining operators are flushed at the end.

    Operators of equal priority are left-associative, ``^`` included:
    ``2^3^2`` converts to ``2 3 ^ 2 ^``.

    The bracket balance is a precondition; a closing bracket with no matching
    opening bracket on the stack raises ``UnbalancedBrackets``.

    A converter instance holds the state of a single pass and is not reused.
    """

    def __init__(self, expression: str, settings: Optional[CalculatorSettings] = None) -> None:
        self.expression = expression
        self.settings = settings or DEFAULT_SETTINGS
        self._stack: BoundedStack[str] = BoundedStack(self.settings.stack_capacity)
        self._output: List[PostfixToken] = []

    def convert(self) -> PostfixSequence:
        """
        Run the conversion.

        :return: Postfix tokens in emission order
        :rtype: PostfixSequence
        :raises EmptyExpression: If the expression is empty
        :raises InvalidToken: If a character is not a digit, operator, bracket or space
        :raises UnbalancedBrackets: If a closing bracket has no matching opening bracket
        :raises ExpressionTooLong: If a configured limit is exceeded
        """
        if not self.expression:
            raise EmptyExpression()

        index = 0
        while index < len(self.expression):
            c = self.expression[index]

            if is_digit(c):
                end = index
                while end < len(self.expression) and is_digit(self.expression[end]):
                    end += 1
                self._emit(IntegerLiteral(digits=self.expression[index:end]))
                index = end
                continue

            if is_operator(c):
                self._push_operator(c)
            elif is_opening_bracket(c):
                self._push(c)
            elif is_closing_bracket(c):
                self._close_bracket(c)
            elif not is_space(c):
                raise InvalidToken(c, index)
            index += 1

        while not self._stack.is_empty():
            top = self._stack.pop()
            if is_opening_bracket(top):
                raise UnbalancedBrackets(self.expression)
            self._emit(Operator(symbol=top))

        postfix = tuple(self._output)
        logger.debug(f"🔀 {self.expression!r} -> {' '.join(str(token) for token in postfix)}")
        return postfix

    def _emit(self, token: PostfixToken) -> None:
        max_tokens = self.settings.max_tokens
        if max_tokens is not None and len(self._output) >= max_tokens:
            raise ExpressionTooLong("token", max_tokens)
        self._output.append(token)

    def _push(self, c: str) -> None:
        try:
            self._stack.push(c)
        except StackOverflow as exc:
            raise ExpressionTooLong("stack", exc.capacity) from exc

    def _push_operator(self, op: str) -> None:
        while not self._stack.is_empty():
            top = self._stack.peek()
            if is_opening_bracket(top) or is_higher_priority(op, top):
                break
            self._emit(Operator(symbol=self._stack.pop()))
        self._push(op)

    def _close_bracket(self, closing: str) -> None:
        opening = matching_bracket(closing)
        while True:
            if self._stack.is_empty():
                raise UnbalancedBrackets(self.expression)
            top = self._stack.pop()
            if top == opening:
                return
            if is_opening_bracket(top):
                raise UnbalancedBrackets(self.expression)
            self._emit(Operator(symbol=top))


def to_postfix(expression: str, settings: Optional[CalculatorSettings] = None) -> PostfixSequence:
    """Convert an infix expression to postfix. See ``InfixToPostfixConverter``."""
    return InfixToPostfixConverter(expression, settings).convert()
