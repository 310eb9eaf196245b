"""Postfix evaluation with an operand stack."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, Iterable, Optional

from postfix_calculator.common.config import DEFAULT_SETTINGS, CalculatorSettings
from postfix_calculator.common.errors import (
    ExpressionTooLong,
    InsufficientOperands,
    InsufficientOperators,
    InvalidOperator,
    InvalidToken,
    StackOverflow,
    StackUnderflow,
)
from postfix_calculator.common.logger import logger
from postfix_calculator.common.models import IntegerLiteral, Operator, PostfixSequence
from postfix_calculator.core.classifier import is_digit, is_operator
from postfix_calculator.core.stack import BoundedStack


# Type alias for operator functions (left operand, right operand) -> result
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and x % 2 == 1


def divide(left: float, right: float) -> float:
    """IEEE 754 division: a zero divisor gives a signed infinity, or NaN for 0/0."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def power(left: float, right: float) -> float:
    """``left`` raised to ``right`` with C ``pow`` results instead of exceptions."""
    try:
        return math.pow(left, right)
    except OverflowError:
        if left < 0 and _is_odd_integer(right):
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power, or a negative base to a non-integer power
        if left == 0:
            return math.copysign(math.inf, left) if _is_odd_integer(right) else math.inf
        return math.nan


def remainder(left: float, right: float) -> float:
    """C ``fmod``: the result has the sign of ``left``; a zero divisor gives NaN."""
    try:
        return math.fmod(left, right)
    except ValueError:
        return math.nan


# Mapping of operator symbols to their arithmetic
ARITHMETIC: dict[str, OperatorFn] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": divide,
    "^": power,
    "%": remainder,
}


def apply_operator(op: str, left: float, right: float) -> float:
    """
    Compute ``left op right``.

    :raises InvalidOperator: If ``op`` has no arithmetic rule
    """
    try:
        fn = ARITHMETIC[op]
    except KeyError:
        raise InvalidOperator(op) from None
    return fn(left, right)


def evaluate(sequence: PostfixSequence, settings: Optional[CalculatorSettings] = None) -> float:
    """
    Evaluate a postfix sequence.

    For each operator the most recently pushed operand is the right-hand side,
    so ``8 6 /`` is ``8 / 6``. The sequence itself is only read.

    :param PostfixSequence sequence: Postfix tokens
    :param Optional[CalculatorSettings] settings: Stack and token limits

    :return: The value of the expression
    :rtype: float
    :raises InsufficientOperands: If an operator finds fewer than two operands, or the sequence is empty
    :raises InsufficientOperators: If operands remain once the sequence is consumed
    :raises InvalidOperator: If an operator has no arithmetic rule
    :raises ExpressionTooLong: If a configured limit is exceeded
    """
    settings = settings or DEFAULT_SETTINGS
    if settings.max_tokens is not None and len(sequence) > settings.max_tokens:
        raise ExpressionTooLong("token", settings.max_tokens)

    operands: BoundedStack[float] = BoundedStack(settings.stack_capacity)

    for token in sequence:
        if isinstance(token, IntegerLiteral):
            value = token.value
        elif isinstance(token, Operator):
            try:
                right = operands.pop()
                left = operands.pop()
            except StackUnderflow:
                raise InsufficientOperands() from None
            value = apply_operator(token.symbol, left, right)
        else:
            raise InvalidToken(str(token))

        try:
            operands.push(value)
        except StackOverflow as exc:
            raise ExpressionTooLong("stack", exc.capacity) from exc

    try:
        result = operands.pop()
    except StackUnderflow:
        raise InsufficientOperands() from None

    if not operands.is_empty():
        raise InsufficientOperators(len(operands))

    logger.debug(f"🧮 {' '.join(str(token) for token in sequence)} = {result}")
    return result


def parse_postfix(text: str) -> PostfixSequence:
    """
    Split space-separated postfix text such as ``"3 4 +"`` into tokens.

    :param str text: Postfix expression

    :return: Postfix tokens
    :rtype: PostfixSequence
    :raises InvalidToken: If a token is neither an integer literal nor an operator
    """
    tokens = []
    for part in text.split():
        if all(is_digit(c) for c in part):
            tokens.append(IntegerLiteral(digits=part))
        elif is_operator(part):
            tokens.append(Operator(symbol=part))
        else:
            raise InvalidToken(part)
    return tuple(tokens)
