"""Exception hierarchy raised by the calculator."""
from typing import Optional


class CalculatorError(ValueError):
    """Base class of every error raised while validating, converting or evaluating an expression."""


class StackError(CalculatorError):
    """Internal bounded stack misuse."""


class StackOverflow(StackError):
    def __init__(self, capacity: int) -> None:
        super().__init__(f"Stack is full (capacity {capacity})")
        self.capacity = capacity


class StackUnderflow(StackError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"[{operation}] Empty stack")
        self.operation = operation


class ExpressionValidationError(CalculatorError):
    """The raw expression was rejected before conversion."""


class ConversionError(CalculatorError):
    """The infix expression could not be converted to postfix."""


class EvaluationError(CalculatorError):
    """The postfix sequence could not be evaluated."""


class InvalidToken(ExpressionValidationError, ConversionError, EvaluationError):
    """
    A character (or postfix token) outside the accepted alphabet.

    :param str token: Offending character or token
    :param Optional[int] position: Index of the character in the expression, if known
    """

    def __init__(self, token: str, position: Optional[int] = None) -> None:
        message = f"Invalid token: {token!r}"
        if position is not None:
            message += f" at position {position}"
        super().__init__(message)
        self.token = token
        self.position = position


class UnbalancedBrackets(ExpressionValidationError, ConversionError):
    def __init__(self, expression: str) -> None:
        super().__init__(f"Unbalanced brackets: {expression!r}")
        self.expression = expression


class EmptyExpression(ConversionError):
    def __init__(self) -> None:
        super().__init__("No expression")


class ExpressionTooLong(ConversionError, EvaluationError):
    """A configured stack capacity or token limit was exceeded."""

    def __init__(self, limit_name: str, limit: int) -> None:
        super().__init__(f"Expression too long: {limit_name} limit of {limit} exceeded")
        self.limit_name = limit_name
        self.limit = limit


class InsufficientOperands(EvaluationError):
    def __init__(self) -> None:
        super().__init__("Not enough operands")


class InsufficientOperators(EvaluationError):
    def __init__(self, remaining: int) -> None:
        super().__init__(f"Not enough operators, {remaining} operand(s) left unused")
        self.remaining = remaining


class InvalidOperator(EvaluationError):
    def __init__(self, operator: str) -> None:
        super().__init__(f"Invalid operation: {operator!r}")
        self.operator = operator
