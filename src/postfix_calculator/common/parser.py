"""Validate, convert and evaluate infix arithmetic expressions."""
from typing import Optional

from postfix_calculator.common.config import CalculatorSettings
from postfix_calculator.common.errors import UnbalancedBrackets
from postfix_calculator.common.logger import logger
from postfix_calculator.common.models import EvaluationResult, PostfixSequence
from postfix_calculator.core import evaluator
from postfix_calculator.core.balance import check_balance
from postfix_calculator.core.classifier import validate
from postfix_calculator.core.converter import InfixToPostfixConverter


class ExpressionParser:
    """
    Parse and evaluate infix arithmetic expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - No state shared between calls: every call builds its own stacks

    Algorithm:
        1. Validate the characters and the bracket balance
        2. Convert to Reverse Polish Notation (RPN) with the shunting algorithm
        3. Evaluate the RPN with an operand stack

    Examples:
        - Infix expression (standard notation): (3 + 4) * 2
        - Corresponding Reverse Polish Notation (RPN): 3 4 + 2 *

    """

    @staticmethod
    def validate_and_check_balance(expression: str) -> None:
        """
        Check the characters of an expression and the nesting of its brackets.

        :param str expression: Infix expression

        :raises InvalidToken: If a character is not a digit, operator, bracket or space
        :raises UnbalancedBrackets: If the brackets do not nest or match
        """
        validate(expression)
        if not check_balance(expression):
            raise UnbalancedBrackets(expression)

    @staticmethod
    def to_postfix(expression: str, settings: Optional[CalculatorSettings] = None) -> PostfixSequence:
        """
        Convert an infix expression to Reverse Polish Notation.

        Call ``validate_and_check_balance`` first; bracket balance is a precondition.

        :param str expression: Infix expression
        :param Optional[CalculatorSettings] settings: Stack and token limits

        :return: Postfix tokens
        :rtype: PostfixSequence
        :raises ConversionError: If the expression cannot be converted
        """
        return InfixToPostfixConverter(expression, settings).convert()

    @staticmethod
    def evaluate(sequence: PostfixSequence, settings: Optional[CalculatorSettings] = None) -> float:
        """
        Evaluate a postfix sequence.

        :param PostfixSequence sequence: Postfix tokens
        :param Optional[CalculatorSettings] settings: Stack and token limits

        :return: Computed result as float
        :rtype: float
        :raises EvaluationError: If the sequence is malformed
        """
        return evaluator.evaluate(sequence, settings)

    @staticmethod
    def calculate(expression: str, settings: Optional[CalculatorSettings] = None) -> EvaluationResult:
        """
        Validate, convert and evaluate an infix expression.

        :param str expression: Infix expression
        :param Optional[CalculatorSettings] settings: Stack and token limits

        :return: The expression with its postfix form and value
        :rtype: EvaluationResult
        :raises CalculatorError: On the first failing step
        """
        ExpressionParser.validate_and_check_balance(expression)
        postfix = ExpressionParser.to_postfix(expression, settings)
        result = ExpressionParser.evaluate(postfix, settings)
        logger.debug(f"✅ {expression!r} = {result}")
        return EvaluationResult(expression=expression, postfix=postfix, result=result)
