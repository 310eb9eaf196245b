"""Worker process for evaluating one infix expression."""
from multiprocessing.connection import Connection
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from postfix_calculator.common.config import DEFAULT_SETTINGS, CalculatorSettings
from postfix_calculator.common.logger import logger
from postfix_calculator.common.models import EvaluationResult
from postfix_calculator.common.parser import ExpressionParser


class ExpressionWorker(BaseModel):
    """
    Worker responsible for evaluating a single infix expression.

    Lifecycle:
        - Spawned by the batch runner
        - Receives one expression only
        - Sends the postfix form and result, or the error, through a Pipe
        - Terminates immediately after computation
    """

    # Make the Pydantic instance immutable (read-only)
    # Allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back to the runner")
    expression: str = Field(..., description="Single infix expression to evaluate")
    line_number: int = Field(..., ge=1, description="Line number in the input file")
    settings: CalculatorSettings = Field(default=DEFAULT_SETTINGS, description="Stack and token limits")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not empty."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def run(self) -> None:
        """
        Evaluate the expression and send the result or error through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        evaluation: Optional[EvaluationResult] = None

        try:
            evaluation = ExpressionParser.calculate(self.expression, self.settings)
            self.conn.send(
                {
                    "line": self.line_number,
                    "expression": self.expression,
                    "postfix": evaluation.postfix_text(),
                    "result": evaluation.result,
                }
            )

        except Exception as exc:
            logger.error(
                f"👷❌ Worker failed on line {self.line_number}: {exc}\n"
                f"Invalid arithmetic expression, could not evaluate: {self.expression!r}"
            )
            self.conn.send(
                {
                    "line": self.line_number,
                    "expression": self.expression,
                    "error": str(exc),
                }
            )

        finally:
            self.conn.close()

            if evaluation is not None:
                logger.info(f"👷✅ Worker finished on line {self.line_number}: {evaluation.result}")
