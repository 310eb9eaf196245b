"""Pydantic models for postfix tokens and evaluation results."""
from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from postfix_calculator.core.classifier import is_operator


class IntegerLiteral(BaseModel):
    """A non-empty run of decimal digits taken verbatim from the infix expression."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["integer"] = "integer"
    digits: str = Field(..., pattern=r"^[0-9]+$", description="Digits of the literal")

    @property
    def value(self) -> float:
        return float(self.digits)

    def __str__(self) -> str:
        return self.digits


class Operator(BaseModel):
    """A single arithmetic operator character."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"
    symbol: str = Field(..., description="Operator character")

    @field_validator("symbol")
    def symbol_must_be_operator(cls, v: str) -> str:
        """Ensure that the symbol is one of the supported operators."""
        if not is_operator(v):
            raise ValueError(f"Unsupported operator: {v!r}")
        return v

    def __str__(self) -> str:
        return self.symbol


PostfixToken = Annotated[Union[IntegerLiteral, Operator], Field(discriminator="kind")]

# Tuples keep a converted sequence immutable while it is evaluated and displayed
PostfixSequence = Tuple[PostfixToken, ...]


class EvaluationResult(BaseModel):
    """Outcome of running an infix expression through conversion and evaluation."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Original infix expression")
    postfix: PostfixSequence = Field(..., description="Postfix form of the expression")
    result: float = Field(..., description="Evaluated numeric result of the expression")

    def postfix_text(self) -> str:
        """Return the postfix sequence as space-separated tokens."""
        return " ".join(str(token) for token in self.postfix)

    def result_text(self, precision: int = 3) -> str:
        """Return the result in fixed-point notation."""
        return f"{self.result:.{precision}f}"
