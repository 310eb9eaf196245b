"""Capacity settings for the conversion and evaluation stacks."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CalculatorSettings(BaseModel):
    """
    Limits applied to one conversion or evaluation pass.

    ``None`` means unbounded.
    """

    model_config = ConfigDict(frozen=True)

    stack_capacity: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of elements on the operator or operand stack"
    )
    max_tokens: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of tokens in a postfix sequence"
    )


DEFAULT_SETTINGS = CalculatorSettings()

# Limits of the fixed-size buffers the calculator historically used
REFERENCE_SETTINGS = CalculatorSettings(stack_capacity=50, max_tokens=80)
