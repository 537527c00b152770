"""
NumberValidator - validates a numeric value against its declared constraints.
"""

import math
from typing import Iterator

from constraint_directive.core.models import ConstraintSpec

from .base_validator import BaseValidator, Failure, failure


# Absolute tolerance for multipleOf on floats (0.3 is a multiple of 0.1)
MULTIPLE_OF_TOLERANCE = 1e-9


def format_number(value: float) -> str:
    """Render a declared bound without a spurious ".0" (3.0 -> "3")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_multiple(value: float, divisor: float) -> bool:
    remainder = math.fmod(value, divisor)
    return (
        math.isclose(remainder, 0.0, abs_tol=MULTIPLE_OF_TOLERANCE)
        or math.isclose(abs(remainder), abs(divisor), abs_tol=MULTIPLE_OF_TOLERANCE)
    )


class NumberValidator(BaseValidator):
    """
    Validates an int or float against its numeric constraints.

    Checks (in order):
    - positive: value must be > 0
    - negative: value must be < 0
    - min / max: inclusive bounds
    - exclusiveMin / exclusiveMax: exclusive bounds
    - multipleOf: value must be a multiple of the divisor
    """

    def evaluate(self, value: float) -> Iterator[Failure]:
        spec = self.spec

        if spec.positive and value <= 0:
            yield failure("Must be a positive number", "positive", spec.positive)

        if spec.negative and value >= 0:
            yield failure("Must be a negative number", "negative", spec.negative)

        if spec.min is not None and value < spec.min:
            yield failure(f"Must be at least {format_number(spec.min)}", "min", spec.min)

        if spec.max is not None and value > spec.max:
            yield failure(f"Must be no greater than {format_number(spec.max)}", "max", spec.max)

        if spec.exclusive_min is not None and value <= spec.exclusive_min:
            yield failure(
                f"Must be greater than {format_number(spec.exclusive_min)}",
                "exclusiveMin", spec.exclusive_min,
            )

        if spec.exclusive_max is not None and value >= spec.exclusive_max:
            yield failure(
                f"Must be less than {format_number(spec.exclusive_max)}",
                "exclusiveMax", spec.exclusive_max,
            )

        if spec.multiple_of is not None and not is_multiple(value, spec.multiple_of):
            yield failure(
                f"Must be a multiple of {format_number(spec.multiple_of)}",
                "multipleOf", spec.multiple_of,
            )

    @property
    def kind(self) -> str:
        return "number"


def validate(field_name: str, spec: ConstraintSpec, value: float, **kwargs) -> bool:
    """Validate one number; see NumberValidator for keyword arguments."""
    return NumberValidator(field_name, spec, **kwargs).validate(value)
