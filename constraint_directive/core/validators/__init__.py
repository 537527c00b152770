"""
Constraint validator implementations.

Provides validators for string, number and list constraints, plus the error
reporting contract they share.
"""

from .base_validator import BaseValidator, Failure
from .error_reporter import (
    ERROR_CODE,
    CollectingReporter,
    ConstraintContext,
    ConstraintValidationError,
    ErrorReporter,
    raise_validation_error,
)
from .list_validator import ListValidator
from .number_validator import NumberValidator
from .string_validator import StringValidator

__all__ = [
    "BaseValidator",
    "Failure",
    "ERROR_CODE",
    "ConstraintContext",
    "ConstraintValidationError",
    "ErrorReporter",
    "CollectingReporter",
    "raise_validation_error",
    "StringValidator",
    "NumberValidator",
    "ListValidator",
]
