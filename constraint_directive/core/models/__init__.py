"""
Core data models for constraint validation.

All models use Pydantic for runtime validation and immutability.
"""

from .constraint_spec import ConstraintSpec, parse_moment
from .field_constraint import FieldConstraint
from .field_kind import FieldKind, TypeRef
from .validation_options import (
    CurrencyOptions,
    DomainNameOptions,
    EmailOptions,
    ValidationOptions,
)
from .validation_result import ValidationResult

__all__ = [
    "ConstraintSpec",
    "parse_moment",
    "FieldConstraint",
    "FieldKind",
    "TypeRef",
    "ValidationOptions",
    "EmailOptions",
    "DomainNameOptions",
    "CurrencyOptions",
    "ValidationResult",
]
