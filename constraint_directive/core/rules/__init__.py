"""
Constraint dispatch, configuration management and the field-set engine.
"""

from .codecs import CODECS, FloatCodec, IntCodec, ScalarCodec, StringCodec
from .constraint_config import (
    ConstraintConfigBuilder,
    ConstraintConfigError,
    ConstraintConfigLoader,
    build_field_constraint,
    coerce_spec_for_kind,
)
from .dispatcher import (
    ConstrainedType,
    ConstraintDispatcher,
    NotScalarTypeError,
    classify,
    parse_type_ref,
)
from .engine import ConstraintEngine

__all__ = [
    "CODECS",
    "ScalarCodec",
    "StringCodec",
    "IntCodec",
    "FloatCodec",
    "ConstraintConfigBuilder",
    "ConstraintConfigError",
    "ConstraintConfigLoader",
    "build_field_constraint",
    "coerce_spec_for_kind",
    "ConstrainedType",
    "ConstraintDispatcher",
    "NotScalarTypeError",
    "classify",
    "parse_type_ref",
    "ConstraintEngine",
]
