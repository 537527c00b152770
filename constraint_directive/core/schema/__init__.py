"""
graphql-core integration: the ``@constraint`` directive.
"""

from .directive import (
    CONSTRAINT_DIRECTIVE_SDL,
    ConstraintDirective,
    apply_constraint_directive,
    constraint_directive_sdl,
    constraint_directive_type_defs,
    to_graphql_type,
    type_ref_of,
)

__all__ = [
    "CONSTRAINT_DIRECTIVE_SDL",
    "ConstraintDirective",
    "apply_constraint_directive",
    "constraint_directive_sdl",
    "constraint_directive_type_defs",
    "to_graphql_type",
    "type_ref_of",
]
