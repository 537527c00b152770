"""
The ``@constraint`` schema directive for graphql-core schemas.

``apply_constraint_directive`` walks every input object field carrying the
directive and replaces its type with a constrained scalar, so literal and
variable input is validated before any resolver runs.
"""

from typing import Any, Mapping

from graphql import (
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLNonNull,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLType,
    is_list_type,
    is_non_null_type,
    is_scalar_type,
)
from graphql.execution.values import get_directive_values
from pydantic import ValidationError

from constraint_directive.core.formats import PredicateLibrary
from constraint_directive.core.models import ConstraintSpec, TypeRef, ValidationOptions
from constraint_directive.core.rules import (
    ConstrainedType,
    ConstraintConfigError,
    ConstraintDispatcher,
    NotScalarTypeError,
    classify,
    coerce_spec_for_kind,
)
from constraint_directive.core.validators import ErrorReporter
from constraint_directive.observability.logger import get_logger

logger = get_logger(__name__)


MATCH_ARGUMENTS = """
  minLength: Int
  maxLength: Int
  startsWith: String
  endsWith: String
  contains: String
  notContains: String
  pattern: String
  afterDate: String
  format: String
  locale: String
  positive: Boolean
  negative: Boolean
  min: Float
  max: Float
  exclusiveMin: Float
  exclusiveMax: Float
  multipleOf: Float"""


def constraint_directive_sdl(directive_name: str = "constraint") -> str:
    """
    SDL declaring the constraint directive and its ``ConstraintMatch`` input.

    ``exclude`` is declared as ``[String]``; items are converted to numbers
    for number lists.
    """
    return (
        f"directive @{directive_name}({MATCH_ARGUMENTS}\n"
        "  minSize: Int\n"
        "  maxSize: Int\n"
        "  exclude: [String]\n"
        "  matches: [ConstraintMatch]\n"
        ") on INPUT_FIELD_DEFINITION\n\n"
        f"input ConstraintMatch {{{MATCH_ARGUMENTS}\n}}\n"
    )


CONSTRAINT_DIRECTIVE_SDL = constraint_directive_sdl()


def constraint_directive_type_defs(type_defs: str, directive_name: str = "constraint") -> str:
    """Prepend the directive declaration to a schema's type definitions."""
    return constraint_directive_sdl(directive_name) + "\n" + type_defs


def type_ref_of(type_: GraphQLType) -> TypeRef:
    """
    Describe a graphql-core input type as a TypeRef.

    Raises:
        NotScalarTypeError: If the type is not a scalar or a list of scalars
    """
    non_null = is_non_null_type(type_)
    inner = type_.of_type if non_null else type_

    if is_list_type(inner):
        element = inner.of_type
        element_non_null = is_non_null_type(element)
        base = element.of_type if element_non_null else element
        if not is_scalar_type(base):
            raise NotScalarTypeError(str(type_))
        return TypeRef(base.name, non_null, True, element_non_null)

    if not is_scalar_type(inner):
        raise NotScalarTypeError(str(type_))
    return TypeRef(inner.name, non_null)


def to_graphql_type(constrained: ConstrainedType, owner: str | None = None) -> GraphQLType:
    """
    Expose a ConstrainedType as a graphql-core scalar (non-null wrapped when declared so).

    Every wrapped field shares its category name (``ConstraintString``, ...),
    so the description names the field it guards, qualified by ``owner``
    when given, and the rules declared on it.
    """
    field = f"{owner}.{constrained.field_name}" if owner else constrained.field_name
    scalar = GraphQLScalarType(
        name=constrained.name,
        description=(
            f"{constrained.type_ref} {field} constrained by {sorted(constrained.spec.declared())}"
        ),
        serialize=constrained.serialize,
        parse_value=constrained.parse_value,
        parse_literal=constrained.parse_literal,
    )
    return GraphQLNonNull(scalar) if constrained.non_null else scalar


class ConstraintDirective:
    """
    Applies ``@constraint`` declarations of a built schema.

    The predicate library, reporter and options are shared by every field
    the directive wraps.
    """

    def __init__(
        self,
        directive_name: str = "constraint",
        predicates: PredicateLibrary | None = None,
        reporter: ErrorReporter | None = None,
        options: ValidationOptions | Mapping[str, Any] | None = None,
    ):
        self.directive_name = directive_name
        self.dispatcher = ConstraintDispatcher(predicates=predicates, reporter=reporter, options=options)

    def apply(self, schema: GraphQLSchema) -> GraphQLSchema:
        """
        Wrap every constrained input field of the schema in place.

        Raises:
            ValueError: If the schema does not declare the directive
            NotScalarTypeError: If a constrained field is not a scalar or list of scalars
            ConstraintConfigError: If declared constraint values are invalid
        """
        directive = schema.get_directive(self.directive_name)
        if directive is None:
            raise ValueError(f"Directive @{self.directive_name} is not declared in the schema")

        wrapped = 0
        for type_name, type_ in schema.type_map.items():
            if type_name.startswith("__") or not isinstance(type_, GraphQLInputObjectType):
                continue
            for field_name, field in type_.fields.items():
                if field.ast_node is None:
                    continue
                arguments = get_directive_values(directive, field.ast_node)
                if arguments is None:
                    continue
                self.wrap_field(type_name, field_name, field, arguments)
                wrapped += 1

        logger.info(
            f"Applied @{self.directive_name} to {wrapped} input fields",
            extra={"operation": "apply_constraint_directive"},
        )
        return schema

    def wrap_field(
        self,
        type_name: str,
        field_name: str,
        field: GraphQLInputField,
        arguments: dict[str, Any],
    ) -> None:
        type_ref = type_ref_of(field.type)
        kind = classify(type_ref)
        try:
            spec = ConstraintSpec.from_arguments(arguments)
        except ValidationError as e:
            raise ConstraintConfigError(f"Invalid constraints on {type_name}.{field_name}: {e}") from e
        spec = coerce_spec_for_kind(field_name, spec, kind)

        codec = field.type
        while not is_scalar_type(codec):
            codec = codec.of_type

        constrained = self.dispatcher.wrap(field_name, type_ref, spec, codec)
        field.type = to_graphql_type(constrained, owner=type_name)
        logger.debug(
            f"Wrapped {type_name}.{field_name} as {constrained.name}",
            extra={"type_name": type_name, "field_name": field_name, "kind": kind.value},
        )


def apply_constraint_directive(
    schema: GraphQLSchema,
    directive_name: str = "constraint",
    predicates: PredicateLibrary | None = None,
    reporter: ErrorReporter | None = None,
    options: ValidationOptions | Mapping[str, Any] | None = None,
) -> GraphQLSchema:
    """Apply the constraint directive to a built schema (see ConstraintDirective)."""
    directive = ConstraintDirective(directive_name, predicates=predicates, reporter=reporter, options=options)
    return directive.apply(schema)
