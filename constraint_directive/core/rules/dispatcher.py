"""
Constraint dispatcher.

Classifies a declared field type into a FieldKind, selects the validator for
it and builds a ConstrainedType whose ingestion path is
decode -> validate -> return, and whose output path is encode.
"""

import re
from dataclasses import dataclass
from typing import Any, Mapping

from constraint_directive.core.formats import PredicateLibrary
from constraint_directive.core.models import ConstraintSpec, FieldKind, TypeRef, ValidationOptions
from constraint_directive.core.validators import (
    BaseValidator,
    ConstraintValidationError,
    ErrorReporter,
    ListValidator,
    NumberValidator,
    StringValidator,
)
from constraint_directive.observability.logger import get_logger
from constraint_directive.observability.metrics import record_validation

from .codecs import ScalarCodec

logger = get_logger(__name__)


STRING_TYPES = frozenset({"String"})
NUMBER_TYPES = frozenset({"Int", "Float"})

TYPE_NOTATION = re.compile(
    r"^\s*(?P<open>\[)?\s*(?P<name>[_A-Za-z][_0-9A-Za-z]*)\s*(?P<element_bang>!)?"
    r"\s*(?P<close>\])?\s*(?P<bang>!)?\s*$"
)


class NotScalarTypeError(TypeError):
    """Raised at build time when a constrained field is not a supported scalar or list."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Not a scalar type: {type_name}")


def parse_type_ref(notation: str) -> TypeRef:
    """
    Parse SDL type notation ("String!", "[Int!]", ...) into a TypeRef.

    Raises:
        NotScalarTypeError: If the notation is not a named type or a list of one
    """
    match = TYPE_NOTATION.match(notation)
    if not match or bool(match["open"]) != bool(match["close"]):
        raise NotScalarTypeError(notation)

    is_list = bool(match["open"])
    if not is_list and match["element_bang"] and match["bang"]:
        raise NotScalarTypeError(notation)

    if is_list:
        return TypeRef(match["name"], bool(match["bang"]), True, bool(match["element_bang"]))
    return TypeRef(match["name"], bool(match["element_bang"] or match["bang"]))


def classify(type_ref: TypeRef) -> FieldKind:
    """
    Map a declared type onto exactly one FieldKind.

    Raises:
        NotScalarTypeError: If the base type is neither String, Int nor Float
    """
    if type_ref.name in STRING_TYPES:
        element_category = "string"
    elif type_ref.name in NUMBER_TYPES:
        element_category = "number"
    else:
        raise NotScalarTypeError(str(type_ref))
    return FieldKind.of(element_category, type_ref.is_list, type_ref.non_null)


@dataclass(frozen=True)
class ConstrainedType:
    """
    A scalar or list type guarded by constraints.

    ``non_null`` tells the host to wrap its own non-null marker around this
    type, so a null still fails at the wire layer before any constraint runs.
    For list kinds ``codec`` is the element codec.
    """

    name: str
    field_name: str
    kind: FieldKind
    type_ref: TypeRef
    spec: ConstraintSpec
    codec: ScalarCodec
    validator: BaseValidator

    @property
    def non_null(self) -> bool:
        return self.kind.non_null

    def serialize(self, value: Any) -> Any:
        if self.kind.is_list:
            return [None if item is None else self.codec.serialize(item) for item in value]
        return self.codec.serialize(value)

    def parse_value(self, value: Any) -> Any:
        if value is None:
            return None
        if self.kind.is_list:
            items = value if isinstance(value, list | tuple) else [value]
            decoded = [self._decode_item(item) for item in items]
        else:
            decoded = self.codec.parse_value(value)
        return self.check(decoded)

    def parse_literal(self, value_node: Any, variables: dict[str, Any] | None = None) -> Any:
        if self.kind.is_list:
            # List literals expose their item nodes as ``values``
            item_nodes = getattr(value_node, "values", None)
            item_nodes = [value_node] if item_nodes is None else item_nodes
            decoded = [self._decode_item_node(node, variables) for node in item_nodes]
        else:
            decoded = self.codec.parse_literal(value_node, variables)
        return self.check(decoded)

    def check(self, decoded: Any) -> Any:
        """Run the validator on an already decoded value and return it."""
        try:
            self.validator.validate(decoded)
        except ConstraintValidationError as e:
            record_validation(self.kind.category, e)
            raise
        record_validation(self.kind.category)
        return decoded

    def _decode_item(self, item: Any) -> Any:
        if item is None and not self.type_ref.element_non_null:
            return None
        return self.codec.parse_value(item)

    def _decode_item_node(self, node: Any, variables: dict[str, Any] | None) -> Any:
        """Decode one list literal item exactly as the same item sent in a variable."""
        node_kind = getattr(node, "kind", None)
        if node_kind == "null_value":
            return self._decode_item(None)
        if node_kind == "variable":
            return self._decode_item((variables or {}).get(node.name.value))
        return self.codec.parse_literal(node, variables)


class ConstraintDispatcher:
    """
    Selects and builds the validator for a field from its declared kind.

    The predicate library, reporter and options are injected once and shared
    by every validator the dispatcher builds.
    """

    VALIDATOR_REGISTRY = {
        "string": StringValidator,
        "number": NumberValidator,
        "list": ListValidator,
    }

    TYPE_NAMES = {
        "string": "ConstraintString",
        "number": "ConstraintNumber",
        "list": "ConstraintList",
    }

    def __init__(
        self,
        predicates: PredicateLibrary | None = None,
        reporter: ErrorReporter | None = None,
        options: ValidationOptions | Mapping[str, Any] | None = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            predicates: Predicate library for format checks
            reporter: Error reporter handed to every validator
            options: Caller predicate options, merged over the defaults per call
        """
        self.predicates = predicates
        self.reporter = reporter
        self.options = options

    def select_validator(self, field_name: str, kind: FieldKind, spec: ConstraintSpec) -> BaseValidator:
        validator_class = self.VALIDATOR_REGISTRY[kind.category]
        return validator_class(
            field_name,
            spec,
            predicates=self.predicates,
            reporter=self.reporter,
            options=self.options,
        )

    def wrap(
        self,
        field_name: str,
        type_ref: TypeRef,
        spec: ConstraintSpec,
        codec: ScalarCodec,
    ) -> ConstrainedType:
        """
        Build the constrained type for one field.

        Args:
            field_name: Name of the field
            type_ref: Declared type of the field
            spec: Declared constraints
            codec: Codec of the base scalar (element scalar for lists)

        Raises:
            NotScalarTypeError: If the declared type cannot be constrained
        """
        kind = classify(type_ref)
        constrained = ConstrainedType(
            name=self.TYPE_NAMES[kind.category],
            field_name=field_name,
            kind=kind,
            type_ref=type_ref,
            spec=spec,
            codec=codec,
            validator=self.select_validator(field_name, kind, spec),
        )
        logger.debug(f"Constrained {field_name}: {type_ref} as {kind.value}")
        return constrained

    def validate(self, field_name: str, kind: FieldKind, spec: ConstraintSpec, value: Any) -> bool:
        """Validate an already decoded value for a field of the given kind."""
        return self.select_validator(field_name, kind, spec).validate(value)

