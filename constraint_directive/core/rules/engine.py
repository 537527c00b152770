"""
Constraint engine for validating whole inputs field by field.

The engine builds one constrained type per declared field and validates
each field of an input independently; a failing field never stops its
siblings from being checked.
"""

from typing import Any, Mapping

from constraint_directive.core.models import FieldConstraint, ValidationResult
from constraint_directive.core.validators import ConstraintContext, ConstraintValidationError
from constraint_directive.observability.logger import get_logger
from constraint_directive.observability.metrics import input_validation_duration_seconds

from .codecs import CODECS
from .constraint_config import coerce_spec_for_kind
from .dispatcher import ConstrainedType, ConstraintDispatcher, classify, parse_type_ref

logger = get_logger(__name__)


class ConstraintEngine:
    """
    Validates inputs (mappings of field name to value) against field constraints.
    """

    def __init__(self, fields: list[FieldConstraint], dispatcher: ConstraintDispatcher | None = None):
        """
        Initialize the engine with field constraints.

        Args:
            fields: Field constraints, e.g. from ConstraintConfigLoader
            dispatcher: Dispatcher used to build validators (default: plain dispatcher)

        Raises:
            NotScalarTypeError: If a field's type cannot be constrained
            ConstraintConfigError: If a field's constraints do not fit its type
        """
        self.fields = fields
        self.dispatcher = dispatcher or ConstraintDispatcher()
        self.constrained: dict[str, ConstrainedType] = {}
        self._build_types()

    def _build_types(self) -> None:
        for field in self.fields:
            if not field.enabled:
                continue

            type_ref = parse_type_ref(field.type)
            kind = classify(type_ref)
            spec = coerce_spec_for_kind(field.field_name, field.constraints, kind)
            self.constrained[field.field_name] = self.dispatcher.wrap(
                field.field_name, type_ref, spec, CODECS[type_ref.name]
            )

    def validate_input(self, payload: Mapping[str, Any], record_id: str | None = None) -> ValidationResult:
        """
        Validate every constrained field of one input.

        Absent or null nullable fields are skipped. Null non-null fields fail.

        Args:
            payload: Field values keyed by field name
            record_id: Optional identifier carried into the result

        Returns:
            ValidationResult with per-field outcome
        """
        passed_fields = []
        failed_fields = []
        errors = []

        with input_validation_duration_seconds.time():
            for field_name, constrained in self.constrained.items():
                value = payload.get(field_name)

                if value is None:
                    if constrained.non_null:
                        error = ConstraintValidationError(
                            constrained.kind.category,
                            field_name,
                            "Must not be null",
                            (ConstraintContext("type", str(constrained.type_ref)),),
                        )
                        failed_fields.append(field_name)
                        errors.append(error.to_dict())
                    continue

                try:
                    constrained.parse_value(value)
                    passed_fields.append(field_name)
                except ConstraintValidationError as e:
                    failed_fields.append(field_name)
                    errors.append(e.to_dict())
                except (TypeError, ValueError) as e:
                    # Raised by the codec: the value is not of the declared type
                    failed_fields.append(field_name)
                    errors.append(
                        ConstraintValidationError(
                            constrained.kind.category,
                            field_name,
                            str(e),
                            (ConstraintContext("type", str(constrained.type_ref)),),
                        ).to_dict()
                    )

        if failed_fields:
            logger.info(
                f"Input {record_id or '<anonymous>'} failed constraints on {', '.join(failed_fields)}"
            )

        return ValidationResult(
            record_id=record_id,
            passed=not failed_fields,
            passed_fields=passed_fields,
            failed_fields=failed_fields,
            errors=errors,
        )

    def validate_batch(self, payloads: list[Mapping[str, Any]]) -> list[ValidationResult]:
        """
        Validate a batch of inputs.

        Args:
            payloads: List of inputs

        Returns:
            List of ValidationResult objects, one per input (record_id is the index)
        """
        return [self.validate_input(payload, record_id=str(i)) for i, payload in enumerate(payloads)]

    def get_constraint_summary(self) -> dict[str, Any]:
        """
        Get summary of constrained fields.

        Returns:
            Dictionary with field counts by kind and declared constraint names
        """
        by_kind: dict[str, int] = {}
        for constrained in self.constrained.values():
            by_kind[constrained.kind.value] = by_kind.get(constrained.kind.value, 0) + 1

        return {
            "total_fields": len(self.constrained),
            "fields_by_kind": by_kind,
            "constraints_by_field": {
                name: sorted(constrained.spec.declared())
                for name, constrained in self.constrained.items()
            },
        }

