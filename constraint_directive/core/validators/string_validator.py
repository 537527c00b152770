"""
StringValidator - validates a string value against its declared constraints.
"""

import re
from typing import Any, Iterator, Mapping

from constraint_directive.core.formats import DEFAULT_PREDICATES, FORMATS, PredicateLibrary
from constraint_directive.core.models import ConstraintSpec, ValidationOptions, parse_moment
from constraint_directive.observability.logger import get_logger

from .base_validator import BaseValidator, Failure, failure
from .error_reporter import ErrorReporter

logger = get_logger(__name__)


class StringValidator(BaseValidator):
    """
    Validates a string against its string constraints.

    Checks run in this order: minLength, maxLength, startsWith, endsWith,
    contains, notContains, pattern, afterDate, format. Lengths count code points.
    Prefix, suffix and substring checks are exact and case sensitive.
    """

    def __init__(
        self,
        field_name: str,
        spec: ConstraintSpec,
        predicates: PredicateLibrary | None = None,
        reporter: ErrorReporter | None = None,
        options: ValidationOptions | Mapping[str, Any] | None = None,
    ):
        super().__init__(field_name, spec, predicates or DEFAULT_PREDICATES, reporter, options)

    def evaluate(self, value: str) -> Iterator[Failure]:
        spec = self.spec

        if spec.min_length is not None and len(value) < spec.min_length:
            yield failure(
                f"Must be at least {spec.min_length} characters in length",
                "minLength", spec.min_length,
            )

        if spec.max_length is not None and len(value) > spec.max_length:
            yield failure(
                f"Must be no more than {spec.max_length} characters in length",
                "maxLength", spec.max_length,
            )

        if spec.starts_with is not None and not value.startswith(spec.starts_with):
            yield failure(f"Must start with {spec.starts_with}", "startsWith", spec.starts_with)

        if spec.ends_with is not None and not value.endswith(spec.ends_with):
            yield failure(f"Must end with {spec.ends_with}", "endsWith", spec.ends_with)

        if spec.contains is not None and spec.contains not in value:
            yield failure(f"Must contain {spec.contains}", "contains", spec.contains)

        if spec.not_contains is not None and spec.not_contains in value:
            yield failure(f"Must not contain {spec.not_contains}", "notContains", spec.not_contains)

        if spec.pattern is not None and not re.search(spec.pattern, value):
            yield failure(f"Must match {spec.pattern}", "pattern", spec.pattern)

        if spec.after_date is not None and not self._is_after(value, spec.after_date):
            yield failure(f"Must be after date {spec.after_date}", "afterDate", spec.after_date)

        if spec.format is not None:
            format_failure = self._check_format(value)
            if format_failure:
                yield format_failure

    @staticmethod
    def _is_after(value: str, after_date: str) -> bool:
        try:
            return parse_moment(value) > parse_moment(after_date)
        except ValueError:
            return False

    def _check_format(self, value: str) -> Failure | None:
        name = self.spec.format
        definition = FORMATS.get(name)
        if definition is None:
            return failure(f"Invalid format type {name}", "format", name)

        options = ValidationOptions.merged(self.spec.locale, self.options)
        try:
            valid = definition.check(self.predicates, value, options)
        except Exception as e:
            # Predicates raise on input they cannot handle (unknown locale, ...)
            logger.debug(f"Format predicate '{name}' raised for {self.field_name}: {e}")
            valid = False

        if not valid:
            return failure(definition.message, "format", name)
        return None

    @property
    def kind(self) -> str:
        return "string"


def validate(field_name: str, spec: ConstraintSpec, value: str, **kwargs) -> bool:
    """Validate one string; see StringValidator for keyword arguments."""
    return StringValidator(field_name, spec, **kwargs).validate(value)
