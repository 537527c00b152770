"""
ListValidator - validates a list of values against its declared constraints.

Item-level matching is delegated to scalar validators, resolved per item by an
injectable resolver, so the list validator itself knows nothing about
strings or numbers.
"""

from typing import Any, Callable, Iterator, Mapping, Sequence

from constraint_directive.core.formats import PredicateLibrary
from constraint_directive.core.models import ConstraintSpec, ValidationOptions

from .base_validator import BaseValidator, Failure, failure
from .error_reporter import ConstraintValidationError, ErrorReporter
from .number_validator import NumberValidator
from .string_validator import StringValidator


# Builds the validator for one item from one nested spec
ElementValidatorFactory = Callable[[ConstraintSpec], BaseValidator]
ElementResolver = Callable[[Any], ElementValidatorFactory | None]


class ListValidator(BaseValidator):
    """
    Validates a list against its list constraints.

    Checks (in order):
    - size range: len(values) within [minSize, maxSize] (defaults 0 and 99999)
    - exclude: no item may appear in the exclude set
    - matches: every non-null item must satisfy at least one nested spec

    Nested specs are tried with the factory returned by ``element_resolver``
    for the item. Trials use the default raising reporter, so the configured
    reporter only ever hears about the list-level failure.
    """

    def __init__(
        self,
        field_name: str,
        spec: ConstraintSpec,
        predicates: PredicateLibrary | None = None,
        reporter: ErrorReporter | None = None,
        options: ValidationOptions | Mapping[str, Any] | None = None,
        element_resolver: ElementResolver | None = None,
    ):
        super().__init__(field_name, spec, predicates, reporter, options)
        self.element_resolver = element_resolver or self.resolve_element_validator

    def resolve_element_validator(self, item: Any) -> ElementValidatorFactory | None:
        """Pick a scalar validator from the item's runtime type."""
        if isinstance(item, bool):
            return None
        if isinstance(item, str):
            validator_class = StringValidator
        elif isinstance(item, int | float):
            validator_class = NumberValidator
        else:
            return None
        return lambda nested: validator_class(
            self.field_name, nested, predicates=self.predicates, options=self.options
        )

    def evaluate(self, values: Sequence[Any]) -> Iterator[Failure]:
        spec = self.spec

        min_size, max_size = spec.size_bounds
        if len(values) < min_size:
            yield failure(f"Must contain at least {min_size} items", "minSize", min_size)
        elif len(values) > max_size:
            yield failure(f"Must contain no more than {max_size} items", "maxSize", max_size)

        if spec.exclude is not None:
            excluded = next((item for item in values if item in spec.exclude), None)
            if excluded is not None:
                yield failure(f"Must not contain {excluded}", "exclude", spec.exclude)

        if spec.matches:
            unmatched = next(
                (item for item in values if item is not None and not self._matches_any(item)),
                None,
            )
            if unmatched is not None:
                yield failure(
                    "Must only contain items matching the declared constraints",
                    "matches",
                    tuple(nested.declared() for nested in spec.matches),
                )

    def _matches_any(self, item: Any) -> bool:
        factory = self.element_resolver(item)
        if factory is None:
            return False
        for nested in self.spec.matches:
            try:
                factory(nested).validate(item)
            except ConstraintValidationError:
                continue
            return True
        return False

    @property
    def kind(self) -> str:
        return "list"


def validate(field_name: str, spec: ConstraintSpec, values: Sequence[Any], **kwargs) -> bool:
    """Validate one list; see ListValidator for keyword arguments."""
    return ListValidator(field_name, spec, **kwargs).validate(values)
