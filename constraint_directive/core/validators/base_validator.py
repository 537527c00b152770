"""
Base validator interface for constraint validators.

All validators inherit from BaseValidator and implement ``evaluate()``, which
yields one Failure per broken constraint in the validator's fixed check order.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator, Mapping, NamedTuple

from constraint_directive.core.models import ConstraintSpec, ValidationOptions
from constraint_directive.observability.logger import get_logger

from .error_reporter import (
    ConstraintContext,
    ConstraintValidationError,
    ErrorReporter,
    raise_validation_error,
)

logger = get_logger(__name__)


class Failure(NamedTuple):
    """A single broken constraint."""

    message: str
    context: tuple[ConstraintContext, ...]


def failure(message: str, arg: str, value: Any) -> Failure:
    """Build a Failure attributed to one constraint argument."""
    return Failure(message, (ConstraintContext(arg, value),))


class BaseValidator(ABC):
    """
    Abstract base class for all constraint validators.

    A validator is built once per field from an immutable ConstraintSpec and
    holds no per-value state, so a single instance may validate any number
    of values concurrently.
    """

    def __init__(
        self,
        field_name: str,
        spec: ConstraintSpec,
        predicates: Any = None,
        reporter: ErrorReporter | None = None,
        options: ValidationOptions | Mapping[str, Any] | None = None,
    ):
        """
        Initialize validator.

        Args:
            field_name: Name of the field being validated
            spec: Declared constraints for the field
            predicates: Predicate library used by format checks
            reporter: Error reporter (defaults to raising immediately)
            options: Caller supplied predicate options
        """
        self.field_name = field_name
        self.spec = spec
        self.predicates = predicates
        self.reporter = reporter or raise_validation_error
        self.options = options

    @abstractmethod
    def evaluate(self, value: Any) -> Iterator[Failure]:
        """
        Yield a Failure for each broken constraint, in check order.

        Args:
            value: The decoded value to check
        """

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the validator kind ("string", "number" or "list")."""

    def validate(self, value: Any) -> bool:
        """
        Validate a value against the declared constraints.

        Each failure is handed to the reporter as soon as it is found. If the
        reporter returns instead of raising, the remaining checks still run
        and the first failure is raised at the end.

        Args:
            value: The decoded value to check

        Returns:
            True when every constraint holds

        Raises:
            ConstraintValidationError: If any constraint fails
        """
        first: Failure | None = None
        for found in self.evaluate(value):
            logger.debug(
                f"Constraint failed for {self.field_name}: {found.message}",
                extra={"field_name": self.field_name, "kind": self.kind},
            )
            self.reporter(self.kind, self.field_name, found.message, found.context)
            if first is None:
                first = found

        if first is not None:
            raise ConstraintValidationError(self.kind, self.field_name, first.message, first.context)
        return True

    def is_valid(self, value: Any) -> bool:
        """Check a value without reporting; True when every constraint holds."""
        return next(iter(self.evaluate(value)), None) is None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, spec={self.spec!r})"
