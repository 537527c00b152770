"""
Error reporting for constraint validation.

A reporter receives every failed constraint as
``(kind, field_name, message, context)``. The default reporter raises
``ConstraintValidationError`` immediately, which ends the validation pass.
"""

from typing import Any, NamedTuple, Protocol, Sequence


ERROR_CODE = "ERR_CONSTRAINT_VALIDATION"


class ConstraintContext(NamedTuple):
    """The constraint argument (and its declared value) behind a failure."""

    arg: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {"arg": self.arg, "value": value}


class ConstraintValidationError(Exception):
    """
    Raised when a value fails one of its declared constraints.

    Attributes:
        kind: Validator kind that produced the failure ("string", "number", "list")
        field_name: Name of the constrained field
        message: Human readable rule message
        context: Constraint arguments that contributed to the failure
        code: Fixed machine readable error code
    """

    code = ERROR_CODE

    def __init__(
        self,
        kind: str,
        field_name: str,
        message: str,
        context: Sequence[ConstraintContext] = (),
    ):
        self.kind = kind
        self.field_name = field_name
        self.message = message
        self.context = tuple(context)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Machine readable form, as surfaced to API clients."""
        return {
            "message": self.message,
            "code": self.code,
            "fieldName": self.field_name,
            "context": [item.to_dict() for item in self.context],
        }


class ErrorReporter(Protocol):
    """Callable sink for failed constraints."""

    def __call__(
        self,
        kind: str,
        field_name: str,
        message: str,
        context: Sequence[ConstraintContext],
    ) -> None:
        ...


def raise_validation_error(
    kind: str,
    field_name: str,
    message: str,
    context: Sequence[ConstraintContext],
) -> None:
    """Default reporter: raise on the first failure."""
    raise ConstraintValidationError(kind, field_name, message, context)


class CollectingReporter:
    """
    Reporter that records failures instead of raising.

    Validators still raise once their checks are exhausted, so a pass never
    succeeds with recorded failures. Useful for tooling that wants every
    failing rule of a value rather than the first one.
    """

    def __init__(self):
        self.errors: list[ConstraintValidationError] = []

    def __call__(
        self,
        kind: str,
        field_name: str,
        message: str,
        context: Sequence[ConstraintContext],
    ) -> None:
        self.errors.append(ConstraintValidationError(kind, field_name, message, context))

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    def clear(self) -> None:
        self.errors.clear()
