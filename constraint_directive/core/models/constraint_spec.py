"""
ConstraintSpec model representing the constraints declared on one field.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_MIN_SIZE = 0
DEFAULT_MAX_SIZE = 99999


def parse_moment(value: str) -> datetime:
    """
    Parse an ISO 8601 date or date-time into an aware datetime.

    Dates mean midnight and naive times are taken as UTC.

    Raises:
        ValueError: If the value is neither form
    """
    try:
        moment = datetime.combine(date.fromisoformat(value), time())
    except ValueError:
        moment = datetime.fromisoformat(value)
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


class ConstraintSpec(BaseModel):
    """
    The full set of constraints declared for a single field.

    Specs are frozen at schema build time and shared read-only by every
    validation of the field. Constraint names use their declared (camelCase)
    form; snake_case attribute names are accepted as well. Unknown names are
    ignored so older servers accept newer declarations.

    A rule is active when its argument is present, so ``minLength: 0`` is a
    real (trivially satisfied) rule rather than an unset one.

    Attributes:
        min_length / max_length: String length bounds (code points)
        starts_with / ends_with: Required prefix / suffix
        contains / not_contains: Required / forbidden substring
        pattern: Regular expression the value must match (unanchored)
        after_date: ISO 8601 date or date-time the value must come after
        format: Named string format (email, uuid, ...)
        locale: Locale handed to locale-aware formats
        positive / negative: Sign constraints
        min / max: Inclusive numeric bounds
        exclusive_min / exclusive_max: Exclusive numeric bounds
        multiple_of: Required divisor
        min_size / max_size: List size bounds
        exclude: Disallowed list items
        matches: Nested specs; every list item must satisfy one of them
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={"example": {"minLength": 3, "maxLength": 64, "format": "email"}},
    )

    # Strings
    min_length: int | None = Field(None, alias="minLength", ge=0)
    max_length: int | None = Field(None, alias="maxLength", ge=0)
    starts_with: str | None = Field(None, alias="startsWith")
    ends_with: str | None = Field(None, alias="endsWith")
    contains: str | None = None
    not_contains: str | None = Field(None, alias="notContains")
    pattern: str | None = None
    after_date: str | None = Field(None, alias="afterDate")
    format: str | None = None
    locale: str | None = None

    # Numbers
    positive: bool | None = None
    negative: bool | None = None
    min: float | None = None
    max: float | None = None
    exclusive_min: float | None = Field(None, alias="exclusiveMin")
    exclusive_max: float | None = Field(None, alias="exclusiveMax")
    multiple_of: float | None = Field(None, alias="multipleOf", gt=0)

    # Lists
    min_size: int | None = Field(None, alias="minSize", ge=0)
    max_size: int | None = Field(None, alias="maxSize", ge=0)
    exclude: tuple[str | int | float, ...] | None = None
    matches: tuple["ConstraintSpec", ...] | None = None

    @field_validator("pattern")
    @classmethod
    def check_pattern_compiles(cls, v):
        """Reject patterns that are not valid regular expressions."""
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern {v!r}: {e}")
        return v

    @field_validator("after_date", mode="before")
    @classmethod
    def check_after_date_parses(cls, v):
        """Accept ISO 8601 strings, and dates as YAML loads them."""
        if isinstance(v, date):
            v = v.isoformat()
        if isinstance(v, str):
            try:
                parse_moment(v)
            except ValueError:
                raise ValueError(f"Invalid afterDate {v!r}: expected an ISO 8601 date or date-time")
        return v

    @classmethod
    def from_arguments(cls, arguments: dict[str, Any] | None) -> "ConstraintSpec":
        """
        Build a spec from directive or config arguments.

        Arguments explicitly set to None are treated as absent.

        Raises:
            pydantic.ValidationError: If an argument has an invalid value
        """
        arguments = {k: v for k, v in (arguments or {}).items() if v is not None}
        return cls.model_validate(arguments)

    @property
    def size_bounds(self) -> tuple[int, int]:
        """Effective (min, max) list size."""
        min_size = DEFAULT_MIN_SIZE if self.min_size is None else self.min_size
        max_size = DEFAULT_MAX_SIZE if self.max_size is None else self.max_size
        return min_size, max_size

    def declared(self) -> dict[str, Any]:
        """Declared constraints keyed by their camelCase names."""
        return self.model_dump(by_alias=True, exclude_none=True)
