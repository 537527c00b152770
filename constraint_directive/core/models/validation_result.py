"""
ValidationResult model representing the outcome of validating an input (ephemeral).
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of validating every constrained field of one input.

    Note: ValidationResult is ephemeral, it only exists to be reported.

    Attributes:
        record_id: Optional identifier of the validated input
        passed: Overall validation status
        passed_fields: Fields whose value satisfied every constraint
        failed_fields: Fields with a failing constraint
        errors: Machine readable error for each failed field
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "record_id": "book-42",
                "passed": False,
                "passed_fields": ["title"],
                "failed_fields": ["isbn"],
                "errors": [
                    {
                        "message": "Must be in ISBN format",
                        "code": "ERR_CONSTRAINT_VALIDATION",
                        "fieldName": "isbn",
                        "context": [{"arg": "format", "value": "isbn"}],
                    }
                ],
            }
        }
    )

    record_id: str | None = None
    passed: bool
    passed_fields: List[str] = Field(default_factory=list)
    failed_fields: List[str] = Field(default_factory=list)
    errors: List[dict[str, Any]] = Field(default_factory=list)

    @field_validator('failed_fields')
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies failed_fields is empty."""
        if info.data.get('passed') and len(v) > 0:
            raise ValueError("passed=True but failed_fields is not empty")
        return v
