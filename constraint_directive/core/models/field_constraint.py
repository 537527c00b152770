"""
FieldConstraint model binding a declared type and constraints to a field name.
"""

from pydantic import BaseModel, ConfigDict, Field

from .constraint_spec import ConstraintSpec


class FieldConstraint(BaseModel):
    """
    Constraints declared for one named input field.

    Attributes:
        field_name: Which field the constraints apply to
        type: Declared type in SDL notation ("String!", "[Int]", ...)
        constraints: The declared ConstraintSpec
        enabled: Whether the field is validated at all
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "field_name": "title",
                "type": "String!",
                "constraints": {"minLength": 3, "maxLength": 120},
                "enabled": True,
            }
        },
    )

    field_name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    constraints: ConstraintSpec = Field(default_factory=ConstraintSpec)
    enabled: bool = True
