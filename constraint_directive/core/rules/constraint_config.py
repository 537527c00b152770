"""
Constraint configuration management.

Loads field constraints from YAML files and provides a builder for
declaring them programmatically.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from constraint_directive.core.models import ConstraintSpec, FieldConstraint, FieldKind


class ConstraintConfigError(ValueError):
    """Raised when declared constraints are malformed."""


def build_field_constraint(
    field_name: str,
    type_notation: str,
    arguments: dict[str, Any] | None = None,
    enabled: bool = True,
) -> FieldConstraint:
    """
    Build a FieldConstraint, turning pydantic errors into ConstraintConfigError.

    Raises:
        ConstraintConfigError: If a constraint argument is invalid
    """
    try:
        spec = ConstraintSpec.from_arguments(arguments)
        return FieldConstraint(field_name=field_name, type=type_notation, constraints=spec, enabled=enabled)
    except ValidationError as e:
        raise ConstraintConfigError(f"Invalid constraints for field '{field_name}': {e}") from e


def coerce_spec_for_kind(field_name: str, spec: ConstraintSpec, kind: FieldKind) -> ConstraintSpec:
    """
    Coerce declared ``exclude`` items to numbers for number lists.

    Schemas declare ``exclude`` as a list of strings whatever the item type.

    Raises:
        ConstraintConfigError: If an item of a number list's exclude set is not numeric
    """
    if spec.exclude is None or not kind.is_list or kind.element_category != "number":
        return spec
    try:
        exclude = tuple(float(item) for item in spec.exclude)
    except ValueError as e:
        raise ConstraintConfigError(f"Invalid exclude item for number list '{field_name}': {e}") from e
    return spec.model_copy(update={"exclude": exclude})


class ConstraintConfigLoader:
    """
    Loads field constraints from YAML configuration files.

    Expected YAML format:
    ```yaml
    fields:
      title:
        type: String!
        constraints:
          minLength: 3
          maxLength: 120

      tags:
        type: "[String]"
        constraints:
          maxSize: 5
          matches:
            - format: alpha
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the constraint config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Constraint configuration file not found: {config_path}")

    def load_fields(self) -> list[FieldConstraint]:
        """
        Load and parse field constraints from the YAML file.

        Returns:
            List of FieldConstraint records suitable for ConstraintEngine

        Raises:
            ConstraintConfigError: If YAML is invalid or missing required keys
        """
        with open(self.config_path) as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConstraintConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not config or "fields" not in config:
            raise ConstraintConfigError("Configuration file must contain 'fields' section")

        fields = config["fields"]
        if not isinstance(fields, dict):
            raise ConstraintConfigError("'fields' must map field names to definitions")

        return [self._parse_field(name, definition) for name, definition in fields.items()]

    def _parse_field(self, field_name: str, definition: Any) -> FieldConstraint:
        if not isinstance(definition, dict):
            raise ConstraintConfigError(f"Definition for field '{field_name}' must be a mapping")
        if "type" not in definition:
            raise ConstraintConfigError(f"Field '{field_name}' is missing 'type'")

        constraints = definition.get("constraints") or {}
        if not isinstance(constraints, dict):
            raise ConstraintConfigError(f"Constraints for field '{field_name}' must be a mapping")

        return build_field_constraint(
            field_name,
            str(definition["type"]),
            constraints,
            enabled=definition.get("enabled", True),
        )


class ConstraintConfigBuilder:
    """
    Programmatically build field constraints (for testing or dynamic schemas).
    """

    def __init__(self):
        """Initialize empty configuration."""
        self.fields: list[FieldConstraint] = []

    def add_string(self, field_name: str, required: bool = False, **constraints: Any) -> "ConstraintConfigBuilder":
        """Add a String field."""
        return self.add(field_name, "String!" if required else "String", **constraints)

    def add_number(
        self,
        field_name: str,
        required: bool = False,
        integer: bool = False,
        **constraints: Any,
    ) -> "ConstraintConfigBuilder":
        """Add an Int or Float field."""
        type_name = "Int" if integer else "Float"
        return self.add(field_name, f"{type_name}!" if required else type_name, **constraints)

    def add_list(
        self,
        field_name: str,
        of: str = "String",
        required: bool = False,
        **constraints: Any,
    ) -> "ConstraintConfigBuilder":
        """Add a list field, e.g. ``add_list("tags", of="String!")``."""
        return self.add(field_name, f"[{of}]!" if required else f"[{of}]", **constraints)

    def add(self, field_name: str, type_notation: str, **constraints: Any) -> "ConstraintConfigBuilder":
        """Add a field with an explicit SDL type."""
        self.fields.append(build_field_constraint(field_name, type_notation, constraints))
        return self

    def build(self) -> list[FieldConstraint]:
        """Build and return the field constraints."""
        return list(self.fields)
