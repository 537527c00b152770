"""
Unit tests for constraint configuration and the field-set engine.
"""

import pytest

from constraint_directive.core.rules import (
    ConstraintConfigBuilder,
    ConstraintConfigError,
    ConstraintConfigLoader,
    ConstraintEngine,
    NotScalarTypeError,
)


@pytest.mark.unit
class TestConstraintConfigLoader:
    """Tests for YAML loading"""

    def test_load_fields(self, fields_yaml):
        """Test every declared field is loaded"""
        fields = ConstraintConfigLoader(fields_yaml).load_fields()
        by_name = {field.field_name: field for field in fields}

        assert set(by_name) == {"title", "isbn", "price", "tags", "ratings", "legacy"}
        assert by_name["title"].type == "String!"
        assert by_name["title"].constraints.min_length == 3
        assert by_name["tags"].constraints.matches[0].format == "alpha"
        assert by_name["legacy"].enabled is False

    def test_missing_file(self, tmp_path):
        """Test a missing file is reported"""
        with pytest.raises(FileNotFoundError):
            ConstraintConfigLoader(tmp_path / "nope.yaml")

    def test_missing_fields_section(self, tmp_path):
        """Test a file without 'fields' is rejected"""
        path = tmp_path / "fields.yaml"
        path.write_text("other: 1\n")

        with pytest.raises(ConstraintConfigError, match="must contain 'fields'"):
            ConstraintConfigLoader(path).load_fields()

    def test_missing_type(self, tmp_path):
        """Test a field without a type is rejected"""
        path = tmp_path / "fields.yaml"
        path.write_text("fields:\n  title:\n    constraints:\n      minLength: 1\n")

        with pytest.raises(ConstraintConfigError, match="missing 'type'"):
            ConstraintConfigLoader(path).load_fields()

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML is rejected"""
        path = tmp_path / "fields.yaml"
        path.write_text("fields: [unclosed\n")

        with pytest.raises(ConstraintConfigError, match="Invalid YAML"):
            ConstraintConfigLoader(path).load_fields()

    def test_invalid_constraint_value(self, tmp_path):
        """Test invalid argument values become configuration errors"""
        path = tmp_path / "fields.yaml"
        path.write_text("fields:\n  price:\n    type: Float\n    constraints:\n      multipleOf: 0\n")

        with pytest.raises(ConstraintConfigError, match="price"):
            ConstraintConfigLoader(path).load_fields()


@pytest.mark.unit
class TestConstraintConfigBuilder:
    """Tests for programmatic configuration"""

    def test_builder_types(self):
        """Test each helper produces the expected SDL type"""
        fields = (
            ConstraintConfigBuilder()
            .add_string("title", required=True, minLength=3)
            .add_number("count", integer=True, min=0)
            .add_number("price")
            .add_list("tags", of="String!", required=True, maxSize=2)
            .add("rating", "Float!", max=5)
            .build()
        )

        assert [field.type for field in fields] == ["String!", "Int", "Float", "[String!]!", "Float!"]
        assert fields[0].constraints.min_length == 3

    def test_builder_rejects_invalid_constraint(self):
        """Test invalid values fail when added"""
        with pytest.raises(ConstraintConfigError):
            ConstraintConfigBuilder().add_string("title", minLength=-1)


@pytest.mark.unit
class TestConstraintEngine:
    """Tests for ConstraintEngine"""

    @pytest.fixture
    def engine(self, fields_yaml) -> ConstraintEngine:
        return ConstraintEngine(ConstraintConfigLoader(fields_yaml).load_fields())

    def test_valid_input(self, engine):
        """Test an input satisfying every constraint"""
        result = engine.validate_input(
            {"title": "Dune", "isbn": "978-0-306-40615-7", "price": 9.99, "tags": ["scifi"], "ratings": [4, 5]},
            record_id="book-1",
        )

        assert result.passed is True
        assert result.record_id == "book-1"
        assert result.failed_fields == []
        assert set(result.passed_fields) == {"title", "isbn", "price", "tags", "ratings"}

    def test_each_field_reported_independently(self, engine):
        """Test one failing field does not stop the others"""
        result = engine.validate_input({"title": "Du", "price": -1, "tags": ["scifi"]})

        assert result.passed is False
        assert result.failed_fields == ["title", "price"]
        assert result.passed_fields == ["tags"]
        assert [error["message"] for error in result.errors] == [
            "Must be at least 3 characters in length",
            "Must be a positive number",
        ]
        assert result.errors[0]["fieldName"] == "title"
        assert result.errors[0]["code"] == "ERR_CONSTRAINT_VALIDATION"

    def test_null_non_null_field_fails(self, engine):
        """Test a missing required field fails before any constraint"""
        result = engine.validate_input({})

        assert result.failed_fields == ["title"]
        assert result.errors[0]["message"] == "Must not be null"
        assert result.errors[0]["context"] == [{"arg": "type", "value": "String!"}]

    def test_wrong_type_fails(self, engine):
        """Test codec errors are reported against the field"""
        result = engine.validate_input({"title": "Dune", "price": "cheap"})

        assert result.failed_fields == ["price"]
        assert "Float cannot represent" in result.errors[0]["message"]

    def test_list_constraints(self, engine):
        """Test list size, exclude and matches through the engine"""
        too_many = engine.validate_input({"title": "Dune", "tags": ["a", "b", "c", "d"]})
        excluded = engine.validate_input({"title": "Dune", "tags": ["spam"]})
        unmatched = engine.validate_input({"title": "Dune", "tags": ["sci-fi"]})

        assert too_many.errors[0]["message"] == "Must contain no more than 3 items"
        assert excluded.errors[0]["message"] == "Must not contain spam"
        assert unmatched.errors[0]["message"] == "Must only contain items matching the declared constraints"

    def test_number_list_exclude_is_numeric(self, engine):
        """Test exclude items declared as strings match numbers"""
        result = engine.validate_input({"title": "Dune", "ratings": [3, 0]})
        assert result.errors[0]["message"] == "Must not contain 0"

    def test_disabled_field_skipped(self, engine):
        """Test disabled fields are never validated"""
        assert engine.validate_input({"title": "Dune", "legacy": "short"}).passed is True

    def test_validate_batch(self, engine):
        """Test batch results carry their index as record id"""
        results = engine.validate_batch([{"title": "Dune"}, {"title": "X"}])

        assert [result.record_id for result in results] == ["0", "1"]
        assert [result.passed for result in results] == [True, False]

    def test_constraint_summary(self, engine):
        """Test the summary counts kinds and lists declared constraints"""
        summary = engine.get_constraint_summary()

        assert summary["total_fields"] == 5
        assert summary["fields_by_kind"] == {
            "NonNullString": 1,
            "String": 1,
            "Number": 1,
            "ListOfString": 1,
            "ListOfNumber": 1,
        }
        assert summary["constraints_by_field"]["title"] == ["maxLength", "minLength"]

    def test_unsupported_type_rejected(self):
        """Test non-scalar field types fail at build time"""
        fields = ConstraintConfigBuilder().add("flag", "Boolean", minLength=1).build()

        with pytest.raises(NotScalarTypeError):
            ConstraintEngine(fields)

    def test_non_numeric_exclude_for_number_list(self):
        """Test exclude items must be numeric for number lists"""
        fields = ConstraintConfigBuilder().add_list("ratings", of="Int", exclude=["zero"]).build()

        with pytest.raises(ConstraintConfigError, match="ratings"):
            ConstraintEngine(fields)
