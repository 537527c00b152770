"""
Unit tests for NumberValidator.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from constraint_directive.core.models import ConstraintSpec
from constraint_directive.core.validators import (
    ConstraintContext,
    ConstraintValidationError,
    NumberValidator,
)
from constraint_directive.core.validators.number_validator import format_number, is_multiple


def number_validator(**constraints) -> NumberValidator:
    return NumberValidator("price", ConstraintSpec.from_arguments(constraints))


@pytest.mark.unit
class TestSignConstraints:
    """Tests for positive and negative"""

    def test_positive(self):
        """Test positive rejects zero and negatives"""
        validator = number_validator(positive=True)
        assert validator.validate(0.5) is True

        for value in (0, -1):
            with pytest.raises(ConstraintValidationError, match="Must be a positive number"):
                validator.validate(value)

    def test_negative(self):
        """Test negative rejects zero and positives"""
        validator = number_validator(negative=True)
        assert validator.validate(-3) is True

        with pytest.raises(ConstraintValidationError, match="Must be a negative number"):
            validator.validate(0)

    def test_positive_false_is_no_constraint(self):
        """Test positive: false adds no requirement"""
        assert number_validator(positive=False).validate(-10) is True


@pytest.mark.unit
class TestBoundConstraints:
    """Tests for min, max, exclusiveMin and exclusiveMax"""

    def test_min_is_inclusive(self):
        """Test the minimum itself passes"""
        validator = number_validator(min=3)
        assert validator.validate(3) is True

        with pytest.raises(ConstraintValidationError) as exc_info:
            validator.validate(2)

        assert str(exc_info.value) == "Must be at least 3"
        assert exc_info.value.context == (ConstraintContext("min", 3.0),)

    def test_max_is_inclusive(self):
        """Test the maximum itself passes"""
        validator = number_validator(max=3)
        assert validator.validate(3) is True

        with pytest.raises(ConstraintValidationError, match="Must be no greater than 3"):
            validator.validate(3.5)

    def test_exclusive_min(self):
        """Test the exclusive minimum itself fails"""
        with pytest.raises(ConstraintValidationError, match="Must be greater than 3"):
            number_validator(exclusiveMin=3).validate(3)

    def test_exclusive_max(self):
        """Test the exclusive maximum itself fails"""
        with pytest.raises(ConstraintValidationError, match="Must be less than 2.5"):
            number_validator(exclusiveMax=2.5).validate(2.5)

    def test_min_zero_is_active(self):
        """Test min 0 rejects negatives"""
        with pytest.raises(ConstraintValidationError, match="Must be at least 0"):
            number_validator(min=0).validate(-1)

    @given(
        st.floats(min_value=-1000, max_value=1000),
        st.floats(min_value=-1000, max_value=1000),
        st.floats(min_value=-1000, max_value=1000),
    )
    def test_property_inclusive_bounds(self, value, low, high):
        """Property test: a value passes exactly when it lies within [min, max]"""
        validator = number_validator(min=low, max=high)
        assert validator.is_valid(value) == (low <= value <= high)


@pytest.mark.unit
class TestMultipleOf:
    """Tests for multipleOf"""

    def test_integer_multiple(self):
        """Test integral divisor"""
        validator = number_validator(multipleOf=2)
        assert validator.validate(10) is True

        with pytest.raises(ConstraintValidationError, match="Must be a multiple of 2"):
            validator.validate(7)

    def test_float_multiple_within_tolerance(self):
        """Test float divisors tolerate binary rounding"""
        assert number_validator(multipleOf=0.1).validate(0.3) is True
        assert number_validator(multipleOf=0.01).validate(19.99) is True

    def test_negative_multiple(self):
        """Test negative values are multiples too"""
        assert number_validator(multipleOf=3).validate(-9) is True

    def test_zero_divisor_rejected_at_build(self):
        """Test multipleOf must be greater than zero"""
        with pytest.raises(ValueError):
            ConstraintSpec(multipleOf=0)

    @given(st.integers(min_value=-10_000, max_value=10_000), st.integers(min_value=1, max_value=50))
    def test_property_integer_products_are_multiples(self, factor, divisor):
        """Property test: factor * divisor is always a multiple of divisor"""
        assert is_multiple(factor * divisor, divisor)


@pytest.mark.unit
class TestCheckOrder:
    """Tests for check order and message rendering"""

    def test_sign_reported_before_bounds(self):
        """Test positive is checked before min"""
        with pytest.raises(ConstraintValidationError, match="Must be a positive number"):
            number_validator(positive=True, min=5).validate(-1)

    def test_every_failure_reported(self, collecting_reporter):
        """Test a non-raising reporter receives each broken rule in order"""
        validator = NumberValidator(
            "price",
            ConstraintSpec(positive=True, min=5, multipleOf=2),
            reporter=collecting_reporter,
        )

        with pytest.raises(ConstraintValidationError):
            validator.validate(-1)

        assert collecting_reporter.messages == [
            "Must be a positive number",
            "Must be at least 5",
            "Must be a multiple of 2",
        ]

    def test_format_number(self):
        """Test integral floats render without a decimal part"""
        assert format_number(3.0) == "3"
        assert format_number(2.5) == "2.5"
        assert format_number(7) == "7"
