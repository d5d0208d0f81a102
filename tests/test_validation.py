"""
Tests for user input validation
"""

from datetime import date, timedelta

import pytest

from usermgmt.errors import ErrorCode, ValidationError
from usermgmt.validation import parse_birth_date, today_utc, validate_names


class TestParseBirthDate:
    def test_valid_date(self):
        assert parse_birth_date("1990-01-01") == date(1990, 1, 1)

    def test_today_is_allowed(self):
        today = date(2024, 5, 10)
        assert parse_birth_date("2024-05-10", today=today) == today

    @pytest.mark.parametrize("value", ["1990/01/01", "90-01-01", "1990-1-1", "", "1990-01-01T00:00"])
    def test_bad_format(self, value):
        with pytest.raises(ValidationError, match="YYYY-MM-DD format") as exc_info:
            parse_birth_date(value)
        assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
        assert exc_info.value.field == "birth_date"

    def test_non_string_is_a_format_error(self):
        with pytest.raises(ValidationError, match="YYYY-MM-DD format"):
            parse_birth_date(19900101)

    @pytest.mark.parametrize("value", ["2023-02-30", "2023-13-01", "2023-00-10"])
    def test_impossible_calendar_date(self, value):
        with pytest.raises(ValidationError, match="must be a valid date"):
            parse_birth_date(value)

    def test_future_date(self):
        tomorrow = today_utc() + timedelta(days=1)
        with pytest.raises(ValidationError, match="cannot be in the future"):
            parse_birth_date(tomorrow.isoformat())

    def test_future_relative_to_given_today(self):
        with pytest.raises(ValidationError, match="cannot be in the future"):
            parse_birth_date("2024-05-11", today=date(2024, 5, 10))


class TestValidateNames:
    def test_strips_and_returns_supplied_fields(self):
        assert validate_names("  John ", "Doe", required=True) == {
            "first_name": "John",
            "last_name": "Doe",
        }

    def test_partial_omits_missing_fields(self):
        assert validate_names(first_name="Jane") == {"first_name": "Jane"}
        assert validate_names() == {}

    def test_required_fields_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_names(required=True)
        assert exc_info.value.message == (
            "Validation failed: First name is required; Last name is required"
        )
        assert exc_info.value.field == "first_name"

    def test_blank_string_is_rejected(self):
        with pytest.raises(ValidationError, match="Last name is required"):
            validate_names(last_name="   ")

    def test_non_string_is_rejected(self):
        with pytest.raises(ValidationError, match="First name must be a string"):
            validate_names(first_name=42, last_name="Doe", required=True)

    def test_too_long(self):
        with pytest.raises(ValidationError, match="at most 100 characters"):
            validate_names(first_name="x" * 101)
