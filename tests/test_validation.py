"""
Tests for the validation result helpers.
"""
from salon.core.validation import ValidationResult, from_pydantic_errors, validate_required


def test_required_fields():
    result = validate_required({"username": "admin", "password": "  "}, ("username", "password"))
    assert not result.valid
    assert result.to_list() == [{"field": "password", "message": "password is required"}]


def test_all_present_is_valid():
    assert validate_required({"a": 1}, ("a",)).valid


def test_pydantic_location_prefix_is_dropped():
    errors = [
        {"loc": ("body", "trust_rating"), "msg": "too large"},
        {"loc": ("query", "status"), "msg": "bad value"},
        {"loc": ("body",), "msg": "field required"},
    ]
    result = from_pydantic_errors(errors)
    assert [e.field for e in result.errors] == ["trust_rating", "status", "body"]


def test_empty_result_is_valid():
    result = ValidationResult()
    assert result.valid
    result.add("name", "name is required")
    assert not result.valid
