"""Unit tests for FieldError and ErrorCollection.

Tests cover:
- FieldError constructors and serialization
- Building an ErrorCollection from literal pairs (duplicate keys merge)
- Incremental append
- Merging two collections
- Exception types carrying context
"""

import pytest

from formbind.errors import (
    ErrorCollection,
    FieldError,
    FormConstructionError,
    FormValidationError,
    UnsupportedSchemaError,
)
from formbind.types import FieldErrorCode, ValueKind


class TestFieldError:
    """Test the FieldError record."""

    def test_required_missing(self):
        error = FieldError.required_missing()
        assert error.code == FieldErrorCode.REQUIRED
        assert error.message == "This field is required."
        assert error.expected is None

    def test_type_mismatch(self):
        error = FieldError.type_mismatch(expected=ValueKind.INT, received=ValueKind.STRING)
        assert error.code == FieldErrorCode.INVALID_TYPE
        assert error.message == "Please enter a valid whole number."
        assert error.expected == "int"
        assert error.received == "string"

    def test_type_mismatch_message_override(self):
        error = FieldError.type_mismatch(ValueKind.BOOL, ValueKind.NULL, message="Tick or untick.")
        assert str(error) == "Tick or untick."

    def test_validation_failed(self):
        error = FieldError.validation_failed("You must be 18+.")
        assert error.code == FieldErrorCode.CUSTOM
        assert str(error) == "You must be 18+."

    def test_to_dict_omits_empty_context(self):
        assert FieldError.required_missing().to_dict() == {
            "code": "required",
            "message": "This field is required.",
        }

    def test_dict_round_trip(self):
        error = FieldError.type_mismatch(ValueKind.DOUBLE, ValueKind.STRING)
        assert FieldError.from_dict(error.to_dict()) == error

    def test_equality(self):
        assert FieldError.required_missing() == FieldError.required_missing()


class TestErrorCollectionLiteral:
    """Test building a collection from literal entries."""

    def test_single_key_many_errors(self):
        error1 = FieldError.required_missing()
        error2 = FieldError.required_missing()
        errors = ErrorCollection({"key": [error1, error2]})
        assert len(errors["key"]) == 2

    def test_duplicate_keys_merge(self):
        """Should keep every error when a key repeats, in encounter order."""
        first = FieldError.validation_failed("first")
        second = FieldError.validation_failed("second")
        third = FieldError.validation_failed("third")
        errors = ErrorCollection([
            ("key", [first]),
            ("other", [third]),
            ("key", [second]),
        ])
        assert errors["key"] == [first, second]
        assert errors.keys() == ["key", "other"]

    def test_empty_entry_creates_nothing(self):
        errors = ErrorCollection([("key", [])])
        assert "key" not in errors
        assert len(errors) == 0


class TestErrorCollectionAppend:
    """Test incremental construction."""

    def test_create_by_appending(self):
        errors = ErrorCollection()
        assert len(errors["key"]) == 0
        errors.append("key", FieldError.required_missing())
        assert len(errors["key"]) == 1
        errors.append("key", FieldError.required_missing())
        assert len(errors["key"]) == 2

    def test_extend_preserves_order(self):
        errors = ErrorCollection()
        errors.extend("key", [FieldError.validation_failed("a"), FieldError.validation_failed("b")])
        errors.append("key", FieldError.validation_failed("c"))
        assert errors.messages("key") == ["a", "b", "c"]

    def test_lookup_returns_copy(self):
        errors = ErrorCollection({"key": [FieldError.required_missing()]})
        errors["key"].append(FieldError.required_missing())
        assert len(errors["key"]) == 1

    def test_missing_key_is_empty(self):
        errors = ErrorCollection()
        assert errors["nothing"] == []
        assert errors.messages("nothing") == []
        assert "nothing" not in errors

    def test_size_and_truthiness(self):
        errors = ErrorCollection()
        assert not errors
        errors.append("a", FieldError.required_missing())
        errors.append("a", FieldError.required_missing())
        errors.append("b", FieldError.required_missing())
        assert errors
        assert len(errors) == 2
        assert errors.total == 3
        assert list(errors) == ["a", "b"]


class TestErrorCollectionMerge:
    """Test key-wise concatenation of two collections."""

    def test_merge_concatenates(self):
        left = ErrorCollection({"a": [FieldError.validation_failed("1")]})
        right = ErrorCollection({
            "a": [FieldError.validation_failed("2")],
            "b": [FieldError.validation_failed("3")],
        })
        merged = left.merge(right)
        assert merged.messages("a") == ["1", "2"]
        assert merged.messages("b") == ["3"]

    def test_merge_leaves_inputs_untouched(self):
        left = ErrorCollection({"a": [FieldError.validation_failed("1")]})
        right = ErrorCollection({"a": [FieldError.validation_failed("2")]})
        left.merge(right)
        assert left.messages("a") == ["1"]
        assert right.messages("a") == ["2"]

    def test_merge_with_empty(self):
        errors = ErrorCollection({"a": [FieldError.required_missing()]})
        assert errors.merge(ErrorCollection()) == errors
        assert ErrorCollection().merge(errors) == errors


class TestErrorCollectionSerialization:
    """Test dict conversion."""

    def test_dict_round_trip(self):
        errors = ErrorCollection({
            "age": [FieldError.validation_failed("You must be 18+.")],
            "name": [FieldError.required_missing()],
        })
        data = errors.to_dict()
        assert data["age"] == [{"code": "custom", "message": "You must be 18+."}]
        assert ErrorCollection.from_dict(data) == errors

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(ErrorCollection())


class TestExceptions:
    """Test the exception classes."""

    def test_form_validation_error_carries_errors(self):
        errors = ErrorCollection({"integer": [FieldError.required_missing()]})
        exc = FormValidationError(errors)
        assert exc.errors is errors
        assert "integer" in str(exc)

    def test_construction_error_is_not_validation_error(self):
        assert not issubclass(FormConstructionError, FormValidationError)
        assert not issubclass(FormValidationError, FormConstructionError)

    def test_construction_error_form_name(self):
        exc = FormConstructionError("bad mapping", form_name="SignupForm")
        assert exc.form_name == "SignupForm"
        assert str(exc) == "bad mapping"

    def test_unsupported_schema_error_path(self):
        exc = UnsupportedSchemaError("#/properties/x", "unsupported type 'array'")
        assert isinstance(exc, ValueError)
        assert exc.path == "#/properties/x"
        assert str(exc) == "#/properties/x: unsupported type 'array'"
