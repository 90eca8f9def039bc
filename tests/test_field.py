"""Unit tests for Field validation.

Tests cover:
- Each Field type's accepted and rejected raw values
- Type mismatch stops the validator chain
- Every validator failure is collected, in order
- Validator/field kind compatibility at declaration time
- Field reuse across validations
"""

import pytest

from formbind.field import (
    BoolField,
    DoubleField,
    FieldValidationResult,
    IntegerField,
    StringField,
    UnsignedIntegerField,
)
from formbind.types import FieldErrorCode, ValueKind
from formbind.validators import (
    CustomValidator,
    DoubleExactValidator,
    DoubleMaximumValidator,
    DoubleMinimumValidator,
    EmailValidator,
    ExactLengthValidator,
    IntegerExactValidator,
    IntegerMaximumValidator,
    IntegerMinimumValidator,
    MaximumLengthValidator,
    MinimumLengthValidator,
    UnsignedIntegerExactValidator,
    UnsignedIntegerMaximumValidator,
    UnsignedIntegerMinimumValidator,
)
from formbind.value import Value


def expect_match(result: FieldValidationResult, expected) -> None:
    assert result.is_valid, result.errors
    assert result.value == Value.of(expected)


class TestStringField:
    """Test StringField."""

    def test_correct_value(self):
        expect_match(StringField().validate("string"), "string")

    def test_null_fails(self):
        result = StringField().validate(None)
        assert not result.is_valid
        assert result.errors[0].code == FieldErrorCode.INVALID_TYPE

    def test_number_is_not_stringified(self):
        assert not StringField().validate(42).is_valid

    def test_too_short(self):
        assert not StringField(MinimumLengthValidator(characters=12)).validate("string").is_valid

    def test_too_long(self):
        assert not StringField(MaximumLengthValidator(characters=6)).validate("maxi string").is_valid

    def test_wrong_exact_size(self):
        assert not StringField(ExactLengthValidator(characters=6)).validate("wrong size").is_valid


class TestEmailField:
    """Test StringField with an EmailValidator."""

    def test_correct_value(self):
        expect_match(StringField(EmailValidator()).validate("email@email.com"), "email@email.com")

    def test_null_fails(self):
        assert not StringField(EmailValidator()).validate(None).is_valid

    def test_too_long(self):
        field = StringField(EmailValidator(), MaximumLengthValidator(characters=6))
        assert not field.validate("email@email.com").is_valid

    def test_not_an_email(self):
        assert not StringField(EmailValidator()).validate("not an email").is_valid


class TestIntegerField:
    """Test IntegerField."""

    @pytest.mark.parametrize("raw,expected", [(42, 42), ("42", 42), (-42, -42), ("-42", -42)])
    def test_correct_values(self, raw, expected):
        expect_match(IntegerField().validate(raw), expected)

    @pytest.mark.parametrize("raw", [None, "I'm a string", 3.4, "3.4"])
    def test_incorrect_values(self, raw):
        assert not IntegerField().validate(raw).is_valid

    def test_too_low(self):
        assert not IntegerField(IntegerMinimumValidator(42)).validate(4).is_valid

    def test_too_high(self):
        assert not IntegerField(IntegerMaximumValidator(42)).validate(420).is_valid

    def test_not_exact(self):
        assert not IntegerField(IntegerExactValidator(42)).validate(420).is_valid

    def test_coerced_kind(self):
        assert IntegerField().validate("42").value.kind == ValueKind.INT


class TestUnsignedIntegerField:
    """Test UnsignedIntegerField."""

    @pytest.mark.parametrize("raw", [42, "42"])
    def test_correct_values(self, raw):
        expect_match(UnsignedIntegerField().validate(raw), 42)

    @pytest.mark.parametrize("raw", [None, "I'm a string", 3.4, "3.4", -42, "-42"])
    def test_incorrect_values(self, raw):
        assert not UnsignedIntegerField().validate(raw).is_valid

    def test_minimum(self):
        assert not UnsignedIntegerField(UnsignedIntegerMinimumValidator(42)).validate(4).is_valid
        assert UnsignedIntegerField(UnsignedIntegerMinimumValidator(42)).validate(44).is_valid

    def test_too_high(self):
        assert not UnsignedIntegerField(UnsignedIntegerMaximumValidator(42)).validate(420).is_valid

    def test_not_exact(self):
        assert not UnsignedIntegerField(UnsignedIntegerExactValidator(42)).validate(420).is_valid

    def test_coerced_kind(self):
        assert UnsignedIntegerField().validate(42).value.kind == ValueKind.UINT


class TestDoubleField:
    """Test DoubleField."""

    @pytest.mark.parametrize("raw,expected", [
        (42.42, 42.42),
        ("42.42", 42.42),
        (-42.42, -42.42),
        ("-42.42", -42.42),
        (42, 42),
        ("42", 42),
    ])
    def test_correct_values(self, raw, expected):
        expect_match(DoubleField().validate(raw), expected)

    @pytest.mark.parametrize("raw", [None, "I'm a string"])
    def test_incorrect_values(self, raw):
        assert not DoubleField().validate(raw).is_valid

    def test_too_low(self):
        assert not DoubleField(DoubleMinimumValidator(4.2)).validate(4.0).is_valid

    def test_too_high(self):
        assert not DoubleField(DoubleMaximumValidator(4.2)).validate(5.6).is_valid

    def test_not_exact(self):
        assert not DoubleField(DoubleExactValidator(4.2)).validate(42).is_valid

    def test_precision(self):
        assert not DoubleField(DoubleMinimumValidator(4.0000002)).validate(4.0000001).is_valid


class TestBoolField:
    """Test BoolField."""

    @pytest.mark.parametrize("raw", [True, "true", "t", 1])
    def test_truthy(self, raw):
        expect_match(BoolField().validate(raw), True)

    @pytest.mark.parametrize("raw", [False, "false", "f", 0])
    def test_falsy(self, raw):
        expect_match(BoolField().validate(raw), False)

    @pytest.mark.parametrize("raw", [None, "yes", 2, "TRUE"])
    def test_incorrect_values(self, raw):
        assert not BoolField().validate(raw).is_valid


class TestValidatorChain:
    """Test how a Field runs its validators."""

    def test_type_mismatch_skips_validators(self):
        """Should report one invalid_type error and never call a validator."""
        calls = []
        field = IntegerField(CustomValidator(ValueKind.INT, lambda n: calls.append(n) or True))
        result = field.validate("walrus")
        assert [e.code for e in result.errors] == [FieldErrorCode.INVALID_TYPE]
        assert result.value is None
        assert calls == []

    def test_all_failures_collected_in_order(self):
        field = StringField(
            MinimumLengthValidator(20, message="too short"),
            EmailValidator(message="not an email"),
            MaximumLengthValidator(2, message="too long"),
        )
        result = field.validate("nope")
        assert result.messages == ["too short", "not an email", "too long"]
        assert all(e.code == FieldErrorCode.CUSTOM for e in result.errors)

    def test_coerced_value_kept_when_validator_fails(self):
        result = IntegerField(IntegerMinimumValidator(42)).validate("4")
        assert not result.is_valid
        assert result.value == Value.of(4)
        assert result.raw == Value.of("4")

    def test_no_validators_accepts_any_coercible_value(self):
        for raw in ("a", "", "0"):
            assert StringField().validate(raw).is_valid

    def test_wrong_validator_kind_rejected(self):
        with pytest.raises(TypeError):
            IntegerField(MaximumLengthValidator(3))
        with pytest.raises(TypeError):
            UnsignedIntegerField(IntegerMinimumValidator(3))

    def test_label(self):
        field = StringField(label="Your name")
        assert field.label == "Your name"
        assert StringField().label is None


class TestFieldReuse:
    """A Field holds no per-call state."""

    def test_results_are_independent(self):
        field = IntegerField(IntegerMinimumValidator(10))
        first = field.validate(4)
        second = field.validate(40)
        assert not first.is_valid
        assert second.is_valid
        assert first.raw == Value.of(4)

    def test_accepts_value_input(self):
        expect_match(IntegerField().validate(Value.of("7")), 7)

    def test_result_to_dict(self):
        data = IntegerField().validate("x").to_dict()
        assert data["isValid"] is False
        assert data["raw"] == "x"
        assert "value" not in data
        assert data["errors"][0]["code"] == "invalid_type"
