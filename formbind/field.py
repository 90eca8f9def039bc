"""Typed fields: coercion followed by an ordered validator chain.

A Field is declared once with its validators and can then validate any number
of raw values. Validation returns a FieldValidationResult and leaves the Field
untouched, so one Field instance can be shared across concurrent requests.

Usage:
    >>> from formbind.validators import EmailValidator, MaximumLengthValidator
    >>> field = StringField(EmailValidator(), MaximumLengthValidator(6), label="Email")
    >>> result = field.validate("email@email.com")
    >>> result.is_valid
    False
    >>> result.messages
    ['Must be at most 6 characters long.']
    >>> IntegerField().validate("3.4").errors[0].code
    <FieldErrorCode.INVALID_TYPE: 'invalid_type'>
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from formbind.coercion import coerce
from formbind.errors import FieldError
from formbind.types import ValueKind
from formbind.validators import Validator
from formbind.value import Value


@dataclass(frozen=True)
class FieldValidationResult:
    """Outcome of validating one raw value against one Field.

    Attributes:
        raw: The submitted value, verbatim
        value: The coerced value, or None if coercion failed. Present even
            when a validator rejected it.
        errors: Every failure, in validator declaration order
    """
    raw: Value
    value: Optional[Value] = None
    errors: Tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "isValid": self.is_valid,
            "raw": self.raw.to_python(),
            "errors": [e.to_dict() for e in self.errors],
        }
        if self.value is not None:
            result["value"] = self.value.to_python()
        return result


class Field:
    """A single typed, validator-chained unit of a schema.

    Subclasses fix ``kind``; use StringField, IntegerField,
    UnsignedIntegerField, DoubleField or BoolField.

    Attributes:
        validators: Validators run in order against the coerced value
        label: Optional human-readable label for presentation

    Raises:
        TypeError: If a validator checks a different kind than the field
    """
    kind: ClassVar[ValueKind]

    def __init__(self, *validators: Validator, label: Optional[str] = None) -> None:
        for validator in validators:
            if validator.kind is not self.kind:
                raise TypeError(
                    f"{type(validator).__name__} checks '{validator.kind.value}' values "
                    f"and cannot be attached to a {type(self).__name__}"
                )
        self.validators: Tuple[Validator, ...] = tuple(validators)
        self.label = label

    def validate(self, raw: Any) -> FieldValidationResult:
        """Coerce ``raw`` to this field's kind and run every validator.

        A value that cannot be coerced (null included) produces a single
        invalid_type error and the validators are skipped. Otherwise every
        validator runs and every failure is kept.

        Args:
            raw: A Value or native Python data accepted by ``Value.of``

        Returns:
            FieldValidationResult with the raw value, coerced value and errors
        """
        raw_value = Value.of(raw)
        coerced = coerce(raw_value, self.kind)
        if coerced is None:
            error = FieldError.type_mismatch(expected=self.kind, received=raw_value.kind)
            return FieldValidationResult(raw=raw_value, errors=(error,))

        errors = []
        for validator in self.validators:
            outcome = validator.check(coerced)
            if not outcome.passed:
                errors.append(FieldError.validation_failed(outcome.message))
        return FieldValidationResult(raw=raw_value, value=coerced, errors=tuple(errors))

    def __repr__(self) -> str:
        parts = [repr(v) for v in self.validators]
        if self.label is not None:
            parts.append(f"label={self.label!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class StringField(Field):
    kind = ValueKind.STRING


class IntegerField(Field):
    kind = ValueKind.INT


class UnsignedIntegerField(Field):
    kind = ValueKind.UINT


class DoubleField(Field):
    kind = ValueKind.DOUBLE


class BoolField(Field):
    kind = ValueKind.BOOL


FIELD_CLASSES: Dict[ValueKind, Type[Field]] = {
    cls.kind: cls
    for cls in (StringField, IntegerField, UnsignedIntegerField, DoubleField, BoolField)
}


__all__ = [
    "FieldValidationResult",
    "Field",
    "StringField",
    "IntegerField",
    "UnsignedIntegerField",
    "DoubleField",
    "BoolField",
    "FIELD_CLASSES",
]
