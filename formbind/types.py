"""Core type definitions for formbind.

This module defines the closed enumerations shared by every layer:
- ValueKind: the tag of each Value variant, also used as a field's target type
- FieldErrorCode: the three ways a single field can fail validation

Both are string-valued so they serialise directly into the dicts produced by
``to_dict()`` and the structures rendered by ``Fieldset.render()``.
"""

from enum import Enum


class ValueKind(str, Enum):
    """Tags of the Value tagged union.

    The scalar kinds (BOOL, INT, UINT, DOUBLE, STRING) double as the target
    types a Field can coerce to. NULL, ARRAY and OBJECT only describe input.
    """
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    DOUBLE = "double"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_numeric(self) -> bool:
        return self in (ValueKind.INT, ValueKind.UINT, ValueKind.DOUBLE)


# Kinds a Field may declare as its target type
SCALAR_KINDS = frozenset({
    ValueKind.BOOL,
    ValueKind.INT,
    ValueKind.UINT,
    ValueKind.DOUBLE,
    ValueKind.STRING,
})


class FieldErrorCode(str, Enum):
    """Failure kinds for a single field.

    REQUIRED: the field is required and was absent from the input.
    INVALID_TYPE: the field was present but could not be coerced.
    CUSTOM: the value coerced but a validator rejected it.
    """
    REQUIRED = "required"
    INVALID_TYPE = "invalid_type"
    CUSTOM = "custom"


__all__ = [
    "ValueKind",
    "SCALAR_KINDS",
    "FieldErrorCode",
]
