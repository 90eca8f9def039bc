"""formbind: typed validation and binding for untyped form and JSON input.

formbind provides:
- Value, an immutable tagged union for any submitted datum
- Strict, documented coercion of raw values into typed fields
- Composable validator families per scalar type
- Fieldsets that validate a whole submission and report every error at once,
  while keeping the raw submission for redisplay
- Forms that bind validated values to application types
- Translation between Fieldsets and JSON Schema

Basic usage:
    >>> from formbind import Fieldset, StringField, UnsignedIntegerField
    >>> from formbind.validators import UnsignedIntegerMinimumValidator
    >>> fieldset = Fieldset({
    ...     "name": StringField(label="Your name"),
    ...     "age": UnsignedIntegerField(UnsignedIntegerMinimumValidator(18, message="You must be 18+.")),
    ... }, requiring=["name", "age"])
    >>> result = fieldset.validate({"name": "Peter Pan", "age": "11"})
    >>> result.errors.messages("age")
    ['You must be 18+.']
"""

__version__ = "0.1.0"
__author__ = "formbind contributors"

# Version info
VERSION = (0, 1, 0)

# Core exports
from formbind.errors import (
    ErrorCollection,
    FieldError,
    FormConstructionError,
    FormValidationError,
    UnsupportedSchemaError,
)
from formbind.field import (
    BoolField,
    DoubleField,
    Field,
    FieldValidationResult,
    IntegerField,
    StringField,
    UnsignedIntegerField,
)
from formbind.fieldset import Fieldset, FieldsetValidationResult
from formbind.form import Form, FormResult, FormResultStatus
from formbind.schema import from_json_schema, to_json_schema
from formbind.types import FieldErrorCode, ValueKind
from formbind.value import Value, ValueSet

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "Value",
    "ValueSet",
    "ValueKind",
    "FieldErrorCode",
    "FieldError",
    "ErrorCollection",
    "FormValidationError",
    "FormConstructionError",
    "UnsupportedSchemaError",
    "Field",
    "FieldValidationResult",
    "StringField",
    "IntegerField",
    "UnsignedIntegerField",
    "DoubleField",
    "BoolField",
    "Fieldset",
    "FieldsetValidationResult",
    "Form",
    "FormResult",
    "FormResultStatus",
    "to_json_schema",
    "from_json_schema",
]
