"""Translation between Fieldsets and JSON Schema (Draft 7) documents.

``to_json_schema`` describes a Fieldset so that clients (browsers, API
consumers, code generators) can learn its shape. ``from_json_schema`` goes the
other way and declares a Fieldset from a flat object schema, so a schema that
already exists for documentation can drive validation.

Only what a Fieldset can express is accepted: a root ``object`` schema whose
properties are ``string``, ``integer``, ``number`` or ``boolean`` with the
keywords below. Everything else raises UnsupportedSchemaError instead of being
silently dropped.

| JSON Schema                      | formbind                                 |
|----------------------------------|------------------------------------------|
| string + minLength / maxLength   | StringField + length validators          |
| string + format: email           | StringField + EmailValidator             |
| integer, minimum >= 0            | UnsignedIntegerField                     |
| integer                          | IntegerField                             |
| number                           | DoubleField                              |
| boolean                          | BoolField                                |
| minimum / maximum / const        | numeric minimum / maximum / exact        |
| title                            | field label                              |

Usage:
    >>> fieldset = from_json_schema({
    ...     "type": "object",
    ...     "properties": {"age": {"type": "integer", "minimum": 18, "title": "Your age"}},
    ...     "required": ["age"],
    ... })
    >>> fieldset.fields["age"]
    UnsignedIntegerField(UnsignedIntegerMinimumValidator(minimum=18, message=None), label='Your age')
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from jsonschema import Draft7Validator

from formbind.errors import UnsupportedSchemaError
from formbind.field import FIELD_CLASSES, Field
from formbind.fieldset import Fieldset
from formbind.types import ValueKind
from formbind.validators import (
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
    Validator,
)

logger = logging.getLogger(__name__)

DRAFT7_URI = "http://json-schema.org/draft-07/schema#"

JSON_TYPES: Dict[ValueKind, str] = {
    ValueKind.STRING: "string",
    ValueKind.INT: "integer",
    ValueKind.UINT: "integer",
    ValueKind.DOUBLE: "number",
    ValueKind.BOOL: "boolean",
}

# Keywords that carry no validation meaning and are accepted anywhere
ANNOTATION_KEYWORDS = frozenset({"title", "description", "default", "examples", "$comment"})

ROOT_KEYWORDS = frozenset({"$schema", "$id", "type", "properties", "required"}) | ANNOTATION_KEYWORDS

PROPERTY_KEYWORDS: Dict[str, frozenset] = {
    "string": frozenset({"minLength", "maxLength", "format"}),
    "integer": frozenset({"minimum", "maximum", "const"}),
    "number": frozenset({"minimum", "maximum", "const"}),
    "boolean": frozenset(),
}

# (minimum, maximum, exact) validator classes per numeric kind
NUMERIC_VALIDATORS: Dict[ValueKind, Tuple[Type[Validator], Type[Validator], Type[Validator]]] = {
    ValueKind.INT: (IntegerMinimumValidator, IntegerMaximumValidator, IntegerExactValidator),
    ValueKind.UINT: (
        UnsignedIntegerMinimumValidator,
        UnsignedIntegerMaximumValidator,
        UnsignedIntegerExactValidator,
    ),
    ValueKind.DOUBLE: (DoubleMinimumValidator, DoubleMaximumValidator, DoubleExactValidator),
}

# Lower bounds tighten upwards, upper bounds downwards
_TIGHTEN = {
    "minimum": max,
    "minLength": max,
    "maximum": min,
    "maxLength": min,
}


def field_to_json_schema(field: Field) -> Dict[str, Any]:
    """Describe one Field as a JSON Schema property.

    When several validators constrain the same bound, the tightest wins.
    CustomValidator rules have no JSON Schema form and are omitted.
    """
    schema: Dict[str, Any] = {"type": JSON_TYPES[field.kind]}
    if field.label is not None:
        schema["title"] = field.label
    if field.kind is ValueKind.UINT:
        schema["minimum"] = 0
    for validator in field.validators:
        for keyword, value in validator.json_schema().items():
            if keyword in schema and keyword in _TIGHTEN:
                value = _TIGHTEN[keyword](schema[keyword], value)
            schema[keyword] = value
    return schema


def to_json_schema(fieldset: Fieldset, title: Optional[str] = None) -> Dict[str, Any]:
    """Describe a Fieldset as a Draft 7 object schema.

    Args:
        fieldset: The Fieldset to describe
        title: Optional schema title

    Returns:
        A JSON-serialisable schema document
    """
    document: Dict[str, Any] = {"$schema": DRAFT7_URI, "type": "object"}
    if title is not None:
        document["title"] = title
    document["properties"] = {
        name: field_to_json_schema(field) for name, field in fieldset.fields.items()
    }
    required = [name for name in fieldset.fields if fieldset.is_required(name)]
    if required:
        document["required"] = required
    return document


def from_json_schema(document: Mapping[str, Any]) -> Fieldset:
    """Declare a Fieldset from a flat Draft 7 object schema.

    Args:
        document: A JSON Schema document

    Returns:
        A Fieldset with one Field per property

    Raises:
        jsonschema.SchemaError: If the document is not a valid JSON Schema
        UnsupportedSchemaError: If the document uses constructs a Fieldset
            cannot express
    """
    Draft7Validator.check_schema(document)

    if not isinstance(document, Mapping):
        raise UnsupportedSchemaError("#", "root schema must be an object")
    if document.get("type") != "object":
        raise UnsupportedSchemaError("#", "root schema must have type 'object'")
    _reject_unknown("#", document, ROOT_KEYWORDS)

    fields = {
        name: _field_from_property(f"#/properties/{name}", prop)
        for name, prop in document.get("properties", {}).items()
    }
    required: List[str] = list(document.get("required", []))
    undeclared = [name for name in required if name not in fields]
    if undeclared:
        raise UnsupportedSchemaError(
            "#/required", f"required names without a property: {', '.join(undeclared)}"
        )

    logger.debug(
        "Declared fieldset from JSON Schema: %d fields, %d required",
        len(fields),
        len(required),
    )
    return Fieldset(fields, requiring=required)


def _reject_unknown(path: str, schema: Mapping[str, Any], allowed: frozenset) -> None:
    unknown = sorted(set(schema) - allowed)
    if unknown:
        raise UnsupportedSchemaError(path, f"unsupported keywords: {', '.join(unknown)}")


def _field_from_property(path: str, prop: Any) -> Field:
    if not isinstance(prop, Mapping):
        raise UnsupportedSchemaError(path, "property schema must be an object")

    json_type = prop.get("type")
    if not isinstance(json_type, str) or json_type not in PROPERTY_KEYWORDS:
        raise UnsupportedSchemaError(path, f"unsupported type {json_type!r}")
    _reject_unknown(path, prop, PROPERTY_KEYWORDS[json_type] | ANNOTATION_KEYWORDS | {"type"})

    label = prop.get("title")
    if json_type == "string":
        return FIELD_CLASSES[ValueKind.STRING](*_string_validators(path, prop), label=label)
    if json_type == "boolean":
        return FIELD_CLASSES[ValueKind.BOOL](label=label)
    if json_type == "number":
        kind = ValueKind.DOUBLE
        minimum = _number(path, prop, "minimum")
    else:
        minimum = _integer(path, prop, "minimum")
        kind = ValueKind.UINT if minimum is not None and minimum >= 0 else ValueKind.INT
        if kind is ValueKind.UINT and minimum == 0:
            # Already implied by the unsigned kind
            minimum = None

    convert = _number if kind is ValueKind.DOUBLE else _integer
    minimum_cls, maximum_cls, exact_cls = NUMERIC_VALIDATORS[kind]
    validators: List[Validator] = []
    if minimum is not None:
        validators.append(minimum_cls(minimum))
    maximum = convert(path, prop, "maximum")
    if maximum is not None:
        validators.append(maximum_cls(maximum))
    exact = convert(path, prop, "const")
    if exact is not None:
        validators.append(exact_cls(exact))
    return FIELD_CLASSES[kind](*validators, label=label)


def _string_validators(path: str, prop: Mapping[str, Any]) -> List[Validator]:
    validators: List[Validator] = []
    min_length = prop.get("minLength")
    max_length = prop.get("maxLength")
    if min_length is not None and min_length == max_length:
        validators.append(ExactLengthValidator(min_length))
    else:
        if min_length is not None:
            validators.append(MinimumLengthValidator(min_length))
        if max_length is not None:
            validators.append(MaximumLengthValidator(max_length))

    string_format = prop.get("format")
    if string_format is not None:
        if string_format != "email":
            raise UnsupportedSchemaError(f"{path}/format", f"unsupported format {string_format!r}")
        validators.append(EmailValidator())
    return validators


def _integer(path: str, prop: Mapping[str, Any], keyword: str) -> Optional[int]:
    value = prop.get(keyword)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedSchemaError(f"{path}/{keyword}", "must be a number")
    if isinstance(value, float):
        if not value.is_integer():
            raise UnsupportedSchemaError(f"{path}/{keyword}", "must be integral for an integer field")
        value = int(value)
    return value


def _number(path: str, prop: Mapping[str, Any], keyword: str) -> Optional[float]:
    value = prop.get(keyword)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UnsupportedSchemaError(f"{path}/{keyword}", "must be a number")
    return float(value)


__all__ = [
    "DRAFT7_URI",
    "field_to_json_schema",
    "to_json_schema",
    "from_json_schema",
]
