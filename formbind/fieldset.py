"""Multi-field validation: the Fieldset.

A Fieldset pairs named Fields with the set of names that must be present. It
validates a whole submission at once and never stops at the first problem, so
a caller can redisplay a form with every error in a single round trip.

Rules applied per declared field, in declaration order:
- absent (missing key or explicit null) and required: one ``required`` error,
  the Field itself is not run
- absent and optional: nothing is recorded
- present: the Field coerces and validates it

Input keys that name no declared field are ignored.

Usage:
    >>> from formbind.field import StringField, UnsignedIntegerField
    >>> from formbind.validators import UnsignedIntegerMinimumValidator
    >>> fieldset = Fieldset({
    ...     "name": StringField(label="Your name"),
    ...     "age": UnsignedIntegerField(UnsignedIntegerMinimumValidator(18), label="Your age"),
    ... }, requiring=["name"])
    >>> result = fieldset.validate({"name": "Peter Pan", "age": 11})
    >>> result.is_valid
    False
    >>> result.errors.messages("age")
    ['Must be at least 18.']
    >>> result.submitted["age"].as_int()
    11
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

from typing_extensions import Protocol, runtime_checkable

from formbind.errors import ErrorCollection, FieldError
from formbind.field import Field
from formbind.value import Value, ValueSet

logger = logging.getLogger(__name__)


@runtime_checkable
class ContentAccessor(Protocol):
    """Anything that looks up raw values by key.

    Plain dicts, other Mappings and object Values all qualify. A missing key
    must yield ``default``.
    """

    def get(self, key: str, default: Any = None) -> Any:
        ...


@dataclass(frozen=True)
class FieldsetValidationResult:
    """Outcome of validating a submission against a Fieldset.

    Attributes:
        values: Coerced values of every field that passed validation. On
            failure this is the partial mapping that could be recovered.
        errors: Errors for every field that failed, keyed by field name
        submitted: The raw value of every declared field that was present,
            verbatim, whether or not it coerced. Use it to redisplay the form.
    """
    values: ValueSet
    errors: ErrorCollection
    submitted: ValueSet

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "values": {name: value.to_python() for name, value in self.values.items()},
            "errors": self.errors.to_dict(),
            "submitted": {name: value.to_python() for name, value in self.submitted.items()},
        }


class Fieldset:
    """A named collection of Fields plus the names that are required.

    Validation results are returned, never stored, so a Fieldset can be
    declared once at module level and shared.

    Attributes:
        fields: Field per name, in declaration order
        required: Names that must be present in the input

    Raises:
        ValueError: If a required name is not a declared field
    """

    def __init__(self, fields: Mapping[str, Field], requiring: Iterable[str] = ()) -> None:
        self.fields: Dict[str, Field] = dict(fields)
        required = frozenset(requiring)
        unknown = sorted(required - set(self.fields))
        if unknown:
            raise ValueError(f"Required fields are not declared: {', '.join(unknown)}")
        self.required = required

    def is_required(self, name: str) -> bool:
        return name in self.required

    def validate(self, content: ContentAccessor) -> FieldsetValidationResult:
        """Validate a submission against every declared field.

        Args:
            content: Mapping (or object Value) from field name to raw value

        Returns:
            FieldsetValidationResult with coerced values, errors and the raw
            submitted values

        Raises:
            TypeError: If content has no ``get`` method
        """
        if not isinstance(content, ContentAccessor):
            raise TypeError(
                f"Fieldset input must provide get(key, default), got {type(content).__name__}"
            )
        values: ValueSet = {}
        submitted: ValueSet = {}
        errors = ErrorCollection()

        for name, field in self.fields.items():
            raw = content.get(name)
            if raw is None or (isinstance(raw, Value) and raw.is_null):
                if name in self.required:
                    errors.append(name, FieldError.required_missing())
                continue

            result = field.validate(raw)
            submitted[name] = result.raw
            if result.is_valid:
                values[name] = result.value
            else:
                errors.extend(name, result.errors)

        if errors:
            logger.debug(
                "Fieldset validation failed for %s (%d errors)",
                ", ".join(errors.keys()),
                errors.total,
            )
        else:
            logger.debug("Fieldset validation passed for %d fields", len(values))

        return FieldsetValidationResult(values=values, errors=errors, submitted=submitted)

    def render(self, result: Optional[FieldsetValidationResult] = None) -> Value:
        """Describe every field, plus the state of a validation pass, as a Value.

        Each entry holds ``type``, ``required``, ``label`` (if set) and, when
        ``result`` is given, ``value`` (the raw submitted value, if present)
        and ``errors`` (messages, only when the field failed). No markup is
        produced; a presentation layer formats the tree.

        Args:
            result: The validation pass to render; omit for a blank form

        Returns:
            An object Value keyed by field name
        """
        tree: Dict[str, Dict[str, Any]] = {}
        for name, field in self.fields.items():
            entry: Dict[str, Any] = {
                "type": field.kind.value,
                "required": name in self.required,
            }
            if field.label is not None:
                entry["label"] = field.label
            if result is not None:
                if name in result.submitted:
                    entry["value"] = result.submitted[name]
                if name in result.errors:
                    entry["errors"] = result.errors.messages(name)
            tree[name] = entry
        return Value.of(tree)

    def __repr__(self) -> str:
        return f"Fieldset({self.fields!r}, requiring={sorted(self.required)!r})"


__all__ = [
    "ContentAccessor",
    "FieldsetValidationResult",
    "Fieldset",
]
