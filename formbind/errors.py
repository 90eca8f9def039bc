"""Structured error types for formbind.

Validation failures are values, not exceptions: each failing field gets one or
more FieldError records, gathered per field name in an ErrorCollection. The
collection is what Fieldset and Form hand back to the caller so that every
problem with a submission can be shown in one round trip.

Exceptions are reserved for mistakes in the calling code:
- FormConstructionError: a Form's conversion rejected already-validated data
- FormValidationError: raised only by ``FormResult.unwrap()`` for callers that
  prefer exceptions, carrying the ErrorCollection
- UnsupportedSchemaError: a JSON Schema document cannot be expressed as a
  Fieldset
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from formbind import messages
from formbind.types import FieldErrorCode, ValueKind


@dataclass(frozen=True)
class FieldError:
    """A single validation failure for one field.

    Attributes:
        code: Failure kind (required, invalid_type or custom)
        message: Human-readable description, safe to show to end users
        expected: Optional - the kind that was expected (type mismatches)
        received: Optional - the kind that was received (type mismatches)

    Examples:
        >>> err = FieldError.required_missing()
        >>> err.code
        <FieldErrorCode.REQUIRED: 'required'>
        >>> str(err)
        'This field is required.'
    """
    code: FieldErrorCode
    message: str
    expected: Optional[Any] = None
    received: Optional[Any] = None

    @classmethod
    def required_missing(cls, message: Optional[str] = None) -> "FieldError":
        return cls(code=FieldErrorCode.REQUIRED, message=message or messages.REQUIRED)

    @classmethod
    def type_mismatch(
        cls,
        expected: ValueKind,
        received: ValueKind,
        message: Optional[str] = None,
    ) -> "FieldError":
        if message is None:
            kind_name = messages.KIND_NAMES.get(expected.value, expected.value)
            message = messages.INVALID_TYPE.format(kind=kind_name)
        return cls(
            code=FieldErrorCode.INVALID_TYPE,
            message=message,
            expected=expected.value,
            received=received.value,
        )

    @classmethod
    def validation_failed(cls, message: str) -> "FieldError":
        return cls(code=FieldErrorCode.CUSTOM, message=message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "code": self.code.value if isinstance(self.code, FieldErrorCode) else self.code,
            "message": self.message,
        }
        if self.expected is not None:
            result["expected"] = self.expected
        if self.received is not None:
            result["received"] = self.received
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldError":
        """Create FieldError from dict."""
        code = data["code"]
        if isinstance(code, str):
            code = FieldErrorCode(code)
        return cls(
            code=code,
            message=data["message"],
            expected=data.get("expected"),
            received=data.get("received"),
        )


ErrorEntries = Union[
    Mapping[str, Iterable[FieldError]],
    Iterable[Tuple[str, Iterable[FieldError]]],
]


class ErrorCollection:
    """Ordered multi-map from field name to the errors recorded for it.

    Errors are never overwritten. Appending to a new name creates it;
    appending to an existing name adds to the end. Building from a list of
    ``(name, errors)`` pairs that repeats a name keeps every error, in the
    order encountered. Looking up a name with no errors yields an empty list.

    Examples:
        >>> errors = ErrorCollection([
        ...     ("key", [FieldError.required_missing()]),
        ...     ("key", [FieldError.validation_failed("Too short.")]),
        ... ])
        >>> len(errors["key"])
        2
        >>> errors["other"]
        []
        >>> errors.append("other", FieldError.validation_failed("Nope."))
        >>> errors.messages("other")
        ['Nope.']
    """

    def __init__(self, entries: Optional[ErrorEntries] = None) -> None:
        self._errors: Dict[str, List[FieldError]] = {}
        if entries is None:
            return
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        for name, errors in pairs:
            self.extend(name, errors)

    def append(self, name: str, error: FieldError) -> None:
        """Record one more error for ``name``."""
        self._errors.setdefault(name, []).append(error)

    def extend(self, name: str, errors: Iterable[FieldError]) -> None:
        """Record several errors for ``name``, preserving their order."""
        for error in errors:
            self.append(name, error)

    def merge(self, other: "ErrorCollection") -> "ErrorCollection":
        """Return a new collection holding this one's errors followed by ``other``'s.

        Neither input is modified. Names are concatenated key-wise.
        """
        merged = ErrorCollection(self.items())
        for name, errors in other.items():
            merged.extend(name, errors)
        return merged

    def messages(self, name: str) -> List[str]:
        return [error.message for error in self._errors.get(name, [])]

    @property
    def total(self) -> int:
        """Number of errors across every field."""
        return sum(len(errors) for errors in self._errors.values())

    def keys(self) -> List[str]:
        return list(self._errors)

    def items(self) -> List[Tuple[str, List[FieldError]]]:
        return [(name, list(errors)) for name, errors in self._errors.items()]

    def __getitem__(self, name: str) -> List[FieldError]:
        return list(self._errors.get(name, []))

    def __contains__(self, name: object) -> bool:
        return name in self._errors

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._errors))

    def __len__(self) -> int:
        return len(self._errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCollection):
            return NotImplemented
        return self._errors == other._errors

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ErrorCollection({self._errors!r})"

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """Convert to dict for serialization."""
        return {
            name: [error.to_dict() for error in errors]
            for name, errors in self._errors.items()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, List[Dict[str, Any]]]) -> "ErrorCollection":
        """Create ErrorCollection from dict."""
        return cls(
            (name, [FieldError.from_dict(error) for error in errors])
            for name, errors in data.items()
        )


class FormValidationError(Exception):
    """Raised by ``FormResult.unwrap()`` when the submitted data was invalid.

    This is user input error: the caller should redisplay the form with
    ``errors``.

    Attributes:
        errors: Every field error found in the submission
    """

    def __init__(self, errors: ErrorCollection, message: Optional[str] = None):
        self.errors = errors
        super().__init__(
            message or f"Validation failed for fields: {', '.join(errors.keys())}"
        )


class FormConstructionError(Exception):
    """A Form's conversion function rejected already-validated data.

    This signals a bug in the Form declaration (for instance reading a field
    that is neither required nor checked for absence), not a user input
    problem, and retrying with the same schema will not help.

    Attributes:
        form_name: Name of the Form class whose conversion failed, if known
    """

    def __init__(self, message: str, form_name: Optional[str] = None):
        self.form_name = form_name
        super().__init__(message)


class UnsupportedSchemaError(ValueError):
    """A JSON Schema document uses a construct formbind cannot express.

    Attributes:
        path: JSON pointer-style location of the offending construct
    """

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


__all__ = [
    "FieldError",
    "ErrorCollection",
    "FormValidationError",
    "FormConstructionError",
    "UnsupportedSchemaError",
]
