"""Typed binding of a Fieldset to an application type.

A Form subclass declares a ``fieldset`` and a ``from_validated`` classmethod
that builds an instance from validated values. ``validating`` runs the
Fieldset and, only if every field passed, the conversion.

The outcome is an explicit FormResult with three distinct states:
- valid: the typed instance was built
- invalid: the submission failed validation; ``errors`` says why
- construction_failed: ``from_validated`` rejected data that had already
  passed validation. This is a bug in the Form declaration, not user error.

Usage:
    >>> from dataclasses import dataclass
    >>> from typing import Optional
    >>> from formbind.field import DoubleField, IntegerField, StringField
    >>> @dataclass
    ... class SimpleForm(Form):
    ...     string: str
    ...     integer: int
    ...     double: Optional[float]
    ...
    ...     fieldset = Fieldset({
    ...         "string": StringField(),
    ...         "integer": IntegerField(),
    ...         "double": DoubleField(),
    ...     }, requiring=["string", "integer"])
    ...
    ...     @classmethod
    ...     def from_validated(cls, values):
    ...         double = values.get("double")
    ...         return cls(
    ...             string=values["string"].as_string(),
    ...             integer=values["integer"].as_int(),
    ...             double=double.as_double() if double else None,
    ...         )
    >>> SimpleForm.validating({"string": "String", "integer": 1}).unwrap()
    SimpleForm(string='String', integer=1, double=None)
    >>> SimpleForm.validating({"string": "String"}).status
    <FormResultStatus.INVALID: 'invalid'>
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Generic, Optional, Type, TypeVar

from formbind.errors import ErrorCollection, FormConstructionError, FormValidationError
from formbind.fieldset import ContentAccessor, Fieldset, FieldsetValidationResult
from formbind.value import Value, ValueSet

logger = logging.getLogger(__name__)

F = TypeVar("F", bound="Form")


class FormResultStatus(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    CONSTRUCTION_FAILED = "construction_failed"


@dataclass(frozen=True)
class FormResult(Generic[F]):
    """Outcome of ``Form.validating``.

    Attributes:
        status: Which of the three outcomes occurred
        validation: The underlying Fieldset result, always present (use it to
            redisplay the submission)
        form: The typed instance, only when status is VALID
        construction_error: Only when status is CONSTRUCTION_FAILED
    """
    status: FormResultStatus
    validation: FieldsetValidationResult
    form: Optional[F] = None
    construction_error: Optional[FormConstructionError] = None

    @property
    def ok(self) -> bool:
        return self.status is FormResultStatus.VALID

    @property
    def errors(self) -> ErrorCollection:
        return self.validation.errors

    def unwrap(self) -> F:
        """Return the typed instance or raise.

        Raises:
            FormValidationError: If the submission was invalid
            FormConstructionError: If the conversion rejected validated data
        """
        if self.status is FormResultStatus.VALID:
            return self.form  # type: ignore[return-value]
        if self.status is FormResultStatus.INVALID:
            raise FormValidationError(self.errors)
        if self.construction_error is None:
            raise FormConstructionError("Form construction failed")
        raise self.construction_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization (the typed instance is omitted)."""
        result: Dict[str, Any] = {
            "ok": self.ok,
            "status": self.status.value,
            "validation": self.validation.to_dict(),
        }
        if self.construction_error is not None:
            result["constructionError"] = str(self.construction_error)
        return result


class Form(ABC):
    """Base class for typed forms.

    Subclasses set ``fieldset`` and implement ``from_validated``. The
    conversion receives only values that passed validation: required fields
    are always present, optional fields only when submitted. Any exception
    raised from it is reported as a construction failure; raise
    FormConstructionError to choose the message.
    """
    fieldset: ClassVar[Fieldset]

    @classmethod
    @abstractmethod
    def from_validated(cls: Type[F], values: ValueSet) -> F:
        """Build an instance from validated values."""

    @classmethod
    def validating(cls: Type[F], content: ContentAccessor) -> "FormResult[F]":
        """Validate ``content`` and, if valid, convert it to an instance.

        Args:
            content: Mapping (or object Value) from field name to raw value

        Returns:
            FormResult; ``from_validated`` is never called for invalid input
        """
        validation = cls.fieldset.validate(content)
        if not validation.is_valid:
            return FormResult(status=FormResultStatus.INVALID, validation=validation)

        try:
            form = cls.from_validated(dict(validation.values))
        except FormConstructionError as exc:
            if exc.form_name is None:
                exc.form_name = cls.__name__
            logger.exception("%s rejected validated data", cls.__name__)
            return FormResult(
                status=FormResultStatus.CONSTRUCTION_FAILED,
                validation=validation,
                construction_error=exc,
            )
        except Exception as exc:
            error = FormConstructionError(
                f"{cls.__name__}.from_validated rejected validated data: {exc!r}",
                form_name=cls.__name__,
            )
            error.__cause__ = exc
            logger.exception("%s rejected validated data", cls.__name__)
            return FormResult(
                status=FormResultStatus.CONSTRUCTION_FAILED,
                validation=validation,
                construction_error=error,
            )

        return FormResult(status=FormResultStatus.VALID, validation=validation, form=form)

    @classmethod
    def render(cls, result: Optional["FormResult[Any]"] = None) -> Value:
        """Render the form's fields, optionally with a previous submission."""
        return cls.fieldset.render(result.validation if result is not None else None)


__all__ = [
    "Form",
    "FormResult",
    "FormResultStatus",
]
