"""Validator families, one per scalar target kind.

A validator is a stateless rule over a value that has already been coerced to
its family's kind. Configuration (a length, a bound, an override message) is
captured at construction; ``check`` has no side effects, so validators can be
shared freely between fields and requests.

Families:
- String: MinimumLengthValidator, MaximumLengthValidator, ExactLengthValidator,
  EmailValidator
- Integer: IntegerMinimumValidator, IntegerMaximumValidator, IntegerExactValidator
- Unsigned integer: UnsignedIntegerMinimumValidator,
  UnsignedIntegerMaximumValidator, UnsignedIntegerExactValidator
- Double: DoubleMinimumValidator, DoubleMaximumValidator, DoubleExactValidator
- Any kind: CustomValidator, wrapping a caller-supplied predicate

Bounds are inclusive. Double comparisons allow ``epsilon`` of slack.

Usage:
    >>> v = MaximumLengthValidator(characters=6)
    >>> v.check(Value.of("maxi string")).passed
    False
    >>> UnsignedIntegerMinimumValidator(18, message="You must be 18+.").check(Value.of(11)).message
    'You must be 18+.'
"""

import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Optional

from formbind import messages
from formbind.types import SCALAR_KINDS, ValueKind
from formbind.value import Value

DEFAULT_EPSILON = sys.float_info.epsilon

# Shape check only: local@domain where the domain has at least one dot
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s.]+(\.[^@\s.]+)+")


@dataclass(frozen=True)
class ValidatorOutcome:
    """Result of running one validator.

    Attributes:
        passed: Whether the value satisfied the rule
        message: Failure message (None when passed)
    """
    passed: bool
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidatorOutcome":
        return PASSED

    @classmethod
    def failure(cls, message: str) -> "ValidatorOutcome":
        return cls(passed=False, message=message)


PASSED = ValidatorOutcome(passed=True)


class Validator(ABC):
    """Base class for every validator.

    Subclasses set ``kind`` to the scalar kind they check and implement
    ``check``. The value passed to ``check`` is always already coerced to
    ``kind``.
    """
    kind: ClassVar[ValueKind]
    message: Optional[str] = None

    @abstractmethod
    def check(self, value: Value) -> ValidatorOutcome:
        """Check a coerced value against this rule."""

    def json_schema(self) -> Dict[str, Any]:
        """JSON Schema keywords expressing this rule; empty if not expressible."""
        return {}

    def _verdict(self, passed: bool, default_message: str) -> ValidatorOutcome:
        if passed:
            return PASSED
        return ValidatorOutcome.failure(self.message or default_message)


class StringValidator(Validator):
    kind = ValueKind.STRING


class IntegerValidator(Validator):
    kind = ValueKind.INT


class UnsignedIntegerValidator(Validator):
    kind = ValueKind.UINT


class DoubleValidator(Validator):
    kind = ValueKind.DOUBLE


# String family

class _LengthBound:
    characters: int

    def __post_init__(self) -> None:
        if self.characters < 0:
            raise ValueError(f"characters must be non-negative, got {self.characters}")


@dataclass(frozen=True)
class MinimumLengthValidator(_LengthBound, StringValidator):
    characters: int
    message: Optional[str] = None

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(
            len(value.payload) >= self.characters,
            messages.MINIMUM_LENGTH.format(characters=self.characters),
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"minLength": self.characters}


@dataclass(frozen=True)
class MaximumLengthValidator(_LengthBound, StringValidator):
    characters: int
    message: Optional[str] = None

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(
            len(value.payload) <= self.characters,
            messages.MAXIMUM_LENGTH.format(characters=self.characters),
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"maxLength": self.characters}


@dataclass(frozen=True)
class ExactLengthValidator(_LengthBound, StringValidator):
    characters: int
    message: Optional[str] = None

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(
            len(value.payload) == self.characters,
            messages.EXACT_LENGTH.format(characters=self.characters),
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"minLength": self.characters, "maxLength": self.characters}


@dataclass(frozen=True)
class EmailValidator(StringValidator):
    """Shape-based email check; not a full RFC 5322 parser."""
    message: Optional[str] = None

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(
            EMAIL_PATTERN.fullmatch(value.payload) is not None,
            messages.EMAIL,
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"format": "email"}


# Numeric families share their comparisons; only doubles get slack

class _Minimum:
    minimum: Any
    _slack: Any = 0

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(  # type: ignore[attr-defined]
            value.payload >= self.minimum - self._slack,
            messages.MINIMUM_VALUE.format(minimum=self.minimum),
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"minimum": self.minimum}


class _Maximum:
    maximum: Any
    _slack: Any = 0

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(  # type: ignore[attr-defined]
            value.payload <= self.maximum + self._slack,
            messages.MAXIMUM_VALUE.format(maximum=self.maximum),
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"maximum": self.maximum}


class _Exact:
    exact: Any
    _slack: Any = 0

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(  # type: ignore[attr-defined]
            value.payload == self.exact or abs(value.payload - self.exact) <= self._slack,
            messages.EXACT_VALUE.format(exact=self.exact),
        )

    def json_schema(self) -> Dict[str, Any]:
        return {"const": self.exact}


@dataclass(frozen=True)
class IntegerMinimumValidator(_Minimum, IntegerValidator):
    minimum: int
    message: Optional[str] = None


@dataclass(frozen=True)
class IntegerMaximumValidator(_Maximum, IntegerValidator):
    maximum: int
    message: Optional[str] = None


@dataclass(frozen=True)
class IntegerExactValidator(_Exact, IntegerValidator):
    exact: int
    message: Optional[str] = None


@dataclass(frozen=True)
class UnsignedIntegerMinimumValidator(_Minimum, UnsignedIntegerValidator):
    minimum: int
    message: Optional[str] = None


@dataclass(frozen=True)
class UnsignedIntegerMaximumValidator(_Maximum, UnsignedIntegerValidator):
    maximum: int
    message: Optional[str] = None


@dataclass(frozen=True)
class UnsignedIntegerExactValidator(_Exact, UnsignedIntegerValidator):
    exact: int
    message: Optional[str] = None


@dataclass(frozen=True)
class DoubleMinimumValidator(_Minimum, DoubleValidator):
    minimum: float
    epsilon: float = DEFAULT_EPSILON
    message: Optional[str] = None

    @property
    def _slack(self) -> float:  # type: ignore[override]
        return self.epsilon


@dataclass(frozen=True)
class DoubleMaximumValidator(_Maximum, DoubleValidator):
    maximum: float
    epsilon: float = DEFAULT_EPSILON
    message: Optional[str] = None

    @property
    def _slack(self) -> float:  # type: ignore[override]
        return self.epsilon


@dataclass(frozen=True)
class DoubleExactValidator(_Exact, DoubleValidator):
    exact: float
    epsilon: float = DEFAULT_EPSILON
    message: Optional[str] = None

    @property
    def _slack(self) -> float:  # type: ignore[override]
        return self.epsilon


@dataclass(frozen=True)
class CustomValidator(Validator):
    """Wrap a predicate over the coerced native value (str, int, float or bool).

    Examples:
        >>> even = CustomValidator(ValueKind.INT, lambda n: n % 2 == 0, message="Must be even.")
        >>> even.check(Value.of(3)).message
        'Must be even.'
    """
    kind: ValueKind  # type: ignore[misc]
    predicate: Callable[[Any], bool]
    message: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in SCALAR_KINDS:
            raise ValueError(f"CustomValidator needs a scalar kind, got '{self.kind}'")

    def check(self, value: Value) -> ValidatorOutcome:
        return self._verdict(bool(self.predicate(value.to_python())), messages.CUSTOM)


__all__ = [
    "DEFAULT_EPSILON",
    "ValidatorOutcome",
    "Validator",
    "StringValidator",
    "IntegerValidator",
    "UnsignedIntegerValidator",
    "DoubleValidator",
    "MinimumLengthValidator",
    "MaximumLengthValidator",
    "ExactLengthValidator",
    "EmailValidator",
    "IntegerMinimumValidator",
    "IntegerMaximumValidator",
    "IntegerExactValidator",
    "UnsignedIntegerMinimumValidator",
    "UnsignedIntegerMaximumValidator",
    "UnsignedIntegerExactValidator",
    "DoubleMinimumValidator",
    "DoubleMaximumValidator",
    "DoubleExactValidator",
    "CustomValidator",
]
