"""Immutable tagged-union representation of input and output data.

Every datum that crosses the formbind boundary, whether it is raw input from a
request body or a coerced value handed to a Form, is a Value. A Value is one of
null, bool, int (signed 64-bit), uint (unsigned 64-bit), double, string, an
ordered array of Values or an object mapping strings to Values.

The ``as_*`` accessors are lenient and meant for reading data back (for
instance to redisplay a submission); they never raise and return ``None`` when
no sensible conversion exists. Strict coercion for validation lives in
``formbind.coercion``.

Usage:
    >>> v = Value.of({"name": "Peter", "age": 13})
    >>> v.kind
    <ValueKind.OBJECT: 'object'>
    >>> v.get("age").as_string()
    '13'
    >>> Value.of(3.4).as_int() is None
    True
"""

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from typing_extensions import TypeAlias

from formbind.types import ValueKind

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

TRUE_TOKENS = frozenset({"true", "t"})
FALSE_TOKENS = frozenset({"false", "f"})


def parse_integer(text: str) -> Optional[int]:
    """Parse a plain integer numeral such as ``"42"`` or ``"-42"``.

    Whitespace, underscores, fractional parts and exponents are rejected.
    """
    if not _INTEGER_LITERAL.fullmatch(text):
        return None
    return int(text)


def parse_double(text: str) -> Optional[float]:
    """Parse a decimal floating literal such as ``"42.42"`` or ``"1e-3"``.

    Spelled-out specials (``"inf"``, ``"nan"``, ``"infinity"``) are rejected; a
    literal past float range such as ``"1e999"`` parses to infinity.
    """
    if not _FLOAT_LITERAL.fullmatch(text):
        return None
    return float(text)


def _signed(number: int) -> Optional[int]:
    return number if INT64_MIN <= number <= INT64_MAX else None


def _unsigned(number: int) -> Optional[int]:
    return number if 0 <= number <= UINT64_MAX else None


@dataclass(frozen=True, eq=False, repr=False)
class Value:
    """A single immutable datum.

    Build instances with ``Value.of`` rather than the constructor; ``of``
    normalises native Python data and maps integers onto the 64-bit kinds.

    Equality is structural. The numeric kinds compare by numeric value, so an
    int 42 equals a double 42.0, while a bool never equals a number.

    Attributes:
        kind: Which variant this Value holds
        payload: The wrapped data (tuple of Values for arrays, read-only
            mapping of Values for objects)
    """
    kind: ValueKind
    payload: Any = None

    @classmethod
    def of(cls, obj: Any) -> "Value":
        """Convert native Python data into a Value.

        Args:
            obj: None, bool, int, float, str, list/tuple, a str-keyed mapping,
                or an existing Value (returned unchanged)

        Integers wider than 64 bits become doubles, so they never coerce to
        an integer kind.

        Raises:
            TypeError: If obj (or something nested in it) has no Value form
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return NULL
        if isinstance(obj, bool):
            return cls(ValueKind.BOOL, obj)
        if isinstance(obj, int):
            if INT64_MIN <= obj <= INT64_MAX:
                return cls(ValueKind.INT, obj)
            if INT64_MAX < obj <= UINT64_MAX:
                return cls(ValueKind.UINT, obj)
            # Wider integers degrade to a double, like a JSON number would
            try:
                return cls(ValueKind.DOUBLE, float(obj))
            except OverflowError:
                return cls(ValueKind.DOUBLE, math.inf if obj > 0 else -math.inf)
        if isinstance(obj, float):
            return cls(ValueKind.DOUBLE, obj)
        if isinstance(obj, str):
            return cls(ValueKind.STRING, obj)
        if isinstance(obj, Mapping):
            items: Dict[str, Value] = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeError(f"Object keys must be strings, got {type(key).__name__}")
                items[key] = cls.of(item)
            return cls(ValueKind.OBJECT, MappingProxyType(items))
        if isinstance(obj, (list, tuple)):
            return cls(ValueKind.ARRAY, tuple(cls.of(item) for item in obj))
        raise TypeError(f"Cannot represent {type(obj).__name__} as a Value")

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def as_string(self) -> Optional[str]:
        """Read back as a string; numbers and booleans are stringified."""
        if self.kind is ValueKind.STRING:
            return self.payload
        if self.kind is ValueKind.BOOL:
            return "true" if self.payload else "false"
        if self.kind in (ValueKind.INT, ValueKind.UINT):
            return str(self.payload)
        if self.kind is ValueKind.DOUBLE:
            return repr(self.payload)
        return None

    def as_int(self) -> Optional[int]:
        """Read back as a signed 64-bit integer; non-integral numbers give None."""
        if self.kind in (ValueKind.INT, ValueKind.UINT):
            return _signed(self.payload)
        if self.kind is ValueKind.DOUBLE:
            return _signed(int(self.payload)) if self.payload.is_integer() else None
        if self.kind is ValueKind.STRING:
            number = parse_integer(self.payload)
            return None if number is None else _signed(number)
        if self.kind is ValueKind.BOOL:
            return int(self.payload)
        return None

    def as_uint(self) -> Optional[int]:
        """Read back as an unsigned 64-bit integer; negatives give None."""
        if self.kind is ValueKind.UINT:
            return self.payload
        if self.kind is ValueKind.STRING:
            number = parse_integer(self.payload)
            return None if number is None else _unsigned(number)
        number = self.as_int()
        return None if number is None else _unsigned(number)

    def as_double(self) -> Optional[float]:
        if self.kind.is_numeric:
            return float(self.payload)
        if self.kind is ValueKind.STRING:
            return parse_double(self.payload)
        if self.kind is ValueKind.BOOL:
            return 1.0 if self.payload else 0.0
        return None

    def as_bool(self) -> Optional[bool]:
        """Read back as a boolean using the "true"/"t"/1 and "false"/"f"/0 tokens."""
        if self.kind is ValueKind.BOOL:
            return self.payload
        if self.kind is ValueKind.STRING:
            if self.payload in TRUE_TOKENS:
                return True
            if self.payload in FALSE_TOKENS:
                return False
            return None
        if self.kind.is_numeric:
            if self.payload == 1:
                return True
            if self.payload == 0:
                return False
        return None

    def as_array(self) -> Optional[Tuple["Value", ...]]:
        return self.payload if self.kind is ValueKind.ARRAY else None

    def as_object(self) -> Optional[Mapping[str, "Value"]]:
        return self.payload if self.kind is ValueKind.OBJECT else None

    def get(self, key: str, default: Optional["Value"] = None) -> Optional["Value"]:
        """Look up ``key`` in an object Value; any other kind yields ``default``.

        This makes an object Value usable directly as Fieldset input.
        """
        if self.kind is not ValueKind.OBJECT:
            return default
        return self.payload.get(key, default)

    def to_python(self) -> Any:
        """Unwrap into plain Python data (dicts, lists and scalars)."""
        if self.kind is ValueKind.ARRAY:
            return [item.to_python() for item in self.payload]
        if self.kind is ValueKind.OBJECT:
            return {key: item.to_python() for key, item in self.payload.items()}
        return self.payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        if self.kind.is_numeric and other.kind.is_numeric:
            return self.payload == other.payload
        if self.kind is not other.kind:
            return False
        if self.kind is ValueKind.OBJECT:
            return dict(self.payload) == dict(other.payload)
        return self.payload == other.payload

    def __hash__(self) -> int:
        if self.kind is ValueKind.OBJECT:
            return hash(frozenset(self.payload.items()))
        if self.kind is ValueKind.BOOL:
            return hash((ValueKind.BOOL, self.payload))
        return hash(self.payload)

    def __repr__(self) -> str:
        return f"<Value {self.kind.value}: {self.to_python()!r}>"


NULL = Value(ValueKind.NULL)

# Mapping from field name to Value, as produced by a successful validation
ValueSet: TypeAlias = Dict[str, Value]


__all__ = [
    "Value",
    "ValueSet",
    "NULL",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "parse_integer",
    "parse_double",
]
