"""Strict coercion of raw Values into a field's target kind.

These are the rules a Field applies before running its validators. They are
deliberately narrower than the lenient ``Value.as_*`` accessors:

- STRING accepts only strings; numbers are never stringified.
- INT accepts ints, integral doubles (3.0) and integer numerals ("-42");
  3.4 and "3.4" are rejected.
- UINT applies the INT rules, then rejects anything below zero.
- DOUBLE accepts doubles, widens ints and parses decimal floating literals;
  the words "inf" and "nan" are not literals, though "1e999" parses to inf.
- BOOL accepts booleans, "true"/"t"/1 and "false"/"f"/0 (case-sensitive);
  1.0 and 0.0 count as 1 and 0.
- NULL never coerces.

Every function is total and deterministic: it returns the coerced Value, or
``None`` when no coercion exists.

Usage:
    >>> from formbind.types import ValueKind
    >>> coerce(Value.of("42"), ValueKind.INT)
    <Value int: 42>
    >>> coerce(Value.of("-42"), ValueKind.UINT) is None
    True
"""

from typing import Callable, Dict, Optional

from formbind.types import ValueKind
from formbind.value import (
    FALSE_TOKENS,
    INT64_MAX,
    INT64_MIN,
    TRUE_TOKENS,
    UINT64_MAX,
    Value,
    parse_double,
    parse_integer,
)


def _integral(value: Value) -> Optional[int]:
    """Extract an exact integer from an int, integral double or numeral string."""
    if value.kind in (ValueKind.INT, ValueKind.UINT):
        return value.payload
    if value.kind is ValueKind.DOUBLE:
        return int(value.payload) if value.payload.is_integer() else None
    if value.kind is ValueKind.STRING:
        return parse_integer(value.payload)
    return None


def coerce_string(value: Value) -> Optional[Value]:
    return value if value.kind is ValueKind.STRING else None


def coerce_int(value: Value) -> Optional[Value]:
    number = _integral(value)
    if number is None or not INT64_MIN <= number <= INT64_MAX:
        return None
    return Value(ValueKind.INT, number)


def coerce_uint(value: Value) -> Optional[Value]:
    number = _integral(value)
    if number is None or not 0 <= number <= UINT64_MAX:
        return None
    return Value(ValueKind.UINT, number)


def coerce_double(value: Value) -> Optional[Value]:
    if value.kind.is_numeric:
        return Value(ValueKind.DOUBLE, float(value.payload))
    if value.kind is ValueKind.STRING:
        number = parse_double(value.payload)
        return None if number is None else Value(ValueKind.DOUBLE, number)
    return None


def coerce_bool(value: Value) -> Optional[Value]:
    if value.kind is ValueKind.BOOL:
        return value
    if value.kind is ValueKind.STRING:
        if value.payload in TRUE_TOKENS:
            return Value(ValueKind.BOOL, True)
        if value.payload in FALSE_TOKENS:
            return Value(ValueKind.BOOL, False)
        return None
    if value.kind.is_numeric and value.payload in (0, 1):
        return Value(ValueKind.BOOL, value.payload == 1)
    return None


COERCERS: Dict[ValueKind, Callable[[Value], Optional[Value]]] = {
    ValueKind.STRING: coerce_string,
    ValueKind.INT: coerce_int,
    ValueKind.UINT: coerce_uint,
    ValueKind.DOUBLE: coerce_double,
    ValueKind.BOOL: coerce_bool,
}


def coerce(value: Value, kind: ValueKind) -> Optional[Value]:
    """Coerce ``value`` to ``kind``.

    Args:
        value: The raw Value to convert
        kind: A scalar target kind

    Returns:
        The coerced Value, or None if the value cannot be coerced

    Raises:
        ValueError: If ``kind`` is not a scalar target kind
    """
    try:
        coercer = COERCERS[kind]
    except KeyError:
        raise ValueError(f"Cannot coerce to non-scalar kind '{kind.value}'") from None
    return coercer(value)


__all__ = [
    "coerce",
    "coerce_string",
    "coerce_int",
    "coerce_uint",
    "coerce_double",
    "coerce_bool",
    "COERCERS",
]
