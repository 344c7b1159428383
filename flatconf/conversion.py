"""Typed conversion between stored string values and scalar Python types.

Responsibilities:
- Select a parse/format pair per target type from a closed converter table.
- Scan numbers the way a formatted stream extractor does (leading literal only).
- Accept permissive boolean tokens for typed lookups.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import re
from typing import Any


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "false", "no", "off"})

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Args:
        value: Arbitrary input value.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def parse_permissive_boolean(value: object) -> bool | None:
    """Parse a permissive boolean token and return `None` for invalid values."""

    if isinstance(value, bool):
        return value

    normalized = normalize_optional_string(value)
    if normalized is None:
        return None

    token = normalized.lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    return None


def scan_int(text: str) -> int | None:
    """Read the leading integer literal of `text`; trailing characters are ignored."""

    match = _INT_PREFIX.match(text)
    if match is None:
        return None
    return int(match.group(1))


def scan_float(text: str) -> float | None:
    """Read the leading decimal literal of `text`; trailing characters are ignored."""

    match = _FLOAT_PREFIX.match(text)
    if match is None:
        return None
    return float(match.group(1))


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class ValueConverter:
    """Parse/format pair for one scalar type.

    Attributes:
        parse: Convert stored text to the target type, `None` on failure.
        format: Convert a typed value to its stored text.
        zero: Sentinel returned by lenient lookups on failure.
    """

    parse: Callable[[str], Any]
    format: Callable[[Any], str]
    zero: Any


_CONVERTERS: dict[type, ValueConverter] = {
    str: ValueConverter(parse=lambda text: text, format=lambda value: value, zero=""),
    int: ValueConverter(parse=scan_int, format=str, zero=0),
    float: ValueConverter(parse=scan_float, format=repr, zero=0.0),
    bool: ValueConverter(parse=parse_permissive_boolean, format=_format_bool, zero=False),
}


def converter_for(value_type: type) -> ValueConverter:
    """Return the converter registered for `value_type`.

    Raises:
        TypeError: If no converter supports the requested type.
    """

    converter = _CONVERTERS.get(value_type)
    if converter is None:
        supported = ", ".join(sorted(kind.__name__ for kind in _CONVERTERS))
        raise TypeError(
            f"Unsupported value type `{getattr(value_type, '__name__', value_type)}`; "
            f"supported: {supported}."
        )
    return converter


def convert_from_string(text: str, value_type: type) -> Any | None:
    """Convert stored text to `value_type`, returning `None` when conversion fails."""

    return converter_for(value_type).parse(text)


def convert_to_string(value: object) -> str:
    """Format a typed value into its stored text representation."""

    # bool is checked before int because it subclasses int
    for kind in (bool, str, int, float):
        if isinstance(value, kind):
            return converter_for(kind).format(value)
    raise TypeError(f"Unsupported value type `{type(value).__name__}`.")


def zero_value(value_type: type) -> Any:
    """Return the lenient-lookup sentinel for `value_type`."""

    return converter_for(value_type).zero


__all__ = [
    "ValueConverter",
    "convert_from_string",
    "convert_to_string",
    "converter_for",
    "normalize_optional_string",
    "parse_permissive_boolean",
    "scan_float",
    "scan_int",
    "zero_value",
]
