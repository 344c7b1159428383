"""Parsed configuration document and its value-map adapter.

Responsibilities:
- Own the raw text, delimiter and flattened values of one parsed document.
- Expose sorted iteration, membership and default-inserting key access.
- Provide typed get/set on top of `flatconf.conversion`.

Key types:
- `ParsedConfig`: result of parsing one document.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .conversion import (
    convert_from_string,
    convert_to_string,
    converter_for,
    zero_value,
)
from .parser import PATH_SEPARATOR, parse, validate_delimiter


class ParsedConfig:
    """Flattened `path -> value` view of a configuration document.

    A config is falsy when it was built from empty text or produced no
    entries. Iteration yields `(path, value)` pairs in sorted key order.
    """

    __slots__ = ("_raw_text", "_delimiter", "_values")

    def __init__(self, text: str = "", delimiter: str | None = None) -> None:
        """Parse `text` immediately; with no arguments the config is empty."""

        self._raw_text = text
        self._delimiter = validate_delimiter(delimiter)
        self._values: dict[str, str] = parse(text, self._delimiter)

    @property
    def raw_text(self) -> str:
        """Exact text the config was built from."""

        return self._raw_text

    @property
    def delimiter(self) -> str | None:
        """Custom field delimiter, or `None` in whitespace mode."""

        return self._delimiter

    @property
    def values(self) -> dict[str, str]:
        """Sorted copy of the flattened values."""

        return self.as_dict()

    def __getitem__(self, key: str) -> str:
        return self._values.get(key, "")

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(
                f"Values must be strings, got {type(value).__name__}; use `set_value`."
            )
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __bool__(self) -> bool:
        return bool(self._raw_text) and bool(self._values)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        for key in sorted(self._values):
            yield key, self._values[key]

    def __reversed__(self) -> Iterator[tuple[str, str]]:
        for key in sorted(self._values, reverse=True):
            yield key, self._values[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedConfig):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ParsedConfig(entries={len(self._values)}, delimiter={self._delimiter!r})"

    def __copy__(self) -> ParsedConfig:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> ParsedConfig:
        return self.copy()

    def contains(self, key: str) -> bool:
        """Return whether `key` has a recorded value."""

        return key in self._values

    def size(self) -> int:
        """Return the number of recorded entries."""

        return len(self._values)

    def keys(self) -> list[str]:
        """Return recorded paths in sorted order."""

        return sorted(self._values)

    def items(self) -> list[tuple[str, str]]:
        """Return `(path, value)` pairs in sorted order."""

        return list(self)

    def as_dict(self) -> dict[str, str]:
        """Return a plain dict copy ordered by key."""

        return dict(self)

    def setdefault(self, key: str, default: str = "") -> str:
        """Return the value for `key`, inserting `default` when it is absent."""

        return self._values.setdefault(key, default)

    def copy(self) -> ParsedConfig:
        """Return an independent copy of the text, delimiter and values."""

        clone = ParsedConfig.__new__(ParsedConfig)
        clone._raw_text = self._raw_text
        clone._delimiter = self._delimiter
        clone._values = dict(self._values)
        return clone

    def take(self) -> ParsedConfig:
        """Move the contents into a new config and leave this one empty."""

        moved = ParsedConfig.__new__(ParsedConfig)
        moved._raw_text = self._raw_text
        moved._delimiter = self._delimiter
        moved._values = self._values
        self._raw_text = ""
        self._values = {}
        return moved

    def get_value(self, key: str, value_type: type = str) -> Any:
        """Return the value converted to `value_type`.

        Absent keys and failed conversions both return the zero sentinel of
        the type (`""`, `0`, `0.0`, `False`).
        """

        converted = self.try_get_value(key, value_type)
        if converted is None:
            return zero_value(value_type)
        return converted

    def try_get_value(self, key: str, value_type: type = str) -> Any | None:
        """Return the converted value, or `None` when absent or not convertible."""

        converter_for(value_type)
        if key not in self._values:
            return None
        return convert_from_string(self._values[key], value_type)

    def require_value(self, key: str, value_type: type = str) -> Any:
        """Return the converted value or raise.

        Raises:
            KeyError: If `key` has no recorded value.
            ValueError: If the stored text cannot be converted to `value_type`.
        """

        if key not in self._values:
            raise KeyError(key)
        converted = convert_from_string(self._values[key], value_type)
        if converted is None:
            raise ValueError(
                f"`{key}` value {self._values[key]!r} is not a valid {value_type.__name__}."
            )
        return converted

    def set_value(self, key: str, value: object) -> None:
        """Store `value` under `key`, formatting non-string scalars as text."""

        self._values[key] = convert_to_string(value)

    def subtree(self, prefix: str) -> ParsedConfig:
        """Return entries below container `prefix` with keys relative to it.

        An empty prefix names the root and returns a copy of every entry.
        """

        container = prefix.strip(PATH_SEPARATOR)
        if not container:
            return self.copy()
        marker = container + PATH_SEPARATOR
        child = ParsedConfig.__new__(ParsedConfig)
        child._raw_text = self._raw_text
        child._delimiter = self._delimiter
        child._values = {
            key[len(marker):]: value
            for key, value in self._values.items()
            if key.startswith(marker)
        }
        return child


__all__ = ["ParsedConfig"]
