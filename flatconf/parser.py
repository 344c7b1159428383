"""Single-pass flattener for brace-nested configuration text.

Responsibilities:
- Walk the input one character at a time and record `;`-terminated statements.
- Track container nesting with a `/`-joined path accumulator.
- Strip surrounding quotes from quoted values.

Key public functions:
- `parse`: flatten a document into a `path -> value` mapping.
- `iter_statements`: yield recorded statements in document order.
"""

from __future__ import annotations

from collections.abc import Iterator

PATH_SEPARATOR = "/"

_TERMINATOR = ";"
_OPEN_CONTAINER = "{"
_CLOSE_CONTAINER = "}"
_QUOTE = '"'


def validate_delimiter(delimiter: str | None) -> str | None:
    """Return a usable field delimiter or raise for invalid values.

    Args:
        delimiter: `None` for whitespace mode, otherwise exactly one character.

    Raises:
        ValueError: If the delimiter is not a single character.
    """

    if delimiter is None:
        return None
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character, got {delimiter!r}.")
    return delimiter


def step_up(path: str, segment: str) -> str:
    """Return `path` extended by one container segment.

    Empty segments never extend a non-empty path.
    """

    if not path:
        return segment
    if not segment:
        return path
    return f"{path}{PATH_SEPARATOR}{segment}"


def step_down(path: str) -> str:
    """Return `path` without its last segment; a single segment becomes empty."""

    head, separator, _ = path.rpartition(PATH_SEPARATOR)
    if not separator:
        return ""
    return head


def finalize_token(token: str) -> str:
    """Convert a buffered statement token into its recorded value."""

    if token.startswith(_QUOTE):
        if token.endswith(_QUOTE) and len(token) > 2:
            return token[1:-1]
        return ""
    return token


def iter_statements(text: str, delimiter: str | None = None) -> Iterator[tuple[str, str]]:
    """Yield `(path, value)` for every terminated statement in document order.

    Repeated paths are yielded each time they are assigned. Tokens that are
    never terminated by `;` are not yielded.

    Args:
        text: Complete document text.
        delimiter: Optional field delimiter replacing whitespace as separator.

    Raises:
        TypeError: If `text` is not a string.
        ValueError: If `delimiter` is not a single character.
    """

    if not isinstance(text, str):
        raise TypeError(f"Can only parse str, got {type(text).__name__}")
    delimiter = validate_delimiter(delimiter)

    current_path = ""
    buffer: list[str] = []
    in_quote = False

    for character in text:
        if character == _TERMINATOR:
            yield current_path, finalize_token("".join(buffer))
            in_quote = False
            buffer.clear()
            current_path = step_down(current_path)
            continue
        if character == _CLOSE_CONTAINER:
            current_path = step_down(current_path)
            buffer.clear()
            continue
        if character == _OPEN_CONTAINER:
            current_path = step_up(current_path, "".join(buffer))
            buffer.clear()
            continue
        if character == _QUOTE:
            in_quote = True
        elif delimiter is not None:
            if character == delimiter:
                current_path = step_up(current_path, "".join(buffer))
                buffer.clear()
                continue
            if character.isspace() and not in_quote:
                continue
        elif character.isspace() and not in_quote:
            current_path = step_up(current_path, "".join(buffer))
            buffer.clear()
            continue

        buffer.append(character)


def parse(text: str, delimiter: str | None = None) -> dict[str, str]:
    """Flatten a configuration document into a `path -> value` mapping.

    Malformed input never raises; it yields partial or empty results. When a
    path is assigned more than once the last value wins. The returned mapping
    is ordered by key.
    """

    values: dict[str, str] = {}
    for path, value in iter_statements(text, delimiter):
        values[path] = value
    return dict(sorted(values.items()))


__all__ = [
    "PATH_SEPARATOR",
    "finalize_token",
    "iter_statements",
    "parse",
    "step_down",
    "step_up",
    "validate_delimiter",
]
