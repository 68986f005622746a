"""Delimited-string codec for list-typed profile fields.

Profile lists are stored as a single column: elements joined by ``,`` with
literal commas written as ``\\,`` and literal backslashes as ``\\\\``. Empty
elements never reach storage and never come back out of it.
"""

from collections.abc import Iterable

DELIMITER = ","
ESCAPE = "\\"


def escape_item(item: str) -> str:
    """Escape the escape character, then the delimiter."""
    return item.replace(ESCAPE, ESCAPE * 2).replace(DELIMITER, ESCAPE + DELIMITER)


def encode_profile_field(items: Iterable[str]) -> str:
    """Join items into the stored representation, dropping empty ones."""
    return DELIMITER.join(escape_item(item) for item in items if item)


def decode_profile_field(value: str | None) -> list[str]:
    """
    Split a stored field back into its items.

    Both ``""`` and ``None`` decode to ``[]``. A trailing lone escape
    character is kept literally.
    """
    if not value:
        return []

    items: list[str] = []
    current: list[str] = []
    chars = iter(value)
    for char in chars:
        if char == ESCAPE:
            nxt = next(chars, None)
            current.append(ESCAPE if nxt is None else nxt)
        elif char == DELIMITER:
            items.append("".join(current))
            current = []
        else:
            current.append(char)
    items.append("".join(current))

    return [item for item in items if item]
