"""Value coercion helpers for shortcode attribute values.

Shortcode attributes always arrive as strings, while the builder wants
booleans for flags such as ``control`` and ``marker``.

Example:
    >>> from mapblock.utils.formatting import to_boolean
    >>> to_boolean("Yes")
    True
    >>> to_boolean("nope")
    False
"""

from __future__ import annotations

TRUTHY = frozenset({"1", "true", "yes", "on"})


def to_boolean(value: object) -> bool:
    """Coerce a shortcode attribute value to a boolean.

    Booleans pass through unchanged. Strings are trimmed and compared
    case-insensitively against "1", "true", "yes" and "on"; any other string
    is false. Numbers are true when non-zero and None is false.

    Args:
        value: Raw attribute value.

    Returns:
        The coerced boolean.
    """
    if isinstance(value, bool):
        return value

    if value is None:
        return False

    if isinstance(value, int | float):
        return value != 0

    return str(value).strip().lower() in TRUTHY
