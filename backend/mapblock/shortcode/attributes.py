"""Shortcode attribute tokenizing and per-shortcode attribute schemas.

The tokenizer follows the host's attribute grammar:

- ``key="value"``, ``key='value'`` and ``key=value`` are named attributes;
  keys are lower-cased and quoted values may contain spaces,
- ``"value"``, ``'value'`` and bare tokens are positional flags,
- non-breaking and zero-width spaces count as whitespace,
- backslash escapes inside values are decoded,
- a value that contains an unclosed HTML element is blanked.

Content written in a rich-text editor often has its quotes turned into
typographic quotes or HTML entities. ``normalize_quotes`` turns a fixed set
of those back into plain quotes before tokenizing.

The schemas (``MapBlockAttributes``, ``LayerAttributes`` and
``MarkerAttributes``) merge parsed attributes over their defaults and coerce
flags and numbers. They never reject user input: a value that cannot be
coerced falls back to the default. Unknown attributes are kept as extras.

Example:
    >>> from mapblock.shortcode import attributes
    >>> parsed = attributes.parse_atts('id="l1" name="My Shops" control=yes')
    >>> parsed.named
    {'id': 'l1', 'name': 'My Shops', 'control': 'yes'}
    >>> attributes.LayerAttributes.from_atts(parsed.named).control
    True
"""

from __future__ import annotations

import dataclasses
import logging
import re
import uuid
from typing import TYPE_CHECKING, Any, Self

import pydantic

from mapblock.utils import formatting

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = 16

_QUOTE_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("&#8220;", '"'),
    ("&Prime;", '"'),
    ("&#8221;", '"'),
    ("&#8243;", '"'),
    ("&#8217;", "'"),
    ("&#8242;", "'"),
    ("&nbsp;&raquo;", '"'),
    ("&#187;", '"'),
    ("&quot;", '"'),
    ("\u201c", '"'),
    ("\u201d", '"'),
    ("\u2033", '"'),
    ("\u00a0\u00bb", '"'),
    ("\u00bb", '"'),
    ("\u2019", "'"),
    ("\u2032", "'"),
)

_ATTRIBUTE_PATTERN = re.compile(
    r"""
    ([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)
    |
    ([\w-]+)\s*=\s*'([^']*)'(?:\s|$)
    |
    ([\w-]+)\s*=\s*([^\s'"]+)(?:\s|$)
    |
    "([^"]*)"(?:\s|$)
    |
    '([^']*)'(?:\s|$)
    |
    (\S+)(?:\s|$)
    """,
    re.VERBOSE,
)

_SPACES = re.compile("[\u00a0\u200b]+")
_ESCAPE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "v": "\v", "f": "\f", "a": "\a", "b": "\b"}
_BALANCED_HTML = re.compile(r"[^<]*(?:<[^>]*>[^<]*)*", re.DOTALL)


@dataclasses.dataclass(frozen=True)
class ParsedAttributes:
    """Tokenized shortcode attributes.

    Attributes:
        named: ``key=value`` attributes, keys lower-cased.
        positional: Values without a key, in order of appearance.
    """

    named: dict[str, str] = dataclasses.field(default_factory=dict)
    positional: list[str] = dataclasses.field(default_factory=list)

    def as_dict(self) -> dict[str, str]:
        """Flatten into one mapping, positional values keyed "0", "1", ..."""
        data = {str(index): value for index, value in enumerate(self.positional)}
        data.update(self.named)
        return data


def normalize_quotes(text: str) -> str:
    """Replace typographic quotes and quote entities with plain quotes.

    Args:
        text: Raw attribute text as written in the editor.

    Returns:
        The text with the known sequences replaced.
    """
    for sequence, replacement in _QUOTE_REPLACEMENTS:
        text = text.replace(sequence, replacement)

    return text


def _unescape(value: str) -> str:
    return _ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), value)


def _balanced(value: str) -> str:
    if "<" in value and not _BALANCED_HTML.fullmatch(value):
        return ""

    return value


def parse_atts(text: str) -> ParsedAttributes:
    """Tokenize the attribute text of a shortcode tag.

    Args:
        text: Everything between the tag name and the closing bracket.

    Returns:
        ParsedAttributes with named and positional values.
    """
    text = _SPACES.sub(" ", text)
    named: dict[str, str] = {}
    positional: list[str] = []

    for match in _ATTRIBUTE_PATTERN.finditer(text):
        if match.group(1):
            named[match.group(1).lower()] = _unescape(match.group(2))
        elif match.group(3):
            named[match.group(3).lower()] = _unescape(match.group(4))
        elif match.group(5):
            named[match.group(5).lower()] = _unescape(match.group(6))
        elif match.group(7) is not None:
            positional.append(_unescape(match.group(7)))
        elif match.group(8) is not None:
            positional.append(_unescape(match.group(8)))
        elif match.group(9):
            positional.append(match.group(9))

    return ParsedAttributes(
        named={key: _balanced(value) for key, value in named.items()},
        positional=[_balanced(value) for value in positional],
    )


def _coerce_str(value: object) -> object:
    if value is None or isinstance(value, str):
        return value

    return str(value)


class ShortcodeAttributes(pydantic.BaseModel):
    """Base schema: defaults merged with parsed values, extras kept."""

    model_config = pydantic.ConfigDict(extra="allow")

    @classmethod
    def from_atts(
        cls,
        atts: Mapping[str, Any],
        defaults: Mapping[str, Any] | None = None,
    ) -> Self:
        """Merge attributes over defaults and validate.

        Args:
            atts: Attributes from the shortcode tag.
            defaults: Values used for keys missing from ``atts``, on top of
                the schema's own field defaults.

        Returns:
            The validated attributes.
        """
        data = dict(defaults or {})
        data.update(atts)
        return cls.model_validate(data)


class MapBlockAttributes(ShortcodeAttributes):
    """Attributes of ``[cn-mapblock]``."""

    id: str = pydantic.Field(default_factory=lambda: f"cn-map-{uuid.uuid4().hex[:13]}")
    latitude: float | str | None = None
    longitude: float | str | None = None
    zoom: int = DEFAULT_ZOOM
    height: str = "400px"
    width: str = "100%"
    marker: bool = True

    @pydantic.field_validator("id", "height", "width", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        return _coerce_str(value)

    @pydantic.field_validator("marker", mode="before")
    @classmethod
    def _coerce_flag(cls, value: object) -> bool:
        return formatting.to_boolean(value)

    @pydantic.field_validator("zoom", mode="before")
    @classmethod
    def _coerce_zoom(cls, value: object) -> int:
        try:
            zoom = int(float(str(value).strip()))
        except (ValueError, OverflowError):
            logger.warning("Invalid zoom %r, using %d", value, DEFAULT_ZOOM)
            return DEFAULT_ZOOM

        if zoom < 0:
            logger.warning("Negative zoom %r, using %d", value, DEFAULT_ZOOM)
            return DEFAULT_ZOOM

        return zoom


class LayerAttributes(ShortcodeAttributes):
    """Attributes of ``[maplayer]``."""

    id: str = "layer"
    name: str = ""
    control: bool = False

    @pydantic.field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        return _coerce_str(value)

    @pydantic.field_validator("control", mode="before")
    @classmethod
    def _coerce_flag(cls, value: object) -> bool:
        return formatting.to_boolean(value)


class MarkerAttributes(ShortcodeAttributes):
    """Attributes of ``[mapmarker]``."""

    id: str = "marker"
    latitude: float | str | None = None
    longitude: float | str | None = None

    @pydantic.field_validator("id", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        return _coerce_str(value)
