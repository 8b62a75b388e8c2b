"""Left-to-right extraction of shortcode occurrences from content.

The scanner walks the content once per call and recognizes the host's tag
grammar for a given set of tag names:

- an opening ``[name`` where ``name`` is followed by whitespace, ``]`` or
  ``/`` (``[maplayers]`` is not a ``[maplayer]``),
- attribute text running to the first ``]`` or ``/]``, the latter marking a
  self-closing tag,
- for a non self-closing tag, inner content running to the FIRST following
  ``[/name]``; with no closing tag the occurrence has empty content,
- ``[[name ...]]`` is an escaped literal for ``replace``: it is not expanded
  and one bracket pair is removed from the output. ``extract_all`` erases it
  like any other occurrence.

Same-tag nesting is not supported: ``[a][a]x[/a][/a]`` matches ``[a]`` with
content ``[a]x`` and leaves the stray ``[/a]`` as text. Inner content is
never scanned again by the same call; callers hand it to another scan for a
different tag.

Example:
    >>> from mapblock.shortcode import scanner
    >>> found = scanner.extract_all(
    ...     'Intro [mapmarker id="m1" latitude="1" longitude="2"]Hi[/mapmarker]',
    ...     "mapmarker",
    ... )
    >>> [(s.attributes_text, s.content) for s in found.shortcodes]
    [(' id="m1" latitude="1" longitude="2"', 'Hi')]
    >>> found.remainder
    'Intro'
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator


@dataclasses.dataclass(frozen=True)
class Shortcode:
    """One shortcode occurrence.

    Attributes:
        tag: Tag name that matched.
        attributes_text: Raw text between the tag name and the closing
            bracket of the opening tag.
        content: Inner content, empty for self-closing tags.
        start: Offset of the opening ``[`` (or of the outer ``[`` when
            escaped).
        end: Offset just past the occurrence.
        self_closing: Whether the tag ended with ``/]``.
        escaped: Whether the occurrence was written as ``[[...]]``.
    """

    tag: str
    attributes_text: str
    content: str
    start: int
    end: int
    self_closing: bool = False
    escaped: bool = False

    def literal(self, source: str) -> str:
        """Return the text an escaped occurrence stands for."""
        return source[self.start + 1 : self.end - 1]


class Extraction(NamedTuple):
    shortcodes: list[Shortcode]
    remainder: str


def _is_name_char(char: str) -> bool:
    return char.isalnum() or char in "_-"


def _tag_at(content: str, index: int, tags: list[str]) -> str | None:
    for tag in tags:
        if not content.startswith(tag, index):
            continue

        after = index + len(tag)
        if after < len(content) and _is_name_char(content[after]):
            continue

        return tag

    return None


class _Lookahead:
    """Forward ``str.find`` remembering its last answer per needle.

    Valid only while the start offsets for a needle never decrease, which
    holds for a single left-to-right pass.
    """

    def __init__(self, content: str) -> None:
        self._content = content
        self._found: dict[str, int] = {}

    def find(self, needle: str, start: int) -> int:
        found = self._found.get(needle)
        if found is not None and (found == -1 or found >= start):
            return found

        found = self._content.find(needle, start)
        self._found[needle] = found
        return found


def _read_opening(
    content: str,
    index: int,
    lookahead: _Lookahead,
) -> tuple[int, int, bool] | None:
    """Find the end of an opening tag's attribute text.

    Returns:
        (attributes_end, token_end, self_closing), or None when there is no
        ``]`` left in the content.
    """
    close_at = lookahead.find("]", index)
    if close_at == -1:
        return None

    if close_at > index and content[close_at - 1] == "/":
        return close_at - 1, close_at + 1, True

    return close_at, close_at + 1, False


def scan(content: str, tags: Iterable[str]) -> Iterator[Shortcode]:
    """Yield well-formed occurrences of any of the given tags.

    Occurrences are yielded left to right and never overlap. The pass is
    linear in the length of the content: every forward search for ``]`` or
    a closing tag resumes from its previous answer.

    Args:
        content: Text to scan.
        tags: Tag names to recognize.

    Yields:
        Shortcode for each occurrence, escaped ones included.
    """
    names = sorted(set(tags), key=len, reverse=True)
    if not names:
        return

    lookahead = _Lookahead(content)
    position = 0
    while True:
        open_at = content.find("[", position)
        if open_at == -1:
            return

        tag = _tag_at(content, open_at + 1, names)
        if tag is None:
            position = open_at + 1
            continue

        opening = _read_opening(content, open_at + 1 + len(tag), lookahead)
        if opening is None:
            # No "]" left, so no later opening tag can end either.
            return

        attributes_end, token_end, self_closing = opening
        attributes_text = content[open_at + 1 + len(tag) : attributes_end]
        inner = ""
        end = token_end
        if not self_closing:
            closing = f"[/{tag}]"
            close_at = lookahead.find(closing, token_end)
            if close_at != -1:
                inner = content[token_end:close_at]
                end = close_at + len(closing)

        escaped = (
            open_at > 0
            and content[open_at - 1] == "["
            and content.startswith("]", end)
        )
        if escaped:
            yield Shortcode(tag, attributes_text, inner, open_at - 1, end + 1, self_closing, True)
            position = end + 1
        else:
            yield Shortcode(tag, attributes_text, inner, open_at, end, self_closing)
            position = end


def replace(
    content: str,
    tags: Iterable[str],
    callback: Callable[[Shortcode], str],
) -> str:
    """Replace each occurrence of the given tags with the callback's result.

    Escaped occurrences are not passed to the callback; they are replaced by
    their literal text.

    Args:
        content: Text to process.
        tags: Tag names to recognize.
        callback: Called with each occurrence, returns its replacement.

    Returns:
        The processed text.
    """
    parts: list[str] = []
    position = 0
    for shortcode in scan(content, tags):
        parts.append(content[position : shortcode.start])
        if shortcode.escaped:
            parts.append(shortcode.literal(content))
        else:
            parts.append(callback(shortcode))

        position = shortcode.end

    parts.append(content[position:])
    return "".join(parts)


def extract_all(content: str, tag: str, *, skip_empty: bool = False) -> Extraction:
    """Remove every occurrence of a tag and return them with the leftover.

    Nested extraction does not honor the ``[[tag]]`` escape: an escaped
    occurrence is returned like any other and erased together with its
    outer brackets. Only top-level expansion through ``replace`` keeps
    escaped occurrences as literal text.

    Args:
        content: Text to process.
        tag: Tag name to extract.
        skip_empty: Erase occurrences with empty inner content without
            returning them.

    Returns:
        Extraction with the occurrences in order of appearance and the
        content with all occurrences removed, trimmed.
    """
    shortcodes: list[Shortcode] = []
    parts: list[str] = []
    position = 0
    for shortcode in scan(content, [tag]):
        parts.append(content[position : shortcode.start])
        position = shortcode.end
        if not (skip_empty and shortcode.content == ""):
            shortcodes.append(shortcode)

    parts.append(content[position:])
    return Extraction(shortcodes, "".join(parts).strip())


def has_shortcode(content: str, tag: str) -> bool:
    """Whether the content holds at least one unescaped occurrence of a tag."""
    return any(not shortcode.escaped for shortcode in scan(content, [tag]))
