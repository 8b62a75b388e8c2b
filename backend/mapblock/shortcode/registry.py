"""Host-side shortcode registry and content expansion.

Handlers are registered per tag and called with the tag's parsed
attributes, its inner content and the tag name. ``do_shortcode`` expands
every registered top-level occurrence in a piece of content; unregistered
tags and malformed occurrences stay in the output as literal text.

Example:
    >>> from mapblock.shortcode.registry import ShortcodeRegistry
    >>> registry = ShortcodeRegistry()
    >>> registry.add("shout", lambda atts, content, tag: content.upper())
    >>> registry.do_shortcode("say [shout]hello[/shout]")
    'say HELLO'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from mapblock.shortcode import attributes, scanner

if TYPE_CHECKING:
    from collections.abc import Mapping


class ShortcodeHandler(Protocol):
    def __call__(self, atts: Mapping[str, str], content: str, tag: str) -> str: ...


class ShortcodeRegistry:
    """Registered shortcode handlers indexed by tag."""

    def __init__(self) -> None:
        self._handlers: dict[str, ShortcodeHandler] = {}

    @property
    def tags(self) -> list[str]:
        return list(self._handlers)

    def add(self, tag: str, handler: ShortcodeHandler) -> None:
        """Register (or replace) the handler for a tag.

        Args:
            tag: Shortcode tag name, e.g. "cn-mapblock".
            handler: Callable receiving (atts, content, tag).

        Raises:
            ValueError: If the tag name is empty or contains characters that
                cannot appear in a tag.
        """
        if not tag or any(char in tag for char in "[]/<>&" + " \t\r\n"):
            raise ValueError(f"Invalid shortcode tag {tag!r}")

        self._handlers[tag] = handler

    def remove(self, tag: str) -> None:
        self._handlers.pop(tag, None)

    def has(self, tag: str) -> bool:
        return tag in self._handlers

    def do_shortcode(self, content: str) -> str:
        """Expand registered shortcodes in content.

        Args:
            content: Post content.

        Returns:
            Content with every registered occurrence replaced by its
            handler's output.
        """
        if "[" not in content or not self._handlers:
            return content

        def expand(shortcode: scanner.Shortcode) -> str:
            atts = attributes.parse_atts(shortcode.attributes_text).as_dict()
            handler = self._handlers[shortcode.tag]
            return str(handler(atts, shortcode.content, shortcode.tag))

        return scanner.replace(content, self._handlers, expand)
