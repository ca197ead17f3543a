"""Truncate HTML by visible characters or words without breaking markup.

The fragment is parsed into a tree and its text nodes are walked in
document order. The node that reaches the limit is shortened in place,
everything rendered after it is removed, and the ellipsis is added. Tags
are only ever removed whole, so every surviving element still closes.
"""

import logging
from abc import ABC, abstractmethod

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from smarttrim.text import count_words, visible_text, word_end
from smarttrim.tree import body, parse, serialize

logger = logging.getLogger(__name__)

# Never append the ellipsis inside these; it goes right after them instead.
NON_SPLITTABLE_TAGS = {"a", "strong", "em", "h1", "h2", "h3", "h4", "h5"}


def truncate_chars(html: str, limit: int, ellipsis: str = "...") -> str:
    """Shorten ``html`` to ``limit`` visible characters.

    Input that is already short enough, or a ``limit`` of zero or less,
    comes back untouched (not re-serialized).
    """
    if limit <= 0 or limit >= len(visible_text(html)):
        return html
    return _CharTruncation(limit, ellipsis).run(html)


def truncate_words(html: str, limit: int, ellipsis: str = "...") -> str:
    """Shorten ``html`` to ``limit`` visible words.

    Words are separated by runs of newlines, tabs and spaces.
    """
    if limit <= 0 or limit >= count_words(visible_text(html)):
        return html
    return _WordTruncation(limit, ellipsis).run(html)


def _is_text(node) -> bool:
    # Comments, CDATA, doctypes and processing instructions are not rendered.
    # Script and style text does count, as it did for plain tag stripping.
    return isinstance(node, NavigableString) and not isinstance(
        node, PreformattedString
    )


class _Truncation(ABC):
    """A single truncation pass. Holds the running count for one call only."""

    unit = ""

    def __init__(self, limit: int, ellipsis: str) -> None:
        self.limit = limit
        self.ellipsis = ellipsis
        self.count = 0

    @abstractmethod
    def measure(self, text: str) -> int:
        """Units of visible text in one text node."""

    @abstractmethod
    def shorten(self, text: str, keep: int, size: int) -> str:
        """Prefix of ``text`` holding ``keep`` of its ``size`` units."""

    def run(self, html: str) -> str:
        tree = parse(html)
        root = body(tree)

        cut_point = None
        for node in root.descendants:
            if not _is_text(node):
                continue
            size = self.measure(node)
            if self.count + size < self.limit:
                self.count += size
                continue
            cut_point = node
            break

        if cut_point is None:
            logger.debug(
                "No cut point for limit %d (%d %s counted)",
                self.limit,
                self.count,
                self.unit,
            )
        else:
            self._cut(tree, root, cut_point)
        return serialize(tree)

    def _cut(self, tree: BeautifulSoup, root: Tag, node: NavigableString) -> None:
        keep = self.limit - self.count
        size = self.measure(node)
        text = self.shorten(str(node), keep, size)
        logger.debug(
            "Cutting after %d of %d %s in node (limit %d)",
            keep,
            size,
            self.unit,
            self.limit,
        )
        if text != node:
            node = _replace_text(node, text)

        _remove_following(root, node)
        _insert_ellipsis(tree, root, node, self.ellipsis)


class _CharTruncation(_Truncation):
    unit = "chars"

    def measure(self, text: str) -> int:
        return len(text)

    def shorten(self, text: str, keep: int, size: int) -> str:
        return text[:keep]


class _WordTruncation(_Truncation):
    unit = "words"

    def measure(self, text: str) -> int:
        return count_words(text)

    def shorten(self, text: str, keep: int, size: int) -> str:
        # A node reaching the limit with its last word is kept whole,
        # trailing whitespace included; the ellipsis step trims that.
        if size > 1 and keep < size:
            return text[: word_end(text, keep)]
        return text


def _replace_text(node: NavigableString, text: str) -> NavigableString:
    new_node = type(node)(text)
    node.replace_with(new_node)
    return new_node


def _remove_following(root: Tag, node: NavigableString) -> None:
    """Drop everything that renders after ``node``, keeping its ancestors."""
    current = node
    while current is not None and current is not root:
        for sibling in list(current.next_siblings):
            sibling.extract()
        current = current.parent


def _insert_ellipsis(
    tree: BeautifulSoup, root: Tag, node: NavigableString, ellipsis: str
) -> None:
    parent = node.parent
    if parent is not root and parent.name in NON_SPLITTABLE_TAGS:
        # Following siblings are gone, so this lands where the
        # parent's next sibling used to be.
        parent.insert_after(tree.new_string(ellipsis))
    else:
        _replace_text(node, node.rstrip() + ellipsis)
