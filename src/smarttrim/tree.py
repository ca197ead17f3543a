"""Parse HTML fragments into a mutable tree and serialize them back.

lxml wraps every fragment in an ``<html><body>`` skeleton. The skeleton
is kept while the tree is worked on (``body`` is the traversal root) and
dropped again on the way out by ``serialize``.
"""

from bs4 import BeautifulSoup, Doctype, Tag
from bs4.element import PageElement

# Elements the parser injects around a fragment. Matched by exact name only.
WRAPPER_TAGS = {"html", "head", "body"}


def parse(html: str) -> BeautifulSoup:
    """Parse an HTML fragment leniently.

    Unclosed tags are auto-closed and stray text is kept as text nodes.
    The body is opened explicitly so that leading bare text is not moved
    into an implied ``<p>``.
    """
    return BeautifulSoup("<body>" + html, "lxml")


def body(tree: BeautifulSoup) -> Tag:
    """Return the element the fragment's content lives under."""
    root = tree.body
    if root is None:
        # Empty input: lxml produces no skeleton at all
        return tree
    return root


def serialize(tree: BeautifulSoup) -> str:
    """Render the tree as markup without the parser's wrapper elements."""
    return "".join(_decode(node) for node in tree.contents)


def _decode(node: PageElement) -> str:
    if isinstance(node, Doctype):
        return ""
    if isinstance(node, Tag):
        if node.name in WRAPPER_TAGS:
            return "".join(_decode(child) for child in node.contents)
        return node.decode()
    return node.output_ready()
