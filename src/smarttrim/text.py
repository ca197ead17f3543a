"""Plain-text helpers: tag stripping, word counting, whitespace cleanup.

These work on raw strings with regular expressions and never build a
tree, so they are cheap enough to run before deciding whether a
fragment needs truncating at all.
"""

import html
import re

# Tags, comments and declarations
_TAG_RE = re.compile(r"<!--.*?-->|<[^>]*>", re.DOTALL)

# A word is anything between runs of newline/tab/space. Not \s: non-breaking
# spaces join words.
WORD_RE = re.compile(r"[^\n\r\t ]+")

_LINE_BREAK_RE = re.compile(r"\n|\r|\t")
_MULTI_SPACE_RE = re.compile(r"\s\s+")


def strip_tags(markup: str) -> str:
    """Remove all markup, leaving entities untouched."""
    return _TAG_RE.sub("", markup)


def visible_text(markup: str) -> str:
    """The text a browser would render for ``markup``, entities decoded."""
    return html.unescape(strip_tags(markup))


def count_words(text: str) -> int:
    """Number of non-empty tokens between runs of newline/tab/space."""
    return len(WORD_RE.findall(text))


def word_end(text: str, n: int) -> int:
    """Offset just past the ``n``-th word of ``text``.

    Returns ``len(text)`` when the text has fewer than ``n`` words.
    """
    for i, match in enumerate(WORD_RE.finditer(text), 1):
        if i == n:
            return match.end()
    return len(text)


def strip_html(markup: str) -> str:
    """Convert rich text to a single line of plain text.

    Tags are replaced by a space, so ``<p>a</p><p>b</p>`` reads
    ``a b`` rather than ``ab``. Entities other than ``&nbsp;`` are kept
    as they are so the result is still safe to treat as markup.
    """
    text = strip_tags(markup.replace("<", " <"))

    # Line breaks become plain spaces
    text = _LINE_BREAK_RE.sub(" ", text)

    # Non-breaking spaces, encoded or literal
    text = text.replace("&nbsp;", " ").replace("\xa0", " ")

    return _MULTI_SPACE_RE.sub(" ", text).strip()
