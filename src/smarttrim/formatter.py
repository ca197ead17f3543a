"""Render field values as trimmed HTML, with suffix and "read more" link."""

import logging
import re
from dataclasses import dataclass
from html import escape

from smarttrim.settings import TrimSettings
from smarttrim.text import strip_html
from smarttrim.truncate import truncate_chars, truncate_words

logger = logging.getLogger(__name__)

# A field ending in this marker was split by its author; no "more" link.
BREAK_MARKER = "<!--break-->"

# Trailing closing tag, optionally preceded by one whitespace character
_CLOSING_TAG_RE = re.compile(r"(.*?)\s??(</[^>]+>)\Z", re.DOTALL)


@dataclass
class FieldItem:
    """One value of a text field as handed over by the host."""

    value: str
    summary: str = ""
    url: str = ""  # canonical URL of the owning entity, if it has one


def format_items(items: list[FieldItem], settings: TrimSettings) -> list[str]:
    """Format every item of a field with the same settings."""
    return [format_item(item, settings) for item in items]


def format_item(item: FieldItem, settings: TrimSettings) -> str:
    """Trim one field value and decorate it according to ``settings``."""
    if settings.summary_handler != "ignore" and item.summary:
        source = item.summary
    else:
        source = item.value

    output = source
    if settings.strip_html:
        output = strip_html(output)

    shortened = False
    # A present summary shown in full is never trimmed
    if settings.summary_handler != "full" or not item.summary:
        if settings.trim_type == "words":
            trimmed = truncate_words(output, settings.trim_length, ellipsis="")
        else:
            trimmed = truncate_chars(output, settings.trim_length, ellipsis="")
        shortened = trimmed != output
        output = trimmed

    extension = settings.trim_suffix if shortened else ""
    # Don't duplicate a period at the end of the text
    if output.endswith(".") and extension.startswith("."):
        extension = extension[1:]

    if settings.more_link and item.url and not source.endswith(BREAK_MARKER):
        extension += more_link(item.url, settings.more_text)

    logger.debug(
        "Formatted field (%d -> %d chars, shortened=%s)",
        len(source),
        len(output),
        shortened,
    )
    return _append_inside(output, extension)


def more_link(url: str, text: str) -> str:
    """Markup for the link to the full entity."""
    return f'<a href="{escape(url)}" class="more-link">{escape(text)}</a>'


def _append_inside(output: str, extension: str) -> str:
    """Put ``extension`` just inside the trailing closing tag, if any.

    ``<p>Text</p>`` becomes ``<p>Text...</p>`` rather than
    ``<p>Text</p>...``, keeping the suffix on the same line.
    """
    match = _CLOSING_TAG_RE.match(output)
    if match is None:
        return output + extension
    return match.group(1) + extension + match.group(2)
