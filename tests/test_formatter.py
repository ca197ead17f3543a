"""Tests for field formatting: summary handling, suffix and more link."""

import pytest

from smarttrim.formatter import FieldItem, format_item, format_items, more_link
from smarttrim.settings import TrimSettings


@pytest.fixture
def settings():
    return TrimSettings(trim_length=5, trim_suffix="...")


class TestTrimming:
    def test_suffix_added_inside_closing_tag(self, settings):
        item = FieldItem(value="<p>Hello world</p>")
        assert format_item(item, settings) == "<p>Hello...</p>"

    def test_no_suffix_when_not_shortened(self, settings):
        item = FieldItem(value="<p>Hi</p>")
        assert format_item(item, settings) == "<p>Hi</p>"

    def test_words(self):
        settings = TrimSettings(trim_length=2, trim_type="words", trim_suffix=" …")
        item = FieldItem(value="<p>One two three</p>")
        assert format_item(item, settings) == "<p>One two …</p>"

    def test_plain_text_gets_suffix_appended(self, settings):
        item = FieldItem(value="Hello world")
        assert format_item(item, settings) == "Hello..."

    def test_period_not_duplicated(self):
        settings = TrimSettings(trim_length=4, trim_suffix="...", strip_html=True)
        item = FieldItem(value="<p>End. More</p>")
        assert format_item(item, settings) == "End..."

    def test_strip_html_before_trimming(self):
        settings = TrimSettings(trim_length=11, strip_html=True, trim_suffix="…")
        item = FieldItem(value="<p>Hello</p>\n<p>big&nbsp;world</p>")
        assert format_item(item, settings) == "Hello big w…"


class TestSummaryHandling:
    def test_full_summary_is_not_trimmed(self, settings):
        item = FieldItem(value="<p>Body text</p>", summary="<p>Short summary text</p>")
        assert format_item(item, settings) == "<p>Short summary text</p>"

    def test_trim_summary(self, settings):
        settings.summary_handler = "trim"
        item = FieldItem(value="<p>Body text</p>", summary="<p>Short summary text</p>")
        assert format_item(item, settings) == "<p>Short...</p>"

    def test_ignore_summary(self, settings):
        settings.summary_handler = "ignore"
        item = FieldItem(value="<p>Body text</p>", summary="<p>Short summary text</p>")
        assert format_item(item, settings) == "<p>Body...</p>"

    def test_full_without_summary_trims_value(self, settings):
        item = FieldItem(value="<p>Body text</p>")
        assert format_item(item, settings) == "<p>Body...</p>"


class TestMoreLink:
    def test_link_appended(self, settings):
        settings.more_link = True
        settings.more_text = "Read more"
        item = FieldItem(value="<p>Hello world</p>", url="/node/1")
        assert format_item(item, settings) == (
            '<p>Hello...<a href="/node/1" class="more-link">Read more</a></p>'
        )

    def test_no_link_without_url(self, settings):
        settings.more_link = True
        item = FieldItem(value="<p>Hello world</p>")
        assert format_item(item, settings) == "<p>Hello...</p>"

    def test_no_link_after_break_marker(self, settings):
        settings.more_link = True
        settings.trim_length = 100
        item = FieldItem(value="<p>Intro</p><!--break-->", url="/node/1")
        assert format_item(item, settings) == "<p>Intro</p><!--break-->"

    def test_link_is_escaped(self):
        assert more_link('/search?q=a&b="c"', "<More>") == (
            '<a href="/search?q=a&amp;b=&quot;c&quot;" class="more-link">&lt;More&gt;</a>'
        )


def test_format_items(settings):
    items = [FieldItem(value="<p>Hello world</p>"), FieldItem(value="<p>Hi</p>")]
    assert format_items(items, settings) == ["<p>Hello...</p>", "<p>Hi</p>"]
