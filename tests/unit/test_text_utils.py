"""Unit tests for summary text helpers (shorten, extract_text)."""

from tasks_management.shared.utils.text import extract_text, shorten


class TestShorten:
    def test_short_value_is_unchanged(self) -> None:
        assert shorten("hello", 10) == "hello"

    def test_value_of_exact_length_is_unchanged(self) -> None:
        assert shorten("a" * 500, 500) == "a" * 500

    def test_none_is_returned_unchanged(self) -> None:
        assert shorten(None, 10) is None

    def test_cuts_on_whitespace_and_appends_suffix(self) -> None:
        assert shorten("hello world foo", 10) == "hello..."

    def test_hard_cut_without_whitespace(self) -> None:
        result = shorten("a" * 501, 500)
        assert result == "a" * 497 + "..."
        assert len(result) == 500

    def test_custom_suffix(self) -> None:
        assert shorten("one two three", 9, suffix="~") == "one two~"


class TestExtractText:
    def test_strips_tags(self) -> None:
        assert extract_text("<p>Hello <b>world</b></p>") == "Hello world"

    def test_drops_script_content(self) -> None:
        assert extract_text("<script>alert(1)</script>Hi") == "Hi"

    def test_unescapes_entities(self) -> None:
        assert extract_text("Tom &amp; Jerry") == "Tom & Jerry"

    def test_plain_text_is_kept(self) -> None:
        assert extract_text("  just text  ") == "just text"

    def test_empty_values(self) -> None:
        assert extract_text(None) == ""
        assert extract_text("") == ""
