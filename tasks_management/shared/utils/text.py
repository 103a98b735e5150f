"""Text helpers for derived, display-only values (asset summaries)."""

import html
from typing import ClassVar

import nh3

ELLIPSIS = "..."


def shorten(value: str | None, length: int, suffix: str = ELLIPSIS) -> str | None:
    """Cut value to at most length characters, preferring a whitespace boundary.

    When the value is longer than length, the cut point is the last whitespace
    at or before length - len(suffix); without one, the text is cut hard at
    that position. The suffix is appended to every shortened value.

    Args:
        value: Text to shorten (None is returned unchanged).
        length: Maximum length of the result, suffix included.
        suffix: Marker appended when text was removed.

    Returns:
        The original value when it already fits, otherwise the shortened text.
    """
    if value is None or len(value) <= length:
        return value
    if length < len(suffix):
        return value[:length]
    cut = length - len(suffix)
    for index in range(cut, -1, -1):
        if value[index].isspace():
            cut = index
            break
    return value[:cut] + suffix


class HtmlTextExtractor:
    """Strip markup from user-supplied HTML, keeping only its text."""

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    # Content of these tags is dropped entirely, not just the tags.
    DROPPED_CONTENT_TAGS: ClassVar[set[str]] = {"script", "style"}

    @classmethod
    def extract(cls, value: str | None) -> str:
        """Remove every HTML tag with nh3 and unescape entities to plain text."""
        if not value:
            return ""
        cleaned = nh3.clean(
            value,
            tags=cls.ALLOWED_TAGS,
            clean_content_tags=cls.DROPPED_CONTENT_TAGS,
            attributes={},
        )
        return html.unescape(cleaned).strip()


def extract_text(value: str | None) -> str:
    """Return the plain text of an HTML fragment (empty string for None)."""
    return HtmlTextExtractor.extract(value)
