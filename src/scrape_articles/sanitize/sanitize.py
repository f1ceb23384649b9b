"""Article body sanitization."""

import html
import re

_ANCHOR_TAG = re.compile(r"</?a\b[^>]*>", re.IGNORECASE)
_IMAGE_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_LINE_BREAK = re.compile(r"<br\b[^>]*>", re.IGNORECASE)

EMPTY_PARAGRAPH = "<p></p>"


def attribution(link: str, resource_name: str) -> str:
    """Trailing block linking back to the original article."""
    return (
        "<br><br><ul><li>"
        f"<a href='{html.escape(link)}'>Read Article @ {html.escape(resource_name)}</a>"
        "</li></ul>"
    )


def sanitize(raw_html: str, link: str, resource_name: str) -> str:
    """Prepare article body markup for storage.

    Strips anchors (keeping their text), drops the first image (already
    stored as the article image), turns line breaks into empty paragraphs and
    appends an attribution link. Blank input gives an empty string.
    """
    if not raw_html or not raw_html.strip():
        return ""

    body = _ANCHOR_TAG.sub("", raw_html)
    body = _IMAGE_TAG.sub("", body, count=1)
    body = _LINE_BREAK.sub(EMPTY_PARAGRAPH, body)
    return body + attribution(link, resource_name)
