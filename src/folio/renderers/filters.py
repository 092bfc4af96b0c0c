"""Jinja2 filters available to layouts.

This module provides filters for formatting dates, deriving excerpts from
rendered bodies, and building links that respect the configured base url.
"""

import html
import re
from datetime import date, datetime

_TAG_RE = re.compile(r"<[^>]+>")
_PARAGRAPH_RE = re.compile(r"<p\b[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")


def format_date(value: date | datetime | str | None, fmt: str = "%B %d, %Y") -> str:
    """Format a date for display.

    Args:
        value: Date, datetime or ISO string
        fmt: strftime format

    Returns:
        Formatted date string, or "" when no date is set

    Examples:
        >>> format_date(date(2021, 3, 4))
        'March 04, 2021'
        >>> format_date("2021-03-04", "%Y/%m/%d")
        '2021/03/04'
    """
    if value is None or value == "":
        return ""

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value

    return value.strftime(fmt)


def strip_html(text: str | None) -> str:
    """Remove tags and collapse whitespace.

    Examples:
        >>> strip_html("<p>Hello <em>there</em></p>")
        'Hello there'
    """
    if not text:
        return ""
    plain = html.unescape(_TAG_RE.sub("", text))
    return _WHITESPACE_RE.sub(" ", plain).strip()


def first_paragraph(rendered: str | None) -> str:
    """Return the inner HTML of the first <p> element of a rendered body.

    Falls back to the first blank-line separated block for bodies without
    paragraph tags.
    """
    if not rendered or not rendered.strip():
        return ""

    match = _PARAGRAPH_RE.search(rendered)
    if match:
        return match.group(1).strip()

    return rendered.strip().split("\n\n", 1)[0].strip()


def absolute_url(url: str | None, base_url: str = "") -> str:
    """Join a site-relative url onto the base url.

    External urls (with a scheme) and fragments are returned unchanged.

    Examples:
        >>> absolute_url("/resume.html", "https://example.org")
        'https://example.org/resume.html'
        >>> absolute_url("https://github.com/me")
        'https://github.com/me'
    """
    if not url:
        return base_url.rstrip("/") + "/" if base_url else "/"

    if "://" in url or url.startswith(("#", "mailto:")):
        return url

    return base_url.rstrip("/") + "/" + url.lstrip("/")
