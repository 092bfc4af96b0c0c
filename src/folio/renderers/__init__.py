"""Jinja2 filters for layouts."""

from folio.renderers.filters import absolute_url, first_paragraph, format_date, strip_html

__all__ = ["absolute_url", "first_paragraph", "format_date", "strip_html"]
