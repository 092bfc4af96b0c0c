"""Folio - static renderer for a personal resume and blog site.

Folio reads content files (a YAML metadata block followed by a Markdown or
HTML body), applies the Jinja2 layout each record names, and writes one HTML
page per record plus any static assets.

Core principles:
- Reproducibility: same content and templates produce byte-identical pages
- Partial failure: a bad record is skipped and reported, the build continues
- Atomic output: a page is either fully written or not written at all
"""

__version__ = "0.1.0"
__author__ = "Folio Contributors"
