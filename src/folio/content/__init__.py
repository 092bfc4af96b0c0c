"""Folio content loading.

- frontmatter: Split and parse the YAML metadata block of a document
- loader: Discover content records under a content directory
"""

from folio.content.frontmatter import parse_document
from folio.content.loader import ContentLoader, LoadResult

__all__ = ["ContentLoader", "LoadResult", "parse_document"]
