"""Folio data models.

This module exports all core entities used throughout the application:
- ContentRecord: One input document (metadata + body)
- RenderedDocument: The output artifact for one record
- BuildResult: Aggregated build outcome
- BuildError: Errors encountered during a build
"""

from folio.models.build import BuildError, BuildResult, BuildStatus
from folio.models.record import (
    ContentRecord,
    PermalinkStyle,
    RecordKind,
    RenderedDocument,
)

__all__ = [
    "ContentRecord",
    "RenderedDocument",
    "RecordKind",
    "PermalinkStyle",
    "BuildResult",
    "BuildError",
    "BuildStatus",
]
