"""Build error taxonomy.

Record-level errors (MalformedMetadata, MissingTemplate, RenderFailure) skip
the offending record and let the build continue. IOFailure aborts the run.
"""

from pathlib import Path


class FolioError(Exception):
    """Base class for all Folio build errors."""

    component: str = "build"
    recoverable: bool = True

    def __init__(self, message: str, source_path: Path | str | None = None) -> None:
        self.message = message
        self.source_path = str(source_path) if source_path is not None else None
        if self.source_path:
            super().__init__(f"{self.source_path}: {message}")
        else:
            super().__init__(message)


class MalformedMetadata(FolioError):
    """Raised when a record's metadata block is not a well-formed YAML mapping."""

    component = "metadata"


class MissingTemplate(FolioError):
    """Raised when a record's layout does not resolve to a known template."""

    component = "template"

    def __init__(self, layout: str, source_path: Path | str | None = None) -> None:
        self.layout = layout
        super().__init__(f"Template not found for layout: {layout}", source_path)


class RenderFailure(FolioError):
    """Raised when a template fails to render or two records claim one output path."""

    component = "render"


class IOFailure(FolioError):
    """Raised when content cannot be read or output cannot be written."""

    component = "io"
    recoverable = False
