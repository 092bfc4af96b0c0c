"""Build result entities.

This module contains entities describing the outcome of a build:
- BuildError: An error raised for one record, or a fatal error for the run
- BuildResult: Aggregated build data
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from folio.exceptions import FolioError
from folio.models.record import RenderedDocument


class BuildStatus(Enum):
    """Status of a build."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class BuildError:
    """Error encountered during a build.

    Attributes:
        component: Component that failed (metadata, template, render, io)
        message: Error description
        source_path: Content file that caused the error (if applicable)
        recoverable: Whether the build continued after this error
    """

    component: str
    message: str
    source_path: str | None = None
    recoverable: bool = True

    @classmethod
    def from_exception(cls, exc: FolioError) -> "BuildError":
        """Create a BuildError from a raised FolioError."""
        return cls(
            component=exc.component,
            message=exc.message,
            source_path=exc.source_path,
            recoverable=exc.recoverable,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "component": self.component,
            "message": self.message,
            "source_path": self.source_path,
            "recoverable": self.recoverable,
        }


@dataclass
class BuildResult:
    """Aggregated outcome of one build run.

    Attributes:
        source_dir: Site directory that was built
        output_dir: Directory pages were written to
        status: Current build status
        documents: Documents rendered (and written unless dry run)
        assets: Static assets copied, relative to the output directory
        skipped: Records excluded by `published: false`
        errors: Errors encountered during the build
    """

    source_dir: Path
    output_dir: Path
    status: BuildStatus = BuildStatus.PENDING
    documents: list[RenderedDocument] = field(default_factory=list)
    assets: list[Path] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[BuildError] = field(default_factory=list)

    def add_error(self, error: BuildError) -> None:
        """Add a build error."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Check if any errors were recorded."""
        return len(self.errors) > 0

    def has_fatal_errors(self) -> bool:
        """Check if any non-recoverable error was recorded."""
        return any(not e.recoverable for e in self.errors)

    def get_errors_by_component(self, component: str) -> list[BuildError]:
        """Get errors for a specific component."""
        return [e for e in self.errors if e.component == component]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_dir": str(self.source_dir),
            "output_dir": str(self.output_dir),
            "status": self.status.value,
            "documents": [str(d.output_path) for d in self.documents],
            "assets": [str(a) for a in self.assets],
            "skipped": self.skipped,
            "errors": [e.to_dict() for e in self.errors],
        }
