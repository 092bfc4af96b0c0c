"""Content record entities.

This module contains the entities a build moves through:
- ContentRecord: one input document (metadata + body)
- RenderedDocument: the HTML output for one record
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

# Jekyll-style post filenames: 2021-03-04-sqlite-layers.md
POST_FILENAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)$")

MARKDOWN_SUFFIXES = {".md", ".markdown"}
HTML_SUFFIXES = {".html", ".htm"}
CONTENT_SUFFIXES = MARKDOWN_SUFFIXES | HTML_SUFFIXES


class RecordKind(Enum):
    """Kind of content record."""

    PAGE = "page"
    POST = "post"


class PermalinkStyle(Enum):
    """How output paths are derived from source paths."""

    PLAIN = "plain"  # about.md -> about.html
    PRETTY = "pretty"  # about.md -> about/index.html


def _coerce_date(value: Any) -> date | None:
    """Normalize a metadata date value to a date.

    YAML already parses bare ISO dates; quoted strings are parsed here.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value).strip()).date()
    except ValueError:
        return None


@dataclass
class ContentRecord:
    """One input document: a metadata mapping and a marked-up body.

    Attributes:
        source_path: Path relative to the content directory (identity)
        metadata: Front-matter keys (title, date, layout, menu, ...)
        body: Raw Markdown or HTML body text
        kind: Page or post
        has_metadata: Whether the source carried a metadata block
    """

    source_path: PurePosixPath
    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    kind: RecordKind = RecordKind.PAGE
    has_metadata: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.source_path, PurePosixPath):
            self.source_path = PurePosixPath(str(self.source_path).replace("\\", "/"))

    @property
    def markup(self) -> str:
        """Return "markdown" or "html" based on the source suffix."""
        if self.source_path.suffix.lower() in HTML_SUFFIXES:
            return "html"
        return "markdown"

    @property
    def published(self) -> bool:
        """Records with `published: false` are left out of the build."""
        return self.metadata.get("published", True) is not False

    @property
    def slug(self) -> str:
        """Return the url slug (filename stem without a date prefix)."""
        stem = self.source_path.stem
        if self.kind == RecordKind.POST:
            match = POST_FILENAME_RE.match(stem)
            if match:
                return match.group(4)
        return stem

    @property
    def date(self) -> date | None:
        """Return the record date from metadata, else from a post filename."""
        meta_date = _coerce_date(self.metadata.get("date"))
        if meta_date is not None:
            return meta_date

        match = POST_FILENAME_RE.match(self.source_path.stem)
        if match:
            try:
                return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
            except ValueError:
                return None
        return None

    @property
    def title(self) -> str:
        """Return the metadata title, falling back to the slug."""
        title = self.metadata.get("title")
        if title is None:
            return self.slug.replace("-", " ").replace("_", " ")
        return str(title)

    def layout(self, default_page: str, default_post: str) -> str:
        """Return the layout name for this record.

        Args:
            default_page: Layout used for pages without a `layout` key
            default_post: Layout used for posts without a `layout` key

        Returns:
            Layout name
        """
        layout = self.metadata.get("layout")
        if layout:
            return str(layout)
        return default_post if self.kind == RecordKind.POST else default_page

    def output_path(self, style: PermalinkStyle, posts_dir: str = "_posts") -> PurePosixPath:
        """Derive the output path relative to the output directory.

        Args:
            style: Permalink style for derived paths
            posts_dir: Name of the posts directory (stripped from post paths)

        Returns:
            Relative output path ending in .html
        """
        permalink = self.metadata.get("permalink")
        if permalink:
            link = str(permalink).lstrip("/")
            if not link or link.endswith("/"):
                return PurePosixPath(link) / "index.html"
            link_path = PurePosixPath(link)
            if link_path.suffix:
                return link_path
            return link_path.with_suffix(".html")

        if self.kind == RecordKind.POST:
            parts = [p for p in self.source_path.parent.parts if p != posts_dir]
            record_date = self.date
            if record_date is not None:
                parts += [
                    f"{record_date.year:04d}",
                    f"{record_date.month:02d}",
                    f"{record_date.day:02d}",
                ]
            parent = PurePosixPath(*parts) if parts else PurePosixPath()
        else:
            parent = self.source_path.parent

        stem = self.slug
        if stem == "index":
            return parent / "index.html"
        if style == PermalinkStyle.PRETTY:
            return parent / stem / "index.html"
        return parent / f"{stem}.html"

    def url(self, style: PermalinkStyle, posts_dir: str = "_posts") -> str:
        """Return the site-absolute url for this record."""
        path = self.output_path(style, posts_dir)
        if path.name == "index.html":
            parent = str(path.parent)
            return "/" if parent == "." else f"/{parent}/"
        return f"/{path}"


@dataclass
class RenderedDocument:
    """The output artifact for one record.

    Attributes:
        record: Record that produced this document
        output_path: Path relative to the output directory
        html: Rendered document text
    """

    record: ContentRecord
    output_path: PurePosixPath
    html: str

    def destination(self, output_dir: Path) -> Path:
        """Return the absolute destination under the output directory."""
        return output_dir.joinpath(*self.output_path.parts)
