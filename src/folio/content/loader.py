"""Content discovery.

Walks the content directory and turns every content file into a
ContentRecord. Parsing failures are returned alongside the records so the
pipeline can skip them without stopping the build.
"""

import fnmatch
import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from folio.content.frontmatter import parse_document
from folio.exceptions import IOFailure, MalformedMetadata
from folio.models.record import CONTENT_SUFFIXES, ContentRecord, RecordKind

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Records discovered under a content directory.

    Attributes:
        records: Successfully parsed records, sorted by source path
        failures: Metadata errors for files that could not be parsed
    """

    records: list[ContentRecord] = field(default_factory=list)
    failures: list[MalformedMetadata] = field(default_factory=list)


class ContentLoader:
    """Discovers and parses content records.

    Usage:
        loader = ContentLoader(content_dir, posts_dir="_posts")
        result = loader.load()
    """

    def __init__(
        self,
        content_dir: Path,
        posts_dir: str = "_posts",
        exclude_patterns: list[str] | None = None,
        skip_dirs: list[Path] | None = None,
    ) -> None:
        """Initialize the content loader.

        Args:
            content_dir: Directory holding content files
            posts_dir: Name of the posts directory inside content_dir
            exclude_patterns: Glob patterns (relative posix paths) to ignore
            skip_dirs: Absolute directories never treated as content
        """
        self.content_dir = content_dir
        self.posts_dir = posts_dir
        self.exclude_patterns = exclude_patterns or []
        self.skip_dirs = [d.resolve() for d in (skip_dirs or [])]

    def discover(self) -> list[Path]:
        """List content files in deterministic order.

        Returns:
            Sorted absolute paths of content files

        Raises:
            IOFailure: If the content directory cannot be listed
        """
        if not self.content_dir.is_dir():
            raise IOFailure(f"Content directory not found: {self.content_dir}")

        try:
            candidates = sorted(p for p in self.content_dir.rglob("*") if p.is_file())
        except OSError as e:
            raise IOFailure(f"Cannot list content directory: {e}") from e

        return [path for path in candidates if self._is_content(path)]

    def _is_content(self, path: Path) -> bool:
        """Check whether a file should be loaded as a record."""
        if path.suffix.lower() not in CONTENT_SUFFIXES:
            return False

        resolved = path.resolve()
        if any(resolved.is_relative_to(skip) for skip in self.skip_dirs):
            return False

        relative = path.relative_to(self.content_dir)
        for part in relative.parts:
            if part == self.posts_dir:
                continue
            if part.startswith(("_", ".")):
                return False

        rel_posix = relative.as_posix()
        for pattern in self.exclude_patterns:
            if fnmatch.fnmatch(rel_posix, pattern):
                logger.debug("Excluded by pattern %s: %s", pattern, rel_posix)
                return False

        return True

    def _kind_for(self, relative: PurePosixPath) -> RecordKind:
        if self.posts_dir in relative.parent.parts:
            return RecordKind.POST
        return RecordKind.PAGE

    def load_file(self, path: Path) -> ContentRecord:
        """Read and parse a single content file.

        Args:
            path: Absolute path to a file under the content directory

        Returns:
            Parsed ContentRecord

        Raises:
            MalformedMetadata: If the metadata block is malformed
            IOFailure: If the file cannot be read
        """
        relative = PurePosixPath(path.relative_to(self.content_dir).as_posix())

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailure(f"Cannot read content file: {e}", relative) from e

        try:
            metadata, body, has_metadata = parse_document(text)
        except MalformedMetadata as e:
            raise MalformedMetadata(e.message, relative) from e

        return ContentRecord(
            source_path=relative,
            metadata=metadata,
            body=body,
            kind=self._kind_for(relative),
            has_metadata=has_metadata,
        )

    def load(self) -> LoadResult:
        """Load every content record.

        Returns:
            LoadResult with parsed records and metadata failures

        Raises:
            IOFailure: If the directory or any file cannot be read
        """
        result = LoadResult()

        for path in self.discover():
            try:
                record = self.load_file(path)
            except MalformedMetadata as e:
                logger.warning("Skipping %s: %s", e.source_path, e.message)
                result.failures.append(e)
                continue

            result.records.append(record)
            logger.debug("Loaded %s (%s)", record.source_path, record.kind.value)

        logger.info(
            "Discovered %d record(s), %d with malformed metadata",
            len(result.records),
            len(result.failures),
        )
        return result
