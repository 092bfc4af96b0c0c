"""Build pipeline orchestrator.

Coordinates content discovery, rendering and output for one site:
1. Discover and parse content records
2. Build the shared site context (menus, post listing)
3. Render each record with its layout
4. Write pages atomically and copy static assets

Record-level failures (malformed metadata, missing layouts, template errors)
skip the record and are collected on the BuildResult. I/O failures abort the
build.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from folio.config import FolioConfig
from folio.content.loader import ContentLoader
from folio.exceptions import FolioError, IOFailure, RenderFailure
from folio.models.build import BuildError, BuildResult, BuildStatus
from folio.models.record import ContentRecord, RenderedDocument
from folio.templates.renderer import PageRenderer
from folio.utils.io import atomic_write_text, clean_directory, copy_static_tree

logger = logging.getLogger(__name__)


@dataclass
class BuildOptions:
    """Options for controlling a build.

    Attributes:
        output_dir: Output directory override (else from config)
        clean: Remove the output directory first (else from config)
        dry_run: Render everything but write nothing
        skip_static: Do not copy static assets
        fail_fast: Stop on the first record error
        exclude_patterns: Extra content globs to ignore
    """

    output_dir: Path | None = None
    clean: bool | None = None
    dry_run: bool = False
    skip_static: bool = False
    fail_fast: bool = False
    exclude_patterns: list[str] = field(default_factory=list)


class SiteBuilder:
    """Builds a site directory into static HTML.

    Usage:
        builder = SiteBuilder(source_dir, config)
        result = builder.run(BuildOptions(output_dir=Path("_site")))
    """

    def __init__(
        self,
        source_dir: Path,
        config: FolioConfig | None = None,
        renderer: PageRenderer | None = None,
    ) -> None:
        """Initialize the site builder.

        Args:
            source_dir: Site directory holding content/, templates/, static/
            config: Folio configuration (uses defaults if None)
            renderer: Page renderer (built from config if None)
        """
        self.source_dir = source_dir.resolve()
        self.config = config or FolioConfig()
        self.renderer = renderer or PageRenderer(
            self.config,
            templates_dir=self._site_path(self.config.paths.templates),
        )

    def _site_path(self, value: str | Path) -> Path:
        path = Path(value)
        if not path.is_absolute():
            path = self.source_dir / path
        return path

    def run(self, options: BuildOptions | None = None) -> BuildResult:
        """Execute the full build.

        Args:
            options: Build options

        Returns:
            BuildResult with rendered documents and collected errors
        """
        options = options or BuildOptions()

        output_dir = (
            options.output_dir.resolve()
            if options.output_dir is not None
            else self._site_path(self.config.paths.output)
        )
        clean = self.config.build.clean if options.clean is None else options.clean

        result = BuildResult(
            source_dir=self.source_dir,
            output_dir=output_dir,
            status=BuildStatus.RUNNING,
        )

        logger.info("Building %s -> %s", self.source_dir, output_dir)

        try:
            if clean and not options.dry_run:
                clean_directory(output_dir)

            records = self._load_records(result, options, output_dir)
            site_context = self.renderer.build_site_context(records)
            documents = self._render_records(records, site_context, result, options)

            if not options.dry_run:
                self._write_documents(documents, output_dir, result)
                if not options.skip_static:
                    result.assets = copy_static_tree(
                        self._site_path(self.config.paths.static), output_dir
                    )
            else:
                result.documents.extend(documents)

            result.status = (
                BuildStatus.FAILED if result.has_fatal_errors() else BuildStatus.COMPLETED
            )

        except IOFailure as e:
            logger.error("Build aborted: %s", e)
            result.status = BuildStatus.FAILED
            result.add_error(BuildError.from_exception(e))

        except FolioError as e:
            # Only reachable with fail_fast
            logger.error("Build stopped: %s", e)
            result.status = BuildStatus.FAILED
            error = BuildError.from_exception(e)
            error.recoverable = False
            result.add_error(error)

        logger.info(
            "Build %s: %d page(s), %d asset(s), %d error(s)",
            result.status.value,
            len(result.documents),
            len(result.assets),
            len(result.errors),
        )

        return result

    def _load_records(
        self,
        result: BuildResult,
        options: BuildOptions,
        output_dir: Path,
    ) -> list[ContentRecord]:
        """Discover records, collecting metadata failures on the result."""
        loader = ContentLoader(
            self._site_path(self.config.paths.content),
            posts_dir=self.config.paths.posts,
            exclude_patterns=[*self.config.build.exclude, *options.exclude_patterns],
            skip_dirs=[
                output_dir,
                self._site_path(self.config.paths.templates),
                self._site_path(self.config.paths.static),
            ],
        )
        loaded = loader.load()

        for failure in loaded.failures:
            result.add_error(BuildError.from_exception(failure))
            if options.fail_fast:
                raise failure

        records: list[ContentRecord] = []
        for record in loaded.records:
            if not record.published:
                logger.info("Skipping unpublished %s", record.source_path)
                result.skipped.append(str(record.source_path))
                continue
            records.append(record)

        return records

    def _render_records(
        self,
        records: list[ContentRecord],
        site_context: dict,
        result: BuildResult,
        options: BuildOptions,
    ) -> list[RenderedDocument]:
        """Render every record; failed records are logged and skipped."""
        documents: list[RenderedDocument] = []
        claimed: dict[PurePosixPath, str] = {}

        for record in records:
            source = str(record.source_path)
            try:
                document = self.renderer.render(record, site_context)
                owner = claimed.get(document.output_path)
                if owner is not None:
                    raise RenderFailure(
                        f"Duplicate output {document.output_path} (already produced by {owner})",
                        source,
                    )
            except IOFailure:
                raise
            except FolioError as e:
                logger.warning("Skipping %s: %s", source, e.message)
                result.add_error(BuildError.from_exception(e))
                if options.fail_fast:
                    raise
                continue

            claimed[document.output_path] = source
            documents.append(document)

        return documents

    def _write_documents(
        self,
        documents: list[RenderedDocument],
        output_dir: Path,
        result: BuildResult,
    ) -> None:
        """Write rendered documents; any failure aborts the build."""
        for document in documents:
            destination = document.destination(output_dir)
            atomic_write_text(destination, document.html)
            result.documents.append(document)
            logger.debug("Wrote %s", destination)
