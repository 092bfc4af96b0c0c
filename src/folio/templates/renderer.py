"""Page renderer (Reproducibility).

Renders content records to HTML using Jinja2 layouts.
All output is deterministic - same input always produces same output.
"""

import logging
from pathlib import Path
from typing import Any

import markdown
from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)
from markupsafe import Markup

from folio.config import FolioConfig
from folio.exceptions import MissingTemplate, RenderFailure
from folio.models.record import ContentRecord, PermalinkStyle, RecordKind, RenderedDocument
from folio.renderers.filters import absolute_url, first_paragraph, format_date, strip_html

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html"

# Context keys that metadata cannot shadow
RESERVED_KEYS = frozenset({"site", "page", "body", "content"})


def template_name_for(layout: str) -> str:
    """Map a layout name to a template file name.

    Examples:
        >>> template_name_for("page")
        'page.html'
        >>> template_name_for("post.html")
        'post.html'
    """
    if Path(layout).suffix:
        return layout
    return f"{layout}{TEMPLATE_SUFFIX}"


class PageRenderer:
    """Renders content records to HTML documents.

    Site layouts come from the configured templates directory; layouts shipped
    with the package are used for any name the site does not define.

    Usage:
        renderer = PageRenderer(config, templates_dir=site / "templates")
        site_context = renderer.build_site_context(records)
        document = renderer.render(record, site_context)
    """

    def __init__(
        self,
        config: FolioConfig | None = None,
        templates_dir: Path | None = None,
        loader: BaseLoader | None = None,
    ) -> None:
        """Initialize the page renderer.

        Args:
            config: Folio configuration (defaults if None)
            templates_dir: Site templates directory searched before package layouts
            loader: Explicit Jinja2 loader, replacing both of the above
        """
        self.config = config or FolioConfig()
        self._body_cache: dict[tuple[str, str], str] = {}

        if loader is None:
            loaders: list[BaseLoader] = []
            if templates_dir is not None and templates_dir.is_dir():
                loaders.append(FileSystemLoader(str(templates_dir)))
            loaders.append(PackageLoader("folio", "templates/layouts"))
            loader = ChoiceLoader(loaders)

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "htm", "xml"]),
            keep_trailing_newline=True,
        )

        self._env.filters["format_date"] = format_date
        self._env.filters["strip_html"] = strip_html
        self._env.filters["first_paragraph"] = first_paragraph
        self._env.filters["absolute_url"] = absolute_url

    @property
    def environment(self) -> Environment:
        """Return the Jinja2 environment."""
        return self._env

    @property
    def permalink_style(self) -> PermalinkStyle:
        return self.config.build.permalinks

    def layout_for(self, record: ContentRecord) -> str:
        """Return the layout name a record renders with."""
        return record.layout(
            default_page=self.config.build.default_layout,
            default_post=self.config.build.post_layout,
        )

    def get_template(self, layout: str, source_path: str | None = None) -> Template:
        """Resolve a layout name to a compiled template.

        Args:
            layout: Layout name (e.g. "page")
            source_path: Record being rendered, for error reporting

        Returns:
            Compiled Jinja2 template

        Raises:
            MissingTemplate: If no template exists for the layout
            RenderFailure: If the template has a syntax error
        """
        name = template_name_for(layout)
        try:
            return self._env.get_template(name)
        except TemplateNotFound as e:
            raise MissingTemplate(layout, source_path) from e
        except TemplateSyntaxError as e:
            raise RenderFailure(
                f"Template syntax error in {e.name or name} at line {e.lineno}: {e.message}",
                source_path,
            ) from e

    def convert_body(self, record: ContentRecord) -> str:
        """Convert a record body to HTML.

        Markdown bodies go through Python-Markdown; HTML bodies pass through.

        Args:
            record: Content record

        Returns:
            Body HTML (empty string for an empty body)
        """
        key = (str(record.source_path), record.body)
        cached = self._body_cache.get(key)
        if cached is not None:
            return cached

        if not record.body.strip():
            html = ""
        elif record.markup == "html":
            html = record.body
        else:
            html = markdown.markdown(
                record.body,
                extensions=list(self.config.build.markdown_extensions),
                output_format="html",
            )

        self._body_cache[key] = html
        return html

    def _page_dict(self, record: ContentRecord) -> dict[str, Any]:
        """Build the template-facing description of a record."""
        body_html = self.convert_body(record)
        excerpt = record.metadata.get("excerpt")
        if excerpt is None:
            excerpt_html = Markup(first_paragraph(body_html))
        else:
            excerpt_html = str(excerpt)

        page: dict[str, Any] = dict(record.metadata)
        page.update(
            {
                "title": record.title,
                "date": record.date,
                "slug": record.slug,
                "kind": record.kind.value,
                "source_path": str(record.source_path),
                "url": record.url(self.permalink_style, self.config.paths.posts),
                "excerpt": excerpt_html,
                "content": Markup(body_html),
            }
        )
        return page

    def build_site_context(self, records: list[ContentRecord]) -> dict[str, Any]:
        """Build the `site` context shared by every page.

        Args:
            records: All published records of the build

        Returns:
            Site dictionary with config metadata, `posts` (newest first)
            and `pages` (by url)
        """
        site = self.config.site.to_dict()

        posts = [r for r in records if r.kind == RecordKind.POST]
        # Newest first; ties broken by source path for stable output
        posts.sort(key=lambda r: str(r.source_path))
        posts.sort(key=lambda r: r.date.toordinal() if r.date else 0, reverse=True)

        pages = [self._page_dict(r) for r in records if r.kind == RecordKind.PAGE]
        pages.sort(key=lambda p: p["url"])

        site["posts"] = [self._page_dict(r) for r in posts]
        site["pages"] = pages
        return site

    def build_context(
        self,
        record: ContentRecord,
        site_context: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build the rendering context for one record.

        Metadata keys are available at top level, next to `page`, `site`,
        `body` and `content`.
        """
        page = self._page_dict(record)
        context: dict[str, Any] = {
            k: v for k, v in record.metadata.items() if k not in RESERVED_KEYS
        }
        context.update(
            {
                "page": page,
                "site": site_context if site_context is not None else self.config.site.to_dict(),
                "body": page["content"],
                "content": page["content"],
            }
        )
        return context

    def render(
        self,
        record: ContentRecord,
        site_context: dict[str, Any] | None = None,
    ) -> RenderedDocument:
        """Render a record with its layout.

        Args:
            record: Content record
            site_context: Shared site context from build_site_context

        Returns:
            RenderedDocument with the output path and HTML

        Raises:
            MissingTemplate: If the record's layout does not resolve
            RenderFailure: If the template fails to render
        """
        source = str(record.source_path)
        layout = self.layout_for(record)
        template = self.get_template(layout, source)

        context = self.build_context(record, site_context)

        try:
            html = template.render(context)
        except Exception as e:
            logger.error("Template rendering failed for %s: %s", source, e)
            raise RenderFailure(f"Template rendering failed ({layout}): {e}", source) from e

        output_path = record.output_path(self.permalink_style, self.config.paths.posts)
        if ".." in output_path.parts:
            raise RenderFailure(f"Output path escapes the output directory: {output_path}", source)

        logger.debug("Rendered %s with %s -> %s", source, layout, output_path)

        return RenderedDocument(record=record, output_path=output_path, html=html)
