"""Folio CLI interface.

Commands:
- build: Render a site directory to static HTML
- init: Initialize a site with configuration and starter content
- validate: Validate a Jinja2 layout

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import json
import shutil
from datetime import date
from importlib import resources
from pathlib import Path
from typing import Annotated

import typer

from folio import __version__
from folio.config import create_default_config, load_config
from folio.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="folio",
    help="Static renderer for a personal resume and blog site",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config_path: Path | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Folio - render Markdown/HTML content into a static site."""
    global _config_path

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)
    _config_path = config


# =============================================================================
# build command
# =============================================================================


@app.command()
def build(
    source: Annotated[
        Path,
        typer.Option(
            "--source",
            "-s",
            help="Site directory (holds content/, templates/, static/)",
            exists=True,
            file_okay=False,
        ),
    ] = Path("."),
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (overrides config)",
        ),
    ] = None,
    clean: Annotated[
        bool,
        typer.Option(
            "--clean",
            help="Remove the output directory before building",
        ),
    ] = False,
    skip_static: Annotated[
        bool,
        typer.Option(
            "--skip-static",
            help="Do not copy static assets",
        ),
    ] = False,
    fail_fast: Annotated[
        bool,
        typer.Option(
            "--fail-fast",
            help="Stop at the first record that fails",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Render pages without writing files",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the build summary as JSON",
        ),
    ] = False,
) -> None:
    """Render every content record to HTML.

    Exit codes:
        0: All records built
        1: Build failed (I/O error, invalid configuration)
        2: Built with skipped records
    """
    from folio.pipeline import BuildOptions, SiteBuilder

    source_dir = source.resolve()

    try:
        config = load_config(config_path=_config_path, start_path=source_dir)
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    if config.config_path:
        _logger.debug(f"Loaded config from: {config.config_path}")

    options = BuildOptions(
        output_dir=output,
        clean=True if clean else None,
        dry_run=dry_run,
        skip_static=skip_static,
        fail_fast=fail_fast,
    )

    builder = SiteBuilder(source_dir, config)
    result = builder.run(options)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        verb = "Rendered" if dry_run else "Wrote"
        typer.echo(f"\n{verb} {len(result.documents)} page(s) to {result.output_dir}")
        for document in result.documents:
            typer.echo(f"  {document.record.source_path} -> {document.output_path}")
        if result.assets:
            typer.echo(f"Copied {len(result.assets)} static asset(s)")
        for error in result.errors:
            location = f"{error.source_path}: " if error.source_path else ""
            typer.echo(f"  [{error.component}] {location}{error.message}")

    if result.has_fatal_errors():
        raise typer.Exit(1)
    elif result.errors:
        raise typer.Exit(2)
    else:
        raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================

_INDEX_PAGE = """---
title: Home
layout: blog
---
Notes on building and maintaining software.
"""

_RESUME_PAGE = """---
title: Resume
subtitle: Software engineer
---
## Experience

## Education
"""

_FIRST_POST = """---
title: Hello, world
---
The first post on this site.
"""


def _write_if_missing(path: Path, content: str) -> bool:
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    _logger.info(f"Created {path}")
    return True


@app.command()
def init(
    path: Annotated[
        Path,
        typer.Argument(
            help="Site directory to initialize",
            file_okay=False,
        ),
    ] = Path("."),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
    layouts: Annotated[
        bool,
        typer.Option(
            "--layouts",
            help="Copy the built-in layouts into templates/ for customization",
        ),
    ] = False,
) -> None:
    """Initialize a Folio site.

    Creates a default configuration file, starter content and the
    content/, templates/ and static/ directories.
    """
    site_dir = path
    folio_dir = site_dir / ".folio"
    folio_dir.mkdir(parents=True, exist_ok=True)

    config_file = folio_dir / "config.yaml"
    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    content_dir = site_dir / "content"
    _write_if_missing(content_dir / "index.md", _INDEX_PAGE)
    _write_if_missing(content_dir / "resume.md", _RESUME_PAGE)
    post_name = f"{date.today().isoformat()}-hello-world.md"
    _write_if_missing(content_dir / "_posts" / post_name, _FIRST_POST)

    templates_dir = site_dir / "templates"
    templates_dir.mkdir(exist_ok=True)
    (site_dir / "static").mkdir(exist_ok=True)

    if layouts:
        builtin = resources.files("folio") / "templates" / "layouts"
        for entry in builtin.iterdir():
            if entry.name.endswith(".html"):
                target = templates_dir / entry.name
                if not target.exists() or force:
                    with resources.as_file(entry) as source_file:
                        shutil.copyfile(source_file, target)
                    _logger.info(f"Copied layout: {target}")

    typer.echo("\n✅ Folio site initialized")
    typer.echo(f"   Config: {config_file}")
    typer.echo(f"   Content: {content_dir}/")
    raise typer.Exit(0)


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Path to Jinja2 layout to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Validate a Jinja2 layout.

    Checks syntax and that every filter used is known to Folio.
    """
    from jinja2 import TemplateSyntaxError

    from folio.templates import PageRenderer

    _logger.info(f"Validating template: {template}")

    environment = PageRenderer().environment

    try:
        environment.from_string(template.read_text(encoding="utf-8"))
    except TemplateSyntaxError as e:
        _logger.error(f"Template syntax error: {e.message}")
        typer.echo(f"❌ Template syntax error at line {e.lineno}: {e.message}")
        raise typer.Exit(1)

    typer.echo(f"✅ Template is valid: {template}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
