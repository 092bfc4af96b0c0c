"""Folio configuration system.

Configuration is YAML-based with minimal CLI overrides (--source, --output, --clean).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.folio/config.yaml
3. ./folio.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from folio.models.record import PermalinkStyle

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class SiteConfig:
    """Site-wide metadata exposed to templates as `site`.

    Attributes:
        title: Site title
        description: Site description
        author: Site author
        base_url: Absolute url the site is published under
        menu: Navigation menu entries, nested via `children`
        extra: Any other keys from the `site` section
    """

    title: str = "My Site"
    description: str = ""
    author: str = ""
    base_url: str = ""
    menu: list[dict[str, Any]] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate site configuration."""
        if not isinstance(self.menu, list):
            raise ValueError(f"site.menu must be a list (got {type(self.menu).__name__})")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the template-facing dictionary."""
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "title": self.title,
                "description": self.description,
                "author": self.author,
                "base_url": self.base_url.rstrip("/"),
                "menu": self.menu,
            }
        )
        return data


@dataclass
class PathsConfig:
    """Directory layout, relative to the site directory.

    Attributes:
        content: Content records directory
        templates: Layout templates directory
        static: Static assets copied as-is
        output: Build output directory
        posts: Posts directory name inside the content directory
    """

    content: str = "content"
    templates: str = "templates"
    static: str = "static"
    output: str = "_site"
    posts: str = "_posts"


@dataclass
class BuildConfig:
    """Rendering options.

    Attributes:
        default_layout: Layout for pages without a `layout` key
        post_layout: Layout for posts without a `layout` key
        permalink_style: "plain" (about.html) or "pretty" (about/index.html)
        markdown_extensions: Python-Markdown extensions to enable
        exclude: Glob patterns of content paths to ignore
        clean: Remove the output directory before building
    """

    default_layout: str = "page"
    post_layout: str = "post"
    permalink_style: str = "plain"
    markdown_extensions: list[str] = field(
        default_factory=lambda: ["fenced_code", "tables"]
    )
    exclude: list[str] = field(default_factory=list)
    clean: bool = False

    def __post_init__(self) -> None:
        """Validate build configuration."""
        valid_styles = {s.value for s in PermalinkStyle}
        if self.permalink_style not in valid_styles:
            raise ValueError(
                f"Invalid permalink style: {self.permalink_style}. Valid: {sorted(valid_styles)}"
            )

    @property
    def permalinks(self) -> PermalinkStyle:
        """Return the permalink style as an enum."""
        return PermalinkStyle(self.permalink_style)


@dataclass
class FolioConfig:
    """Top-level Folio configuration.

    Attributes:
        site: Site metadata (title, menu, ...)
        paths: Directory layout
        build: Rendering options
    """

    site: SiteConfig = field(default_factory=SiteConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    build: BuildConfig = field(default_factory=BuildConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${SITE_URL} -> value of SITE_URL

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.folio/config.yaml
    2. ./folio.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".folio" / "config.yaml",
        start_path / "folio.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================

_SITE_KEYS = {"title", "description", "author", "base_url", "menu"}


def load_config_from_dict(data: dict[str, Any]) -> FolioConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        FolioConfig instance
    """
    data = substitute_env_vars(data)

    config = FolioConfig()

    if "site" in data:
        site_data = data["site"] or {}
        config.site = SiteConfig(
            title=str(site_data.get("title", config.site.title)),
            description=str(site_data.get("description", "")),
            author=str(site_data.get("author", "")),
            base_url=str(site_data.get("base_url", "")),
            menu=site_data.get("menu") or [],
            extra={k: v for k, v in site_data.items() if k not in _SITE_KEYS},
        )

    if "paths" in data:
        paths_data = data["paths"] or {}
        defaults = PathsConfig()
        config.paths = PathsConfig(
            content=paths_data.get("content", defaults.content),
            templates=paths_data.get("templates", defaults.templates),
            static=paths_data.get("static", defaults.static),
            output=paths_data.get("output", defaults.output),
            posts=paths_data.get("posts", defaults.posts),
        )

    if "build" in data:
        build_data = data["build"] or {}
        defaults_build = BuildConfig()
        config.build = BuildConfig(
            default_layout=build_data.get("default_layout", defaults_build.default_layout),
            post_layout=build_data.get("post_layout", defaults_build.post_layout),
            permalink_style=build_data.get("permalink_style", defaults_build.permalink_style),
            markdown_extensions=build_data.get(
                "markdown_extensions", defaults_build.markdown_extensions
            ),
            exclude=build_data.get("exclude", []),
            clean=build_data.get("clean", False),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
    start_path: Path | None = None,
) -> FolioConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified
        start_path: Directory to search from (defaults to cwd)

    Returns:
        FolioConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file(start_path)
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = FolioConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# Folio Configuration

# Site metadata, available in templates as `site`
site:
  title: "My Site"
  description: "Resume and notes on software engineering"
  author: ""
  base_url: ""  # e.g. "https://example.org" or "${SITE_URL}"
  menu:
    - title: "Home"
      url: "/"
    - title: "Resume"
      url: "/resume.html"
    - title: "Blog"
      url: "/blog.html"
      # children:
      #   - title: "Archive"
      #     url: "/archive.html"

# Directory layout, relative to the site directory
paths:
  content: "content"
  templates: "templates"
  static: "static"
  output: "_site"
  posts: "_posts"

# Rendering options
build:
  default_layout: "page"
  post_layout: "post"
  permalink_style: "plain"  # plain (about.html), pretty (about/index.html)
  markdown_extensions:
    - "fenced_code"
    - "tables"
  exclude: []
  clean: false
'''
