"""Shared pytest fixtures for Folio tests.

Fixtures are organized by category:
- Path fixtures: The sample site shipped with the tests
- Site fixtures: Temporary site directories built per test
- Configuration fixtures: Config dictionaries for various scenarios
"""

from pathlib import Path
from typing import Any

import pytest

from tests.fixtures import SAMPLE_SITE_PATH

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_site() -> Path:
    """Return the path to the sample site fixture."""
    return SAMPLE_SITE_PATH


# =============================================================================
# Temporary Site Fixtures
# =============================================================================


def write_file(path: Path, content: str) -> Path:
    """Write a file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def temp_site(tmp_path: Path) -> Path:
    """Create an empty site directory with content/ and templates/."""
    site = tmp_path / "site"
    (site / "content").mkdir(parents=True)
    (site / "templates").mkdir()
    return site


@pytest.fixture
def simple_site(temp_site: Path) -> Path:
    """Create a site with a single `page` layout and two pages."""
    write_file(
        temp_site / "templates" / "page.html",
        "<h1>{{title}}</h1>{{body}}",
    )
    write_file(
        temp_site / "content" / "resume.md",
        "---\ntitle: Resume\nlayout: page\n---\n## Education",
    )
    write_file(
        temp_site / "content" / "contact.md",
        "---\ntitle: Contact\n---\nMail me.",
    )
    return temp_site


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid Folio configuration."""
    return {
        "site": {
            "title": "Jane Doe",
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete Folio configuration with all options."""
    return {
        "site": {
            "title": "Jane Doe",
            "description": "Resume and notes",
            "author": "Jane Doe",
            "base_url": "https://jane.example.org/",
            "language": "en",
            "menu": [
                {"title": "Home", "url": "/"},
                {
                    "title": "Writing",
                    "url": "/blog.html",
                    "children": [{"title": "Archive", "url": "/archive.html"}],
                },
            ],
        },
        "paths": {
            "content": "pages",
            "templates": "layouts",
            "static": "assets",
            "output": "public",
            "posts": "_posts",
        },
        "build": {
            "default_layout": "default",
            "post_layout": "article",
            "permalink_style": "pretty",
            "markdown_extensions": ["tables"],
            "exclude": ["drafts/*"],
            "clean": True,
        },
    }
