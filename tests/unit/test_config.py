"""Unit tests for configuration system."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from folio.config import (
    BuildConfig,
    SiteConfig,
    create_default_config,
    find_config_file,
    load_config,
    load_config_from_dict,
    substitute_env_vars,
)
from folio.models import PermalinkStyle


class TestSubstituteEnvVars:
    """Tests for environment variable substitution."""

    def test_substitute_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test substituting env var in string."""
        monkeypatch.setenv("SITE_URL", "https://jane.example.org")

        result = substitute_env_vars("${SITE_URL}/feed.xml")

        assert result == "https://jane.example.org/feed.xml"

    def test_substitute_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test substituting env vars inside dicts and lists."""
        monkeypatch.setenv("AUTHOR", "Jane")

        data = {"site": {"author": "${AUTHOR}", "menu": [{"title": "${AUTHOR}"}]}}
        result = substitute_env_vars(data)

        assert result["site"]["author"] == "Jane"
        assert result["site"]["menu"][0]["title"] == "Jane"

    def test_missing_env_var_raises(self) -> None:
        """Test that missing env var raises ValueError."""
        with pytest.raises(ValueError, match="Environment variable not set"):
            substitute_env_vars("${FOLIO_NONEXISTENT_VAR}")

    def test_passthrough_non_string(self) -> None:
        """Test that non-string values pass through unchanged."""
        assert substitute_env_vars(123) == 123
        assert substitute_env_vars(True) is True
        assert substitute_env_vars(None) is None


class TestFindConfigFile:
    """Tests for config file discovery."""

    def test_find_folio_dir_config(self, tmp_path: Path) -> None:
        """Test finding .folio/config.yaml."""
        config_dir = tmp_path / ".folio"
        config_dir.mkdir()
        config_file = config_dir / "config.yaml"
        config_file.write_text("site:\n  title: x")

        assert find_config_file(tmp_path) == config_file

    def test_find_root_config(self, tmp_path: Path) -> None:
        """Test finding folio.yaml at root."""
        config_file = tmp_path / "folio.yaml"
        config_file.write_text("site:\n  title: x")

        assert find_config_file(tmp_path) == config_file

    def test_prefer_folio_dir_over_root(self, tmp_path: Path) -> None:
        """Test .folio/config.yaml is preferred over folio.yaml."""
        config_dir = tmp_path / ".folio"
        config_dir.mkdir()
        preferred = config_dir / "config.yaml"
        preferred.write_text("# preferred")
        (tmp_path / "folio.yaml").write_text("# fallback")

        assert find_config_file(tmp_path) == preferred

    def test_no_config_returns_none(self, tmp_path: Path) -> None:
        """Test returns None when no config found."""
        assert find_config_file(tmp_path) is None


class TestLoadConfigFromDict:
    """Tests for loading config from dictionary."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = load_config_from_dict({})

        assert config.site.title == "My Site"
        assert config.paths.content == "content"
        assert config.paths.output == "_site"
        assert config.paths.posts == "_posts"
        assert config.build.default_layout == "page"
        assert config.build.post_layout == "post"
        assert config.build.permalinks == PermalinkStyle.PLAIN
        assert config.build.markdown_extensions == ["fenced_code", "tables"]
        assert config.build.clean is False

    def test_minimal_config(self, minimal_config: dict[str, Any]) -> None:
        """Test a config with only a site title."""
        config = load_config_from_dict(minimal_config)

        assert config.site.title == "Jane Doe"
        assert config.site.menu == []

    def test_full_config(self, full_config: dict[str, Any]) -> None:
        """Test every section is read."""
        config = load_config_from_dict(full_config)

        assert config.site.author == "Jane Doe"
        assert config.site.menu[1]["children"][0]["title"] == "Archive"
        assert config.site.extra == {"language": "en"}
        assert config.paths.content == "pages"
        assert config.paths.templates == "layouts"
        assert config.paths.static == "assets"
        assert config.paths.output == "public"
        assert config.build.default_layout == "default"
        assert config.build.post_layout == "article"
        assert config.build.permalinks == PermalinkStyle.PRETTY
        assert config.build.markdown_extensions == ["tables"]
        assert config.build.exclude == ["drafts/*"]
        assert config.build.clean is True

    def test_site_to_dict(self, full_config: dict[str, Any]) -> None:
        """Test the template-facing site dictionary."""
        site = load_config_from_dict(full_config).site.to_dict()

        assert site["base_url"] == "https://jane.example.org"
        assert site["language"] == "en"
        assert site["menu"][0] == {"title": "Home", "url": "/"}

    def test_invalid_permalink_style(self) -> None:
        """Test unknown permalink styles are rejected."""
        with pytest.raises(ValueError, match="Invalid permalink style"):
            load_config_from_dict({"build": {"permalink_style": "ugly"}})

    def test_menu_must_be_list(self) -> None:
        with pytest.raises(ValueError, match="site.menu must be a list"):
            load_config_from_dict({"site": {"menu": {"title": "Home"}}})


class TestDataclasses:
    """Tests for config dataclass validation."""

    def test_build_config_valid_styles(self) -> None:
        assert BuildConfig(permalink_style="pretty").permalinks == PermalinkStyle.PRETTY

    def test_site_config_defaults(self) -> None:
        assert SiteConfig().to_dict()["menu"] == []


class TestLoadConfig:
    """Tests for loading config files."""

    def test_explicit_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "missing.yaml")

    def test_discovers_from_start_path(self, tmp_path: Path) -> None:
        """Test discovery relative to a site directory."""
        (tmp_path / "folio.yaml").write_text("site:\n  title: Found\n")

        config = load_config(start_path=tmp_path)

        assert config.site.title == "Found"
        assert config.config_path == tmp_path.resolve() / "folio.yaml"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "folio.yaml"
        config_file.write_text("")

        config = load_config(config_path=config_file)

        assert config.site.title == "My Site"

    def test_default_config_round_trips(self) -> None:
        """Test the generated default config loads cleanly."""
        config = load_config_from_dict(yaml.safe_load(create_default_config()))

        assert config.site.menu[0]["url"] == "/"
        assert config.build.permalinks == PermalinkStyle.PLAIN
