"""Integration tests building the sample site end to end."""

from pathlib import Path

import pytest

from folio.config import load_config
from folio.models import BuildStatus
from folio.pipeline import BuildOptions, SiteBuilder
from tests.fixtures import SAMPLE_SITE_PATH


@pytest.fixture
def built_site(tmp_path: Path) -> Path:
    """Build the sample site into a temporary directory."""
    output = tmp_path / "_site"
    config = load_config(start_path=SAMPLE_SITE_PATH)
    result = SiteBuilder(SAMPLE_SITE_PATH, config).run(BuildOptions(output_dir=output))
    assert result.status == BuildStatus.COMPLETED
    assert result.errors == []
    return output


class TestSampleSite:
    """Tests against the rendered sample site."""

    def test_resume_uses_site_layout(self, built_site: Path) -> None:
        """Test the site's own page layout overrides the packaged one."""
        html = (built_site / "resume.html").read_text()

        assert '<article class="site-page">' in html
        assert "<h1>Resume</h1>" in html
        assert '<p class="subtitle">Software engineer</p>' in html
        assert "<h2>Education</h2>" in html
        assert "<table>" in html

    def test_navigation_menu(self, built_site: Path) -> None:
        """Test the nested menu is rendered with absolute links."""
        html = (built_site / "resume.html").read_text()

        assert '<a href="https://jane.example.org/resume.html" class="active">Resume</a>' in html
        assert '<a href="https://github.com/janedoe">GitHub</a>' in html
        assert "<title>Resume | Jane Doe</title>" in html

    def test_blog_index_lists_posts_newest_first(self, built_site: Path) -> None:
        html = (built_site / "index.html").read_text()

        newer = html.index("Python tooling I keep coming back to")
        older = html.index("Layering SQLite access in C")
        assert newer < older
        assert "https://jane.example.org/2020/02/14/python-tooling.html" in html
        assert "Keep SQL behind one module." in html
        assert "A short tour of the tools in my Python projects." in html

    def test_post_page(self, built_site: Path) -> None:
        html = (built_site / "2019" / "05" / "10" / "sqlite-access-layers.html").read_text()

        assert '<article class="post">' in html
        assert '<time datetime="2019-05-10">May 10, 2019</time>' in html
        assert '<code class="language-c">' in html

    def test_html_record_passthrough(self, built_site: Path) -> None:
        html = (built_site / "about.html").read_text()

        assert '<p class="about">I write C and Python.</p>' in html

    def test_static_assets(self, built_site: Path) -> None:
        assert (built_site / "css" / "style.css").read_text() == "body { font-family: serif; }\n"

    def test_rebuild_is_byte_identical(self, built_site: Path, tmp_path: Path) -> None:
        """Test two builds of the same site produce identical files."""
        second = tmp_path / "second"
        config = load_config(start_path=SAMPLE_SITE_PATH)
        SiteBuilder(SAMPLE_SITE_PATH, config).run(BuildOptions(output_dir=second))

        first_files = sorted(p.relative_to(built_site) for p in built_site.rglob("*") if p.is_file())
        second_files = sorted(p.relative_to(second) for p in second.rglob("*") if p.is_file())

        assert first_files == second_files
        for relative in first_files:
            assert (built_site / relative).read_bytes() == (second / relative).read_bytes()
