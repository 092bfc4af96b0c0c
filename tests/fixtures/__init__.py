"""Test fixtures for Folio.

This package provides sample sites for integration and end-to-end testing.

Sample Sites:
- sample_site: A resume page, an about page, a reading list and two posts
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Specific sample site paths
SAMPLE_SITE_PATH = FIXTURES_DIR / "sample_site"
