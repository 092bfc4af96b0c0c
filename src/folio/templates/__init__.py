"""Folio page rendering (Reproducibility).

This module provides Jinja2-based rendering of content records with
deterministic output. The `layouts` directory holds the layouts used when a
site does not define its own.
"""

from folio.templates.renderer import PageRenderer, template_name_for

__all__ = ["PageRenderer", "template_name_for"]
