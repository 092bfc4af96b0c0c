"""Folio utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- io: Atomic page writes and static asset passthrough
"""

from folio.utils.io import atomic_write_text, copy_static_tree
from folio.utils.logging import get_logger, setup_logging

__all__ = [
    "atomic_write_text",
    "copy_static_tree",
    "get_logger",
    "setup_logging",
]
