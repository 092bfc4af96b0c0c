"""File output for builds.

Pages are written atomically: content goes to a temporary file in the
destination directory and is renamed into place, so a failed write never
leaves a truncated page behind.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from folio.exceptions import IOFailure

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)

    Raises:
        IOFailure: If the file cannot be written
    """
    try:
        ensure_parent(path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as e:
        raise IOFailure(f"Cannot create output file {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        raise IOFailure(f"Cannot write output file {path}: {e}") from e
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def copy_static_tree(static_dir: Path, output_dir: Path) -> list[Path]:
    """Copy every file under static_dir into output_dir, keeping relative paths.

    Args:
        static_dir: Source directory of passthrough assets
        output_dir: Build output directory

    Returns:
        Copied paths relative to output_dir, sorted

    Raises:
        IOFailure: If a file cannot be copied
    """
    if not static_dir.is_dir():
        return []

    copied: list[Path] = []
    for source in sorted(static_dir.rglob("*")):
        if not source.is_file():
            continue
        relative = source.relative_to(static_dir)
        destination = output_dir / relative
        try:
            ensure_parent(destination)
            shutil.copy2(source, destination)
        except OSError as e:
            raise IOFailure(f"Cannot copy static asset {relative}: {e}") from e
        copied.append(relative)
        logger.debug("Copied %s", relative)

    return copied


def clean_directory(path: Path) -> None:
    """Remove a build output directory.

    Raises:
        IOFailure: If the directory cannot be removed
    """
    if not path.exists():
        return
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise IOFailure(f"Cannot clean output directory {path}: {e}") from e
    logger.info("Cleaned %s", path)
