"""Metadata block parsing.

A content file may open with a YAML metadata block fenced by `---` lines:

    ---
    title: Resume
    layout: page
    ---
    ## Education

A file that does not start with the fence is a body-only record.
"""

import re
from typing import Any

import yaml

from folio.exceptions import MalformedMetadata


FENCE_RE = re.compile(r"^---[ \t]*$")


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split raw text into its metadata block and body.

    Args:
        text: Raw file content

    Returns:
        (metadata block text or None when absent, body text)

    Raises:
        MalformedMetadata: If the opening fence is never closed
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)

    if not lines or not FENCE_RE.match(lines[0].rstrip("\r\n")):
        return None, text

    for index in range(1, len(lines)):
        if FENCE_RE.match(lines[index].rstrip("\r\n")):
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :]).lstrip("\r\n")
            return block, body

    raise MalformedMetadata("Metadata block is not closed with '---'")


def parse_metadata(block: str) -> dict[str, Any]:
    """Parse a metadata block as a YAML mapping.

    Args:
        block: Text between the fences

    Returns:
        Metadata dictionary (empty for an empty block)

    Raises:
        MalformedMetadata: If the block is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(block)
    except (yaml.YAMLError, ValueError, TypeError) as e:
        # Timestamp and other scalar constructors raise plain ValueError
        raise MalformedMetadata(f"Invalid YAML in metadata block: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise MalformedMetadata(
            f"Metadata block must be a mapping (got {type(data).__name__})"
        )

    return {str(key): value for key, value in data.items()}


def parse_document(text: str) -> tuple[dict[str, Any], str, bool]:
    """Parse a full content document.

    Args:
        text: Raw file content

    Returns:
        (metadata, body, has_metadata)

    Raises:
        MalformedMetadata: If the metadata block is malformed

    Examples:
        >>> parse_document("---\\ntitle: Resume\\n---\\n## Education\\n")
        ({'title': 'Resume'}, '## Education\\n', True)
        >>> parse_document("Just a body")
        ({}, 'Just a body', False)
    """
    block, body = split_frontmatter(text)
    if block is None:
        return {}, body, False
    return parse_metadata(block), body, True
