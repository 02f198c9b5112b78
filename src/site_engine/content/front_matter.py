"""YAML front matter parsing.

A post starts with a block delimited by ``---`` lines:

    ---
    title: Redux saga style guide
    date: "2020-01-05T10:00:00.000Z"
    description: Best practices for sagas
    ---
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .models import FrontMatterError, PostFrontMatter

_DELIMITER_RE = re.compile(r"^---[ \t]*$", re.MULTILINE)


def parse_front_matter(
    text: str,
    source: Optional[Path] = None,
) -> tuple[dict, str]:
    """Split a document into its front matter mapping and Markdown body.

    Args:
        text: Full file contents
        source: File the text came from, used in error messages

    Returns:
        (front matter dict, body)

    Raises:
        FrontMatterError: no block, unterminated block, bad YAML or
            a block that is not a mapping.
    """
    where = str(source) if source else "<string>"
    text = text.lstrip("\ufeff")

    opening = _DELIMITER_RE.match(text)
    if not opening:
        raise FrontMatterError(f"{where}: missing front matter block")

    closing = _DELIMITER_RE.search(text, opening.end())
    if not closing:
        raise FrontMatterError(f"{where}: unterminated front matter block")

    raw = text[opening.end():closing.start()]
    try:
        data = yaml.safe_load(raw)
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises a plain ValueError for impossible unquoted dates
        raise FrontMatterError(f"{where}: invalid YAML front matter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"{where}: front matter must be a mapping")

    body = text[closing.end():].lstrip("\r\n")
    return data, body


def load_front_matter(
    text: str,
    source: Optional[Path] = None,
) -> tuple[PostFrontMatter, str]:
    """Parse and validate front matter into a PostFrontMatter."""
    data, body = parse_front_matter(text, source)
    try:
        meta = PostFrontMatter(**data)
    except (ValidationError, TypeError) as e:
        where = str(source) if source else "<string>"
        raise FrontMatterError(f"{where}: invalid front matter: {e}") from e
    return meta, body
