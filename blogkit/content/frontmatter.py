"""Helpers for parsing TOML (``+++``) and YAML (``---``) frontmatter."""

from __future__ import annotations

import logging
import re
import tomllib
from typing import Any

import frontmatter
import yaml
from frontmatter.default_handlers import BaseHandler, YAMLHandler

logger = logging.getLogger(__name__)


class TomlFrontmatter(BaseHandler):
    """Load ``+++`` delimited TOML metadata with the standard library parser.

    python-frontmatter only ships a working TOML handler when the third-party
    ``toml`` package is installed.
    """

    FM_BOUNDARY = re.compile(r"^\+{3,}\s*$", re.MULTILINE)
    START_DELIMITER = END_DELIMITER = "+++"

    def load(self, fm: str, **kwargs: object) -> Any:
        return tomllib.loads(fm)

    def export(self, metadata: dict[str, object], **kwargs: object) -> str:
        raise NotImplementedError("blogkit never writes TOML frontmatter")


HANDLERS = (TomlFrontmatter(), YAMLHandler())


class FrontmatterError(ValueError):
    """Raised when a frontmatter block exists but cannot be parsed."""


def parse_frontmatter(content: str) -> tuple[dict[str, Any] | None, str]:
    """Split a document into metadata and body.

    Args:
        content: Full document text.

    Returns:
        Tuple of (metadata, body). Metadata is None when the document has no
        frontmatter block at all.

    Raises:
        FrontmatterError: If the block is present but cannot be parsed.
    """
    content = content.lstrip("\ufeff")
    for handler in HANDLERS:
        if not handler.detect(content):
            continue
        try:
            metadata, body = frontmatter.parse(content, handler=handler)
        except (yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
            raise FrontmatterError(f"malformed frontmatter: {exc}") from exc
        return dict(metadata), body

    logger.debug("No frontmatter block detected")
    return None, content
