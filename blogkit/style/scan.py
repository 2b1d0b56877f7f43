"""Scan source trees for utility-class tokens."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from ..errors import SourceIOError

logger = logging.getLogger(__name__)

# Optional variant prefixes ("md:", "hover:"), an optional negative sign, then
# lowercase segments joined by "-", "." or "/" (e.g. "py-0.5", "w-1/2").
TOKEN_PATTERN = re.compile(
    r"(?<![\w:/.-])"
    r"((?:[a-z0-9]+:)*-?[a-z][a-z0-9]*(?:[-./][a-z0-9]+)*)"
    r"(?![\w:/-])"
)


def extract_tokens(text: str) -> set[str]:
    """Return every utility-class candidate in text."""
    return set(TOKEN_PATTERN.findall(text))


def expand_globs(globs: Iterable[str], root: Path) -> list[Path]:
    """Resolve glob patterns relative to root into a sorted, deduplicated file list."""
    root = Path(root)
    files: set[Path] = set()
    for pattern in globs:
        pattern = pattern.strip()
        while pattern.startswith("./"):
            pattern = pattern[2:]
        pattern = pattern.lstrip("/")
        if not pattern:
            continue
        matched = [p for p in root.glob(pattern) if p.is_file()]
        logger.debug("Glob %r matched %d file(s)", pattern, len(matched))
        files.update(matched)
    return sorted(files)


def scan(globs: Iterable[str], root: Path = Path(".")) -> frozenset[str]:
    """Collect the distinct tokens referenced by the files matching globs.

    The result does not depend on the order files are visited in.

    Raises:
        SourceIOError: If a matched file cannot be read
    """
    tokens: set[str] = set()
    for path in expand_globs(globs, root):
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise SourceIOError(str(path), f"cannot read file: {e}") from e
        tokens.update(extract_tokens(text))
    logger.debug("Scanned %d distinct token(s)", len(tokens))
    return frozenset(tokens)
