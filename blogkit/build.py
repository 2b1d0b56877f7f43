"""Pipeline orchestrating one run over a project root."""

import datetime as dt
import logging
from pathlib import Path, PurePosixPath

from pydantic import BaseModel

from .config import DATE_SKEW, DEFAULT_CONTENT_DIR, INDEX_FILENAME, STYLESHEET_FILENAME
from .content.indexer import ContentIndex, load
from .content.manifest import create_manifest, render_manifest
from .errors import ConflictError, SourceIOError
from .site.build import render_site
from .site.render import Renderer
from .site.templates import TEMPLATE_CLASSES
from .style.backend import StyleSheetBackend, known_utilities
from .style.emit import emit
from .style.scan import scan
from .style.theme import (
    StyleRules,
    ThemeConfig,
    find_theme_config,
    load_theme_config,
    resolve_theme,
)

logger = logging.getLogger(__name__)


class BuildResult(BaseModel):
    """Result of a build run."""

    output_dir: Path
    documents: int
    drafts: int
    tags: int
    aliases: int
    tokens: int
    utilities: int
    artifacts: list[str]


def check(
    root: Path,
    *,
    config_path: Path | None = None,
    content_dir: str = DEFAULT_CONTENT_DIR,
    today: dt.date | None = None,
    skew: dt.timedelta = DATE_SKEW,
) -> tuple[ContentIndex, str, frozenset[str]]:
    """Run the indexer and the style extractor without writing anything.

    Returns:
        Tuple of (content index, stylesheet text, scanned tokens)

    Raises:
        LoadError, ConflictError, ConfigError, SourceIOError
    """
    index, rules, tokens = _prepare(root, config_path, content_dir, today, skew)
    return index, emit(tokens, rules), tokens


def build(
    root: Path,
    out_dir: Path,
    *,
    config_path: Path | None = None,
    content_dir: str = DEFAULT_CONTENT_DIR,
    with_site: bool = False,
    renderer: Renderer | None = None,
    backend: StyleSheetBackend | None = None,
    today: dt.date | None = None,
    skew: dt.timedelta = DATE_SKEW,
) -> BuildResult:
    """Build the index, the stylesheet and optionally the HTML site.

    Every artifact is produced in memory first; nothing is written unless the
    whole run succeeds.

    Args:
        root: Project root containing the content directory and theme config
        out_dir: Output directory
        config_path: Theme config file (defaults to theme.toml/json/yaml in root)
        content_dir: Content directory name under root
        with_site: Also render HTML pages
        renderer: Body renderer for the HTML pages
        backend: Stylesheet backend
        today: Reference date for the future-date check
        skew: Allowed future-date tolerance

    Returns:
        BuildResult with build info
    """
    index, rules, tokens = _prepare(Path(root), config_path, content_dir, today, skew)
    if with_site:
        tokens = tokens | TEMPLATE_CLASSES

    artifacts: dict[str, str] = {
        INDEX_FILENAME: render_manifest(create_manifest(index)),
        STYLESHEET_FILENAME: emit(tokens, rules, backend),
    }
    if with_site:
        for rel, html in render_site(index, renderer=renderer).items():
            if rel in artifacts:
                raise ConflictError(
                    kind="output", key=rel, sources=(f"artifact {rel}", f"page {rel}")
                )
            artifacts[rel] = html

    out_dir = Path(out_dir)
    check_targets(artifacts, out_dir)
    for rel, text in sorted(artifacts.items()):
        target = out_dir / rel
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as e:
            raise SourceIOError(str(target), f"cannot write artifact: {e}") from e

    logger.info("Wrote %d artifact(s) to %s", len(artifacts), out_dir)
    return BuildResult(
        output_dir=out_dir,
        documents=len(index.documents),
        drafts=len(index.drafts),
        tags=len(index.taxonomy),
        aliases=len(index.aliases),
        tokens=len(tokens),
        utilities=len(known_utilities(tokens, rules)),
        artifacts=sorted(artifacts),
    )


def _prepare(
    root: Path,
    config_path: Path | None,
    content_dir: str,
    today: dt.date | None,
    skew: dt.timedelta,
) -> tuple[ContentIndex, StyleRules, frozenset[str]]:
    root = Path(root)

    # Step 1: Index content
    index = load(root / content_dir, today=today, skew=skew)

    # Step 2: Resolve theme
    config = _theme_config(root, config_path)
    rules = resolve_theme(config)

    # Step 3: Scan sources
    tokens = scan(config.content, root)
    return index, rules, tokens


def _theme_config(root: Path, config_path: Path | None) -> ThemeConfig:
    path = config_path or find_theme_config(root)
    if path is None:
        logger.debug("No theme config found in %s, using defaults", root)
        return ThemeConfig()
    return load_theme_config(path)


def check_targets(artifacts: dict[str, str], out_dir: Path) -> None:
    """Make sure every artifact can be written before any is.

    Raises:
        ConflictError: If one artifact path is a directory of another
        SourceIOError: If an existing file or directory is in the way
    """
    out_dir = Path(out_dir)
    for rel in sorted(artifacts):
        parents = [str(p) for p in PurePosixPath(rel).parents if str(p) != "."]
        for parent in parents:
            if parent in artifacts:
                raise ConflictError(kind="output", key=parent, sources=(parent, rel))

        target = out_dir / rel
        if target.is_dir():
            raise SourceIOError(str(target), "a directory is in the way of an artifact")
        for parent in [out_dir, *(out_dir / p for p in reversed(parents))]:
            if parent.exists() and not parent.is_dir():
                raise SourceIOError(str(parent), "a file is in the way of an artifact directory")
