"""Content indexer: walk a content root and build the document index."""

from __future__ import annotations

import datetime as dt
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..config import DATE_SKEW, RESERVED_ROOTS
from ..errors import BlogkitError, ConflictError, LoadError, SourceIOError, ValidationError
from .document import Document, parse_document
from .slugs import path_root, slug_path, tag_slug

logger = logging.getLogger(__name__)

SECTION_FILENAME = "_index.md"


@dataclass(frozen=True)
class ContentIndex:
    """Published documents plus the structures derived from them."""

    documents: list[Document]
    drafts: list[Document] = field(default_factory=list)
    taxonomy: dict[str, list[Document]] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)

    @property
    def by_slug(self) -> dict[str, Document]:
        return {d.slug: d for d in self.documents}


def load(
    root: Path,
    *,
    today: dt.date | None = None,
    skew: dt.timedelta = DATE_SKEW,
) -> ContentIndex:
    """Index every document under a content root.

    Args:
        root: Content directory
        today: Reference date for the future-date check
        skew: Allowed future-date tolerance

    Returns:
        ContentIndex with ordered documents, taxonomy and alias table

    Raises:
        SourceIOError: If the root or a document cannot be read
        LoadError: Listing every validation error and conflict found
    """
    root = Path(root)
    if not root.exists():
        raise SourceIOError(str(root), "content root does not exist")
    if not root.is_dir():
        raise SourceIOError(str(root), "content root is not a directory")

    files = discover_documents(root)
    logger.debug("Discovered %d document(s) under %s", len(files), root)

    errors: list[BlogkitError] = []
    parsed: list[Document] = []
    for rel in files:
        raw = _read_bytes(root / rel, rel)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            errors.append(ValidationError(rel, "encoding", f"not valid UTF-8: {e.reason}"))
            continue
        try:
            parsed.append(parse_document(rel, text, today=today, skew=skew))
        except LoadError as e:
            errors.extend(e.errors)

    errors.extend(find_slug_conflicts(parsed))

    published = order_documents(d for d in parsed if not d.draft)
    drafts = order_documents(d for d in parsed if d.draft)
    errors.extend(find_alias_conflicts(published))
    errors.extend(find_tag_conflicts(published))

    if errors:
        raise LoadError(errors=tuple(errors), checked=len(files))

    index = ContentIndex(
        documents=published,
        drafts=drafts,
        taxonomy=build_taxonomy(published),
        aliases=build_alias_table(published),
    )
    logger.info(
        "Indexed %d document(s), %d draft(s), %d tag(s)",
        len(index.documents),
        len(index.drafts),
        len(index.taxonomy),
    )
    return index


def discover_documents(root: Path) -> list[str]:
    """Return POSIX paths of every document under root, sorted."""

    def _unreadable(e: OSError) -> None:
        path = e.filename or str(root)
        raise SourceIOError(path, f"cannot list directory: {e.strerror or e}") from e

    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_unreadable):
        # Prune hidden directories in place so they are never entered
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        base = Path(dirpath)
        for name in filenames:
            if name.startswith(".") or name == SECTION_FILENAME or not name.endswith(".md"):
                continue
            found.append((base / name).relative_to(root).as_posix())
    return sorted(found)


def order_documents(documents: Iterable[Document]) -> list[Document]:
    """Sort by date descending, then slug ascending."""
    by_slug = sorted(documents, key=lambda d: d.slug)
    return sorted(by_slug, key=lambda d: d.date, reverse=True)


def build_taxonomy(documents: Iterable[Document]) -> dict[str, list[Document]]:
    """Group documents by tag, each group ordered like the default listing."""
    groups: dict[str, list[Document]] = {}
    for doc in documents:
        for tag in doc.tags:
            groups.setdefault(tag, []).append(doc)
    return {tag: order_documents(groups[tag]) for tag in sorted(groups)}


def find_slug_conflicts(documents: Iterable[Document]) -> list[ConflictError]:
    """One ConflictError per slug claimed by more than one source file."""
    owners: dict[str, list[str]] = {}
    for doc in documents:
        owners.setdefault(doc.slug, []).append(doc.path)

    conflicts: list[ConflictError] = []
    for slug, paths in sorted(owners.items()):
        sources = sorted(paths)
        root = path_root(slug)
        if root in RESERVED_ROOTS:
            sources.append(_generated(root))
        if len(sources) > 1:
            conflicts.append(ConflictError(kind="slug", key=slug, sources=tuple(sources)))
    return conflicts


def find_alias_conflicts(documents: Iterable[Document]) -> list[ConflictError]:
    """Aliases claimed by two documents, or shadowing a document's own path."""
    documents = list(documents)
    owners: dict[str, set[str]] = {}
    for doc in documents:
        for alias in doc.aliases:
            owners.setdefault(alias, set()).add(doc.slug)

    own_paths = {slug_path(d.slug): d.slug for d in documents}
    conflicts: list[ConflictError] = []
    for alias, slugs in sorted(owners.items()):
        claimants = set(slugs)
        if alias in own_paths:
            claimants.add(own_paths[alias])
        sources = sorted(claimants)
        root = path_root(alias)
        if root in RESERVED_ROOTS:
            sources.append(_generated(root))
        if len(sources) > 1:
            conflicts.append(ConflictError(kind="alias", key=alias, sources=tuple(sources)))
    return conflicts


def find_tag_conflicts(documents: Iterable[Document]) -> list[ConflictError]:
    """Distinct tags that would share one tag page directory (``c++`` and ``c``)."""
    owners: dict[str, set[str]] = {}
    for doc in documents:
        for tag in doc.tags:
            owners.setdefault(tag_slug(tag), set()).add(tag)
    return [
        ConflictError(kind="tag", key=directory, sources=tuple(sorted(tags)))
        for directory, tags in sorted(owners.items())
        if len(tags) > 1
    ]


def _generated(root: str) -> str:
    return f"generated /{root}"


def build_alias_table(documents: Iterable[Document]) -> dict[str, str]:
    """Map each alias to the slug it redirects to.

    Raises:
        ConflictError: If an alias would redirect ambiguously
    """
    documents = list(documents)
    conflicts = find_alias_conflicts(documents)
    if conflicts:
        raise conflicts[0]
    table = {alias: doc.slug for doc in documents for alias in doc.aliases}
    return dict(sorted(table.items()))


def _read_bytes(path: Path, rel: str) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise SourceIOError(rel, f"cannot read file: {e}") from e
