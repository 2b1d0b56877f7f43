"""Index manifest model and serialization."""

import hashlib
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from ..config import INDEX_FILENAME, SCHEMA_VERSION
from .document import Document
from .indexer import ContentIndex


class DocumentEntry(BaseModel):
    """Document metadata in the index manifest."""

    slug: str
    path: str
    url: str
    title: str
    description: str
    date: str
    updated: str | None
    tags: list[str]
    aliases: list[str]
    word_count: int
    reading_time: int
    extra: dict[str, Any]
    sha256: str


class IndexManifest(BaseModel):
    """Document and taxonomy index handed to the rendering layer."""

    schema_version: int = SCHEMA_VERSION
    documents: list[DocumentEntry]
    taxonomy: dict[str, list[str]]  # tag -> ordered slugs
    aliases: dict[str, str]  # alias -> slug
    drafts: list[str]


def compute_sha256(content: bytes | str) -> str:
    """Compute SHA256 hash of content.

    Args:
        content: Bytes or string to hash

    Returns:
        Hex-encoded SHA256 hash
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def document_entry(doc: Document) -> DocumentEntry:
    return DocumentEntry(
        slug=doc.slug,
        path=doc.path,
        url=doc.url_path,
        title=doc.title,
        description=doc.description,
        date=doc.date.isoformat(),
        updated=doc.updated.isoformat() if doc.updated else None,
        tags=list(doc.tags),
        aliases=list(doc.aliases),
        word_count=doc.word_count,
        reading_time=doc.reading_time,
        extra=doc.extra,
        sha256=compute_sha256(doc.body),
    )


def create_manifest(index: ContentIndex) -> IndexManifest:
    """Create the manifest for a loaded content index.

    Drafts are listed by slug only so authors can see what was held back.
    """
    return IndexManifest(
        documents=[document_entry(d) for d in index.documents],
        taxonomy={tag: [d.slug for d in docs] for tag, docs in index.taxonomy.items()},
        aliases=dict(index.aliases),
        drafts=[d.slug for d in index.drafts],
    )


def render_manifest(manifest: IndexManifest) -> str:
    """Serialize a manifest to stable JSON text."""
    payload = manifest.model_dump(mode="json")
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def write_manifest(manifest: IndexManifest, output_dir: Path) -> Path:
    """Write manifest to JSON file.

    Args:
        manifest: Manifest object
        output_dir: Directory to write to

    Returns:
        Path to written manifest file
    """
    manifest_path = output_dir / INDEX_FILENAME
    manifest_path.write_text(render_manifest(manifest), encoding="utf-8")
    return manifest_path
