"""Content indexing: frontmatter parsing, validation, taxonomy and aliases."""

from .document import Document, parse_document
from .frontmatter import parse_frontmatter
from .indexer import ContentIndex, build_alias_table, build_taxonomy, load, order_documents
from .manifest import IndexManifest, create_manifest, write_manifest
from .slugs import derive_slug, normalize_alias, slugify

__all__ = [
    "ContentIndex",
    "Document",
    "IndexManifest",
    "build_alias_table",
    "build_taxonomy",
    "create_manifest",
    "derive_slug",
    "load",
    "normalize_alias",
    "order_documents",
    "parse_document",
    "parse_frontmatter",
    "slugify",
    "write_manifest",
]
