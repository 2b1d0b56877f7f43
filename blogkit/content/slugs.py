"""Slug and alias path derivation."""

import re
from pathlib import PurePosixPath

_INDEX_STEMS = {"index"}


def slugify(text: str) -> str:
    """Convert a path segment or title to a URL-safe slug.

    Args:
        text: Text to convert

    Returns:
        Lowercase slug with hyphens
    """
    # Lowercase
    text = text.strip().lower()

    # Replace common joiners
    text = text.replace("&", "-and-")

    # Apostrophes vanish rather than split words
    text = re.sub(r"['’]", "", text)

    # Everything else that is not alphanumeric becomes a separator
    text = re.sub(r"[^a-z0-9]+", "-", text)

    return text.strip("-")


def derive_slug(relative_path: str, override: str | None = None) -> str:
    """Derive a document slug from its path relative to the content root.

    ``blog/My Post.md`` becomes ``blog/my-post`` and ``blog/trip/index.md``
    becomes ``blog/trip``. An explicit ``override`` replaces the last segment.
    """
    path = PurePosixPath(relative_path)
    parts = list(path.parent.parts)
    if path.stem.lower() not in _INDEX_STEMS:
        parts.append(path.stem)

    if override is not None:
        if parts:
            parts[-1] = override
        else:
            parts.append(override)

    segments = [slugify(p) for p in parts]
    return "/".join(s for s in segments if s)


def normalize_alias(alias: str) -> str:
    """Normalize a legacy path to ``/a/b/`` form (``/`` for the site root)."""
    parts = [p for p in alias.strip().split("/") if p and p != "."]
    if not parts:
        return "/"
    return "/" + "/".join(parts) + "/"


def slug_path(slug: str) -> str:
    """Public URL path of a slug, in the same form as normalized aliases."""
    return normalize_alias(slug)


def tag_slug(tag: str) -> str:
    """Directory name of a tag's page."""
    return slugify(tag) or "tag"


def path_root(path: str) -> str:
    """First segment of a slug or alias (``""`` for the site root)."""
    return path.strip("/").split("/", 1)[0]
