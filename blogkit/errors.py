"""Error types raised by the indexer and the style extractor.

Document-level problems (``ValidationError``, ``ConflictError``) are collected
by ``load`` and raised together as a single ``LoadError``. Theme and I/O
problems (``ConfigError``, ``SourceIOError``) abort the run immediately.
"""

from __future__ import annotations

from dataclasses import dataclass


class BlogkitError(Exception):
    """Base class for all blogkit failures."""


@dataclass(frozen=True)
class ValidationError(BlogkitError):
    """A document is missing a required field or carries a malformed one."""

    path: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.field}: {self.message}"


@dataclass(frozen=True)
class ConflictError(BlogkitError):
    """Two sources claim the same slug or alias."""

    kind: str  # "slug" or "alias"
    key: str
    sources: tuple[str, ...]

    def __str__(self) -> str:
        claimed = " and ".join(self.sources)
        return f"duplicate {self.kind} {self.key!r} claimed by {claimed}"


@dataclass(frozen=True)
class ConfigError(BlogkitError):
    """The theme configuration is malformed."""

    key: str
    message: str

    def __str__(self) -> str:
        return f"{self.key}: {self.message}"


@dataclass(frozen=True)
class SourceIOError(BlogkitError, OSError):
    """A source root or file could not be read."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass(frozen=True)
class LoadError(BlogkitError):
    """Every authoring error found while indexing a content root."""

    errors: tuple[BlogkitError, ...]
    checked: int

    @property
    def invalid(self) -> list[ValidationError]:
        return [e for e in self.errors if isinstance(e, ValidationError)]

    @property
    def conflicts(self) -> list[ConflictError]:
        return [e for e in self.errors if isinstance(e, ConflictError)]

    def __str__(self) -> str:
        lines = [f"{len(self.errors)} error(s) in {self.checked} document(s):"]
        lines.extend(f"  - {e}" for e in self.errors)
        return "\n".join(lines)
