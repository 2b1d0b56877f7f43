"""Document model and per-file validation."""

from __future__ import annotations

import datetime as dt
import math
from typing import Annotated, Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from ..config import DATE_SKEW, WORDS_PER_MINUTE
from ..errors import LoadError, ValidationError
from .frontmatter import FrontmatterError, parse_frontmatter
from .slugs import derive_slug, normalize_alias, slug_path, slugify

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Document(BaseModel):
    """One authored article, validated and normalized."""

    model_config = ConfigDict(frozen=True)

    slug: str
    path: str
    title: str
    description: str
    date: dt.date
    updated: dt.date | None = None
    tags: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()
    draft: bool = False
    extra: dict[str, Any] = Field(default_factory=dict)
    body: str = ""
    word_count: int = 0
    reading_time: int = 1

    @property
    def url_path(self) -> str:
        return slug_path(self.slug)


class Frontmatter(BaseModel):
    """Schema of the metadata block. Unknown keys are kept as extras."""

    model_config = ConfigDict(extra="allow")

    title: NonEmptyStr
    description: NonEmptyStr
    date: dt.date
    updated: dt.date | None = None
    slug: NonEmptyStr | None = None
    tags: list[NonEmptyStr] = Field(default_factory=list)
    aliases: list[NonEmptyStr] = Field(default_factory=list)
    draft: bool = False
    extra: dict[str, Any] = Field(default_factory=dict)

    @pydantic.model_validator(mode="before")
    @classmethod
    def _lift_taxonomies(cls, data: Any) -> Any:
        # Zola nests taxonomy terms: [taxonomies] tags = [...]
        if not isinstance(data, dict) or "taxonomies" not in data:
            return data
        data = dict(data)
        taxonomies = data.pop("taxonomies")
        if not isinstance(taxonomies, dict):
            raise ValueError("taxonomies must be a table of term lists")
        if "tags" in taxonomies:
            if "tags" in data:
                raise ValueError("tags given both at top level and under taxonomies")
            data["tags"] = taxonomies["tags"]
        return data

    @pydantic.field_validator("date", "updated", mode="before")
    @classmethod
    def _reduce_datetime(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            try:
                return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
            except ValueError:
                return value
        return value

    @pydantic.field_validator("date")
    @classmethod
    def _not_in_future(cls, value: dt.date, info: pydantic.ValidationInfo) -> dt.date:
        context = info.context or {}
        today = context.get("today") or dt.date.today()
        skew = context.get("skew", DATE_SKEW)
        if value > today + skew:
            raise ValueError(f"{value.isoformat()} is in the future (today is {today.isoformat()})")
        return value

    @pydantic.field_validator("slug")
    @classmethod
    def _slug_has_content(cls, value: str | None) -> str | None:
        if value is not None and not slugify(value):
            raise ValueError("slug has no usable characters")
        return value

    @pydantic.field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        return sorted({t.lower() for t in value})

    @pydantic.field_validator("aliases")
    @classmethod
    def _normalize_aliases(cls, value: list[str]) -> list[str]:
        out: list[str] = []
        for alias in value:
            if "://" in alias or ".." in alias.split("/"):
                raise ValueError(f"alias {alias!r} must be a site-relative path")
            normalized = normalize_alias(alias)
            if normalized == "/":
                raise ValueError("alias cannot point at the site root")
            if normalized not in out:
                out.append(normalized)
        return out

    @pydantic.model_validator(mode="after")
    def _updated_not_before_date(self) -> Frontmatter:
        if self.updated is not None and self.updated < self.date:
            raise ValueError("updated is earlier than date")
        return self


def parse_document(
    relative_path: str,
    text: str,
    *,
    today: dt.date | None = None,
    skew: dt.timedelta = DATE_SKEW,
) -> Document:
    """Parse and validate one document.

    Args:
        relative_path: POSIX path relative to the content root
        text: Raw file content
        today: Reference date for the future-date check (defaults to today)
        skew: How far past ``today`` a date may lie

    Returns:
        The validated Document

    Raises:
        LoadError: Listing every ValidationError found in this document
    """
    try:
        metadata, body = parse_frontmatter(text)
    except FrontmatterError as e:
        raise LoadError(errors=(ValidationError(relative_path, "frontmatter", str(e)),), checked=1)

    if metadata is None:
        raise LoadError(
            errors=(ValidationError(relative_path, "frontmatter", "missing metadata block"),),
            checked=1,
        )

    try:
        fm = Frontmatter.model_validate(metadata, context={"today": today, "skew": skew})
    except pydantic.ValidationError as e:
        errors = tuple(
            ValidationError(relative_path, _field_name(err), _message(err)) for err in e.errors()
        )
        raise LoadError(errors=errors, checked=1)

    slug = derive_slug(relative_path, override=fm.slug)
    if not slug:
        # Would publish at the site root, over the listing page
        raise LoadError(
            errors=(
                ValidationError(
                    relative_path, "slug", "path yields an empty slug; set slug in the metadata"
                ),
            ),
            checked=1,
        )

    extra = dict(fm.extra)
    extra.update(fm.model_extra or {})

    word_count = len(body.split())
    return Document(
        slug=slug,
        path=relative_path,
        title=fm.title,
        description=fm.description,
        date=fm.date,
        updated=fm.updated,
        tags=tuple(fm.tags),
        aliases=tuple(fm.aliases),
        draft=fm.draft,
        extra=extra,
        body=body,
        word_count=word_count,
        reading_time=max(1, math.ceil(word_count / WORDS_PER_MINUTE)),
    )


def _field_name(err: Any) -> str:
    loc = [str(p) for p in err.get("loc", ())]
    return ".".join(loc) or "frontmatter"


def _message(err: Any) -> str:
    msg = str(err.get("msg", "invalid value"))
    # Custom validator messages are prefixed by pydantic.
    return msg.removeprefix("Value error, ")
