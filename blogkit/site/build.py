"""Static HTML output for a loaded content index."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from ..config import STYLESHEET_FILENAME, TAGS_DIR
from ..content.document import Document
from ..content.indexer import ContentIndex
from ..content.slugs import tag_slug
from ..errors import ConflictError
from .render import MarkdownRenderer, Renderer
from .templates import (
    PostRow,
    html_doc,
    link,
    post_list,
    post_page,
    redirect_doc,
    tag_index,
    tag_links,
)

SITE_TITLE = "Blog"


class _Pages:
    """Output path -> HTML, refusing to let two pages share a path."""

    def __init__(self) -> None:
        self.html: dict[str, str] = {}
        self.owners: dict[str, str] = {}

    def add(self, path: str, owner: str, html: str) -> None:
        if path in self.owners:
            raise ConflictError(kind="page", key=path, sources=(self.owners[path], owner))
        self.owners[path] = owner
        self.html[path] = html


def build_site(
    index: ContentIndex,
    out_dir: Path,
    renderer: Renderer | None = None,
    title: str = SITE_TITLE,
) -> dict[str, int]:
    """Render and write every page of the site."""
    pages = render_site(index, renderer=renderer, title=title)
    write_pages(pages, out_dir)
    return {
        "posts": len(index.documents),
        "tags": len(index.taxonomy),
        "redirects": len(index.aliases),
        "pages": len(pages),
    }


def render_site(
    index: ContentIndex,
    renderer: Renderer | None = None,
    title: str = SITE_TITLE,
) -> dict[str, str]:
    """Render the site in memory: output path -> HTML.

    Raises:
        ConflictError: If two pages would be written to the same path
    """
    renderer = renderer or MarkdownRenderer(heading_offset=1)
    pages = _Pages()

    # Listing
    body = post_list("POSTS", [_row(d, "") for d in index.documents])
    pages.add(
        "index.html",
        "listing",
        html_doc(
            title=title,
            stylesheet_href=STYLESHEET_FILENAME,
            header_left=link("index.html", title),
            header_right=link(f"{TAGS_DIR}/index.html", "Tags"),
            body=body,
        ),
    )

    # Posts
    for doc in index.documents:
        page = _page_path(doc.slug)
        up = _up(page)
        tags_html = tag_links(
            (tag, f"{up}{TAGS_DIR}/{tag_slug(tag)}/index.html") for tag in doc.tags
        )
        meta = [doc.date.isoformat(), f"{doc.reading_time} min read"]
        if doc.updated:
            meta.append(f"Updated {doc.updated.isoformat()}")
        pages.add(
            page,
            f"post {doc.path}",
            html_doc(
                title=f"{doc.title} · {title}",
                stylesheet_href=f"{up}{STYLESHEET_FILENAME}",
                header_left=link(f"{up}index.html", f"← {title}"),
                header_right=link(f"{up}{TAGS_DIR}/index.html", "Tags"),
                body=post_page(doc.title, meta, tags_html, renderer.render(doc.body)),
            ),
        )

    # Taxonomy
    rows = [
        (tag, f"{tag_slug(tag)}/index.html", len(docs)) for tag, docs in index.taxonomy.items()
    ]
    pages.add(
        f"{TAGS_DIR}/index.html",
        "tag index",
        html_doc(
            title=f"Tags · {title}",
            stylesheet_href=f"../{STYLESHEET_FILENAME}",
            header_left=link("../index.html", f"← {title}"),
            header_right="",
            body=tag_index(rows),
        ),
    )
    for tag, docs in index.taxonomy.items():
        page = f"{TAGS_DIR}/{tag_slug(tag)}/index.html"
        up = _up(page)
        pages.add(
            page,
            f"tag {tag}",
            html_doc(
                title=f"#{tag} · {title}",
                stylesheet_href=f"{up}{STYLESHEET_FILENAME}",
                header_left=link(f"{up}index.html", f"← {title}"),
                header_right=link("../index.html", "Tags"),
                body=post_list(f"#{tag}", [_row(d, up) for d in docs]),
            ),
        )

    # Redirect stubs
    for alias, slug in index.aliases.items():
        page = _page_path(alias.strip("/"))
        pages.add(page, f"alias {alias}", redirect_doc(f"{_up(page)}{_page_path(slug)}"))

    return dict(sorted(pages.html.items()))


def write_pages(pages: dict[str, str], out_dir: Path) -> None:
    out_dir = Path(out_dir)
    for rel, html in pages.items():
        target = out_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")


def _row(doc: Document, up: str) -> PostRow:
    return PostRow(
        title=doc.title,
        date=doc.date.isoformat(),
        description=doc.description,
        href=f"{up}{_page_path(doc.slug)}",
    )


def _page_path(slug: str) -> str:
    return f"{slug}/index.html" if slug else "index.html"


def _up(page: str) -> str:
    # Relative prefix from a page back to the site root
    depth = len(PurePosixPath(page).parts) - 1
    return "../" * depth
