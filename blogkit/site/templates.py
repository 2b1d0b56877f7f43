"""HTML templates for the static site output."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from html import escape

# Every utility class the templates below emit; merged into the scanned tokens
# when the site is built. Keep in sync with the markup.
TEMPLATE_CLASSES = frozenset(
    {
        "border-b",
        "border-gray-200",
        "flex",
        "font-bold",
        "hover:underline",
        "items-baseline",
        "justify-between",
        "max-w-prose",
        "mb-2",
        "mb-4",
        "mb-6",
        "mt-2",
        "mt-6",
        "mx-auto",
        "pb-2",
        "prose",
        "px-4",
        "py-8",
        "text-3xl",
        "text-gray-500",
        "text-gray-600",
        "text-sm",
        "tracking-wide",
        "uppercase",
    }
)


def html_doc(title: str, stylesheet_href: str, header_left: str, header_right: str, body: str) -> str:
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n"
        f'<link rel="stylesheet" href="{escape(stylesheet_href, quote=True)}">\n'
        "</head>\n"
        '<body class="mx-auto max-w-prose px-4 py-8">\n'
        '<header class="flex justify-between items-baseline border-b border-gray-200 pb-2 mb-6">\n'
        f"<div>{header_left}</div>\n"
        f"<nav>{header_right}</nav>\n"
        "</header>\n"
        f"{body}\n"
        "</body>\n"
        "</html>\n"
    )


def redirect_doc(target: str) -> str:
    href = escape(target, quote=True)
    return (
        "<!doctype html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f'<link rel="canonical" href="{href}">\n'
        f'<meta http-equiv="refresh" content="0; url={href}">\n'
        "<title>Redirect</title>\n"
        "</head>\n"
        "<body>\n"
        f'<p><a href="{href}">Click here</a> to be redirected.</p>\n'
        "</body>\n"
        "</html>\n"
    )


def link(href: str, text: str) -> str:
    return f'<a href="{escape(href, quote=True)}">{escape(text)}</a>'


def h1(text: str) -> str:
    return f'<h1 class="text-3xl font-bold mb-2">{escape(text)}</h1>'


def h2(text: str) -> str:
    return f'<h2 class="text-sm uppercase tracking-wide text-gray-500 mb-2">{escape(text)}</h2>'


@dataclass(frozen=True)
class PostRow:
    title: str
    date: str
    description: str
    href: str


def post_list(heading: str, rows: Iterable[PostRow]) -> str:
    lines = [h2(heading), "<ul>"]
    for r in rows:
        lines.append(
            '<li class="mb-4">'
            f"{link(r.href, r.title)}"
            f' <span class="text-sm text-gray-500">{escape(r.date)}</span>'
            f'<div class="text-gray-600">{escape(r.description)}</div>'
            "</li>"
        )
    lines.append("</ul>")
    return "\n".join(lines)


def tag_links(items: Iterable[tuple[str, str]]) -> str:
    """Items: (tag, href)."""
    return " ".join(
        f'<a class="text-sm text-gray-600 hover:underline" href="{escape(href, quote=True)}">'
        f"#{escape(tag)}</a>"
        for tag, href in items
    )


def tag_index(rows: Iterable[tuple[str, str, int]]) -> str:
    """Rows: (tag, href, count)."""
    lines = [h2("TAGS"), "<ul>"]
    for tag, href, count in rows:
        lines.append(f'<li>{link(href, tag)} <span class="text-gray-500">{count}</span></li>')
    lines.append("</ul>")
    return "\n".join(lines)


def post_page(title: str, meta_lines: list[str], tags_html: str, html: str) -> str:
    lines = ["<article>", h1(title)]
    for m in meta_lines:
        lines.append(f'<div class="text-sm text-gray-500">{escape(m)}</div>')
    if tags_html:
        lines.append(f'<div class="mt-2">{tags_html}</div>')
    lines.append(f'<div class="prose mt-6">\n{html}\n</div>')
    lines.append("</article>")
    return "\n".join(lines)
