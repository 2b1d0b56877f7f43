"""Document body renderers."""

from __future__ import annotations

import re
from typing import Protocol


class Renderer(Protocol):
    """Turns a raw document body into HTML markup."""

    def render(self, body: str) -> str: ...


class MarkdownRenderer:
    """Minimal Markdown → HTML converter (CommonMark-ish subset).

    The goal is readable, deterministic output, not perfect rendering.
    Headings are shifted by ``heading_offset`` so a post's own ``#`` does not
    compete with the page title.
    """

    def __init__(self, heading_offset: int = 0):
        self.heading_offset = heading_offset

    def render(self, body: str) -> str:
        lines = body.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        out: list[str] = []
        para: list[str] = []

        def flush_paragraph() -> None:
            text = " ".join(s.strip() for s in para if s.strip())
            if text:
                out.append(f"<p>{_inline(text)}</p>")
            para.clear()

        i = 0
        while i < len(lines):
            stripped = lines[i].strip()

            # Code fences, with an optional language hint
            if stripped.startswith("```"):
                flush_paragraph()
                lang = stripped[3:].strip()
                code: list[str] = []
                i += 1
                while i < len(lines) and not lines[i].strip().startswith("```"):
                    code.append(lines[i])
                    i += 1
                i += 1
                cls = f' class="language-{_escape_attr(lang)}"' if lang else ""
                out.append(f"<pre><code{cls}>{_escape(chr(10).join(code))}</code></pre>")
                continue

            if stripped in ("---", "***"):
                flush_paragraph()
                out.append("<hr>")
                i += 1
                continue

            if _looks_like_table_start(lines, i):
                flush_paragraph()
                rows: list[str] = []
                while i < len(lines) and lines[i].strip().startswith("|"):
                    rows.append(lines[i])
                    i += 1
                out.append(_table_to_html(rows))
                continue

            if stripped.startswith("#"):
                flush_paragraph()
                level = len(stripped) - len(stripped.lstrip("#"))
                text = stripped[level:].strip()
                level = min(max(level + self.heading_offset, 1), 6)
                out.append(f"<h{level}>{_inline(text)}</h{level}>")
                i += 1
                continue

            if stripped.startswith(("- ", "* ")) or _ORDERED_ITEM.match(stripped):
                flush_paragraph()
                ordered = bool(_ORDERED_ITEM.match(stripped))
                tag = "ol" if ordered else "ul"
                out.append(f"<{tag}>")
                while i < len(lines):
                    s = lines[i].strip()
                    if ordered and _ORDERED_ITEM.match(s):
                        item = _ORDERED_ITEM.sub("", s, count=1)
                    elif not ordered and s.startswith(("- ", "* ")):
                        item = s[2:].strip()
                    else:
                        break
                    out.append(f"<li>{_inline(item)}</li>")
                    i += 1
                out.append(f"</{tag}>")
                continue

            if stripped.startswith(">"):
                flush_paragraph()
                out.append("<blockquote>")
                while i < len(lines) and lines[i].lstrip().startswith(">"):
                    q = lines[i].lstrip()[1:].strip()
                    if q:
                        out.append(f"<p>{_inline(q)}</p>")
                    i += 1
                out.append("</blockquote>")
                continue

            if not stripped:
                flush_paragraph()
            else:
                para.append(lines[i])
            i += 1

        flush_paragraph()
        return "\n".join(out)


_ORDERED_ITEM = re.compile(r"^\d+\.\s+")


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(text: str) -> str:
    return _escape(text).replace('"', "&quot;")


def _inline(text: str) -> str:
    # Placeholder-based inline renderer (escape-by-default).
    stash: list[str] = []

    def keep(html: str) -> str:
        stash.append(html)
        return f"@@{len(stash) - 1}@@"

    text = re.sub(r"`([^`]+)`", lambda m: keep(f"<code>{_escape(m.group(1))}</code>"), text)

    def _image(m: re.Match[str]) -> str:
        src = _safe_href(m.group(2))
        if not src:
            return m.group(1)
        return keep(f'<img src="{_escape_attr(src)}" alt="{_escape_attr(m.group(1))}">')

    def _link(m: re.Match[str]) -> str:
        href = _safe_href(m.group(2))
        if not href:
            return m.group(1)
        return keep(f'<a href="{_escape_attr(href)}">{_escape(m.group(1))}</a>')

    text = re.sub(r"!\[([^\]]*)\]\(([^)]+)\)", _image, text)
    text = re.sub(r"\[([^\]]+)\]\(([^)]+)\)", _link, text)
    text = re.sub(
        r"\*\*([^*]+)\*\*", lambda m: keep(f"<strong>{_escape(m.group(1))}</strong>"), text
    )
    text = re.sub(
        r"(?<![*\w])[*_]([^*_]+)[*_](?![*\w])",
        lambda m: keep(f"<em>{_escape(m.group(1))}</em>"),
        text,
    )

    escaped = _escape(text)
    for idx, html in enumerate(stash):
        escaped = escaped.replace(f"@@{idx}@@", html)
    return escaped


def _safe_href(href: str | None) -> str | None:
    if href is None:
        return None
    cleaned = href.strip()
    if not cleaned:
        return None
    if cleaned.lower().startswith(("javascript:", "data:", "vbscript:")):
        return None
    return cleaned


def _looks_like_table_start(lines: list[str], i: int) -> bool:
    if i + 1 >= len(lines):
        return False
    header = lines[i].strip()
    sep = lines[i + 1].strip()
    return header.startswith("|") and sep.startswith("|") and "---" in sep


def _table_to_html(table_lines: list[str]) -> str:
    rows = [[c.strip() for c in line.strip().strip("|").split("|")] for line in table_lines]
    if len(rows) < 2:
        return "<pre>" + _escape("\n".join(table_lines)) + "</pre>"

    out = ["<table>", "<thead>", "<tr>"]
    out.extend(f"<th>{_inline(h)}</th>" for h in rows[0])
    out.extend(["</tr>", "</thead>", "<tbody>"])
    for r in rows[2:]:
        out.append("<tr>")
        out.extend(f"<td>{_inline(c)}</td>" for c in r)
        out.append("</tr>")
    out.extend(["</tbody>", "</table>"])
    return "\n".join(out)
