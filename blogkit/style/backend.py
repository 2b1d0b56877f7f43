"""Built-in utility-class stylesheet backend.

Supports a deliberately small utility grammar; tokens outside it are dropped.
A full utility-class generator can be plugged in through ``StyleSheetBackend``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from .theme import StyleRules

BREAKPOINTS = (("sm", "640px"), ("md", "768px"), ("lg", "1024px"), ("xl", "1280px"))
PSEUDO_CLASSES = {"hover": ":hover", "focus": ":focus"}

STATIC_UTILITIES: dict[str, dict[str, str]] = {
    "block": {"display": "block"},
    "inline-block": {"display": "inline-block"},
    "inline": {"display": "inline"},
    "flex": {"display": "flex"},
    "inline-flex": {"display": "inline-flex"},
    "grid": {"display": "grid"},
    "hidden": {"display": "none"},
    "flex-row": {"flex-direction": "row"},
    "flex-col": {"flex-direction": "column"},
    "flex-wrap": {"flex-wrap": "wrap"},
    "items-start": {"align-items": "flex-start"},
    "items-center": {"align-items": "center"},
    "items-end": {"align-items": "flex-end"},
    "items-baseline": {"align-items": "baseline"},
    "justify-start": {"justify-content": "flex-start"},
    "justify-center": {"justify-content": "center"},
    "justify-end": {"justify-content": "flex-end"},
    "justify-between": {"justify-content": "space-between"},
    "mx-auto": {"margin-left": "auto", "margin-right": "auto"},
    "w-full": {"width": "100%"},
    "max-w-prose": {"max-width": "65ch"},
    "text-left": {"text-align": "left"},
    "text-center": {"text-align": "center"},
    "text-right": {"text-align": "right"},
    "italic": {"font-style": "italic"},
    "not-italic": {"font-style": "normal"},
    "underline": {"text-decoration-line": "underline"},
    "no-underline": {"text-decoration-line": "none"},
    "uppercase": {"text-transform": "uppercase"},
    "lowercase": {"text-transform": "lowercase"},
    "capitalize": {"text-transform": "capitalize"},
    "leading-none": {"line-height": "1"},
    "leading-tight": {"line-height": "1.25"},
    "leading-normal": {"line-height": "1.5"},
    "leading-relaxed": {"line-height": "1.625"},
    "tracking-tight": {"letter-spacing": "-0.025em"},
    "tracking-wide": {"letter-spacing": "0.025em"},
    "rounded": {"border-radius": "0.25rem"},
    "rounded-full": {"border-radius": "9999px"},
    "border": {"border-width": "1px"},
    "border-b": {"border-bottom-width": "1px"},
}

FONT_WEIGHTS = {
    "thin": "100",
    "light": "300",
    "normal": "400",
    "medium": "500",
    "semibold": "600",
    "bold": "700",
    "black": "900",
}

FONT_SIZES = {
    "xs": ("0.75rem", "1rem"),
    "sm": ("0.875rem", "1.25rem"),
    "base": ("1rem", "1.5rem"),
    "lg": ("1.125rem", "1.75rem"),
    "xl": ("1.25rem", "1.75rem"),
    "2xl": ("1.5rem", "2rem"),
    "3xl": ("1.875rem", "2.25rem"),
    "4xl": ("2.25rem", "2.5rem"),
}

COLORS = {
    "black": "#000",
    "white": "#fff",
    "gray-50": "#f9fafb",
    "gray-100": "#f3f4f6",
    "gray-200": "#e5e7eb",
    "gray-300": "#d1d5db",
    "gray-400": "#9ca3af",
    "gray-500": "#6b7280",
    "gray-600": "#4b5563",
    "gray-700": "#374151",
    "gray-800": "#1f2937",
    "gray-900": "#111827",
}

COLOR_PROPERTIES = {"text": "color", "bg": "background-color", "border": "border-color"}

SPACING_PROPERTIES = {
    "p": ("padding",),
    "px": ("padding-left", "padding-right"),
    "py": ("padding-top", "padding-bottom"),
    "pt": ("padding-top",),
    "pr": ("padding-right",),
    "pb": ("padding-bottom",),
    "pl": ("padding-left",),
    "m": ("margin",),
    "mx": ("margin-left", "margin-right"),
    "my": ("margin-top", "margin-bottom"),
    "mt": ("margin-top",),
    "mr": ("margin-right",),
    "mb": ("margin-bottom",),
    "ml": ("margin-left",),
    "gap": ("gap",),
}

_SPACING = re.compile(r"^(-?)(p|px|py|pt|pr|pb|pl|m|mx|my|mt|mr|mb|ml|gap)-(px|\d+(?:\.5)?)$")

# Defaults of the typography layer; theme overrides are merged on top.
PROSE_DEFAULTS: dict[str, dict[str, str]] = {
    "a": {"color": "#111827", "text-decoration": "underline", "font-weight": "500"},
    "strong": {"font-weight": "600"},
    "h1": {"font-size": "2.25em", "font-weight": "800", "line-height": "1.1111111"},
    "h2": {"font-size": "1.5em", "font-weight": "700", "line-height": "1.3333333"},
    "h3": {"font-size": "1.25em", "font-weight": "600", "line-height": "1.6"},
    "blockquote": {
        "font-style": "italic",
        "border-left-width": "0.25rem",
        "border-left-color": "#e5e7eb",
        "padding-left": "1em",
    },
    "code": {"font-weight": "600", "font-size": "0.875em"},
    "code::before": {"content": '"`"'},
    "code::after": {"content": '"`"'},
    "pre": {
        "overflow-x": "auto",
        "background-color": "#1f2937",
        "color": "#e5e7eb",
        "padding": "0.8571429em 1.1428571em",
    },
    "pre code": {"background-color": "transparent", "padding": "0", "font-weight": "inherit"},
}


class StyleSheetBackend(Protocol):
    """Turns a token set and resolved theme into stylesheet text."""

    def generate(self, tokens: frozenset[str], rules: StyleRules) -> str: ...


class UtilityBackend:
    """Generate CSS for the built-in utility grammar."""

    def generate(self, tokens: frozenset[str], rules: StyleRules) -> str:
        blocks: list[str] = [_base_layer(rules)]

        if "prose" in tokens:
            blocks.append(_prose_layer(rules))

        plain: list[str] = []
        pseudo: list[str] = []
        responsive: dict[str, list[str]] = {bp: [] for bp, _ in BREAKPOINTS}

        for token in sorted(tokens):
            parsed = _split_variants(token)
            if parsed is None:
                continue
            breakpoint, pseudo_class, name = parsed
            declarations = self.declarations(name, rules)
            if declarations is None:
                continue
            rule = _rule("." + escape_class(token) + (pseudo_class or ""), declarations)
            if breakpoint:
                responsive[breakpoint].append(rule)
            elif pseudo_class:
                pseudo.append(rule)
            else:
                plain.append(rule)

        blocks.extend(plain)
        blocks.extend(pseudo)
        for bp, width in BREAKPOINTS:
            if responsive[bp]:
                inner = "\n".join(_indent(r) for r in responsive[bp])
                blocks.append(f"@media (min-width: {width}) {{\n{inner}\n}}")

        return "\n\n".join(b for b in blocks if b) + "\n"

    def declarations(self, name: str, rules: StyleRules) -> dict[str, str] | None:
        """Return the declarations for an unprefixed utility, or None if unknown."""
        if name in STATIC_UTILITIES:
            return STATIC_UTILITIES[name]

        prefix, _, rest = name.partition("-")
        if prefix == "font" and rest in rules.font_families:
            return {"font-family": ", ".join(rules.font_families[rest])}
        if prefix == "font" and rest in FONT_WEIGHTS:
            return {"font-weight": FONT_WEIGHTS[rest]}
        if prefix == "text" and rest in FONT_SIZES:
            size, line_height = FONT_SIZES[rest]
            return {"font-size": size, "line-height": line_height}
        if prefix in COLOR_PROPERTIES and rest in COLORS:
            return {COLOR_PROPERTIES[prefix]: COLORS[rest]}

        match = _SPACING.match(name)
        if match:
            negative, kind, amount = match.groups()
            if negative and not kind.startswith("m"):
                return None
            value = _spacing_value(amount)
            if negative and value != "0px":
                value = "-" + value
            return {prop: value for prop in SPACING_PROPERTIES[kind]}
        return None


def escape_class(token: str) -> str:
    """Escape a token for use as a CSS class selector."""
    return re.sub(r"([^a-zA-Z0-9_-])", r"\\\1", token)


def _split_variants(token: str) -> tuple[str | None, str | None, str] | None:
    *variants, name = token.split(":")
    breakpoints = dict(BREAKPOINTS)
    breakpoint = pseudo_class = None
    for v in variants:
        if v in breakpoints and breakpoint is None:
            breakpoint = v
        elif v in PSEUDO_CLASSES and pseudo_class is None:
            pseudo_class = PSEUDO_CLASSES[v]
        else:
            return None
    return breakpoint, pseudo_class, name


def _spacing_value(amount: str) -> str:
    if amount == "px":
        return "1px"
    if amount == "0":
        return "0px"
    return f"{float(amount) * 0.25:g}rem"


def _base_layer(rules: StyleRules) -> str:
    sans = rules.font_families.get("sans")
    if not sans:
        return ""
    return _rule("html", {"font-family": ", ".join(sans)})


def _prose_layer(rules: StyleRules) -> str:
    out = [_rule(".prose", {"max-width": "65ch", "line-height": "1.75"})]
    selectors = list(PROSE_DEFAULTS)
    selectors.extend(s for s in rules.typography if s not in PROSE_DEFAULTS)
    for selector in selectors:
        declarations = dict(PROSE_DEFAULTS.get(selector, {}))
        declarations.update(rules.typography.get(selector, {}))
        out.append(_rule(f".prose {selector}", declarations))
    return "\n\n".join(out)


def _rule(selector: str, declarations: dict[str, str]) -> str:
    body = "\n".join(f"  {prop}: {value};" for prop, value in declarations.items())
    return f"{selector} {{\n{body}\n}}"


def _indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line for line in text.split("\n"))


def known_utilities(tokens: Iterable[str], rules: StyleRules) -> list[str]:
    """Tokens from the set that the built-in grammar can render, sorted."""
    tokens = set(tokens)
    backend = UtilityBackend()
    out = []
    for token in sorted(tokens):
        parsed = _split_variants(token)
        if parsed is not None and backend.declarations(parsed[2], rules) is not None:
            out.append(token)
    if "prose" in tokens:
        out.append("prose")
    return sorted(set(out))
