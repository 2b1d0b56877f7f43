"""Theme configuration loading and resolution."""

from __future__ import annotations

import json
import logging
import math
import re
import tomllib
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any

import pydantic
import yaml
from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_CONTENT_GLOBS, THEME_CONFIG_NAMES
from ..errors import ConfigError, SourceIOError

logger = logging.getLogger(__name__)

# Element selectors the typography layer accepts overrides for, in emission order.
TYPOGRAPHY_SELECTORS = (
    "p",
    "a",
    "strong",
    "em",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "blockquote",
    "ul",
    "ol",
    "li",
    "hr",
    "img",
    "table",
    "thead",
    "th",
    "td",
    "kbd",
    "code",
    "code::before",
    "code::after",
    "pre",
    "pre code",
)

DEFAULT_FONT_FAMILIES: dict[str, tuple[str, ...]] = {
    "sans": (
        "ui-sans-serif",
        "system-ui",
        "sans-serif",
        '"Apple Color Emoji"',
        '"Segoe UI Emoji"',
        '"Segoe UI Symbol"',
        '"Noto Color Emoji"',
    ),
    "serif": ("ui-serif", "Georgia", "Cambria", '"Times New Roman"', "Times", "serif"),
    "mono": (
        "ui-monospace",
        "SFMono-Regular",
        "Menlo",
        "Monaco",
        "Consolas",
        '"Liberation Mono"',
        '"Courier New"',
        "monospace",
    ),
}

_FAMILY_NAME = re.compile(r"^[a-z][a-z0-9-]*$")
_PROPERTY_NAME = re.compile(r"^-?[A-Za-z][A-Za-z0-9-]*$")
_SPREAD_PREFIX = "..."


class ExtendSection(BaseModel):
    """``theme.extend``: the Tailwind config nesting."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    font_family: dict[str, Any] = Field(default_factory=dict, alias="fontFamily")
    typography: dict[str, Any] = Field(default_factory=dict)


class ThemeSection(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    font_family: dict[str, Any] = Field(default_factory=dict, alias="fontFamily")
    typography_overrides: dict[str, Any] = Field(
        default_factory=dict, alias="typographyOverrides"
    )
    extend: ExtendSection = Field(default_factory=ExtendSection)


class ThemeConfig(BaseModel):
    """Theme configuration file contents."""

    model_config = ConfigDict(extra="allow")

    content: list[str] = Field(default_factory=lambda: list(DEFAULT_CONTENT_GLOBS))
    theme: ThemeSection = Field(default_factory=ThemeSection)
    plugins: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class StyleRules:
    """Resolved theme, ready for a stylesheet backend."""

    font_families: dict[str, tuple[str, ...]] = field(default_factory=dict)
    typography: dict[str, dict[str, str]] = field(default_factory=dict)
    plugins: tuple[str, ...] = ()


def parse_theme_config(payload: Any) -> ThemeConfig:
    """Validate a decoded configuration object.

    Raises:
        ConfigError: Naming the first offending key
    """
    if not isinstance(payload, dict):
        raise ConfigError("<root>", "theme configuration must be a mapping")
    try:
        config = ThemeConfig.model_validate(payload)
    except pydantic.ValidationError as e:
        err = e.errors()[0]
        key = ".".join(str(p) for p in err["loc"]) or "<root>"
        raise ConfigError(key, err["msg"]) from e

    ignored = sorted(config.model_extra or {})
    if ignored:
        logger.debug("Ignoring theme keys handled by the external generator: %s", ignored)
    return config


def load_theme_config(path: Path) -> ThemeConfig:
    """Load a theme configuration file (TOML, JSON or YAML).

    Raises:
        SourceIOError: If the file cannot be read
        ConfigError: If it cannot be decoded or fails validation
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise SourceIOError(str(path), f"cannot read theme config: {e}") from e

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            payload = tomllib.loads(raw.decode("utf-8"))
        elif suffix == ".json":
            payload = json.loads(raw.decode("utf-8"))
        elif suffix in (".yaml", ".yml"):
            payload = yaml.safe_load(raw.decode("utf-8")) or {}
        else:
            raise ConfigError(path.name, f"unsupported config format {suffix or '(none)'}")
    except (UnicodeDecodeError, tomllib.TOMLDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(path.name, f"cannot parse: {e}") from e

    return parse_theme_config(payload)


def find_theme_config(root: Path) -> Path | None:
    """Return the first conventional theme config file found in root."""
    for name in THEME_CONFIG_NAMES:
        candidate = Path(root) / name
        if candidate.is_file():
            return candidate
    return None


def resolve_theme(config: ThemeConfig) -> StyleRules:
    """Validate theme values and flatten them into StyleRules.

    Raises:
        ConfigError: For an unknown selector or a malformed value
    """
    theme = config.theme

    families = dict(DEFAULT_FONT_FAMILIES)
    for prefix, table in (
        ("theme.fontFamily", theme.font_family),
        ("theme.extend.fontFamily", theme.extend.font_family),
    ):
        for name, stack in table.items():
            families[name] = _font_stack(f"{prefix}.{name}", name, stack)

    typography: dict[str, dict[str, str]] = {}
    _merge_typography(typography, "theme.typographyOverrides", theme.typography_overrides)
    for variant, body in theme.extend.typography.items():
        key = f"theme.extend.typography.{variant}"
        if variant != "DEFAULT":
            raise ConfigError(key, "only the DEFAULT typography variant is supported")
        if not isinstance(body, dict) or set(body) - {"css"}:
            raise ConfigError(key, "expected a table with a single 'css' key")
        _merge_typography(typography, f"{key}.css", body.get("css") or {})

    order = {sel: i for i, sel in enumerate(TYPOGRAPHY_SELECTORS)}
    return StyleRules(
        font_families=dict(sorted(families.items())),
        typography={sel: typography[sel] for sel in sorted(typography, key=order.__getitem__)},
        plugins=tuple(config.plugins),
    )


def _font_stack(key: str, name: str, stack: Any) -> tuple[str, ...]:
    if not _FAMILY_NAME.match(name):
        raise ConfigError(key, "family names must be lowercase identifiers")
    if not isinstance(stack, list) or not stack:
        raise ConfigError(key, "expected a non-empty list of font names")

    out: list[str] = []
    for i, entry in enumerate(stack):
        if not isinstance(entry, str) or not entry.strip():
            raise ConfigError(f"{key}.{i}", "font names must be non-empty strings")
        entry = entry.strip()
        if entry.startswith(_SPREAD_PREFIX):
            # "...sans" splices in the built-in stack, like a JS spread.
            base = entry[len(_SPREAD_PREFIX) :]
            if base not in DEFAULT_FONT_FAMILIES:
                raise ConfigError(f"{key}.{i}", f"no built-in family named {base!r}")
            out.extend(DEFAULT_FONT_FAMILIES[base])
            continue
        if any(c in entry for c in ";{}"):
            raise ConfigError(f"{key}.{i}", "font name contains CSS punctuation")
        if " " in entry and entry[0] not in "\"'":
            entry = f'"{entry}"'
        out.append(entry)
    return tuple(out)


def _merge_typography(target: dict[str, dict[str, str]], prefix: str, table: Any) -> None:
    if not isinstance(table, dict):
        raise ConfigError(prefix, "expected a table of selectors")
    for selector, declarations in table.items():
        if selector not in TYPOGRAPHY_SELECTORS:
            raise ConfigError(selector, f"unknown typography selector in {prefix}")
        key = f"{prefix}.{selector}"
        if not isinstance(declarations, dict):
            raise ConfigError(key, "expected a table of declarations")
        merged = target.setdefault(selector, {})
        for prop, value in declarations.items():
            merged[_css_property(f"{key}.{prop}", prop)] = _css_value(f"{key}.{prop}", value)


def _css_property(key: str, prop: Any) -> str:
    if not isinstance(prop, str) or not _PROPERTY_NAME.match(prop):
        raise ConfigError(key, "malformed property name")
    return re.sub(r"[A-Z]", lambda m: "-" + m.group(0).lower(), prop)


def _css_value(key: str, value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(key, f"expected a string or number, got {type(value).__name__}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ConfigError(key, f"expected a finite number, got {value!r}")
        return _plain_number(value)
    text = value.strip()
    if not text:
        raise ConfigError(key, "empty value")
    if any(c in text for c in ";{}"):
        raise ConfigError(key, "value contains CSS punctuation")
    return text


def _plain_number(value: float) -> str:
    # Positional notation only; CSS has no "1e+06"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
