"""Style extraction: token scanning, theme resolution and stylesheet emission."""

from .backend import StyleSheetBackend, UtilityBackend
from .emit import emit
from .scan import extract_tokens, scan
from .theme import (
    StyleRules,
    ThemeConfig,
    find_theme_config,
    load_theme_config,
    parse_theme_config,
    resolve_theme,
)

__all__ = [
    "StyleRules",
    "StyleSheetBackend",
    "ThemeConfig",
    "UtilityBackend",
    "emit",
    "extract_tokens",
    "find_theme_config",
    "load_theme_config",
    "parse_theme_config",
    "resolve_theme",
    "scan",
]
