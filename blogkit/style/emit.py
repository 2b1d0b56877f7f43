"""Stylesheet emission."""

from __future__ import annotations

from collections.abc import Iterable

from .backend import StyleSheetBackend, UtilityBackend
from .theme import StyleRules


def emit(
    tokens: Iterable[str],
    rules: StyleRules,
    backend: StyleSheetBackend | None = None,
) -> str:
    """Render the stylesheet for a token set.

    Identical tokens and rules always produce byte-identical text.

    Args:
        tokens: Tokens found by ``scan``
        rules: Resolved theme from ``resolve_theme``
        backend: Stylesheet generator (defaults to the built-in utility backend)

    Returns:
        Stylesheet text ending in a newline
    """
    backend = backend or UtilityBackend()
    return backend.generate(frozenset(tokens), rules)
