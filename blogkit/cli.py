"""CLI entry point for blogkit.

Subcommands run the content indexer and the style extractor over a project
root; all output artifacts are written only after both succeed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .config import DEFAULT_CONTENT_DIR
from .errors import BlogkitError, LoadError


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint (kept as `app` for packaging compatibility)."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="blogkit",
        description="Index blog content and extract the stylesheet it needs.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"blogkit {__version__}",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="Validate content and theme without writing output")
    _add_common(p_check)

    p_build = sub.add_parser("build", help="Write index.json, style.css and optionally the site")
    _add_common(p_build)
    p_build.add_argument("--out", "-o", type=Path, default=Path("./public"), help="Output directory")
    p_build.add_argument("--site", action="store_true", help="Also render HTML pages")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "check":
        return _cmd_check(args)
    if args.cmd == "build":
        return _cmd_build(args)

    parser.print_help()
    return 2


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("root", type=Path, nargs="?", default=Path("."), help="Project root")
    p.add_argument("--config", "-c", type=Path, default=None, help="Theme config file")
    p.add_argument(
        "--content-dir", default=DEFAULT_CONTENT_DIR, help="Content directory under root"
    )


def _cmd_check(args: Any) -> int:
    from .build import check

    try:
        index, stylesheet, tokens = check(
            args.root, config_path=args.config, content_dir=args.content_dir
        )
    except BlogkitError as e:
        return _report_error(e)

    print("✓ Content and theme are valid")
    print(f"  Documents: {len(index.documents)}")
    print(f"  Drafts: {len(index.drafts)}")
    print(f"  Tags: {len(index.taxonomy)}")
    print(f"  Aliases: {len(index.aliases)}")
    print(f"  Tokens: {len(tokens):,}")
    print(f"  Stylesheet: {len(stylesheet.encode('utf-8')) / 1024:.1f} KB")
    return 0


def _cmd_build(args: Any) -> int:
    from .build import build

    try:
        result = build(
            args.root,
            args.out,
            config_path=args.config,
            content_dir=args.content_dir,
            with_site=bool(args.site),
        )
    except BlogkitError as e:
        return _report_error(e)

    print("✓ Build complete")
    print(f"  Output: {result.output_dir}")
    print(f"  Documents: {result.documents} ({result.drafts} drafts held back)")
    print(f"  Tags: {result.tags}")
    print(f"  Redirects: {result.aliases}")
    print(f"  Utilities: {result.utilities} of {result.tokens:,} tokens")
    print(f"  Artifacts: {len(result.artifacts)}")
    return 0


def _report_error(e: BlogkitError) -> int:
    if isinstance(e, LoadError):
        print(f"Error: {len(e.errors)} problem(s) in {e.checked} document(s)", file=sys.stderr)
        for err in e.errors:
            print(f"  - {err}", file=sys.stderr)
    else:
        print(f"Error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    app()
