"""Tests for the command-line interface."""

from __future__ import annotations

import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from blogkit.cli import main

POST = """+++
title = "Hello"
date = 2020-01-01
description = "Greeting"
+++

Body.
"""


class TestCli(unittest.TestCase):
    def _run(self, argv: list[str]) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_check_valid_project(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "content").mkdir()
            (root / "content" / "hello.md").write_text(POST, encoding="utf-8")
            code, out, _ = self._run(["check", str(root)])
            self.assertEqual(code, 0)
            self.assertIn("Documents: 1", out)

    def test_check_reports_every_problem(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "content").mkdir()
            (root / "content" / "a.md").write_text("no frontmatter", encoding="utf-8")
            (root / "content" / "b.md").write_text(POST.replace("title", "name"), encoding="utf-8")
            code, _, err = self._run(["check", str(root)])
            self.assertEqual(code, 1)
            self.assertIn("2 problem(s) in 2 document(s)", err)
            self.assertIn("a.md", err)
            self.assertIn("b.md", err)

    def test_build_writes_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "content").mkdir()
            (root / "content" / "hello.md").write_text(POST, encoding="utf-8")
            out_dir = root / "dist"
            code, out, _ = self._run(["build", str(root), "--out", str(out_dir), "--site"])
            self.assertEqual(code, 0)
            self.assertIn("Build complete", out)
            self.assertTrue((out_dir / "index.json").exists())
            self.assertTrue((out_dir / "hello" / "index.html").exists())

    def test_missing_content_dir(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, _, err = self._run(["check", td])
            self.assertEqual(code, 1)
            self.assertIn("Error:", err)


if __name__ == "__main__":
    unittest.main()
