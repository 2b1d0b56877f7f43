"""Tests for slug and alias derivation."""

import unittest

from blogkit.content.slugs import (
    derive_slug,
    normalize_alias,
    path_root,
    slug_path,
    slugify,
    tag_slug,
)


class TestSlugify(unittest.TestCase):
    def test_basic_slug(self) -> None:
        self.assertEqual(slugify("Business Overview"), "business-overview")

    def test_drops_apostrophes_and_joins_ampersand(self) -> None:
        self.assertEqual(slugify("Rust's Traits & Lifetimes"), "rusts-traits-and-lifetimes")

    def test_collapses_separators(self) -> None:
        self.assertEqual(slugify("  a -- b__c  "), "a-b-c")


class TestDeriveSlug(unittest.TestCase):
    def test_nested_path(self) -> None:
        self.assertEqual(derive_slug("blog/My Post.md"), "blog/my-post")

    def test_index_file_uses_directory(self) -> None:
        self.assertEqual(derive_slug("blog/trip-report/index.md"), "blog/trip-report")

    def test_override_replaces_last_segment(self) -> None:
        self.assertEqual(derive_slug("blog/2024-01-01-draft.md", override="Final Name"), "blog/final-name")


class TestAliases(unittest.TestCase):
    def test_normalize_alias(self) -> None:
        self.assertEqual(normalize_alias("old/path"), "/old/path/")
        self.assertEqual(normalize_alias("/old//path/"), "/old/path/")
        self.assertEqual(normalize_alias("./x"), "/x/")
        self.assertEqual(normalize_alias(""), "/")

    def test_slug_path_matches_alias_form(self) -> None:
        self.assertEqual(slug_path("blog/post"), normalize_alias("/blog/post"))


class TestOutputNames(unittest.TestCase):
    def test_tag_slug(self) -> None:
        self.assertEqual(tag_slug("Web Dev"), "web-dev")
        self.assertEqual(tag_slug("c++"), "c")
        self.assertEqual(tag_slug("++"), "tag")

    def test_path_root(self) -> None:
        self.assertEqual(path_root("/tags/a/"), "tags")
        self.assertEqual(path_root("blog/post"), "blog")
        self.assertEqual(path_root("/"), "")


if __name__ == "__main__":
    unittest.main()
