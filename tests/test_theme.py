"""Tests for theme configuration loading and resolution."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from blogkit.config import DEFAULT_CONTENT_GLOBS
from blogkit.errors import ConfigError, SourceIOError
from blogkit.style.theme import (
    DEFAULT_FONT_FAMILIES,
    load_theme_config,
    parse_theme_config,
    resolve_theme,
)

# The layout of the original theme file, expressed as data.
ORIGINAL_THEME = {
    "content": ["./templates/**/*.html", "./content/**/*.md", "./static/icons/**/*.svg"],
    "theme": {
        "extend": {
            "fontFamily": {
                "sans": ['"IBM Plex Sans"', "...sans"],
                "cursive": ["Charm", "cursive"],
            },
            "typography": {
                "DEFAULT": {
                    "css": {
                        "code": {
                            "backgroundColor": "#f5f5f5",
                            "padding": "0.2em 0.4em",
                            "borderRadius": "0.25em",
                            "color": "#333",
                            "fontWeight": "normal",
                        },
                        "code::before": {"content": '""'},
                        "code::after": {"content": '""'},
                    }
                }
            },
        }
    },
    "plugins": ["@tailwindcss/typography"],
}


class TestParseThemeConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        config = parse_theme_config({})
        self.assertEqual(config.content, list(DEFAULT_CONTENT_GLOBS))
        self.assertEqual(config.plugins, [])

    def test_content_must_be_list(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            parse_theme_config({"content": "templates/*.html"})
        self.assertEqual(ctx.exception.key, "content")

    def test_unrelated_keys_pass_through(self) -> None:
        config = parse_theme_config({"darkMode": "class", "plugins": ["x"]})
        self.assertEqual(config.plugins, ["x"])

    def test_top_level_must_be_mapping(self) -> None:
        with self.assertRaises(ConfigError):
            parse_theme_config(["not", "a", "mapping"])


class TestLoadThemeConfig(unittest.TestCase):
    def test_toml_json_and_yaml_agree(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "theme.toml").write_text(
                'content = ["a/**/*.html"]\nplugins = ["p"]\n\n'
                '[theme.fontFamily]\nserif = ["Charter", "serif"]\n',
                encoding="utf-8",
            )
            (root / "theme.json").write_text(
                json.dumps(
                    {
                        "content": ["a/**/*.html"],
                        "plugins": ["p"],
                        "theme": {"fontFamily": {"serif": ["Charter", "serif"]}},
                    }
                ),
                encoding="utf-8",
            )
            (root / "theme.yaml").write_text(
                "content: ['a/**/*.html']\nplugins: [p]\ntheme:\n  fontFamily:\n    serif: [Charter, serif]\n",
                encoding="utf-8",
            )
            configs = [load_theme_config(root / n) for n in ("theme.toml", "theme.json", "theme.yaml")]
            rules = [resolve_theme(c) for c in configs]
            self.assertEqual(rules[0], rules[1])
            self.assertEqual(rules[1], rules[2])
            self.assertEqual(rules[0].font_families["serif"], ("Charter", "serif"))

    def test_unparseable_file_is_config_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "theme.toml"
            path.write_text("content = [", encoding="utf-8")
            with self.assertRaises(ConfigError) as ctx:
                load_theme_config(path)
            self.assertEqual(ctx.exception.key, "theme.toml")

    def test_missing_file_is_io_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(SourceIOError):
                load_theme_config(Path(td) / "theme.toml")


class TestResolveTheme(unittest.TestCase):
    def test_original_layout(self) -> None:
        rules = resolve_theme(parse_theme_config(ORIGINAL_THEME))
        self.assertEqual(
            rules.font_families["sans"],
            ('"IBM Plex Sans"', *DEFAULT_FONT_FAMILIES["sans"]),
        )
        self.assertEqual(rules.font_families["cursive"], ("Charm", "cursive"))
        self.assertEqual(rules.typography["code"]["background-color"], "#f5f5f5")
        self.assertEqual(rules.typography["code"]["border-radius"], "0.25em")
        self.assertEqual(rules.typography["code::before"], {"content": '""'})
        self.assertEqual(list(rules.typography), ["code", "code::before", "code::after"])
        self.assertEqual(rules.plugins, ("@tailwindcss/typography",))

    def test_unknown_selector_names_it(self) -> None:
        config = parse_theme_config({"theme": {"typographyOverrides": {"h7": {"color": "red"}}}})
        with self.assertRaises(ConfigError) as ctx:
            resolve_theme(config)
        self.assertEqual(ctx.exception.key, "h7")
        self.assertIn("h7", str(ctx.exception))

    def test_malformed_value_names_key(self) -> None:
        config = parse_theme_config({"theme": {"typographyOverrides": {"code": {"color": ["red"]}}}})
        with self.assertRaises(ConfigError) as ctx:
            resolve_theme(config)
        self.assertEqual(ctx.exception.key, "theme.typographyOverrides.code.color")

    def test_boolean_value_rejected(self) -> None:
        config = parse_theme_config({"theme": {"typographyOverrides": {"a": {"fontWeight": True}}}})
        with self.assertRaises(ConfigError):
            resolve_theme(config)

    def test_value_with_css_punctuation_rejected(self) -> None:
        config = parse_theme_config({"theme": {"typographyOverrides": {"a": {"color": "red; x: y"}}}})
        with self.assertRaises(ConfigError):
            resolve_theme(config)

    def test_numbers_and_kebab_properties(self) -> None:
        config = parse_theme_config(
            {"theme": {"typographyOverrides": {"h1": {"fontWeight": 700, "line-height": 1.2}}}}
        )
        rules = resolve_theme(config)
        self.assertEqual(rules.typography["h1"], {"font-weight": "700", "line-height": "1.2"})

    def test_numbers_keep_positional_notation(self) -> None:
        config = parse_theme_config(
            {"theme": {"typographyOverrides": {"p": {"zIndex": 1000000, "letterSpacing": 1e-7, "opacity": 0.5}}}}
        )
        self.assertEqual(
            resolve_theme(config).typography["p"],
            {"z-index": "1000000", "letter-spacing": "0.0000001", "opacity": "0.5"},
        )

    def test_non_finite_numbers_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "theme.toml"
            path.write_text("[theme.typographyOverrides.p]\nlineHeight = nan\n", encoding="utf-8")
            config = load_theme_config(path)
            with self.assertRaises(ConfigError) as ctx:
                resolve_theme(config)
            self.assertEqual(ctx.exception.key, "theme.typographyOverrides.p.lineHeight")

        config = parse_theme_config({"theme": {"typographyOverrides": {"p": {"width": float("inf")}}}})
        with self.assertRaises(ConfigError):
            resolve_theme(config)

    def test_extend_overrides_plain_declarations(self) -> None:
        config = parse_theme_config(
            {
                "theme": {
                    "typographyOverrides": {"a": {"color": "red", "fontWeight": "400"}},
                    "extend": {"typography": {"DEFAULT": {"css": {"a": {"color": "blue"}}}}},
                }
            }
        )
        rules = resolve_theme(config)
        self.assertEqual(rules.typography["a"], {"color": "blue", "font-weight": "400"})

    def test_unknown_typography_variant_rejected(self) -> None:
        config = parse_theme_config({"theme": {"extend": {"typography": {"lg": {"css": {}}}}}})
        with self.assertRaises(ConfigError) as ctx:
            resolve_theme(config)
        self.assertEqual(ctx.exception.key, "theme.extend.typography.lg")

    def test_font_family_validation(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            resolve_theme(parse_theme_config({"theme": {"fontFamily": {"Body": ["x"]}}}))
        self.assertEqual(ctx.exception.key, "theme.fontFamily.Body")

        with self.assertRaises(ConfigError):
            resolve_theme(parse_theme_config({"theme": {"fontFamily": {"body": []}}}))

        with self.assertRaises(ConfigError):
            resolve_theme(parse_theme_config({"theme": {"fontFamily": {"body": ["...nope"]}}}))

    def test_font_names_with_spaces_are_quoted(self) -> None:
        rules = resolve_theme(parse_theme_config({"theme": {"fontFamily": {"body": ["Open Sans", "sans-serif"]}}}))
        self.assertEqual(rules.font_families["body"], ('"Open Sans"', "sans-serif"))


if __name__ == "__main__":
    unittest.main()
