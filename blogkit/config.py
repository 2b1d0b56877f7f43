"""Configuration constants and defaults for blogkit."""

import os
from datetime import timedelta

# Documents dated further ahead than this are rejected.
# Override via BLOGKIT_DATE_SKEW_DAYS environment variable
DATE_SKEW = timedelta(days=int(os.getenv("BLOGKIT_DATE_SKEW_DAYS", "1")))

# Reading speed used for reading_time
WORDS_PER_MINUTE = int(os.getenv("BLOGKIT_WORDS_PER_MINUTE", "200"))

# Project layout
DEFAULT_CONTENT_DIR = "content"
DEFAULT_CONTENT_GLOBS = (
    "./templates/**/*.html",
    "./content/**/*.md",
    "./static/icons/**/*.svg",
)
THEME_CONFIG_NAMES = ("theme.toml", "theme.json", "theme.yaml", "theme.yml")

# Output artifacts
INDEX_FILENAME = "index.json"
STYLESHEET_FILENAME = "style.css"

# Index versioning for determinism tracking
SCHEMA_VERSION = 1

# Top-level output names owned by generated pages and artifacts; no slug or
# alias may start with one of them.
TAGS_DIR = "tags"
RESERVED_ROOTS = (TAGS_DIR, "index.html", INDEX_FILENAME, STYLESHEET_FILENAME)
