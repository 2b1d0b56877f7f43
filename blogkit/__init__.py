"""blogkit: deterministic content indexing and style extraction for a blog."""

__version__ = "0.1.0"
