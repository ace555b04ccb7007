"""Convert checkstyle output into structured issues with source snippets."""

__version__ = "0.1.0"
