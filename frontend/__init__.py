"""Content frontend: renders content store documents as HTML pages and feeds."""

__version__ = "0.1.0"
