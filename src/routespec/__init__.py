"""Reduce route trees into OpenAPI documents and keep them merged on disk."""

__version__ = "0.1.0"
