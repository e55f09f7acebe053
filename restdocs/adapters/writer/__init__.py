"""Snippet writers persisting rendered documentation."""

from .filesystem import StandardWriterResolver

__all__ = ["StandardWriterResolver"]
