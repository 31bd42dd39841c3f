"""
Template archive sources.
"""

from .source import DirectoryTemplateSource, InMemoryTemplateSource, TemplateSource

__all__ = ["DirectoryTemplateSource", "InMemoryTemplateSource", "TemplateSource"]
