"""
Error taxonomy raised by the scaffolder.

Every failure is fatal to the scaffold in progress and reaches the caller as a
subclass of ScaffoldError. The offending entry or output path (when known) is
kept on the exception, and the underlying OS/zip error is chained as __cause__.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional, Union


class ScaffoldError(RuntimeError):
    """
    Base class for all scaffolding failures.

    Attributes:
        path: Archive entry path or filesystem path the failure relates to, if any.
    """

    def __init__(self, message: str, *, path: Optional[Union[str, PurePath]] = None) -> None:
        self.path = str(path) if path is not None else None
        if self.path is not None:
            message = f"{message} [{self.path}]"
        super().__init__(message)


class SettingsError(ScaffoldError):
    """Environment or `.env` settings failed validation."""


class TemplateNotFound(ScaffoldError):
    """The template (or code template) identifier is unknown."""


class TemplateUnreadable(ScaffoldError):
    """The template archive exists but could not be opened."""


class CatalogError(TemplateUnreadable):
    """The template catalog file is missing, malformed, or invalid."""


class InvalidIdentifier(ScaffoldError, ValueError):
    """A project name or package identifier contains path-hostile characters."""


class PathRewriteError(ScaffoldError):
    """Path rewriting cannot run or produced an empty path."""


class UnsafeEntryPath(ScaffoldError):
    """A rewritten entry path would land outside the destination root."""


class ArchiveReadError(ScaffoldError):
    """Reading the archive stream failed."""


class ArchiveCorrupt(ScaffoldError):
    """The archive is malformed or truncated."""


class OutputWriteError(ScaffoldError):
    """Writing an extracted entry to disk failed."""


class SeedWriteError(ScaffoldError):
    """Writing the generated seed source file failed."""


__all__ = [
    "ScaffoldError",
    "SettingsError",
    "TemplateNotFound",
    "TemplateUnreadable",
    "CatalogError",
    "InvalidIdentifier",
    "PathRewriteError",
    "UnsafeEntryPath",
    "ArchiveReadError",
    "ArchiveCorrupt",
    "OutputWriteError",
    "SeedWriteError",
]
