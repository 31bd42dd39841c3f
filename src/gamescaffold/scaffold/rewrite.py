"""
Placeholder substitution on archive entry paths.

Rules run in a fixed order over the whole relative path string:

1. the template's internal name becomes the project name;
2. `game/logic/$pkgName` becomes `game/logic/<package id with dots as slashes>`.

The second rule matches as a plain substring, so `foo/game/logic/$pkgName/...`
is rewritten as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PureWindowsPath
from typing import Tuple

from ..errors import InvalidIdentifier, PathRewriteError, UnsafeEntryPath
from ..util import is_within

LOGIC_DIR = "game/logic"
PACKAGE_TOKEN = "$pkgName"
PACKAGE_PLACEHOLDER = f"{LOGIC_DIR}/{PACKAGE_TOKEN}"

_HOSTILE_TOKENS = ("/", "\\", "..")


def validate_identifier(value: str, label: str) -> str:
    """
    Reject identifiers that could change the shape of an output path.

    Raises:
        InvalidIdentifier: If value is empty or contains `/`, `\\` or `..`.
    """
    if not value:
        raise InvalidIdentifier(f"{label} must not be empty")
    for token in _HOSTILE_TOKENS:
        if token in value:
            raise InvalidIdentifier(f"{label} must not contain {token!r}: {value!r}")
    return value


def package_path(package_id: str) -> str:
    """On-disk form of a package identifier (`com.acme.demo` -> `com/acme/demo`)."""
    return package_id.replace(".", "/")


def normalize_entry_path(entry_path: str) -> str:
    return entry_path.replace("\\", "/")


@dataclass(frozen=True)
class RewriteRule:
    source: str
    target: str

    def apply(self, path: str) -> str:
        return path.replace(self.source, self.target)


class PathRewriter:
    """
    Rewrites archive entry paths for one scaffold.

    Construction validates the identifiers, so a rewriter that exists is safe
    to apply to any entry.
    """

    def __init__(self, project_name: str, package_id: str, internal_name: str) -> None:
        self.project_name = validate_identifier(project_name, "Project name")
        self.package_id = validate_identifier(package_id, "Package id")
        if not internal_name:
            raise PathRewriteError("Template internal name must not be empty")
        self.internal_name = internal_name
        self.rules: Tuple[RewriteRule, ...] = (
            RewriteRule(internal_name, project_name),
            RewriteRule(PACKAGE_PLACEHOLDER, f"{LOGIC_DIR}/{package_path(package_id)}"),
        )

    def rewrite(self, entry_path: str) -> str:
        """
        Apply every rule in order and return the rewritten relative path.

        Raises:
            PathRewriteError: If the result is empty.
        """
        path = normalize_entry_path(entry_path)
        for rule in self.rules:
            path = rule.apply(path)
        if not path.strip("/"):
            raise PathRewriteError("Entry path is empty after rewriting", path=entry_path)
        return path

    def resolve(self, entry_path: str, destination_root: Path, *, directory: bool = False) -> Path:
        """
        Rewrite entry_path and join it to destination_root.

        The result is normalized (symlinks included) and must lie beneath the
        root. A directory entry may also resolve to the root itself.

        Raises:
            UnsafeEntryPath: If the path is absolute or escapes the root.
        """
        relative = self.rewrite(entry_path)
        if relative.startswith("/") or PureWindowsPath(relative).drive:
            raise UnsafeEntryPath("Absolute entry path in archive", path=entry_path)
        root = destination_root.resolve()
        candidate = (root / relative).resolve()
        if directory and candidate == root:
            return candidate
        if not is_within(candidate, root):
            raise UnsafeEntryPath(f"Entry path escapes destination root {root}", path=entry_path)
        return candidate
