"""
Project scaffolding: archive extraction, path rewriting and seed emission.
"""

from .emit import SEED_CLASS_NAME, CodeTemplateEmitter
from .extract import ArchiveEntry, ExtractionResult, extract_archive
from .rewrite import PathRewriter, RewriteRule, package_path, validate_identifier
from .service import ScaffoldReport, create_project, scaffold

__all__ = [
    "SEED_CLASS_NAME",
    "ArchiveEntry",
    "CodeTemplateEmitter",
    "ExtractionResult",
    "PathRewriter",
    "RewriteRule",
    "ScaffoldReport",
    "create_project",
    "extract_archive",
    "package_path",
    "scaffold",
    "validate_identifier",
]
