"""
Caller-facing scaffold operation: extract a template, then seed the main screen.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from ..codegen import get_code_template
from ..config.models import ScaffoldRequest, TemplateDescriptor
from ..config.settings import get_settings
from ..errors import OutputWriteError
from ..templates import TemplateSource
from ..util import ensure_directory, file_lock, lock_path_for
from .emit import CodeTemplateEmitter
from .extract import extract_archive
from .rewrite import PathRewriter, validate_identifier

logger = logging.getLogger(__name__)


@dataclass
class ScaffoldReport:
    """
    Stores what a successful scaffold produced.

    Attributes:
        root: Resolved destination root.
        project_root: Directory named after the project beneath the root.
        template_id: Archive id of the template that was expanded.
        directories_created: Directories created while extracting.
        files_written: Files extracted from the archive, in archive order.
        seed_path: The emitted seed class.
    """
    root: Path
    project_root: Path
    template_id: str
    directories_created: List[Path] = field(default_factory=list)
    files_written: List[Path] = field(default_factory=list)
    seed_path: Optional[Path] = None

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Template", self.template_id)
        yield ("Project root", str(self.project_root))
        yield ("Directories created", str(len(self.directories_created)))
        yield ("Files extracted", str(len(self.files_written)))
        yield ("Seed class", str(self.seed_path) if self.seed_path else "not written")


def create_project(
    destination_root: Path | str,
    project_name: str,
    package_id: str,
    template: TemplateDescriptor,
    *,
    source: TemplateSource,
    buffer_size: Optional[int] = None,
    lock: bool = True,
) -> ScaffoldReport:
    """
    Materialize a new project beneath destination_root.

    Args:
        destination_root: Writable directory; created when missing.
        project_name: Replaces the template's internal name in entry paths.
        package_id: Dot-separated package; becomes `game/logic/<a/b/c>`.
        template: Descriptor naming the archive to expand.
        source: Where the archive is opened from.
        buffer_size: Copy chunk size; defaults to the configured setting.
        lock: Hold a file lock in destination_root while writing.

    Returns:
        A ScaffoldReport describing the generated tree.

    Raises:
        ScaffoldError: Any subclass; the tree may be partially written.
    """
    request = ScaffoldRequest(
        project_name=project_name,
        package_id=package_id,
        destination_root=Path(destination_root).expanduser(),
        template=template,
    )
    return scaffold(request, source=source, buffer_size=buffer_size, lock=lock)


def scaffold(
    request: ScaffoldRequest,
    *,
    source: TemplateSource,
    buffer_size: Optional[int] = None,
    lock: bool = True,
) -> ScaffoldReport:
    """Run a ScaffoldRequest; see create_project."""
    validate_identifier(request.project_name, "Project name")
    validate_identifier(request.package_id, "Package id")
    if buffer_size is None:
        buffer_size = get_settings().buffer_size

    try:
        root = ensure_directory(request.destination_root)
    except OSError as exc:
        raise OutputWriteError(f"Unable to create destination root: {exc}", path=request.destination_root) from exc

    logger.info(
        "Scaffolding %s (%s) from template %s into %s",
        request.project_name,
        request.package_id,
        request.template.archive_id,
        root,
    )
    with ExitStack() as stack:
        if lock:
            try:
                stack.enter_context(file_lock(root))
            except OSError as exc:
                raise OutputWriteError(f"Unable to lock destination root: {exc}", path=lock_path_for(root)) from exc
        with source.open(request.template.archive_id) as (stream, descriptor):
            if descriptor.internal_name != request.template.internal_name:
                logger.warning(
                    "Template %s declares internal name %r; ignoring %r from the request",
                    descriptor.archive_id,
                    descriptor.internal_name,
                    request.template.internal_name,
                )
            rewriter = PathRewriter(request.project_name, request.package_id, descriptor.internal_name)
            emitter = CodeTemplateEmitter(get_code_template(descriptor.code_template))
            extraction = extract_archive(stream, root, rewriter, buffer_size=buffer_size)
        seed_path = emitter.emit(root, request.project_name, request.package_id)

    project_root = root / request.project_name
    logger.info("Project %s ready at %s", request.project_name, project_root)
    return ScaffoldReport(
        root=root,
        project_root=project_root,
        template_id=descriptor.archive_id,
        directories_created=extraction.directories_created,
        files_written=extraction.files_written,
        seed_path=seed_path,
    )
