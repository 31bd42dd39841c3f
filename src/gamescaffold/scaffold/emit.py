"""
Write the seed class into a freshly extracted project.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..codegen import CodeTemplate
from ..errors import SeedWriteError, UnsafeEntryPath
from ..util import is_within, write_bytes_file
from .rewrite import LOGIC_DIR, package_path

logger = logging.getLogger(__name__)

SEED_CLASS_NAME = "MainScreen"


class CodeTemplateEmitter:
    """
    Renders a code template as `MainScreen` in the package's logic directory.
    """

    def __init__(self, code_template: CodeTemplate, *, class_name: str = SEED_CLASS_NAME) -> None:
        self.code_template = code_template
        self.class_name = class_name

    def target_path(self, destination_root: Path, project_name: str, package_id: str) -> Path:
        filename = f"{self.class_name}.{self.code_template.target_extension()}"
        return Path(destination_root) / project_name / LOGIC_DIR / package_path(package_id) / filename

    def emit(self, destination_root: Path, project_name: str, package_id: str) -> Path:
        """
        Write the seed file, replacing any file the archive left at that path.

        Returns:
            Path of the written file.

        Raises:
            UnsafeEntryPath: If the target resolves outside destination_root.
            SeedWriteError: If the file or its parent directories cannot be written.
        """
        root = Path(destination_root).resolve()
        target = self.target_path(root, project_name, package_id).resolve()
        if not is_within(target, root):
            raise UnsafeEntryPath(f"Seed class would be written outside destination root {root}", path=target)
        content = self.code_template.render(self.class_name, package_id)
        try:
            write_bytes_file(target, content)
        except OSError as exc:
            raise SeedWriteError(f"Unable to write seed class: {exc}", path=target) from exc
        logger.info("Seeded %s", target)
        return target
