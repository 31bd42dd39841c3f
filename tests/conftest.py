from pathlib import Path
import io
import textwrap
import zipfile
from typing import Callable, Dict, Optional

import pytest
from typer.testing import CliRunner

ArchiveFactory = Callable[[Dict[str, Optional[bytes]]], bytes]

STARTER_ENTRIES: Dict[str, Optional[bytes]] = {
    "TemplateGame/": None,
    "TemplateGame/README.md": b"hello template",
    "TemplateGame/game/logic/$pkgName/Stub.txt": b"x",
}


def _build_archive(entries: Dict[str, Optional[bytes]]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, payload in entries.items():
            if payload is None:
                archive.writestr(zipfile.ZipInfo(name if name.endswith("/") else f"{name}/"), b"")
            else:
                archive.writestr(name, payload)
    return buffer.getvalue()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def make_archive() -> ArchiveFactory:
    """
    Return a factory building zip bytes from {entry path: content}; a None
    content makes a directory entry.
    """
    return _build_archive


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """
    A template directory with one `starter` template and its catalog.
    """
    root = tmp_path / "templates"
    root.mkdir()
    (root / "starter.zip").write_bytes(_build_archive(STARTER_ENTRIES))
    catalog = textwrap.dedent(
        """
        [[template]]
        id = "starter"
        archive = "starter.zip"
        internal_name = "TemplateGame"
        code_template = "game-screen-logic"
        description = "Empty 2D game"
        """
    ).strip()
    (root / "templates.toml").write_text(catalog + "\n", encoding="utf-8")
    return root
