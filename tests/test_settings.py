import os
from pathlib import Path

import pytest

from gamescaffold.config import TemplateDescriptor, settings
from gamescaffold.errors import SettingsError
from gamescaffold.scaffold import create_project
from gamescaffold.templates import InMemoryTemplateSource


@pytest.fixture(autouse=True)
def _fresh_settings():
    settings.get_settings.cache_clear()
    yield
    settings.get_settings.cache_clear()


def test_project_dotenv_overrides_environment(tmp_path: Path, monkeypatch) -> None:
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    (project_dir / ".env").write_text("GAMESCAFFOLD_BUFFER_SIZE=8192\n", encoding="utf-8")

    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("GAMESCAFFOLD_BUFFER_SIZE", "16384")

    settings._load_dotenv()

    assert os.getenv("GAMESCAFFOLD_BUFFER_SIZE") == "8192"
    assert settings.get_settings().buffer_size == 8192


def test_defaults_when_unset(monkeypatch) -> None:
    for name in ("GAMESCAFFOLD_TEMPLATE_DIR", "GAMESCAFFOLD_BUFFER_SIZE", "GAMESCAFFOLD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    loaded = settings.get_settings()

    assert loaded.buffer_size == settings.DEFAULT_BUFFER_SIZE
    assert loaded.template_dir == Path.home() / ".gamescaffold" / "templates"
    assert loaded.log_level is None


def test_template_dir_from_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("GAMESCAFFOLD_TEMPLATE_DIR", str(tmp_path))

    assert settings.get_settings().template_dir == tmp_path


@pytest.mark.parametrize("value", ["1", "999999999"])
def test_buffer_size_is_bounded(monkeypatch, value: str) -> None:
    monkeypatch.setenv("GAMESCAFFOLD_BUFFER_SIZE", value)

    with pytest.raises(SettingsError) as exc:
        settings.get_settings()

    assert "GAMESCAFFOLD_BUFFER_SIZE" in str(exc.value)


def test_create_project_reports_invalid_settings(tmp_path: Path, monkeypatch, make_archive) -> None:
    descriptor = TemplateDescriptor(archive_id="starter", internal_name="TemplateGame")
    source = InMemoryTemplateSource([(descriptor, make_archive({"TemplateGame/a.txt": b"a"}))])
    monkeypatch.setenv("GAMESCAFFOLD_BUFFER_SIZE", "12")

    with pytest.raises(SettingsError):
        create_project(tmp_path, "MyGame", "p", descriptor, source=source, lock=False)
