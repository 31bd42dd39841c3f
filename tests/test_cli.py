from pathlib import Path

from typer.testing import CliRunner

from gamescaffold import __version__, cli


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_create_builds_project(runner: CliRunner, template_dir: Path, tmp_path: Path) -> None:
    destination = tmp_path / "projects"

    result = runner.invoke(
        cli.app,
        [
            "create",
            str(destination),
            "--name",
            "MyGame",
            "--package",
            "com.acme.demo",
            "--template",
            "starter",
            "--template-dir",
            str(template_dir),
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "Scaffold Summary" in result.stdout
    assert (destination / "MyGame/game/logic/com/acme/demo/MainScreen.java").is_file()
    assert (destination / "MyGame/game/logic/com/acme/demo/Stub.txt").is_file()


def test_create_uses_template_dir_from_environment(
    runner: CliRunner, template_dir: Path, tmp_path: Path, monkeypatch
) -> None:
    monkeypatch.setenv("GAMESCAFFOLD_TEMPLATE_DIR", str(template_dir))
    cli.get_settings.cache_clear()
    try:
        result = runner.invoke(
            cli.app,
            ["create", str(tmp_path / "out"), "-n", "MyGame", "-p", "solo", "-t", "starter", "--no-lock"],
        )
    finally:
        cli.get_settings.cache_clear()

    assert result.exit_code == 0, result.stdout
    assert (tmp_path / "out/MyGame/game/logic/solo/MainScreen.java").is_file()


def test_create_reports_invalid_identifier(runner: CliRunner, template_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        [
            "create",
            str(tmp_path / "out"),
            "--name",
            "a/b",
            "--package",
            "p",
            "--template",
            "starter",
            "--template-dir",
            str(template_dir),
        ],
    )

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    assert not (tmp_path / "out").exists()


def test_create_reports_unknown_template(runner: CliRunner, template_dir: Path, tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        [
            "create",
            str(tmp_path / "out"),
            "--name",
            "MyGame",
            "--package",
            "p",
            "--template",
            "missing",
            "--template-dir",
            str(template_dir),
        ],
    )

    assert result.exit_code == 1
    assert "Unknown template" in result.stdout


def test_create_requires_existing_template_dir(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(
        cli.app,
        [
            "create",
            str(tmp_path / "out"),
            "--name",
            "MyGame",
            "--package",
            "p",
            "--template",
            "starter",
            "--template-dir",
            str(tmp_path / "nowhere"),
        ],
    )

    assert result.exit_code != 0


def test_seed_prints_rendered_class(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["seed", "--package", "com.acme.demo"])

    assert result.exit_code == 0
    assert result.stdout.startswith("package com.acme.demo;")
    assert "class MainScreen" in result.stdout


def test_seed_rejects_unknown_code_template(runner: CliRunner) -> None:
    result = runner.invoke(cli.app, ["seed", "--package", "p", "--code-template", "nope"])

    assert result.exit_code == 1


def test_invalid_settings_exit_with_error(runner: CliRunner, monkeypatch) -> None:
    monkeypatch.setenv("GAMESCAFFOLD_BUFFER_SIZE", "12")
    cli.get_settings.cache_clear()
    try:
        result = runner.invoke(cli.app, ["seed", "--package", "p"])
    finally:
        cli.get_settings.cache_clear()

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    assert result.exception is None or isinstance(result.exception, SystemExit)
