from __future__ import annotations

from quiz_author import config as config_mod
from quiz_author.workspace import cli


def test_init_creates_workspace_and_config(tmp_path, capsys, monkeypatch):
    target = tmp_path / "workspace"
    monkeypatch.setenv("QUIZ_AUTHOR_DATA_HOME", str(target))

    code = cli.main([])

    captured = capsys.readouterr()
    assert code == 0
    assert "Workspace ready" in captured.out
    assert "(written)" in captured.out
    assert (target / "bank").is_dir()
    assert (target / "config" / config_mod.CONFIG_FILENAME).is_file()


def test_init_supports_custom_path(tmp_path, capsys):
    target = tmp_path / "custom"

    code = cli.main(["--path", str(target)])

    captured = capsys.readouterr()
    assert code == 0
    assert target.is_dir()
    assert str(target) in captured.out


def test_init_keeps_existing_config_unless_forced(tmp_path, capsys):
    target = tmp_path / "again"
    config_file = target / "config" / config_mod.CONFIG_FILENAME
    assert cli.main(["--path", str(target), "--quiet"]) == 0
    config_file.write_text("[quiz]\ndefault_count = 5\n", encoding="utf-8")

    code = cli.main(["--path", str(target)])
    captured = capsys.readouterr()
    assert code == 0
    assert "(exists)" in captured.out
    assert "default_count = 5" in config_file.read_text(encoding="utf-8")

    assert cli.main(["--path", str(target), "--force", "--quiet"]) == 0
    assert "count_choices" in config_file.read_text(encoding="utf-8")


def test_init_quiet_mode(tmp_path, capsys, monkeypatch):
    target = tmp_path / "quiet"
    monkeypatch.setenv("QUIZ_AUTHOR_DATA_HOME", str(target))

    code = cli.main(["--quiet"])

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out == ""


def test_init_reports_workspace_errors(tmp_path, capsys):
    target = tmp_path / "occupied"
    target.write_text("file", encoding="utf-8")

    code = cli.main(["--path", str(target)])

    captured = capsys.readouterr()
    assert code == 1
    assert "not a directory" in captured.err
