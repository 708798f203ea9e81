import json

import pytest

from simpletodo.cli import main


@pytest.fixture
def settings_path(tmp_path):
    return str(tmp_path / "settings.json")


def test_reschedule_command(tmp_path, settings_path, capsys):
    path = tmp_path / "todo.md"
    path.write_text("2024-01-01\n- [ ] Buy milk\n2024-01-02", encoding="utf-8")
    code = main(["--settings", settings_path, "reschedule", str(path),
                 "--today", "2024-01-02", "--cursor", "2", "--yes", "--no-preview"])
    assert code == 0
    assert path.read_text(encoding="utf-8") == "2024-01-01\n\n2024-01-02\n- [ ] Buy milk"
    assert "cursor: 3" in capsys.readouterr().out


def test_reschedule_declined_by_prompt(tmp_path, settings_path, monkeypatch):
    path = tmp_path / "todo.md"
    path.write_text("2024-01-01\n- [ ] a", encoding="utf-8")
    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    assert main(["--settings", settings_path, "reschedule", str(path), "--today", "2024-01-02"]) == 0
    assert path.read_text(encoding="utf-8") == "2024-01-01\n- [ ] a"


def test_nothing_to_reschedule_is_not_an_error(tmp_path, settings_path):
    path = tmp_path / "todo.md"
    path.write_text("2024-01-01\n- [x] a", encoding="utf-8")
    assert main(["--settings", settings_path, "reschedule", str(path), "--today", "2024-01-02", "-y"]) == 0


def test_missing_file_fails(tmp_path, settings_path):
    assert main(["--settings", settings_path, "toggle", str(tmp_path / "missing.md"), "0"]) == 1


def test_toggle_command(tmp_path, settings_path):
    path = tmp_path / "todo.md"
    path.write_text("2024-01-01\n- [ ] a", encoding="utf-8")
    assert main(["--settings", settings_path, "toggle", str(path), "1"]) == 0
    assert path.read_text(encoding="utf-8") == "2024-01-01\n- [/] a"


def test_archive_command(tmp_path, settings_path):
    path = tmp_path / "todo.md"
    path.write_text("2024-03-01\n- [x] a\n- [x] b", encoding="utf-8")
    assert main(["--settings", settings_path, "archive", str(path), "--archive-dir", "done"]) == 0
    assert (tmp_path / "done" / "archive-2024-03.md").exists()
    assert path.read_text(encoding="utf-8") == "2024-03-01"


def test_settings_command_persists(settings_path, capsys):
    assert main(["--settings", settings_path, "settings", "--preview", "off", "--scan-origin", "cursor"]) == 0
    with open(settings_path, encoding="utf-8") as f:
        saved = json.load(f)
    assert saved["preview"] is False
    assert saved["scan_origin"] == "cursor"
    assert "scan_origin = cursor" in capsys.readouterr().out
