from simpletodo.config import Config
from simpletodo.utils import FileUtils, Logger


def test_write_file_is_atomic_and_round_trips(tmp_path):
    path = tmp_path / "doc.md"
    assert FileUtils.write_file(str(path), "a\r\nb\n")
    assert FileUtils.read_content(str(path)) == "a\r\nb\n"
    assert [p.name for p in tmp_path.iterdir()] == ["doc.md"]


def test_write_file_joins_lists(tmp_path):
    path = tmp_path / "doc.md"
    assert FileUtils.write_file(str(path), ["x", None, "y"])
    assert path.read_text(encoding="utf-8") == "x\ny"


def test_write_failure_returns_false(tmp_path):
    assert not FileUtils.write_file(str(tmp_path / "missing" / "doc.md"), "x")
    assert FileUtils.read_content(str(tmp_path / "missing" / "doc.md")) is None


def test_error_once_deduplicates(capsys):
    Logger.error_once("test_dedup_key", "boom")
    Logger.error_once("test_dedup_key", "boom")
    assert capsys.readouterr().out.count("boom") == 1


def test_debug_is_silent_unless_enabled(monkeypatch, capsys):
    monkeypatch.setattr(Config, "DEBUG_MODE", False)
    Logger.debug("hidden")
    monkeypatch.setattr(Config, "DEBUG_MODE", True)
    Logger.debug_block("shown", ["line"])
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "shown" in out
