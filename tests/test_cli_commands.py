import logging

import pytest
import yaml

from core.desktop.devtools.interface import stm_app
from infrastructure.sqlite_repository import SqliteTaskStore


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Point database and user config at a temp dir."""
    db = tmp_path / "stm.db"
    monkeypatch.setenv("STM_DB_PATH", str(db))
    monkeypatch.setenv("STM_CONFIG", str(tmp_path / "config.yaml"))
    monkeypatch.delenv("STM_LANG", raising=False)
    monkeypatch.delenv("STM_LOG_FILE", raising=False)
    return tmp_path


def test_projects_empty(isolated, capsys):
    assert stm_app.main(["projects"]) == 0
    assert capsys.readouterr().out.strip() == "No projects."


def test_projects_lists_titles_and_descriptions(isolated, capsys):
    store = SqliteTaskStore(isolated / "stm.db")
    store.create_project("Home", "chores")
    store.create_project("Work")
    store.close()
    assert stm_app.main(["projects"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith("Work")
    assert lines[1].endswith("Home  - chores")


def test_explicit_db_overrides_env(isolated, capsys):
    other = isolated / "other.db"
    store = SqliteTaskStore(other)
    store.create_project("Elsewhere")
    store.close()
    assert stm_app.main(["--db", str(other), "projects"]) == 0
    assert "Elsewhere" in capsys.readouterr().out


def test_unopenable_store_exits_1(isolated, capsys):
    assert stm_app.main(["--db", str(isolated), "projects"]) == 1
    assert "Cannot open database" in capsys.readouterr().err


def test_version(capsys):
    assert stm_app.main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_config_writes_and_clears_keys(isolated, capsys):
    assert stm_app.main(["config", "--theme", "dark-olive", "--lang", "ru", "--db-path", "~/x.db"]) == 0
    saved = yaml.safe_load((isolated / "config.yaml").read_text(encoding="utf-8"))
    assert saved == {"theme": "dark-olive", "lang": "ru", "db_path": "~/x.db"}
    out = capsys.readouterr().out
    assert "theme: dark-olive" in out
    # STM_DB_PATH still wins over the configured path.
    assert f"db_path: {isolated / 'stm.db'}" in out

    assert stm_app.main(["config", "--theme", "", "--lang", "", "--db-path", ""]) == 0
    assert not (isolated / "config.yaml").exists()


def test_config_rejects_unknown_lang(isolated, capsys):
    assert stm_app.main(["config", "--lang", "xx"]) == 1
    assert "Unknown language: xx" in capsys.readouterr().err
    assert not (isolated / "config.yaml").exists()


def test_tui_uses_configured_theme(isolated, monkeypatch):
    (isolated / "config.yaml").write_text("theme: dark-olive\n", encoding="utf-8")
    seen = {}

    def fake_run(args, store):
        seen["theme"] = args.theme
        seen["projects"] = store.list_projects()
        return 0

    monkeypatch.setattr(stm_app, "_run_tui", fake_run)
    assert stm_app.main([]) == 0
    assert seen == {"theme": "dark-olive", "projects": []}
    assert stm_app.main(["tui", "--theme", "tokyo-night"]) == 0
    assert seen["theme"] == "tokyo-night"


def test_log_file_is_opt_in(isolated, monkeypatch):
    root = logging.getLogger("stm")
    before = list(root.handlers)
    log_path = isolated / "stm.log"
    monkeypatch.setenv("STM_LOG_FILE", str(log_path))
    monkeypatch.setenv("STM_LOG_LEVEL", "debug")
    try:
        stm_app.configure_logging()
        logging.getLogger("stm.tests").debug("hello log")
        for handler in root.handlers:
            handler.flush()
        assert "hello log" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers[len(before):]:
            handler.close()
        root.handlers[:] = before
        root.setLevel(logging.NOTSET)
