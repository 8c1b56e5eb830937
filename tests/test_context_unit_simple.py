from types import SimpleNamespace

from core.desktop.devtools.application import context
from infrastructure.sqlite_repository import SqliteTaskStore


def _settings_store(initial=""):
    data = {context.LAST_PROJECT_KEY: initial}
    return SimpleNamespace(
        get_setting=lambda key: data.get(key, ""),
        set_setting=lambda key, value: data.__setitem__(key, value),
        data=data,
    )


def test_get_last_project_unset_returns_none():
    assert context.get_last_project(_settings_store()) is None


def test_get_last_project_ignores_garbage():
    assert context.get_last_project(_settings_store("abc")) is None
    assert context.get_last_project(_settings_store(" 12 ")) == 12


def test_save_last_project_none_clears():
    store = _settings_store("4")
    context.save_last_project(store, None)
    assert store.data[context.LAST_PROJECT_KEY] == ""


def test_last_project_roundtrip_through_store(tmp_path):
    store = SqliteTaskStore(tmp_path / "stm.db")
    context.save_last_project(store, 7)
    store.close()
    reopened = SqliteTaskStore(tmp_path / "stm.db")
    assert context.get_last_project(reopened) == 7
    reopened.close()
