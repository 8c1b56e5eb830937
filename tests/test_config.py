import config


def test_missing_config_is_empty(tmp_path, monkeypatch):
    monkeypatch.setenv("STM_CONFIG", str(tmp_path / "absent.yaml"))
    assert config.get_user_theme() == ""
    assert config.get_user_db_path() == ""


def test_invalid_yaml_is_treated_as_empty(tmp_path, monkeypatch):
    path = tmp_path / "broken.yaml"
    path.write_text("theme: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv("STM_CONFIG", str(path))
    assert config.get_user_theme() == ""
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert config.get_user_lang() == ""


def test_setters_roundtrip_and_remove_empty(tmp_path, monkeypatch):
    path = tmp_path / "nested" / "config.yaml"
    monkeypatch.setenv("STM_CONFIG", str(path))
    config.set_user_theme(" dark-olive ")
    config.set_user_lang("ru")
    assert config.get_user_theme() == "dark-olive"
    assert config.get_user_lang() == "ru"
    config.set_user_theme("")
    assert "theme" not in path.read_text(encoding="utf-8")
    config.set_user_lang("")
    assert not path.exists()


def test_db_path_from_config_used_by_resolver(tmp_path, monkeypatch):
    from infrastructure.db_path_resolver import get_db_path

    monkeypatch.delenv("STM_DB_PATH", raising=False)
    monkeypatch.setenv("STM_CONFIG", str(tmp_path / "config.yaml"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    assert get_db_path() == tmp_path / "xdg" / "stm" / "stm.db"
    config.set_user_db_path(str(tmp_path / "custom.db"))
    assert get_db_path() == tmp_path / "custom.db"
    assert get_db_path(tmp_path / "explicit.db") == tmp_path / "explicit.db"
