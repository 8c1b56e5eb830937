from core.desktop.devtools.interface.constants import (
    COMMENT_CHAR_LIMIT,
    LANG_PACK,
    SEARCH_CHAR_LIMIT,
    TIMESTAMP_FORMAT,
)
from core.desktop.devtools.interface.i18n import effective_lang, missing_translations, translate


def test_constants_values_present():
    assert "en" in LANG_PACK and "ru" in LANG_PACK
    assert (SEARCH_CHAR_LIMIT, COMMENT_CHAR_LIMIT) == (100, 2000)
    assert TIMESTAMP_FORMAT == "%Y-%m-%d %H:%M"


def test_every_language_covers_english_keys():
    for lang in LANG_PACK:
        assert missing_translations(lang) == [], lang


def test_missing_key_falls_back_to_english(monkeypatch):
    monkeypatch.setitem(LANG_PACK, "xx", {"LOADING": "..."})
    assert missing_translations("xx")
    assert translate("LOADING", lang="xx") == "..."
    assert translate("NO_TAGS", lang="xx") == LANG_PACK["en"]["NO_TAGS"]


def test_translate_formats_and_falls_back():
    assert translate("STATUS_DATA_FAILED", operation="save_task", error="locked") == "save_task failed: locked"
    assert translate("NO_SUCH_KEY") == "NO_SUCH_KEY"
    # Missing placeholders leave the template untouched.
    assert translate("STATUS_DATA_FAILED") == LANG_PACK["en"]["STATUS_DATA_FAILED"]


def test_effective_lang_order(monkeypatch):
    monkeypatch.delenv("STM_LANG", raising=False)
    assert effective_lang() == "en"
    assert effective_lang("ru") == "ru"
    monkeypatch.setenv("STM_LANG", "ru")
    assert effective_lang() == "ru"
    assert translate("CLI_NO_PROJECTS") == LANG_PACK["ru"]["CLI_NO_PROJECTS"]
    monkeypatch.setenv("STM_LANG", "xx")
    assert effective_lang() == "en"
