import os
from typing import List, Optional

from config import get_user_lang
from core.desktop.devtools.interface.constants import LANG_PACK

BASE_LANG = "en"


def effective_lang(preferred: Optional[str] = None) -> str:
    """Resolve active language: explicit, STM_LANG, pytest (always en), then config."""
    for candidate in (preferred, os.getenv("STM_LANG")):
        if candidate in LANG_PACK:
            return candidate
    if os.getenv("PYTEST_CURRENT_TEST"):
        return BASE_LANG
    configured = get_user_lang()
    return configured if configured in LANG_PACK else BASE_LANG


def missing_translations(lang: str) -> List[str]:
    """Keys present in the base language but absent from `lang`."""
    own = LANG_PACK.get(lang, {})
    return sorted(key for key in LANG_PACK[BASE_LANG] if key not in own)


def translate(key: str, lang: Optional[str] = None, **kwargs) -> str:
    """Look `key` up in the active language, then in English, then return it as is."""
    active = LANG_PACK.get(effective_lang(lang), {})
    template = active.get(key) or LANG_PACK[BASE_LANG].get(key, key)
    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


__all__ = ["BASE_LANG", "effective_lang", "missing_translations", "translate"]
