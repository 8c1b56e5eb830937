from pathlib import Path
import os

from config import get_user_db_path

DB_FILENAME = "stm.db"


def get_data_dir() -> Path:
    """XDG data directory for stm, falling back to ~/.local/share/stm."""
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home).expanduser() if data_home else Path.home() / ".local" / "share"
    return base / "stm"


def get_db_path(db_path: Path | None = None) -> Path:
    """Unified resolver for the database file.

    Priority:
    1. Explicit db_path if provided.
    2. STM_DB_PATH env variable (for tests).
    3. db_path from the user config.
    4. <XDG_DATA_HOME>/stm/stm.db.
    """
    if db_path:
        return Path(db_path).expanduser()
    env_path = os.environ.get("STM_DB_PATH")
    if env_path:
        return Path(env_path).expanduser()
    configured = get_user_db_path()
    if configured:
        return Path(configured).expanduser()
    return get_data_dir() / DB_FILENAME


__all__ = ["get_data_dir", "get_db_path", "DB_FILENAME"]
