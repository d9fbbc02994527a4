from __future__ import annotations
import sqlite3
from pathlib import Path
from typing import Optional, Union

DB_NAME = "agenda.sqlite3"


def data_dir(app_name: str = "Agenda", override: Optional[Path] = None) -> Path:
    # Cross-platform local app data dir
    # macOS: ~/Library/Application Support/Agenda
    # Windows: %APPDATA%\Agenda
    # Linux: ~/.local/share/Agenda
    if override is not None:
        d = override
    else:
        home = Path.home()
        if _is_macos():
            base = home / "Library" / "Application Support"
        elif _is_windows():
            base = Path(_get_env("APPDATA", str(home)))
        else:
            base = home / ".local" / "share"
        d = base / app_name
    d.mkdir(parents=True, exist_ok=True)
    return d


def db_path(override_dir: Optional[Path] = None) -> Path:
    return data_dir(override=override_dir) / DB_NAME


def connect(path: Union[str, Path, None] = None) -> sqlite3.Connection:
    """Open the storage database. Pass ":memory:" for a throwaway store."""
    conn = sqlite3.connect(str(path) if path is not None else str(db_path()))
    conn.row_factory = sqlite3.Row
    return conn


def migrate(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS storage (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );
        """
    )
    conn.commit()


def _is_windows() -> bool:
    import sys
    return sys.platform.startswith("win")


def _is_macos() -> bool:
    import sys
    return sys.platform == "darwin"


def _get_env(k: str, default: str) -> str:
    import os
    return os.environ.get(k, default)
