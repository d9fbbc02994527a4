from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_LOGIN_DELAY_MS = 500


@dataclass(frozen=True)
class AppConfig:
    data_dir: Optional[Path]  # None -> platform default, see db.data_dir()
    log_level: str
    login_delay_ms: int


def load_config() -> AppConfig:
    raw_dir = os.environ.get("AGENDA_DATA_DIR", "").strip()
    return AppConfig(
        data_dir=Path(raw_dir).expanduser() if raw_dir else None,
        log_level=os.environ.get("AGENDA_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        login_delay_ms=_int_env("AGENDA_LOGIN_DELAY_MS", DEFAULT_LOGIN_DELAY_MS),
    )


def _int_env(key: str, default: int) -> int:
    try:
        value = int(os.environ.get(key, str(default)))
    except ValueError:
        return default
    return value if value >= 0 else default
