from __future__ import annotations
import sqlite3
from typing import List, Optional


class LocalStorage:
    """
    String-keyed, string-valued store with localStorage semantics.

    Every write is committed immediately and overwrites the previous value.
    There is no cross-process coordination: the last writer wins.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get_item(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM storage WHERE key=?", (key,)).fetchone()
        return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT INTO storage(key,value) VALUES(?,?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, str(value)),
        )
        self.conn.commit()

    def remove_item(self, key: str) -> None:
        self.conn.execute("DELETE FROM storage WHERE key=?", (key,))
        self.conn.commit()

    def clear(self) -> None:
        self.conn.execute("DELETE FROM storage")
        self.conn.commit()

    def keys(self) -> List[str]:
        rows = self.conn.execute("SELECT key FROM storage ORDER BY key ASC").fetchall()
        return [r["key"] for r in rows]
