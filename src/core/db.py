"""SQLite key-value layer backing the local favorites list."""

import json
import sqlite3
from pathlib import Path

_KV_TABLE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_KV_TABLE)
    conn.commit()
    return conn


def get_value(conn: sqlite3.Connection, key: str) -> str | None:
    """Return the raw stored value for ``key``, or None if absent."""
    row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    if row is None:
        return None
    return row["value"]


def set_value(conn: sqlite3.Connection, key: str, value: str) -> None:
    """Insert or overwrite ``key``."""
    conn.execute(
        """
        INSERT INTO kv_store (key, value, updated_at)
        VALUES (?, ?, datetime('now'))
        ON CONFLICT(key)
        DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        """,
        (key, value),
    )
    conn.commit()


def load_favorite_indices(conn: sqlite3.Connection, key: str) -> list[int]:
    """Read the stored favorites list.

    Raises:
        sqlite3.Error: storage unavailable.
        ValueError: stored value is not a JSON array (json.JSONDecodeError included).
    """
    raw = get_value(conn, key)
    if raw is None:
        return []
    data = json.loads(raw)
    if not isinstance(data, list):
        msg = f"favorites under '{key}' is not a JSON array"
        raise ValueError(msg)
    # bool is an int subclass; JSON true must not count as position 1.
    return [i for i in data if isinstance(i, int) and not isinstance(i, bool)]


def save_favorite_indices(conn: sqlite3.Connection, key: str, indices: list[int]) -> None:
    """Rewrite the full favorites list."""
    set_value(conn, key, json.dumps(sorted(indices)))
