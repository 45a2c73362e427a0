"""Key-value storage for blocks and the chain checkpoint."""

from __future__ import annotations

import sqlite3
from os import PathLike

DB_NAME = "blockchain.db"
_DATA_TABLE = "data"
_BLOCKS_TABLE = "blocks"
_CHECKPOINT_KEY = "checkpoint"


class Database:
    """A small persistent store with a data bucket and a blocks bucket."""

    def __init__(self, path: str | PathLike[str] = DB_NAME) -> None:
        self._conn = sqlite3.connect(str(path))
        with self._conn:
            for table in (_DATA_TABLE, _BLOCKS_TABLE):
                self._conn.execute(
                    f"CREATE TABLE IF NOT EXISTS {table} "
                    "(key TEXT PRIMARY KEY, value BLOB NOT NULL)"
                )

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def _put(self, table: str, key: str, data: bytes) -> None:
        with self._conn:
            self._conn.execute(
                f"INSERT OR REPLACE INTO {table} (key, value) VALUES (?, ?)",
                (key, sqlite3.Binary(data)),
            )

    def _get(self, table: str, key: str) -> bytes | None:
        row = self._conn.execute(
            f"SELECT value FROM {table} WHERE key = ?", (key,)
        ).fetchone()
        return None if row is None else bytes(row[0])

    def save_block(self, block_hash: str, data: bytes) -> None:
        """Store an encoded block under its hash."""
        self._put(_BLOCKS_TABLE, block_hash, data)

    def save_checkpoint(self, data: bytes) -> None:
        """Store the encoded chain state."""
        self._put(_DATA_TABLE, _CHECKPOINT_KEY, data)

    def checkpoint(self) -> bytes | None:
        """Return the encoded chain state, or None if none was saved."""
        return self._get(_DATA_TABLE, _CHECKPOINT_KEY)

    def block(self, block_hash: str) -> bytes | None:
        """Return the encoded block with this hash, or None."""
        return self._get(_BLOCKS_TABLE, block_hash)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()