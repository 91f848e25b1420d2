import json
import sqlite3
from pathlib import Path
from typing import Any, Sequence

from label_maker.config.logger_config import logger
from label_maker.registry.application.ports import KeyValueStorePort
from label_maker.registry.application.snapshot_cache import CACHE_KEY, TIMESTAMP_KEY


class SQLiteKeyValueStore(KeyValueStorePort):
    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path)
        try:
            self.init_schema()
        except Exception:
            self.conn.close()
            raise

    def init_schema(self) -> None:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        self.conn.commit()

    def get(self, key: str) -> Any | None:
        cursor = self.conn.cursor()
        cursor.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
        row = cursor.fetchone()
        if not row:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as exc:
            logger.warning("Stored value for key '{}' is not valid JSON: {}", key, exc.msg)
            return None

    def set(self, key: str, value: Any) -> None:
        cursor = self.conn.cursor()
        self._upsert(cursor, key, json.dumps(value, ensure_ascii=False))
        self.conn.commit()

    def replace_snapshot(self, names: Sequence[str], captured_at_ms: int) -> None:
        rows = (
            (CACHE_KEY, json.dumps(list(names), ensure_ascii=False)),
            (TIMESTAMP_KEY, json.dumps(int(captured_at_ms))),
        )
        cursor = self.conn.cursor()
        try:
            cursor.execute("BEGIN IMMEDIATE")
            for key, encoded in rows:
                self._upsert(cursor, key, encoded)
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

    @staticmethod
    def _upsert(cursor: sqlite3.Cursor, key: str, encoded: str) -> None:
        cursor.execute(
            """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = CURRENT_TIMESTAMP
            """,
            (key, encoded),
        )

    def close(self) -> None:
        self.conn.close()
