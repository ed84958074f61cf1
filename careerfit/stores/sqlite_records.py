from __future__ import annotations

import asyncio
import json
import os
import sqlite3
import threading
from typing import Any

from .base import RecordNotFound


class SqliteRecordStore:
    """Document-style record store keeping JSON payloads per collection in SQLite."""

    def __init__(self, db_path: str, *, database_id: str = "default"):
        self._db_path = db_path
        self._database_id = database_id
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is not None:
                return self._conn

            directory = os.path.dirname(self._db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS records (
                    database_id TEXT NOT NULL,
                    collection_id TEXT NOT NULL,
                    record_id TEXT NOT NULL,
                    payload_json TEXT NOT NULL,
                    PRIMARY KEY (database_id, collection_id, record_id)
                );
                """
            )
            self._conn = conn
            return self._conn

    @staticmethod
    def _decode(record_id: str, payload_json: str) -> dict[str, Any]:
        payload = json.loads(payload_json)
        if not isinstance(payload, dict):
            payload = {}
        payload["id"] = record_id
        return payload

    def put_record(self, collection: str, record_id: str, payload: dict[str, Any]) -> None:
        conn = self._get_connection()
        body = {key: value for key, value in payload.items() if key != "id"}
        with self._lock:
            conn.execute(
                """
                INSERT INTO records (database_id, collection_id, record_id, payload_json)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (database_id, collection_id, record_id)
                DO UPDATE SET payload_json = excluded.payload_json
                """,
                (self._database_id, collection, record_id, json.dumps(body, ensure_ascii=False)),
            )

    def _find_records_sync(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        conn = self._get_connection()
        with self._lock:
            rows = conn.execute(
                """
                SELECT record_id, payload_json
                FROM records
                WHERE database_id = ? AND collection_id = ?
                ORDER BY rowid
                """,
                (self._database_id, collection),
            ).fetchall()
        matches: list[dict[str, Any]] = []
        for record_id, payload_json in rows:
            record = self._decode(record_id, payload_json)
            if record.get(field) == value:
                matches.append(record)
        return matches

    def _get_record_sync(self, collection: str, record_id: str) -> dict[str, Any]:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                """
                SELECT record_id, payload_json
                FROM records
                WHERE database_id = ? AND collection_id = ? AND record_id = ?
                """,
                (self._database_id, collection, record_id),
            ).fetchone()
        if row is None:
            raise RecordNotFound(f"Record '{record_id}' not found in '{collection}'")
        return self._decode(row[0], row[1])

    async def find_records(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self._find_records_sync, collection, field, value)

    async def get_record(self, collection: str, record_id: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._get_record_sync, collection, record_id)

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
