from __future__ import annotations

import asyncio
import json
import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Sequence

from .base import ObjectNotFound


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteObjectStore:
    """Binary object store keeping blobs and their permission list in SQLite."""

    def __init__(self, db_path: str):
        self._db_path = db_path
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
                CREATE TABLE IF NOT EXISTS stored_objects (
                    bucket_id TEXT NOT NULL,
                    object_id TEXT NOT NULL,
                    file_name TEXT NOT NULL,
                    size_bytes INTEGER NOT NULL,
                    permissions_json TEXT NOT NULL,
                    content BLOB NOT NULL,
                    created_at TEXT NOT NULL,
                    PRIMARY KEY (bucket_id, object_id)
                );
                """
            )
            self._conn = conn
            return self._conn

    def _create_object_sync(
        self,
        bucket: str,
        object_id: str,
        content: bytes,
        file_name: str,
        permissions: Sequence[str],
    ) -> str:
        conn = self._get_connection()
        with self._lock:
            conn.execute(
                """
                INSERT INTO stored_objects (
                    bucket_id, object_id, file_name, size_bytes, permissions_json, content, created_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    bucket,
                    object_id,
                    file_name,
                    len(content),
                    json.dumps(list(permissions)),
                    sqlite3.Binary(content),
                    _utc_now(),
                ),
            )
        return object_id

    def _delete_object_sync(self, bucket: str, object_id: str) -> None:
        conn = self._get_connection()
        with self._lock:
            cursor = conn.execute(
                "DELETE FROM stored_objects WHERE bucket_id = ? AND object_id = ?",
                (bucket, object_id),
            )
        if cursor.rowcount == 0:
            raise ObjectNotFound(f"Object '{object_id}' not found in bucket '{bucket}'")

    def object_exists(self, bucket: str, object_id: str) -> bool:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                "SELECT 1 FROM stored_objects WHERE bucket_id = ? AND object_id = ?",
                (bucket, object_id),
            ).fetchone()
        return row is not None

    def object_permissions(self, bucket: str, object_id: str) -> list[str]:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                "SELECT permissions_json FROM stored_objects WHERE bucket_id = ? AND object_id = ?",
                (bucket, object_id),
            ).fetchone()
        if row is None:
            raise ObjectNotFound(f"Object '{object_id}' not found in bucket '{bucket}'")
        return list(json.loads(row[0]))

    async def create_object(
        self,
        bucket: str,
        object_id: str,
        content: bytes,
        *,
        file_name: str,
        permissions: Sequence[str],
    ) -> str:
        return await asyncio.to_thread(
            self._create_object_sync, bucket, object_id, content, file_name, permissions
        )

    async def delete_object(self, bucket: str, object_id: str) -> None:
        await asyncio.to_thread(self._delete_object_sync, bucket, object_id)

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
