from .base import ObjectNotFound, ObjectStore, ObjectStoreError, RecordNotFound, RecordStore, RecordStoreError
from .sqlite_objects import SqliteObjectStore
from .sqlite_records import SqliteRecordStore

__all__ = [
    "ObjectNotFound",
    "ObjectStore",
    "ObjectStoreError",
    "RecordNotFound",
    "RecordStore",
    "RecordStoreError",
    "SqliteObjectStore",
    "SqliteRecordStore",
]
