from __future__ import annotations

from typing import Any, Protocol, Sequence


class RecordStoreError(RuntimeError):
    pass


class RecordNotFound(RecordStoreError):
    pass


class ObjectStoreError(RuntimeError):
    pass


class ObjectNotFound(ObjectStoreError):
    pass


class RecordStore(Protocol):
    async def find_records(self, collection: str, field: str, value: Any) -> list[dict[str, Any]]: ...

    async def get_record(self, collection: str, record_id: str) -> dict[str, Any]: ...


class ObjectStore(Protocol):
    async def create_object(
        self,
        bucket: str,
        object_id: str,
        content: bytes,
        *,
        file_name: str,
        permissions: Sequence[str],
    ) -> str: ...

    async def delete_object(self, bucket: str, object_id: str) -> None: ...
