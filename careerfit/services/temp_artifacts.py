from __future__ import annotations

import asyncio
import logging
import uuid

from careerfit.core.config import AnalysisConfig
from careerfit.stores.base import ObjectStore

logger = logging.getLogger(__name__)


def owner_permissions(owner_id: str) -> list[str]:
    return [f'read("user:{owner_id}")', f'delete("user:{owner_id}")']


class TempArtifactManager:
    """Keeps uploaded originals for the lifetime of one request only.

    Uploads are best effort: a failed upload is logged and yields ``None``.
    ``cleanup`` deletes every recorded artifact concurrently and never raises.
    """

    def __init__(self, objects: ObjectStore, config: AnalysisConfig, owner_id: str):
        self._objects = objects
        self._bucket = config.storage_bucket_id
        self._owner_id = owner_id
        self._artifact_ids: list[str] = []

    @property
    def artifact_ids(self) -> tuple[str, ...]:
        return tuple(self._artifact_ids)

    async def upload(self, content: bytes, file_name: str) -> str | None:
        object_id = uuid.uuid4().hex
        try:
            stored_id = await self._objects.create_object(
                self._bucket,
                object_id,
                content,
                file_name=file_name,
                permissions=owner_permissions(self._owner_id),
            )
        except Exception as exc:
            logger.warning("temp_upload_failed file=%s: %s", file_name, exc)
            return None

        artifact_id = stored_id or object_id
        self._artifact_ids.append(artifact_id)
        logger.info("temp_upload_stored file=%s artifact_id=%s", file_name, artifact_id)
        return artifact_id

    async def _delete(self, artifact_id: str) -> bool:
        try:
            await self._objects.delete_object(self._bucket, artifact_id)
        except Exception as exc:
            logger.error("temp_cleanup_failed artifact_id=%s: %s", artifact_id, exc)
            return False
        logger.info("temp_cleanup_deleted artifact_id=%s", artifact_id)
        return True

    async def cleanup(self) -> int:
        pending = list(self._artifact_ids)
        if not pending:
            return 0

        logger.info("temp_cleanup_started count=%s", len(pending))
        outcomes = await asyncio.gather(
            *(self._delete(artifact_id) for artifact_id in pending),
            return_exceptions=True,
        )
        self._artifact_ids.clear()
        return sum(1 for outcome in outcomes if outcome is True)
