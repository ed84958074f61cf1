from __future__ import annotations

import logging
from functools import lru_cache

from careerfit.ai.factory import get_model_client
from careerfit.ai.types import ModelClient
from careerfit.core.config import AnalysisConfig, model_credentials_configured, settings
from careerfit.services.pipeline import DocumentAnalysisPipeline
from careerfit.stores import SqliteObjectStore, SqliteRecordStore

logger = logging.getLogger(__name__)

analysis_config = AnalysisConfig.from_settings(settings)


@lru_cache(maxsize=1)
def get_record_store() -> SqliteRecordStore:
    return SqliteRecordStore(settings.records_db_path, database_id=settings.database_id)


@lru_cache(maxsize=1)
def get_object_store() -> SqliteObjectStore:
    return SqliteObjectStore(settings.objects_db_path)


@lru_cache(maxsize=1)
def get_model() -> ModelClient | None:
    if not model_credentials_configured(settings):
        logger.error("model_client_unavailable provider=%s", settings.ai_provider)
        return None
    return get_model_client(settings)


def get_pipeline() -> DocumentAnalysisPipeline:
    return DocumentAnalysisPipeline(
        analysis_config,
        records=get_record_store(),
        objects=get_object_store(),
        model=get_model(),
    )


def close_stores() -> None:
    if get_record_store.cache_info().currsize:
        get_record_store().close()
    if get_object_store.cache_info().currsize:
        get_object_store().close()
