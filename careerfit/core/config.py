from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

ALLOWED_EXTENSIONS = ("pdf", "jpg", "jpeg", "png", "doc", "docx", "txt")
DEFAULT_MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    records_db_path: str
    objects_db_path: str
    database_id: str
    candidates_collection_id: str
    jobs_collection_id: str
    employers_collection_id: str
    storage_bucket_id: str
    max_file_size_bytes: int
    min_extracted_chars: int
    strict_analysis_shape: bool
    ai_provider: str
    ai_model: str
    ai_temperature: float
    ai_max_output_tokens: int
    openai_api_key: str | None
    openai_base_url: str | None
    openai_timeout_s: float
    openai_max_retries: int


def load_settings() -> Settings:
    return Settings(
        api_key=_get_env("API_KEY"),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            [
                "http://localhost:5173",
                "http://127.0.0.1:5173",
                "http://localhost:3000",
            ],
        ),
        cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
        cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
        records_db_path=_get_env("RECORDS_DB_PATH", "data/records.db") or "data/records.db",
        objects_db_path=_get_env("OBJECTS_DB_PATH", "data/objects.db") or "data/objects.db",
        database_id=_get_env("DATABASE_ID", "career4m") or "career4m",
        candidates_collection_id=_get_env("CANDIDATES_COLLECTION_ID", "talents") or "talents",
        jobs_collection_id=_get_env("JOBS_COLLECTION_ID", "jobs") or "jobs",
        employers_collection_id=_get_env("EMPLOYERS_COLLECTION_ID", "employers") or "employers",
        storage_bucket_id=_get_env("STORAGE_BUCKET_ID", "avatars") or "avatars",
        max_file_size_bytes=_get_env_int("MAX_FILE_SIZE_BYTES", DEFAULT_MAX_FILE_SIZE_BYTES),
        min_extracted_chars=_get_env_int("MIN_EXTRACTED_CHARS", 50),
        strict_analysis_shape=_get_env_bool("ANALYSIS_STRICT_SHAPE", False),
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        ai_model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL") or "gpt-4o-mini").strip(),
        ai_temperature=_get_env_float("AI_TEMPERATURE", 0.4),
        ai_max_output_tokens=_get_env_int("AI_MAX_OUTPUT_TOKENS", 3000),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        openai_timeout_s=_get_env_float("OPENAI_TIMEOUT_S", 60.0),
        openai_max_retries=_get_env_int("OPENAI_MAX_RETRIES", 0),
    )


settings = load_settings()


def model_credentials_configured(cfg: Settings) -> bool:
    if cfg.ai_provider != "openai":
        return False
    key = (cfg.openai_api_key or "").strip()
    return bool(key) and not _looks_like_placeholder(key)


@dataclass(frozen=True)
class AnalysisConfig:
    """Per-process analysis parameters handed to every pipeline component."""

    candidates_collection_id: str = "talents"
    jobs_collection_id: str = "jobs"
    employers_collection_id: str = "employers"
    storage_bucket_id: str = "avatars"
    allowed_extensions: tuple[str, ...] = ALLOWED_EXTENSIONS
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    min_extracted_chars: int = 50
    strict_shape: bool = False
    model_configured: bool = True

    @classmethod
    def from_settings(cls, cfg: Settings) -> "AnalysisConfig":
        return cls(
            candidates_collection_id=cfg.candidates_collection_id,
            jobs_collection_id=cfg.jobs_collection_id,
            employers_collection_id=cfg.employers_collection_id,
            storage_bucket_id=cfg.storage_bucket_id,
            max_file_size_bytes=max(1, cfg.max_file_size_bytes),
            min_extracted_chars=max(0, cfg.min_extracted_chars),
            strict_shape=cfg.strict_analysis_shape,
            model_configured=model_credentials_configured(cfg),
        )
