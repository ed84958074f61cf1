from __future__ import annotations

import logging

from careerfit.ai.types import Attachment, ModelClient
from careerfit.core.config import AnalysisConfig
from careerfit.core.errors import ExtractionError
from careerfit.schemas.analysis import DocumentKind
from careerfit.services.prompts import EXTRACTION_PROMPTS
from careerfit.services.validator import file_extension, mime_type_for

logger = logging.getLogger(__name__)

DOCUMENT_LABELS: dict[DocumentKind, str] = {
    "cv": "CV",
    "cover_letter": "Cover letter",
}


class TextExtractor:
    def __init__(self, model: ModelClient, config: AnalysisConfig):
        self._model = model
        self._config = config

    async def extract_text(self, content: bytes, file_name: str, kind: DocumentKind) -> str:
        label = DOCUMENT_LABELS[kind].lower()
        attachment = Attachment(
            data=content,
            mime_type=mime_type_for(file_extension(file_name)),
            filename=file_name,
        )

        try:
            text = await self._model.generate(EXTRACTION_PROMPTS[kind], attachment)
        except Exception as exc:
            logger.error("text_extraction_failed kind=%s file=%s: %s", kind, file_name, exc)
            raise ExtractionError(f"Failed to extract text from {label}: {exc}") from exc

        if not text or len(text.strip()) < self._config.min_extracted_chars:
            logger.warning(
                "text_extraction_insufficient kind=%s file=%s chars=%s",
                kind,
                file_name,
                len((text or "").strip()),
            )
            raise ExtractionError(
                f"Failed to extract text from {label}: Insufficient text extracted from {label}"
            )

        return text
