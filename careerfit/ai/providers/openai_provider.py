from __future__ import annotations

import base64
import os
from typing import Any, Optional

from openai import AsyncOpenAI

from careerfit.ai.types import Attachment


def _attachment_part(attachment: Attachment) -> dict[str, Any]:
    if attachment.mime_type == "text/plain":
        text = attachment.data.decode("utf-8", errors="replace")
        label = attachment.filename or "document.txt"
        return {"type": "text", "text": f"DOCUMENT ({label}):\n{text}"}

    encoded = base64.b64encode(attachment.data).decode("utf-8")
    data_url = f"data:{attachment.mime_type};base64,{encoded}"
    if attachment.mime_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": data_url}}
    return {
        "type": "file",
        "file": {"filename": attachment.filename or "document", "file_data": data_url},
    }


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 60.0,
        max_retries: int = 0,
        temperature: float = 0.4,
        max_output_tokens: int = 3000,
    ):
        self._model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=timeout_s,
            max_retries=max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, prompt: str, attachment: Attachment | None = None) -> str:
        if attachment is None:
            content: Any = prompt
        else:
            content = [{"type": "text", "text": prompt}, _attachment_part(attachment)]

        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": content}],
            temperature=self._temperature,
            max_tokens=self._max_output_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
