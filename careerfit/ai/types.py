from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Attachment:
    data: bytes
    mime_type: str
    filename: str = ""


class ModelClient(Protocol):
    async def generate(
        self, prompt: str, attachment: Attachment | None = None
    ) -> str: ...
