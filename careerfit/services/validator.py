from __future__ import annotations

import base64
import binascii
import math
import re
from dataclasses import dataclass

from careerfit.core.config import AnalysisConfig
from careerfit.core.errors import FileTooLarge, InputError, UnsupportedFileType

MIME_TYPES = {
    "pdf": "application/pdf",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain",
}

_DATA_URL_PREFIX_RE = re.compile(r"^data:[^;,]*;base64,", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class FileCheck:
    file_name: str
    extension: str
    mime_type: str
    size_bytes: int


def file_extension(file_name: str) -> str:
    if "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[-1].lower()


def mime_type_for(extension: str) -> str:
    return MIME_TYPES.get(extension.lower().lstrip("."), "application/octet-stream")


def strip_data_url_prefix(encoded: str) -> str:
    return _DATA_URL_PREFIX_RE.sub("", encoded.strip(), count=1)


def decoded_size(encoded: str) -> int:
    return math.ceil(len(encoded) * 3 / 4)


def validate_file(file_name: str | None, encoded: str | None, config: AnalysisConfig) -> FileCheck:
    if not file_name or not encoded:
        raise InputError("File name and data are required")

    extension = file_extension(file_name)
    if extension not in config.allowed_extensions:
        raise UnsupportedFileType(
            "Unsupported file type. Please upload PDF, DOC, DOCX, JPG, PNG, or TXT files."
        )

    size_bytes = decoded_size(strip_data_url_prefix(encoded))
    if size_bytes > config.max_file_size_bytes:
        size_mb = round(size_bytes / 1024 / 1024)
        limit_mb = config.max_file_size_bytes // (1024 * 1024)
        raise FileTooLarge(
            f"File size too large ({size_mb}MB). Please upload files smaller than {limit_mb}MB."
        )

    return FileCheck(
        file_name=file_name,
        extension=extension,
        mime_type=mime_type_for(extension),
        size_bytes=size_bytes,
    )


def decode_payload(encoded: str, *, field: str) -> bytes:
    cleaned = _WHITESPACE_RE.sub("", strip_data_url_prefix(encoded))
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InputError(f"{field} is not valid base64 data") from exc
