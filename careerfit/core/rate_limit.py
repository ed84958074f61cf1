from __future__ import annotations

import hashlib

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from careerfit.core.config import settings

limiter = Limiter(key_func=get_remote_address)


def analysis_client_key(request: Request) -> str:
    """Callers presenting an API key share one bucket per key; everyone else is keyed by address."""
    api_key = (request.headers.get("X-API-Key") or "").strip()
    if api_key:
        return "key:" + hashlib.sha256(api_key.encode("utf-8")).hexdigest()[:16]
    return get_remote_address(request)


def rate_limit():
    if settings.rate_limit_enabled:
        return limiter.limit(settings.rate_limit, key_func=analysis_client_key)

    def decorator(func):
        return func

    return decorator
