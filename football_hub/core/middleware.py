"""Middleware de rastreio, tempo de resposta e headers de segurança"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from time import perf_counter
from uuid import uuid4
from football_hub.core.logging_config import request_id_var
import logging

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Propaga X-Request-ID para os logs e a resposta; loga requisições lentas e 5xx"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        started = perf_counter()
        try:
            response = await call_next(request)
            elapsed = perf_counter() - started

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{elapsed:.4f}"
            response.headers.update(SECURITY_HEADERS)

            route = f"{request.method} {request.url.path}"
            if response.status_code >= 500:
                logger.error(f"{route} -> {response.status_code} ({elapsed:.3f}s)")
            elif elapsed > SLOW_REQUEST_SECONDS:
                logger.warning(f"🐢 Requisição lenta {route}: {elapsed:.3f}s")
            return response
        finally:
            request_id_var.reset(token)
