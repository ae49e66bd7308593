"""Middleware de requisições: id, tempo de resposta e log das escritas no ledger"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from time import perf_counter
from app.core.config import settings
import logging
import uuid

logger = logging.getLogger(__name__)

WRITE_METHODS = {"POST", "PUT", "DELETE"}
LEDGER_ROUTES = ("/matches", "/match-players", "/data-integrity/repair")


def is_ledger_write(method: str, path: str) -> bool:
    """Requisições que alteram partidas, participações ou contadores"""
    if method not in WRITE_METHODS:
        return False
    route = path[len(settings.API_V1_PREFIX):] if path.startswith(settings.API_V1_PREFIX) else path
    return route.startswith(LEDGER_ROUTES)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Propaga X-Request-ID, mede o tempo e registra escritas no ledger"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        start_time = perf_counter()

        response = await call_next(request)

        process_time = perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        route = request.scope.get("route")
        path = getattr(route, "path", request.url.path)

        if is_ledger_write(request.method, request.url.path):
            logger.info(
                f"[{request_id}] ledger {request.method} {path} -> "
                f"{response.status_code} em {process_time:.4f}s"
            )

        if process_time > settings.SLOW_REQUEST_SECONDS:
            logger.warning(
                f"[{request_id}] requisição lenta: {request.method} {path} "
                f"levou {process_time:.4f}s"
            )

        return response
