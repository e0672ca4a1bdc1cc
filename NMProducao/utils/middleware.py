# utils/middleware.py
"""
Middlewares HTTP: CORS por lista de origens, cabeçalhos de segurança,
limite de requisições por IP e log de acesso.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from utils.errors import error_response

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("access")

CORS_ALLOW_METHODS = "GET,HEAD,PUT,PATCH,POST,DELETE,OPTIONS"
CORS_ALLOW_HEADERS = "Origin, X-Requested-With, Content-Type, Accept, Authorization, Cache-Control"
CORS_MAX_AGE = "3600"


# ==========================================
# CORS
# ==========================================

class AllowListCORSMiddleware(BaseHTTPMiddleware):
    """
    Libera somente origens da lista (ou requisições sem Origin).

    Devolve a origem literal em Access-Control-Allow-Origin: com
    credenciais o navegador não aceita '*'. Preflight (OPTIONS) é respondido
    aqui mesmo, sem corpo, antes de qualquer outro processamento.
    """

    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = set(allowed_origins)

    def is_allowed(self, origin: str | None) -> bool:
        return not origin or origin in self.allowed_origins

    def _apply_headers(self, response: Response, origin: str | None) -> None:
        if origin and origin in self.allowed_origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Max-Age"] = CORS_MAX_AGE

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")

        if request.method == "OPTIONS":
            response = Response(status_code=200)
            self._apply_headers(response, origin)
            return response

        if not self.is_allowed(origin):
            logger.warning("origem bloqueada: %s %s %s", origin, request.method, request.url.path)
            response = JSONResponse(status_code=403, content={"error": f"Origem não permitida pelo CORS: {origin}"})
            self._apply_headers(response, origin)
            return response

        try:
            response = await call_next(request)
        except Exception as exc:
            # Erro não tratado também leva os cabeçalhos CORS
            logger.exception("erro não tratado em %s %s", request.method, request.url.path)
            response = error_response(exc)
        self._apply_headers(response, origin)
        return response


# ==========================================
# Cabeçalhos de segurança
# ==========================================

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


# ==========================================
# Limite de requisições
# ==========================================

class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Janela fixa por IP: no máximo `max_requests` a cada `window_seconds`.
    Estado só em memória do processo.
    """

    PRUNE_THRESHOLD = 10_000

    def __init__(
        self,
        app,
        max_requests: int,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._hits: Dict[str, Tuple[float, int]] = {}

    def _prune(self, now: float) -> None:
        expired = [ip for ip, (start, _) in self._hits.items() if now - start >= self.window_seconds]
        for ip in expired:
            del self._hits[ip]

    def hit(self, key: str) -> Tuple[int, int]:
        """Conta uma requisição; retorna (usadas na janela, segundos até reiniciar)."""
        now = self.clock()
        if len(self._hits) > self.PRUNE_THRESHOLD:
            self._prune(now)

        start, count = self._hits.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0
        count += 1
        self._hits[key] = (start, count)
        reset = max(0, int(round(self.window_seconds - (now - start))))
        return count, reset

    def _headers(self, count: int, reset: int) -> dict:
        return {
            "RateLimit-Limit": str(self.max_requests),
            "RateLimit-Remaining": str(max(0, self.max_requests - count)),
            "RateLimit-Reset": str(reset),
        }

    async def dispatch(self, request: Request, call_next):
        key = request.client.host if request.client else "unknown"
        count, reset = self.hit(key)
        headers = self._headers(count, reset)

        if count > self.max_requests:
            logger.warning("limite de requisições excedido para %s", key)
            return JSONResponse(
                status_code=429,
                content={"error": "Muitas requisições, tente novamente em instantes."},
                headers={**headers, "Retry-After": str(reset)},
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


# ==========================================
# Log de acesso
# ==========================================

class AccessLogMiddleware(BaseHTTPMiddleware):
    """Uma linha por requisição, no formato tiny, combined ou json."""

    def __init__(self, app, log_format: str = "tiny"):
        super().__init__(app)
        self.log_format = log_format

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        path = request.url.path + (f"?{request.url.query}" if request.url.query else "")
        length = response.headers.get("content-length", "-")

        if self.log_format == "json":
            access_logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "length": length,
                    "ms": round(elapsed_ms, 3),
                    "client": request.client.host if request.client else None,
                },
            )
        elif self.log_format == "combined":
            access_logger.info(
                '%s - - [%s] "%s %s HTTP/%s" %s %s "%s" "%s"',
                request.client.host if request.client else "-",
                datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S +0000"),
                request.method,
                path,
                request.scope.get("http_version", "1.1"),
                response.status_code,
                length,
                request.headers.get("referer", "-"),
                request.headers.get("user-agent", "-"),
            )
        else:
            access_logger.info("%s %s %s %s - %.3f ms", request.method, path, response.status_code, length, elapsed_ms)
        return response
