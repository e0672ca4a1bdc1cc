import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.middleware.gzip import GZipMiddleware

from api.router import api_router
from config.settings import settings
from services.bootstrap_service import init_schema
from utils.db import engine
from utils.errors import install_error_handlers
from utils.logging import setup_logging
from utils.middleware import (
    AccessLogMiddleware,
    AllowListCORSMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_schema(engine)
    except Exception:
        logger.exception("Erro ao iniciar schema")
        raise
    logger.info("🚀 %s pronto na porta %s", settings.APP_NAME, settings.PORT)
    yield
    logger.info("Encerrando %s...", settings.APP_NAME)
    engine.dispose()


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL, "json" if settings.LOG_FORMAT == "json" else "text")

    app = FastAPI(
        title="API Produção — NM Compensados",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # O último adicionado é o mais externo: CORS responde o preflight antes de tudo
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RateLimitMiddleware, max_requests=settings.RATE_LIMIT_MAX)
    app.add_middleware(AccessLogMiddleware, log_format=settings.LOG_FORMAT)
    app.add_middleware(AllowListCORSMiddleware, allowed_origins=settings.allowed_origins)
    logger.info("🔒 CORS configurado para %d origens", len(settings.allowed_origins))

    install_error_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
