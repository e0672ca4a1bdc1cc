# api/health.py
"""
Saúde, identidade e diagnóstico de configuração.

Os endpoints de diagnóstico expõem só booleanos e metadados não sensíveis;
a URL do banco nunca é devolvida.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import settings
from schemas.common import Msg
from schemas.health import DebugOut, HealthOut, VersionOut
from utils.db import SessionLocal

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_health_session():
    """Sessão sem o log de erro do get_db: banco fora do ar aqui é resposta, não falha."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@router.get("/healthz", response_model=HealthOut, responses={500: {"model": HealthOut}})
def healthz(db: Session = Depends(get_health_session)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("healthz: banco indisponível (%s)", exc.__class__.__name__)
        return JSONResponse(
            status_code=500,
            content={"status": "degraded", "app": settings.APP_NAME, "db": "down"},
        )
    return {"status": "ok", "app": settings.APP_NAME, "db": "up"}


@router.get("/version", response_model=VersionOut)
def version():
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION}


@router.get("/test-connection", response_model=Msg)
def test_connection():
    return {"message": "API funcionando 🚀"}


@router.get("/debug", response_model=DebugOut)
def debug(request: Request):
    return {
        "message": "Debug endpoint funcionando",
        "timestamp": _now_iso(),
        "headers": {
            "origin": request.headers.get("origin"),
            "user-agent": request.headers.get("user-agent"),
            "host": request.headers.get("host"),
        },
        "environment": {
            "ENVIRONMENT": settings.ENVIRONMENT,
            "PORT": settings.PORT,
            "HAS_DATABASE_URL": bool(settings.DATABASE_URL),
            "CORS_CONFIGURED": bool(settings.cors_origins),
            "CORS_ORIGINS": settings.allowed_origins,
        },
    }


@router.get("/cors-test")
def cors_test(request: Request):
    return {
        "message": "CORS teste OK",
        "origin": request.headers.get("origin"),
        "method": request.method,
        "timestamp": _now_iso(),
    }
