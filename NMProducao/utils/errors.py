import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.db import db_error_code

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Rota não encontrada"


def _normalize_errors(errs):
    norm = []
    for e in errs:
        e = dict(e)
        val = e.get("input")
        if isinstance(val, (bytes, bytearray)):
            e["input"] = val.decode("utf-8", errors="ignore")
        e.pop("ctx", None)
        norm.append(e)
    return norm


def error_response(exc: Exception) -> JSONResponse:
    """
    Resposta para erro não tratado: status do próprio erro (ou 500) e
    {error, code}. Mensagens que mencionam CORS viram 403.
    """
    status_code = getattr(exc, "status", None) or getattr(exc, "status_code", None) or 500
    if isinstance(exc, SQLAlchemyError):
        code = db_error_code(exc)
    else:
        code = getattr(exc, "code", None) or "ERR"
    msg = str(exc) or "Erro inesperado"
    if "CORS" in msg:
        return JSONResponse(status_code=403, content={"error": msg})
    return JSONResponse(status_code=int(status_code), content={"error": msg, "code": str(code)})


def install_error_handlers(app: FastAPI):
    @app.exception_handler(StarletteHTTPException)
    async def http_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail
        if exc.status_code == 404 and detail == "Not Found":
            detail = NOT_FOUND_MESSAGE
        if exc.status_code == 403 and "CORS" in str(detail):
            return JSONResponse(status_code=403, content={"error": detail})
        return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "validation_error", "detail": _normalize_errors(exc.errors())},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_handler(request: Request, exc: IntegrityError):
        code = db_error_code(exc)
        logger.warning("conflito de integridade %s: %s", code, exc.orig)
        return JSONResponse(status_code=409, content={"error": str(exc.orig), "code": code})

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception):
        logger.exception("erro não tratado em %s %s", request.method, request.url.path)
        return error_response(exc)
