"""
Exception handlers globais para capturar e logar erros da API.

Todas as respostas de erro seguem o formato `{"message": ..., "error": ...}`.
"""
import json
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.utils.logger import logger


def _mensagem_validacao(error: dict) -> str:
    campo = ".".join(str(loc) for loc in error.get("loc", []) if loc != "body")
    msg = error.get("msg", "Erro de validação")
    return f"{campo}: {msg}" if campo else msg


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler para erros de validação do FastAPI/Pydantic.
    Responde 400 com a lista de mensagens e registra os detalhes nos logs.
    """
    errors = exc.errors()
    error_details = []

    for error in errors:
        error_details.append({
            "field": ".".join(str(loc) for loc in error.get("loc", [])),
            "type": error.get("type", "unknown"),
            "message": error.get("msg", "Erro de validação"),
        })

    logger.error(
        f"[VALIDATION ERROR 400] {request.method} {request.url.path} - "
        f"Erros de validação detectados:\n{json.dumps(error_details, indent=2, ensure_ascii=False)}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Dados inválidos na requisição.",
            "error": [_mensagem_validacao(e) for e in errors],
            "detail": error_details,
        }
    )


async def http_exception_handler(request: Request, exc):
    """
    Handler para HTTPExceptions.
    Aceita `detail` como texto ou como dict `{message, error}`.
    """
    status_code = exc.status_code

    log_message = (
        f"[HTTP ERROR {status_code}] {request.method} {request.url.path} - "
        f"Detalhes: {exc.detail}"
    )
    if status_code >= 500:
        logger.error(log_message)
    elif status_code >= 400:
        logger.warning(log_message)

    if isinstance(exc.detail, dict):
        content = dict(exc.detail)
        content.setdefault("message", "Erro na requisição.")
    else:
        content = {"message": str(exc.detail)}

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Handler para exceções não tratadas.
    Registra erros críticos nos logs.
    """
    logger.error(
        f"[UNHANDLED EXCEPTION] {request.method} {request.url.path} - "
        f"{type(exc).__name__}: {str(exc)}"
    )
    logger.error(f"[UNHANDLED EXCEPTION] Traceback completo:\n{traceback.format_exc()}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": "Erro interno do servidor.",
            "error": str(exc),
        }
    )
