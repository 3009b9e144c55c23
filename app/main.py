import os

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exception_handlers import (
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from app.utils.logger import logger
from app.config.settings import CORS_ORIGINS, CORS_ALLOW_ALL, BASE_URL as SETTINGS_BASE_URL, ENABLE_DOCS

from app.api.catalogo.router.router import router as catalogo_router
from app.api.pedidos.router.router import api_pedidos
from app.api.pagamentos.router.router import api_pagamentos
from app.api.monitoring.router import router_public as monitoring_router_public


BASE_URL = SETTINGS_BASE_URL or os.getenv("BASE_URL", "http://localhost:3000")
# ──────────────────────────
# Instância FastAPI
# ──────────────────────────
app = FastAPI(
    title="Lanches API",
    version="1.0.0",
    description="Cardápio, pedidos e pagamentos do PWA de delivery",
    docs_url=("/swagger" if ENABLE_DOCS else None),
    redoc_url=("/redoc" if ENABLE_DOCS else None),
    openapi_url=("/openapi.json" if ENABLE_DOCS else None),
    servers=[{"url": BASE_URL, "description": "Base URL do ambiente"}],
    redirect_slashes=False  # Evita redirecionamento 307 quando URL não termina com /
)

# ───────────────────────────
# Exception Handlers Globais
# ───────────────────────────
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# ───────────────────────────
# Middlewares
# ───────────────────────────
# Middlewares são executados na ORDEM REVERSA da adição (último adicionado = primeiro executado)

# Prometheus Middleware (para coletar métricas)
from app.utils.prometheus_metrics import PrometheusMiddleware
app.add_middleware(PrometheusMiddleware)

# CORS (adicionado por último, será executado primeiro)
# ───────────────────────────
# Regra:
# - Se CORS_ALLOW_ALL=true => allow_origins=["*"], allow_credentials=False
# - Caso contrário => allow_origins=CORS_ORIGINS (se vazio cai para ["*"]), allow_credentials=True somente quando houver origens explícitas
if CORS_ALLOW_ALL:
    allowed_origins = ["*"]
    allow_credentials = False
else:
    allowed_origins = CORS_ORIGINS or ["*"]
    allow_credentials = bool(CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ───────────────────────────
# Startup
# ───────────────────────────
@app.on_event("startup")
async def startup():
    from app.config.settings import montar_database_url
    from app.database.db_connection import DatabaseProvider
    from app.database.init_db import inicializar_banco
    from app.api.pagamentos.services.service_pagamento_gateway import PaymentGatewayClient

    logger.info("Iniciando API e banco de dados...")

    # Um provider já anexado (ex.: testes) é reaproveitado
    if getattr(app.state, "db", None) is None:
        app.state.db = DatabaseProvider(montar_database_url())
    app.state.db.open()
    inicializar_banco(app.state.db)

    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = PaymentGatewayClient()
    logger.info(f"Gateway de pagamento em modo '{app.state.gateway.mode}'.")

    logger.info("API iniciada com sucesso.")

# ───────────────────────────
# Shutdown
# ───────────────────────────
@app.on_event("shutdown")
async def shutdown():
    logger.info("Encerrando API...")

    gateway = getattr(app.state, "gateway", None)
    if gateway is not None:
        await gateway.close()

    provider = getattr(app.state, "db", None)
    if provider is not None:
        provider.close()

    logger.info("API encerrada.")

# ───────────────────────────
# Rotas
# ───────────────────────────

@app.get("/")
async def root():
    return {"status": "ok", "message": "API is running"}

@app.get("/health")
async def health():
    return {"status": "healthy"}

@app.get("/test-db")
def test_db():
    """Confere a conexão com o banco executando uma consulta trivial."""
    try:
        with app.state.db.sessao() as db:
            agora = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
    except SQLAlchemyError as e:
        logger.error(f"[DB] Erro ao testar conexão: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Erro ao conectar ao banco de dados.", "error": str(e)},
        )
    return {"message": "Conexão com o banco bem-sucedida!", "currentTime": str(agora)}

# ───────────────────────────
# Monitoring - Métricas
# ───────────────────────────
app.include_router(monitoring_router_public)

# ───────────────────────────
# Routers
# ───────────────────────────
app.include_router(catalogo_router)
app.include_router(api_pedidos)
app.include_router(api_pagamentos)
