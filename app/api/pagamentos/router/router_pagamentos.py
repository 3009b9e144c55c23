from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status

from app.api.pagamentos.schemas.schema_pagamento import (
    PagamentoCartaoRequest,
    PagamentoPixRequest,
    PagamentoResponse,
    PreferenciaRequest,
    PreferenciaResponse,
    WebhookNotificacao,
    WebhookResponse,
)
from app.api.pagamentos.services.dependencies import get_pagamento_service
from app.api.pagamentos.services.service_pagamento import PagamentoService
from app.utils.logger import logger

router = APIRouter(prefix="/api/pagamentos", tags=["Pagamentos"])


@router.post("/pix", response_model=PagamentoResponse, status_code=status.HTTP_201_CREATED)
async def criar_pagamento_pix(
    payload: PagamentoPixRequest = Body(...),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    """Gera a cobrança PIX (QR Code e copia-e-cola) para um pedido."""
    return await svc.criar_pix(payload)


@router.post("/cartao", response_model=PagamentoResponse, status_code=status.HTTP_201_CREATED)
async def criar_pagamento_cartao(
    payload: PagamentoCartaoRequest = Body(...),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    return await svc.criar_cartao(payload)


@router.post("/preferencia", response_model=PreferenciaResponse, status_code=status.HTTP_201_CREATED)
async def criar_preferencia(
    payload: PreferenciaRequest = Body(...),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    """Cria uma preferência do Checkout Pro e devolve o link de pagamento."""
    return await svc.criar_preferencia(payload)


@router.post("/webhook", response_model=WebhookResponse, status_code=status.HTTP_200_OK)
async def webhook_mercadopago(
    notificacao: Optional[WebhookNotificacao] = Body(None),
    topic: Optional[str] = Query(None, description="Tópico no formato IPN"),
    tipo: Optional[str] = Query(None, alias="type"),
    recurso_id: Optional[str] = Query(None, alias="id"),
    data_id: Optional[str] = Query(None, alias="data.id"),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    """
    Recebe notificações do Mercado Pago.

    Aceita o formato Webhooks (corpo JSON) e o IPN legado (query string).
    """
    logger.info(f"[Pagamentos] Webhook recebido - topic={topic or tipo} id={data_id or recurso_id}")
    return await svc.processar_webhook(
        notificacao or WebhookNotificacao(),
        topic=topic or tipo,
        payment_id=data_id or recurso_id,
    )


@router.get("/{payment_id}", response_model=PagamentoResponse, status_code=status.HTTP_200_OK)
async def consultar_pagamento(
    payment_id: str = Path(..., description="ID do pagamento no Mercado Pago"),
    svc: PagamentoService = Depends(get_pagamento_service),
):
    logger.info(f"[Pagamentos] Consultar pagamento - id={payment_id}")
    return await svc.consultar(payment_id)
