from typing import List

from fastapi import APIRouter, Body, Depends, status

from app.api.pedidos.schemas.schema_pedido import (
    AtualizarStatusRequest,
    AtualizarStatusResponse,
    PedidoCreateRequest,
    PedidoCriadoResponse,
    PedidoResponse,
)
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService
from app.utils.logger import logger

router = APIRouter(prefix="/api/pedidos", tags=["Pedidos"])


# ======================================================================
# ====================== LISTAR PEDIDOS  ===============================
@router.get("", response_model=List[PedidoResponse], status_code=status.HTTP_200_OK)
def listar_pedidos(svc: PedidoService = Depends(get_pedido_service)):
    """Lista todos os pedidos (mais recentes primeiro) com itens e complementos."""
    logger.info("[Pedidos] Listar pedidos")
    return svc.listar_pedidos()


# ======================================================================
# ====================== CRIAR PEDIDO  =================================
@router.post("", response_model=PedidoCriadoResponse, status_code=status.HTTP_201_CREATED)
def criar_pedido(
    payload: PedidoCreateRequest = Body(...),
    svc: PedidoService = Depends(get_pedido_service),
):
    """
    Recebe e grava um pedido do PWA.

    O reenvio de um `orderId` já gravado é aceito e não altera o pedido existente.
    """
    logger.info(
        f"[Pedidos] Novo pedido - id={payload.id_pedido} entrega={payload.opcao_entrega.tipo} "
        f"pagamento={payload.metodo_pagamento}"
    )
    return svc.criar_pedido(payload)


# ======================================================================
# ====================== ATUALIZAR STATUS ==============================
@router.put("", response_model=AtualizarStatusResponse, status_code=status.HTTP_200_OK)
def atualizar_status(
    atualizacoes: List[AtualizarStatusRequest] = Body(...),
    svc: PedidoService = Depends(get_pedido_service),
):
    """Atualiza o status de vários pedidos de uma vez (tudo ou nada)."""
    logger.info(f"[Pedidos] Atualizar status em lote - entradas={len(atualizacoes)}")
    return svc.atualizar_status_lote(atualizacoes)
