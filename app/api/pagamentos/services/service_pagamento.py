from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx
from fastapi import HTTPException, status

from app.api.pagamentos.schemas.schema_pagamento import (
    IdentificacaoPagador,
    PagamentoCartaoRequest,
    PagamentoPixRequest,
    PagamentoResponse,
    PreferenciaRequest,
    PreferenciaResponse,
    WebhookNotificacao,
    WebhookResponse,
)
from app.api.pedidos.models.model_pedido import (
    STATUS_CANCELADO,
    STATUS_ESTORNADO,
    STATUS_PAGO,
    STATUS_RECUSADO,
)
from app.api.pedidos.schemas.schema_pedido import AtualizarStatusRequest
from app.api.pedidos.services.service_pedido import PedidoService
from app.api.shared.schemas.schema_shared_enums import PagamentoStatusEnum, PagamentoTipoEnum
from app.config import settings
from app.utils.logger import logger
from app.utils.prometheus_metrics import pagamentos_criados_total
from .service_pagamento_gateway import (
    GatewayNaoConfiguradoError,
    PaymentGatewayClient,
    PaymentResult,
)

# Status do pagamento que alteram o status do pedido
STATUS_PEDIDO_POR_PAGAMENTO = {
    PagamentoStatusEnum.PAGO: STATUS_PAGO,
    PagamentoStatusEnum.RECUSADO: STATUS_RECUSADO,
    PagamentoStatusEnum.CANCELADO: STATUS_CANCELADO,
    PagamentoStatusEnum.ESTORNADO: STATUS_ESTORNADO,
}


@asynccontextmanager
async def _erros_do_gateway(operacao: str):
    """Traduz falhas do gateway em respostas HTTP."""
    try:
        yield
    except GatewayNaoConfiguradoError as e:
        logger.error(f"[Pagamentos] {operacao}: gateway não configurado - {e}")
        raise HTTPException(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            {"message": "Gateway de pagamento não configurado.", "error": str(e)},
        )
    except httpx.HTTPStatusError as e:
        logger.error(
            f"[Pagamentos] {operacao}: gateway respondeu {e.response.status_code} - {e.response.text}"
        )
        raise HTTPException(
            status.HTTP_502_BAD_GATEWAY,
            {"message": "Erro no gateway de pagamento.", "error": e.response.text},
        )
    except httpx.RequestError as e:
        logger.error(f"[Pagamentos] {operacao}: falha de comunicação com o gateway - {e}")
        raise HTTPException(
            status.HTTP_502_BAD_GATEWAY,
            {"message": "Falha de comunicação com o gateway de pagamento.", "error": str(e)},
        )


class PagamentoService:
    """Orquestra as cobranças no gateway e a reconciliação dos pedidos via webhook."""

    def __init__(self, gateway: PaymentGatewayClient, pedido_service: PedidoService):
        self.gateway = gateway
        self.pedidos = pedido_service

    # ---------------- Commands ---------------
    async def criar_pix(self, payload: PagamentoPixRequest) -> PagamentoResponse:
        logger.info(f"[Pagamentos] PIX - pedido={payload.id_pedido} valor={payload.valor}")
        async with _erros_do_gateway("PIX"):
            result = await self.gateway.charge_pix(
                order_id=payload.id_pedido,
                amount=payload.valor,
                payer=self._payer(payload.email_cliente, payload.nome_cliente, payload.identificacao),
                descricao=payload.descricao,
                notification_url=settings.MERCADOPAGO_NOTIFICATION_URL,
            )
        pagamentos_criados_total.labels(tipo=PagamentoTipoEnum.PIX.value).inc()
        return self._to_response(result)

    async def criar_cartao(self, payload: PagamentoCartaoRequest) -> PagamentoResponse:
        logger.info(
            f"[Pagamentos] Cartão - pedido={payload.id_pedido} valor={payload.valor} "
            f"parcelas={payload.parcelas} bandeira={payload.payment_method_id}"
        )
        async with _erros_do_gateway("Cartão"):
            result = await self.gateway.charge_card(
                order_id=payload.id_pedido,
                amount=payload.valor,
                token=payload.token,
                installments=payload.parcelas,
                payment_method_id=payload.payment_method_id,
                issuer_id=payload.issuer_id,
                payer=self._payer(payload.email_cliente, None, payload.identificacao),
                descricao=payload.descricao,
                notification_url=settings.MERCADOPAGO_NOTIFICATION_URL,
            )
        pagamentos_criados_total.labels(tipo=PagamentoTipoEnum.CARTAO.value).inc()
        return self._to_response(result)

    async def criar_preferencia(self, payload: PreferenciaRequest) -> PreferenciaResponse:
        itens = [
            {
                "title": item.titulo,
                "quantity": item.quantidade,
                "unit_price": float(item.preco_unitario),
                "currency_id": "BRL",
            }
            for item in payload.itens
        ]
        payer = {"email": payload.email_cliente} if payload.email_cliente else None

        logger.info(f"[Pagamentos] Preferência - pedido={payload.id_pedido} itens={len(itens)}")
        async with _erros_do_gateway("Preferência"):
            result = await self.gateway.create_preference(
                order_id=payload.id_pedido,
                itens=itens,
                payer=payer,
                notification_url=settings.MERCADOPAGO_NOTIFICATION_URL,
            )
        pagamentos_criados_total.labels(tipo=PagamentoTipoEnum.PREFERENCIA.value).inc()
        return PreferenciaResponse(
            preference_id=result.preference_id,
            init_point=result.init_point,
            sandbox_init_point=result.sandbox_init_point,
        )

    # ---------------- Queries ----------------
    async def consultar(self, payment_id: str) -> PagamentoResponse:
        result = await self._consultar_gateway(payment_id)
        return self._to_response(result)

    # ---------------- Webhook ----------------
    async def processar_webhook(
        self,
        notificacao: WebhookNotificacao,
        *,
        topic: Optional[str] = None,
        payment_id: Optional[str] = None,
    ) -> WebhookResponse:
        """
        Reconciliação do pedido a partir de uma notificação do Mercado Pago.

        O corpo da notificação não é confiável: o pagamento é sempre
        consultado no gateway antes de alterar o status do pedido.
        """
        tipo = notificacao.type or notificacao.topic or topic
        recurso_id = (notificacao.data.id if notificacao.data else None) or payment_id

        if tipo != "payment" or not recurso_id:
            logger.info(f"[Pagamentos] Webhook ignorado - tipo={tipo!r} id={recurso_id!r}")
            return WebhookResponse(message="Notificação recebida.", detalhes={"tipo": tipo})

        result = await self._consultar_gateway(str(recurso_id))
        detalhes: Dict[str, Any] = {
            "paymentId": result.provider_transaction_id,
            "status": result.status.value,
            "orderId": result.external_reference,
        }

        novo_status = STATUS_PEDIDO_POR_PAGAMENTO.get(result.status)
        if not result.external_reference or novo_status is None:
            logger.info(
                f"[Pagamentos] Webhook sem alteração de pedido - pagamento={recurso_id} "
                f"status={result.gateway_status} pedido={result.external_reference!r}"
            )
            return WebhookResponse(message="Notificação processada.", detalhes=detalhes)

        resultado = self.pedidos.atualizar_status_lote(
            [AtualizarStatusRequest(id_pedido=result.external_reference, status=novo_status)]
        )
        logger.info(
            f"[Pagamentos] Webhook - pedido={result.external_reference} status={novo_status} "
            f"atualizados={resultado.atualizados}"
        )
        return WebhookResponse(
            message="Notificação processada.",
            pedido_atualizado=resultado.atualizados > 0,
            detalhes=detalhes,
        )

    # ---------------- Helpers -----------------
    async def _consultar_gateway(self, payment_id: str) -> PaymentResult:
        async with _erros_do_gateway("Consulta"):
            try:
                return await self.gateway.consult(payment_id=payment_id)
            except LookupError:
                raise HTTPException(
                    status.HTTP_404_NOT_FOUND,
                    {"message": f"Pagamento {payment_id} não encontrado."},
                )

    @staticmethod
    def _payer(
        email: str,
        nome: Optional[str],
        identificacao: Optional[IdentificacaoPagador],
    ) -> Dict[str, Any]:
        payer: Dict[str, Any] = {"email": email}
        if nome:
            partes = nome.split(maxsplit=1)
            payer["first_name"] = partes[0]
            if len(partes) > 1:
                payer["last_name"] = partes[1]
        if identificacao:
            payer["identification"] = {"type": identificacao.tipo, "number": identificacao.numero}
        return payer

    @staticmethod
    def _to_response(result: PaymentResult) -> PagamentoResponse:
        return PagamentoResponse(
            payment_id=result.provider_transaction_id,
            status=result.status,
            status_gateway=result.gateway_status,
            status_detail=result.status_detail,
            external_reference=result.external_reference,
            qr_code=result.qr_code,
            qr_code_base64=result.qr_code_base64,
            ticket_url=result.ticket_url,
        )
