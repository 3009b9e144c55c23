from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List

import httpx


@dataclass(slots=True)
class MercadoPagoPayment:
    """Representa uma resposta simplificada de pagamento (PIX ou cartão) do Mercado Pago."""

    id: str
    status: str
    status_detail: str | None
    external_reference: str | None
    qr_code: str | None
    qr_code_base64: str | None
    ticket_url: str | None
    raw: Dict[str, Any]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MercadoPagoPayment":
        point_of_interaction = data.get("point_of_interaction", {}) or {}
        transaction_data = point_of_interaction.get("transaction_data", {}) or {}

        qr_code = transaction_data.get("qr_code")
        qr_code_base64 = transaction_data.get("qr_code_base64")

        # Algumas respostas trazem o QR como imagem binária base64.
        if isinstance(qr_code_base64, dict) and "data" in qr_code_base64:
            qr_code_base64 = qr_code_base64.get("data")

        return cls(
            id=str(data.get("id")),
            status=data.get("status", "pending"),
            status_detail=data.get("status_detail"),
            external_reference=data.get("external_reference"),
            qr_code=qr_code,
            qr_code_base64=qr_code_base64,
            ticket_url=transaction_data.get("ticket_url"),
            raw=data,
        )


@dataclass(slots=True)
class MercadoPagoPreference:
    """Preferência do Checkout Pro (pagamento na página hospedada do Mercado Pago)."""

    id: str
    init_point: str | None
    sandbox_init_point: str | None
    raw: Dict[str, Any]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MercadoPagoPreference":
        return cls(
            id=str(data.get("id")),
            init_point=data.get("init_point"),
            sandbox_init_point=data.get("sandbox_init_point"),
            raw=data,
        )


class MercadoPagoClient:
    """Cliente HTTP simples para acessar a API do Mercado Pago."""

    def __init__(
        self,
        *,
        access_token: str,
        base_url: str = "https://api.mercadopago.com",
        timeout: int = 20,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not access_token:
            raise ValueError("access_token é obrigatório para o Mercado Pago")

        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    def _idempotency_headers(self, idempotency_key: str | None) -> Dict[str, str]:
        return {"X-Idempotency-Key": idempotency_key or str(uuid.uuid4())}

    async def criar_pagamento_pix(
        self,
        *,
        external_reference: str,
        amount: Decimal,
        payer: Dict[str, Any],
        descricao: str | None = None,
        notification_url: str | None = None,
        metadata: Dict[str, Any] | None = None,
        idempotency_key: str | None = None,
    ) -> MercadoPagoPayment:
        """
        Cria um pagamento PIX via `/v1/payments`.

        - `external_reference` deve ser único para o pedido (ex.: ID do pedido).
        - A resposta traz o QR Code (imagem base64) e o código copia-e-cola.
        """
        payload: Dict[str, Any] = {
            "transaction_amount": float(amount),
            "description": descricao or f"Pedido {external_reference}",
            "payment_method_id": "pix",
            "external_reference": external_reference,
            "payer": payer,
            "metadata": metadata or {},
        }
        if notification_url:
            payload["notification_url"] = notification_url

        resp = await self._client.post(
            "/v1/payments",
            json=payload,
            headers=self._idempotency_headers(idempotency_key),
        )
        resp.raise_for_status()
        return MercadoPagoPayment.from_dict(resp.json())

    async def criar_pagamento_cartao(
        self,
        *,
        external_reference: str,
        amount: Decimal,
        token: str,
        installments: int,
        payment_method_id: str,
        payer: Dict[str, Any],
        issuer_id: str | None = None,
        descricao: str | None = None,
        notification_url: str | None = None,
        idempotency_key: str | None = None,
    ) -> MercadoPagoPayment:
        """Cria um pagamento com cartão a partir do token gerado no front (Card Payment Brick)."""
        payload: Dict[str, Any] = {
            "transaction_amount": float(amount),
            "token": token,
            "description": descricao or f"Pedido {external_reference}",
            "installments": installments,
            "payment_method_id": payment_method_id,
            "external_reference": external_reference,
            "payer": payer,
        }
        if issuer_id:
            payload["issuer_id"] = issuer_id
        if notification_url:
            payload["notification_url"] = notification_url

        resp = await self._client.post(
            "/v1/payments",
            json=payload,
            headers=self._idempotency_headers(idempotency_key),
        )
        resp.raise_for_status()
        return MercadoPagoPayment.from_dict(resp.json())

    async def criar_preferencia(
        self,
        *,
        external_reference: str,
        itens: List[Dict[str, Any]],
        payer: Dict[str, Any] | None = None,
        notification_url: str | None = None,
        back_urls: Dict[str, str] | None = None,
        idempotency_key: str | None = None,
    ) -> MercadoPagoPreference:
        payload: Dict[str, Any] = {
            "items": itens,
            "external_reference": external_reference,
        }
        if payer:
            payload["payer"] = payer
        if notification_url:
            payload["notification_url"] = notification_url
        if back_urls:
            payload["back_urls"] = back_urls
            payload["auto_return"] = "approved"

        resp = await self._client.post(
            "/checkout/preferences",
            json=payload,
            headers=self._idempotency_headers(idempotency_key),
        )
        resp.raise_for_status()
        return MercadoPagoPreference.from_dict(resp.json())

    async def get_payment(self, payment_id: str) -> MercadoPagoPayment:
        resp = await self._client.get(f"/v1/payments/{payment_id}")
        resp.raise_for_status()
        return MercadoPagoPayment.from_dict(resp.json())
