from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from app.api.shared.schemas.schema_shared_enums import PagamentoStatusEnum
from app.config import settings
from app.integrations.mercadopago.client import (
    MercadoPagoClient,
    MercadoPagoPayment,
    MercadoPagoPreference,
)


class GatewayNaoConfiguradoError(RuntimeError):
    """Gateway real solicitado sem MERCADOPAGO_ACCESS_TOKEN."""


STATUS_MAP = {
    "pending": PagamentoStatusEnum.PENDENTE,
    "in_process": PagamentoStatusEnum.PENDENTE,
    "in_mediation": PagamentoStatusEnum.PENDENTE,
    "authorized": PagamentoStatusEnum.AUTORIZADO,
    "approved": PagamentoStatusEnum.PAGO,
    "rejected": PagamentoStatusEnum.RECUSADO,
    "cancelled": PagamentoStatusEnum.CANCELADO,
    "refunded": PagamentoStatusEnum.ESTORNADO,
    "charged_back": PagamentoStatusEnum.ESTORNADO,
}


@dataclass
class PaymentResult:
    status: PagamentoStatusEnum
    gateway_status: str
    provider_transaction_id: str
    payload: Dict[str, Any]
    status_detail: Optional[str] = None
    external_reference: Optional[str] = None
    qr_code: Optional[str] = None
    qr_code_base64: Optional[str] = None
    ticket_url: Optional[str] = None


@dataclass
class PreferenceResult:
    preference_id: str
    init_point: Optional[str]
    sandbox_init_point: Optional[str]
    payload: Dict[str, Any] = field(default_factory=dict)


class PaymentGatewayClient:
    """Abstrai o gateway de pagamentos usado pela loja (Mercado Pago ou mock)."""

    def __init__(
        self,
        mode: str | None = None,
        mock_scenario: str = "success",
        mercadopago_client: MercadoPagoClient | None = None,
    ):
        self.mode = (mode or settings.GATEWAY_MODE).lower()
        self.mock_scenario = mock_scenario  # "success", "failure", "pending"
        self._mercadopago_client = mercadopago_client
        # pagamentos criados no modo mock, para que a consulta/webhook os encontre
        self._mock_payments: Dict[str, PaymentResult] = {}

    @property
    def mercadopago(self) -> MercadoPagoClient:
        if not self._mercadopago_client:
            if not settings.MERCADOPAGO_ACCESS_TOKEN:
                raise GatewayNaoConfiguradoError("MERCADOPAGO_ACCESS_TOKEN não configurado")
            self._mercadopago_client = MercadoPagoClient(
                access_token=settings.MERCADOPAGO_ACCESS_TOKEN,
                base_url=settings.MERCADOPAGO_BASE_URL,
                timeout=settings.MERCADOPAGO_TIMEOUT_SECONDS,
            )
        return self._mercadopago_client

    async def close(self) -> None:
        if self._mercadopago_client:
            await self._mercadopago_client.close()
            self._mercadopago_client = None

    # ---------------- PIX ----------------
    async def charge_pix(
        self,
        *,
        order_id: str,
        amount: Decimal,
        payer: Dict[str, Any],
        descricao: str | None = None,
        notification_url: str | None = None,
    ) -> PaymentResult:
        if self.mode == "mock":
            return self._mock_charge(order_id=order_id, amount=amount, metodo="pix")

        payment = await self.mercadopago.criar_pagamento_pix(
            external_reference=order_id,
            amount=amount,
            payer=payer,
            descricao=descricao,
            notification_url=notification_url,
            metadata={"order_id": order_id},
        )
        return self._payment_to_result(payment)

    # ---------------- Cartão ----------------
    async def charge_card(
        self,
        *,
        order_id: str,
        amount: Decimal,
        token: str,
        installments: int,
        payment_method_id: str,
        payer: Dict[str, Any],
        issuer_id: str | None = None,
        descricao: str | None = None,
        notification_url: str | None = None,
    ) -> PaymentResult:
        if self.mode == "mock":
            return self._mock_charge(order_id=order_id, amount=amount, metodo=payment_method_id)

        payment = await self.mercadopago.criar_pagamento_cartao(
            external_reference=order_id,
            amount=amount,
            token=token,
            installments=installments,
            payment_method_id=payment_method_id,
            payer=payer,
            issuer_id=issuer_id,
            descricao=descricao,
            notification_url=notification_url,
        )
        return self._payment_to_result(payment)

    # ---------------- Checkout Pro ----------------
    async def create_preference(
        self,
        *,
        order_id: str,
        itens: List[Dict[str, Any]],
        payer: Dict[str, Any] | None = None,
        notification_url: str | None = None,
    ) -> PreferenceResult:
        if self.mode == "mock":
            preference_id = f"mock_pref_{uuid.uuid4().hex[:10]}"
            return PreferenceResult(
                preference_id=preference_id,
                init_point=f"https://mock.mercadopago.local/checkout/{preference_id}",
                sandbox_init_point=None,
                payload={"mock": True, "order_id": order_id, "items": itens},
            )

        preference = await self.mercadopago.criar_preferencia(
            external_reference=order_id,
            itens=itens,
            payer=payer,
            notification_url=notification_url,
        )
        return self._preference_to_result(preference)

    # ---------------- Consulta ----------------
    async def consult(self, *, payment_id: str) -> PaymentResult:
        if self.mode == "mock":
            result = self._mock_payments.get(payment_id)
            if result is None:
                raise LookupError(f"Pagamento {payment_id} não encontrado")
            return result

        payment = await self.mercadopago.get_payment(payment_id)
        return self._payment_to_result(payment)

    # ---------------- Helpers -----------------
    def _mock_charge(
        self,
        *,
        order_id: str,
        amount: Decimal,
        metodo: str,
    ) -> PaymentResult:
        if self.mock_scenario == "failure":
            status, gateway_status = PagamentoStatusEnum.RECUSADO, "rejected"
        elif self.mock_scenario == "pending":
            status, gateway_status = PagamentoStatusEnum.PENDENTE, "pending"
        else:
            status, gateway_status = PagamentoStatusEnum.PAGO, "approved"

        provider_id = f"mock_{metodo.lower()}_{uuid.uuid4().hex[:10]}"

        qr_code = None
        qr_code_base64 = None
        if metodo == "pix":
            qr_code = "00020126580014BR.GOV.BCB.PIX***"  # valor fictício
            qr_code_base64 = "iVBORw0K***"  # base64 fictício

        result = PaymentResult(
            status=status,
            gateway_status=gateway_status,
            provider_transaction_id=provider_id,
            payload={
                "mock": True,
                "order_id": order_id,
                "amount": str(amount),
                "metodo": metodo,
            },
            external_reference=order_id,
            qr_code=qr_code,
            qr_code_base64=qr_code_base64,
        )
        self._mock_payments[provider_id] = result
        return result

    def _payment_to_result(self, payment: MercadoPagoPayment) -> PaymentResult:
        return PaymentResult(
            status=STATUS_MAP.get(payment.status, PagamentoStatusEnum.PENDENTE),
            gateway_status=payment.status,
            provider_transaction_id=payment.id,
            payload=payment.raw,
            status_detail=payment.status_detail,
            external_reference=payment.external_reference,
            qr_code=payment.qr_code,
            qr_code_base64=payment.qr_code_base64,
            ticket_url=payment.ticket_url,
        )

    def _preference_to_result(self, preference: MercadoPagoPreference) -> PreferenceResult:
        return PreferenceResult(
            preference_id=preference.id,
            init_point=preference.init_point,
            sandbox_init_point=preference.sandbox_init_point,
            payload=preference.raw,
        )
