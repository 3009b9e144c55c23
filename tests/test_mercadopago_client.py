import asyncio
import json
from decimal import Decimal

import httpx
import pytest

from app.integrations.mercadopago.client import MercadoPagoClient


def _client(handler):
    return MercadoPagoClient(
        access_token="TEST-token",
        base_url="https://api.mercadopago.test/",
        transport=httpx.MockTransport(handler),
    )


def test_criar_pagamento_pix_envia_payload_e_le_qr_code():
    requisicoes = []

    def handler(request: httpx.Request) -> httpx.Response:
        requisicoes.append(request)
        return httpx.Response(
            201,
            json={
                "id": 123456,
                "status": "pending",
                "status_detail": "pending_waiting_transfer",
                "external_reference": "o1",
                "point_of_interaction": {
                    "transaction_data": {
                        "qr_code": "00020126-copia-e-cola",
                        "qr_code_base64": "iVBORw0KGgo=",
                        "ticket_url": "https://mp.test/ticket",
                    }
                },
            },
        )

    async def run():
        client = _client(handler)
        try:
            return await client.criar_pagamento_pix(
                external_reference="o1",
                amount=Decimal("30.00"),
                payer={"email": "ana@example.com"},
                notification_url="https://loja.test/api/pagamentos/webhook",
                idempotency_key="chave-fixa",
            )
        finally:
            await client.close()

    payment = asyncio.run(run())

    assert payment.id == "123456"
    assert payment.status == "pending"
    assert payment.qr_code == "00020126-copia-e-cola"
    assert payment.qr_code_base64 == "iVBORw0KGgo="
    assert payment.ticket_url == "https://mp.test/ticket"

    request = requisicoes[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/payments"
    assert request.headers["Authorization"] == "Bearer TEST-token"
    assert request.headers["X-Idempotency-Key"] == "chave-fixa"
    body = json.loads(request.content)
    assert body["payment_method_id"] == "pix"
    assert body["transaction_amount"] == 30.0
    assert body["external_reference"] == "o1"
    assert body["notification_url"] == "https://loja.test/api/pagamentos/webhook"


def test_criar_pagamento_cartao_gera_chave_de_idempotencia():
    requisicoes = []

    def handler(request: httpx.Request) -> httpx.Response:
        requisicoes.append(request)
        return httpx.Response(201, json={"id": 1, "status": "approved", "status_detail": "accredited"})

    async def run():
        client = _client(handler)
        try:
            return await client.criar_pagamento_cartao(
                external_reference="o2",
                amount=Decimal("50"),
                token="card-token",
                installments=3,
                payment_method_id="visa",
                payer={"email": "ana@example.com"},
            )
        finally:
            await client.close()

    payment = asyncio.run(run())

    assert payment.status == "approved"
    assert payment.qr_code is None
    body = json.loads(requisicoes[0].content)
    assert body["token"] == "card-token"
    assert body["installments"] == 3
    assert "issuer_id" not in body
    assert "notification_url" not in body
    assert requisicoes[0].headers["X-Idempotency-Key"]


def test_criar_preferencia():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/checkout/preferences"
        assert request.headers["X-Idempotency-Key"] == "pref-o3"
        body = json.loads(request.content)
        assert body["items"][0]["title"] == "X-Tudo"
        return httpx.Response(
            201,
            json={"id": "pref-1", "init_point": "https://mp.test/init", "sandbox_init_point": None},
        )

    async def run():
        client = _client(handler)
        try:
            return await client.criar_preferencia(
                external_reference="o3",
                itens=[{"title": "X-Tudo", "quantity": 1, "unit_price": 28.0}],
                idempotency_key="pref-o3",
            )
        finally:
            await client.close()

    preference = asyncio.run(run())

    assert preference.id == "pref-1"
    assert preference.init_point == "https://mp.test/init"


def test_erro_do_gateway_propaga_http_status_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Payment not found"})

    async def run():
        client = _client(handler)
        try:
            await client.get_payment("999")
        finally:
            await client.close()

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(run())


def test_access_token_obrigatorio():
    with pytest.raises(ValueError):
        MercadoPagoClient(access_token="")
