import httpx

from app.main import app
from app.config import settings
from app.api.pagamentos.services.dependencies import get_payment_gateway
from app.api.pagamentos.services.service_pagamento_gateway import (
    PaymentGatewayClient,
    PaymentResult,
)
from app.api.shared.schemas.schema_shared_enums import PagamentoStatusEnum


PIX = {
    "orderId": "o1",
    "total": 30.0,
    "customerName": "Ana Souza",
    "customerEmail": "ana@example.com",
}


class GatewayFora:
    """Gateway que simula indisponibilidade de rede."""
    mode = "mercadopago"

    async def consult(self, *, payment_id):
        raise httpx.ConnectError("connection refused")

    async def close(self):
        pass


class GatewayComStatus:
    def __init__(self, status, external_reference="o1"):
        self.status = status
        self.external_reference = external_reference

    async def consult(self, *, payment_id):
        return PaymentResult(
            status=self.status,
            gateway_status=self.status.value.lower(),
            provider_transaction_id=payment_id,
            payload={},
            external_reference=self.external_reference,
        )


def _status_do_pedido(client, order_id):
    return {p["orderId"]: p["status"] for p in client.get("/api/pedidos").json()}[order_id]


def test_criar_pix_em_modo_mock(client):
    resp = client.post("/api/pagamentos/pix", json=PIX)

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["paymentId"].startswith("mock_pix_")
    assert body["status"] == "PAGO"
    assert body["orderId"] == "o1"
    assert body["qrCode"]
    assert body["qrCodeBase64"]


def test_criar_cartao_em_modo_mock(client):
    payload = {
        "orderId": "o1",
        "total": 30.0,
        "token": "card-token",
        "installments": 2,
        "paymentMethodId": "visa",
        "customerEmail": "ana@example.com",
        "identification": {"type": "CPF", "number": "12345678909"},
    }
    resp = client.post("/api/pagamentos/cartao", json=payload)

    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "PAGO"
    assert resp.json()["qrCode"] is None


def test_criar_preferencia_em_modo_mock(client):
    payload = {
        "orderId": "o1",
        "items": [{"title": "X-Tudo", "quantity": 1, "unitPrice": 28.0}],
    }
    resp = client.post("/api/pagamentos/preferencia", json=payload)

    assert resp.status_code == 201, resp.text
    assert resp.json()["preferenceId"].startswith("mock_pref_")
    assert resp.json()["initPoint"]


def test_preferencia_sem_itens_retorna_400(client):
    resp = client.post("/api/pagamentos/preferencia", json={"orderId": "o1", "items": []})
    assert resp.status_code == 400


def test_consultar_pagamento(client):
    payment_id = client.post("/api/pagamentos/pix", json=PIX).json()["paymentId"]

    resp = client.get(f"/api/pagamentos/{payment_id}")
    assert resp.status_code == 200, resp.text
    assert resp.json()["paymentId"] == payment_id


def test_consultar_pagamento_inexistente_retorna_404(client):
    resp = client.get("/api/pagamentos/nao-existe")
    assert resp.status_code == 404
    assert "não encontrado" in resp.json()["message"]


def test_webhook_aprovado_marca_pedido_como_pago(client, pedido_payload):
    client.post("/api/pedidos", json=pedido_payload("o1"))
    payment_id = client.post("/api/pagamentos/pix", json=PIX).json()["paymentId"]

    resp = client.post(
        "/api/pagamentos/webhook",
        json={"type": "payment", "action": "payment.updated", "data": {"id": payment_id}},
    )

    assert resp.status_code == 200, resp.text
    assert resp.json()["pedido_atualizado"] is True
    assert _status_do_pedido(client, "o1") == "pago"


def test_webhook_no_formato_ipn(client, pedido_payload):
    client.post("/api/pedidos", json=pedido_payload("o1"))
    payment_id = client.post("/api/pagamentos/pix", json=PIX).json()["paymentId"]

    resp = client.post(f"/api/pagamentos/webhook?topic=payment&id={payment_id}")

    assert resp.status_code == 200, resp.text
    assert resp.json()["pedido_atualizado"] is True


def test_webhook_recusado_marca_pedido_como_recusado(client, pedido_payload):
    client.post("/api/pedidos", json=pedido_payload("o1"))
    app.dependency_overrides[get_payment_gateway] = lambda: GatewayComStatus(PagamentoStatusEnum.RECUSADO)

    resp = client.post("/api/pagamentos/webhook", json={"type": "payment", "data": {"id": "77"}})

    assert resp.status_code == 200, resp.text
    assert _status_do_pedido(client, "o1") == "recusado"


def test_webhook_pendente_nao_altera_pedido(client, pedido_payload):
    client.post("/api/pedidos", json=pedido_payload("o1"))
    app.dependency_overrides[get_payment_gateway] = lambda: GatewayComStatus(PagamentoStatusEnum.PENDENTE)

    resp = client.post("/api/pagamentos/webhook", json={"type": "payment", "data": {"id": "77"}})

    assert resp.status_code == 200, resp.text
    assert resp.json()["pedido_atualizado"] is False
    assert _status_do_pedido(client, "o1") == "pendente"


def test_webhook_de_outro_topico_e_apenas_reconhecido(client):
    resp = client.post("/api/pagamentos/webhook", json={"type": "merchant_order", "data": {"id": "5"}})

    assert resp.status_code == 200, resp.text
    assert resp.json()["pedido_atualizado"] is False


def test_webhook_com_gateway_fora_retorna_502(client):
    app.dependency_overrides[get_payment_gateway] = lambda: GatewayFora()

    resp = client.post("/api/pagamentos/webhook", json={"type": "payment", "data": {"id": "1"}})

    assert resp.status_code == 502
    assert resp.json()["message"] == "Falha de comunicação com o gateway de pagamento."


def test_gateway_sem_token_retorna_503(client, monkeypatch):
    monkeypatch.setattr(settings, "MERCADOPAGO_ACCESS_TOKEN", None)
    gateway_real = PaymentGatewayClient(mode="mercadopago")
    app.dependency_overrides[get_payment_gateway] = lambda: gateway_real

    resp = client.post("/api/pagamentos/pix", json=PIX)

    assert resp.status_code == 503
    assert resp.json()["message"] == "Gateway de pagamento não configurado."


def test_gateway_recusa_no_modo_mock(client):
    client.app.state.gateway.mock_scenario = "failure"

    resp = client.post("/api/pagamentos/pix", json=PIX)

    assert resp.status_code == 201, resp.text
    assert resp.json()["status"] == "RECUSADO"
