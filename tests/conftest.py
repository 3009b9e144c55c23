import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database.db_connection import DatabaseProvider
from app.database.init_db import inicializar_banco
from app.api.pagamentos.services.service_pagamento_gateway import PaymentGatewayClient


@pytest.fixture
def provider():
    # SQLite em memória compartilhado entre as sessões (uma única conexão)
    provider = DatabaseProvider(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ).open()
    inicializar_banco(provider)
    yield provider
    provider.close()


@pytest.fixture
def gateway():
    return PaymentGatewayClient(mode="mock")


@pytest.fixture
def client(provider, gateway):
    app.state.db = provider
    app.state.gateway = gateway
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    app.state.db = None
    app.state.gateway = None


def _pedido_payload(order_id="o1", **extra):
    payload = {
        "orderId": order_id,
        "customerName": "Ana",
        "deliveryOption": {"type": "table-service", "tableNumber": 5},
        "paymentMethod": "pix",
        "total": 30.0,
        "items": [
            {
                "productId": 7,
                "name": "X",
                "quantity": 2,
                "basePrice": 10,
                "unitPriceWithComplements": 15,
                "totalItemPrice": 30,
                "complements": [{"id": 3, "name": "cheese", "price": 5}],
            }
        ],
    }
    payload.update(extra)
    return payload


@pytest.fixture
def pedido_payload():
    """Fábrica do payload de pedido enviado pelo PWA."""
    return _pedido_payload
