import pytest
from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.api.pedidos.models import (
    PedidoItemComplementoModel,
    PedidoItemModel,
    PedidoModel,
)
from app.api.pedidos.schemas.schema_pedido import (
    ComplementoItemRequest,
    ItemPedidoRequest,
    PedidoCreateRequest,
)
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.services.service_pedido import PedidoService


def _contar(provider, model):
    with provider.sessao() as db:
        return db.execute(select(func.count()).select_from(model)).scalar()


def test_criar_e_listar_pedido_ponta_a_ponta(client, pedido_payload):
    resp = client.post("/api/pedidos", json=pedido_payload())
    assert resp.status_code == 201, resp.text
    assert resp.json() == {"message": "Pedido salvo com sucesso!", "orderId": "o1"}

    resp = client.get("/api/pedidos")
    assert resp.status_code == 200, resp.text
    pedidos = resp.json()
    assert len(pedidos) == 1

    pedido = pedidos[0]
    assert pedido["orderId"] == "o1"
    assert pedido["customerName"] == "Ana"
    assert pedido["status"] == "pendente"
    assert pedido["observations"] == ""
    assert pedido["customerEmail"] is None
    assert pedido["deliveryOption"] == {"type": "table-service", "address": None, "tableNumber": "5"}
    assert pedido["total"] == 30.0

    assert len(pedido["items"]) == 1
    item = pedido["items"][0]
    assert item["productId"] == 7
    assert item["quantity"] == 2
    assert item["complements"] == [{"id": 3, "name": "cheese", "price": 5.0}]


def test_reenvio_do_mesmo_pedido_nao_duplica(client, provider, pedido_payload):
    primeiro = client.post("/api/pedidos", json=pedido_payload())
    segundo = client.post("/api/pedidos", json=pedido_payload(customerName="Outra", total=99))

    assert primeiro.status_code == 201
    assert segundo.status_code == 201
    assert _contar(provider, PedidoModel) == 1
    assert _contar(provider, PedidoItemModel) == 1
    assert _contar(provider, PedidoItemComplementoModel) == 1

    pedido = client.get("/api/pedidos").json()[0]
    assert pedido["customerName"] == "Ana"
    assert pedido["total"] == 30.0


def test_itens_e_complementos_lidos_sem_duplicacao(client, provider, pedido_payload):
    itens = []
    for n in range(3):
        itens.append({
            "productId": n + 1,
            "name": f"Lanche {n}",
            "quantity": 1,
            "basePrice": 10,
            "unitPriceWithComplements": 10 + n,
            "totalItemPrice": 10 + n,
            "complements": [{"id": c, "name": f"extra {c}", "price": 1} for c in range(n)],
        })
    resp = client.post("/api/pedidos", json=pedido_payload("multi", items=itens, total=33))
    assert resp.status_code == 201, resp.text

    assert _contar(provider, PedidoItemModel) == 3
    assert _contar(provider, PedidoItemComplementoModel) == 0 + 1 + 2

    pedido = client.get("/api/pedidos").json()[0]
    assert [len(i["complements"]) for i in pedido["items"]] == [0, 1, 2]
    assert [c["id"] for c in pedido["items"][2]["complements"]] == [0, 1]


def test_complemento_repetido_no_item_e_mantido(client, provider, pedido_payload):
    item = {
        "productId": 7,
        "name": "X",
        "quantity": 1,
        "basePrice": 10,
        "unitPriceWithComplements": 20,
        "totalItemPrice": 20,
        "complements": [
            {"id": 3, "name": "bacon", "price": 5},
            {"id": 3, "name": "bacon", "price": 5},
        ],
    }
    resp = client.post("/api/pedidos", json=pedido_payload("duplo-bacon", items=[item], total=20))
    assert resp.status_code == 201, resp.text
    assert _contar(provider, PedidoItemComplementoModel) == 2

    complementos = client.get("/api/pedidos").json()[0]["items"][0]["complements"]
    assert complementos == [
        {"id": 3, "name": "bacon", "price": 5.0},
        {"id": 3, "name": "bacon", "price": 5.0},
    ]


def test_alterar_catalogo_nao_muda_pedidos_gravados(client, pedido_payload):
    client.post("/api/pedidos", json=pedido_payload("o1"))

    resp = client.put(
        "/api/produtos",
        json=[{"id": 7, "nome": "X Renomeado", "preco": "99.00", "categoria": "Lanches"}],
    )
    assert resp.status_code == 200, resp.text

    item = client.get("/api/pedidos").json()[0]["items"][0]
    assert item["productId"] == 7
    assert item["name"] == "X"
    assert item["basePrice"] == 10.0
    assert item["unitPriceWithComplements"] == 15.0
    assert item["totalItemPrice"] == 30.0


def test_pedido_sem_itens_aparece_na_listagem(client, pedido_payload):
    resp = client.post("/api/pedidos", json=pedido_payload("vazio", items=[], total=0))
    assert resp.status_code == 201, resp.text

    pedido = client.get("/api/pedidos").json()[0]
    assert pedido["orderId"] == "vazio"
    assert pedido["items"] == []


def test_campos_vazios_viram_padrao(client, pedido_payload):
    payload = pedido_payload(
        "delivery",
        customerEmail="",
        trocoPara="",
        observations=None,
        deliveryOption={"type": "delivery", "address": "Rua A, 10", "tableNumber": ""},
    )
    resp = client.post("/api/pedidos", json=payload)
    assert resp.status_code == 201, resp.text

    pedido = client.get("/api/pedidos").json()[0]
    assert pedido["customerEmail"] is None
    assert pedido["trocoPara"] is None
    assert pedido["observations"] == ""
    assert pedido["deliveryOption"] == {"type": "delivery", "address": "Rua A, 10", "tableNumber": None}


def test_pedidos_mais_recentes_primeiro(client, pedido_payload):
    client.post("/api/pedidos", json=pedido_payload("antigo", sentAt="2026-01-01T10:00:00"))
    client.post("/api/pedidos", json=pedido_payload("novo", sentAt="2026-01-02T10:00:00"))

    ids = [p["orderId"] for p in client.get("/api/pedidos").json()]
    assert ids == ["novo", "antigo"]


def test_pedido_sem_tipo_de_entrega_retorna_400(client, provider, pedido_payload):
    payload = pedido_payload(deliveryOption={"tableNumber": 5})
    resp = client.post("/api/pedidos", json=payload)

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Dados inválidos na requisição."
    assert any("deliveryOption.type" in e for e in body["error"])
    assert _contar(provider, PedidoModel) == 0


def test_falha_no_meio_do_pedido_desfaz_tudo(provider):
    complemento_invalido = ComplementoItemRequest.model_construct(
        id_complemento=9, nome=None, preco=1
    )
    itens = [
        ItemPedidoRequest(
            id_produto=n,
            nome=f"Item {n}",
            quantidade=1,
            preco_base=5,
            preco_unitario_com_complementos=5,
            total_item=5,
            complementos=[complemento_invalido] if n == 3 else [],
        )
        for n in (1, 2, 3)
    ]
    payload = PedidoCreateRequest(
        id_pedido="quebrado",
        nome_cliente="Ana",
        itens=itens,
        opcao_entrega={"type": "delivery", "address": "Rua B"},
        metodo_pagamento="dinheiro",
        valor_total=15,
    )

    db = provider.session()
    try:
        with pytest.raises(HTTPException) as exc:
            PedidoService(db).criar_pedido(payload)
    finally:
        db.close()

    assert exc.value.status_code == 500
    assert exc.value.detail["message"] == "Erro ao salvar pedido."
    assert _contar(provider, PedidoModel) == 0
    assert _contar(provider, PedidoItemModel) == 0
    assert _contar(provider, PedidoItemComplementoModel) == 0


def test_atualizar_status_em_lote_ignora_entradas_incompletas(client, pedido_payload):
    client.post("/api/pedidos", json=pedido_payload("o1"))
    client.post("/api/pedidos", json=pedido_payload("o2"))

    resp = client.put(
        "/api/pedidos",
        json=[{"orderId": "o1", "status": "pronto"}, {"orderId": "o2"}],
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["atualizados"] == 1
    assert resp.json()["ignorados"] == 1

    status_por_id = {p["orderId"]: p["status"] for p in client.get("/api/pedidos").json()}
    assert status_por_id == {"o1": "pronto", "o2": "pendente"}


def test_atualizar_status_de_pedido_inexistente_nao_falha(client):
    resp = client.put("/api/pedidos", json=[{"orderId": "nao-existe", "status": "pago"}])
    assert resp.status_code == 200, resp.text
    assert resp.json()["atualizados"] == 0


def test_falha_no_lote_de_status_desfaz_tudo(client, pedido_payload, monkeypatch):
    client.post("/api/pedidos", json=pedido_payload("o1"))
    client.post("/api/pedidos", json=pedido_payload("o2"))

    atualizar_status = PedidoRepository.atualizar_status
    chamadas = []

    def atualizar_ou_falhar(self, id_pedido, status):
        chamadas.append(id_pedido)
        if len(chamadas) == 2:
            raise OperationalError("UPDATE pedidos", {}, Exception("conexão perdida"))
        return atualizar_status(self, id_pedido, status)

    monkeypatch.setattr(PedidoRepository, "atualizar_status", atualizar_ou_falhar)

    resp = client.put(
        "/api/pedidos",
        json=[{"orderId": "o1", "status": "pronto"}, {"orderId": "o2", "status": "pronto"}],
    )

    assert resp.status_code == 500
    assert resp.json()["message"] == "Erro ao atualizar status dos pedidos."
    assert chamadas == ["o1", "o2"]

    status_por_id = {p["orderId"]: p["status"] for p in client.get("/api/pedidos").json()}
    assert status_por_id == {"o1": "pendente", "o2": "pendente"}
