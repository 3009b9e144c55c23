"""
Reconstrução da árvore pedido → itens → complementos a partir das linhas
achatadas do LEFT JOIN.

O JOIN repete a linha do pedido para cada item e a linha do item para cada
complemento; sem a deduplicação por id os itens e complementos apareceriam
duplicados na resposta.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Set, Tuple

from app.api.pedidos.schemas.schema_pedido import (
    ComplementoItemResponse,
    ItemPedidoResponse,
    OpcaoEntregaResponse,
    PedidoResponse,
)
from app.utils.database_utils import to_float


def _pedido_da_linha(linha: Mapping[str, Any]) -> PedidoResponse:
    numero_mesa = linha["numero_mesa"]
    return PedidoResponse(
        id_pedido=linha["id_pedido"],
        nome_cliente=linha["nome_cliente"],
        email_cliente=linha["email_cliente"],
        opcao_entrega=OpcaoEntregaResponse(
            tipo=linha["tipo_entrega"],
            endereco=linha["endereco_entrega"],
            numero_mesa=str(numero_mesa) if numero_mesa is not None else None,
        ),
        observacoes=linha["observacoes"] or "",
        metodo_pagamento=linha["metodo_pagamento"],
        troco_para=to_float(linha["troco_para"]),
        valor_total=to_float(linha["valor_total"]),
        status=linha["status"],
        data_hora_envio=linha["data_hora_envio"],
        itens=[],
    )


def _item_da_linha(linha: Mapping[str, Any]) -> ItemPedidoResponse:
    return ItemPedidoResponse(
        item_id=linha["id_item_pedido"],
        id_produto=linha["id_produto"],
        nome=linha["nome_produto"],
        quantidade=linha["quantidade"],
        preco_base=to_float(linha["preco_base_produto"]),
        preco_unitario_com_complementos=to_float(linha["preco_unitario_com_complementos"]),
        total_item=to_float(linha["total_item_preco"]),
        complementos=[],
    )


def montar_pedidos(linhas: Iterable[Mapping[str, Any]]) -> List[PedidoResponse]:
    """
    Converte as linhas do JOIN em pedidos aninhados.

    A ordem de saída é a ordem em que cada pedido, item e complemento
    aparece pela primeira vez nas linhas.
    """
    pedidos: Dict[str, PedidoResponse] = {}
    itens: Dict[Tuple[str, int], ItemPedidoResponse] = {}
    complementos_vistos: Dict[Tuple[str, int], Set[int]] = {}

    for linha in linhas:
        id_pedido = linha["id_pedido"]
        pedido = pedidos.get(id_pedido)
        if pedido is None:
            pedido = _pedido_da_linha(linha)
            pedidos[id_pedido] = pedido

        id_item = linha["id_item_pedido"]
        if id_item is None:
            continue

        chave_item = (id_pedido, id_item)
        item = itens.get(chave_item)
        if item is None:
            item = _item_da_linha(linha)
            itens[chave_item] = item
            complementos_vistos[chave_item] = set()
            pedido.itens.append(item)

        # o mesmo complemento pode ter sido escolhido mais de uma vez no item
        id_selecao = linha["id_complemento_item"]
        if id_selecao is None or id_selecao in complementos_vistos[chave_item]:
            continue

        complementos_vistos[chave_item].add(id_selecao)
        item.complementos.append(
            ComplementoItemResponse(
                id=linha["id_complemento_disponivel"],
                name=linha["nome_complemento"],
                price=to_float(linha["preco_complemento"]),
            )
        )

    return list(pedidos.values())
