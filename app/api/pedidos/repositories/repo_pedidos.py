from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.models.model_pedido_item import PedidoItemModel
from app.api.pedidos.models.model_pedido_item_complemento import PedidoItemComplementoModel


# Dialetos com suporte a INSERT ... ON CONFLICT DO NOTHING
_INSERT_POR_DIALETO = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class PedidoRepository:
    def __init__(self, db: Session):
        self.db = db

    # -------------------- Mutations -------------------
    def inserir_pedido_ignorando_conflito(
        self,
        *,
        id_pedido: str,
        nome_cliente: str,
        email_cliente: Optional[str],
        tipo_entrega: str,
        endereco_entrega: Optional[str],
        numero_mesa: Optional[str],
        observacoes: str,
        metodo_pagamento: str,
        troco_para: Optional[Decimal],
        valor_total: Decimal,
        status: str,
        data_hora_envio: datetime,
    ) -> bool:
        """
        Insere o cabeçalho do pedido. Se `id_pedido` já existir nada é alterado.

        Retorna True quando a linha foi inserida e False quando já existia.
        """
        dialeto = self.db.get_bind().dialect.name
        insert = _INSERT_POR_DIALETO.get(dialeto)
        if insert is None:
            raise RuntimeError(f"Dialeto '{dialeto}' não suporta ON CONFLICT DO NOTHING")

        stmt = (
            insert(PedidoModel)
            .values(
                id_pedido=id_pedido,
                nome_cliente=nome_cliente,
                email_cliente=email_cliente,
                tipo_entrega=tipo_entrega,
                endereco_entrega=endereco_entrega,
                numero_mesa=numero_mesa,
                observacoes=observacoes,
                metodo_pagamento=metodo_pagamento,
                troco_para=troco_para,
                valor_total=valor_total,
                status=status,
                data_hora_envio=data_hora_envio,
            )
            .on_conflict_do_nothing(index_elements=[PedidoModel.id_pedido])
        )
        result = self.db.execute(stmt)
        return (result.rowcount or 0) > 0

    def inserir_item(self, **data: Any) -> PedidoItemModel:
        """Insere um item do pedido e devolve o objeto já com `id_item_pedido` gerado."""
        item = PedidoItemModel(**data)
        self.db.add(item)
        self.db.flush()
        return item

    def inserir_complemento(self, **data: Any) -> PedidoItemComplementoModel:
        complemento = PedidoItemComplementoModel(**data)
        self.db.add(complemento)
        self.db.flush()
        return complemento

    def atualizar_status(self, id_pedido: str, status: str) -> int:
        """Atualiza o status de um pedido; retorna quantas linhas foram alteradas."""
        result = self.db.execute(
            update(PedidoModel)
            .where(PedidoModel.id_pedido == id_pedido)
            .values(status=status)
        )
        return result.rowcount or 0

    # ------------- Queries -------------
    def listar_linhas_pedidos(self) -> Sequence[Mapping[str, Any]]:
        """
        Uma linha por combinação (pedido, item, complemento), via LEFT JOIN.

        Pedidos sem itens e itens sem complementos vêm com NULL nas colunas
        correspondentes. Pedidos mais recentes primeiro.
        """
        stmt = (
            select(
                PedidoModel.id_pedido,
                PedidoModel.nome_cliente,
                PedidoModel.email_cliente,
                PedidoModel.tipo_entrega,
                PedidoModel.endereco_entrega,
                PedidoModel.numero_mesa,
                PedidoModel.observacoes,
                PedidoModel.metodo_pagamento,
                PedidoModel.troco_para,
                PedidoModel.valor_total,
                PedidoModel.status,
                PedidoModel.data_hora_envio,
                PedidoItemModel.id_item_pedido,
                PedidoItemModel.id_produto,
                PedidoItemModel.nome_produto,
                PedidoItemModel.quantidade,
                PedidoItemModel.preco_base_produto,
                PedidoItemModel.preco_unitario_com_complementos,
                PedidoItemModel.total_item_preco,
                PedidoItemComplementoModel.id.label("id_complemento_item"),
                PedidoItemComplementoModel.id_complemento_disponivel,
                PedidoItemComplementoModel.nome_complemento,
                PedidoItemComplementoModel.preco_complemento,
            )
            .select_from(PedidoModel)
            .outerjoin(PedidoItemModel, PedidoItemModel.id_pedido == PedidoModel.id_pedido)
            .outerjoin(
                PedidoItemComplementoModel,
                PedidoItemComplementoModel.id_item_pedido == PedidoItemModel.id_item_pedido,
            )
            .order_by(
                PedidoModel.data_hora_envio.desc(),
                PedidoModel.id_pedido,
                PedidoItemModel.id_item_pedido,
                PedidoItemComplementoModel.id,
            )
        )
        return self.db.execute(stmt).mappings().all()

