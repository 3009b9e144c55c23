# app/api/pedidos/models/model_pedido.py
from sqlalchemy import Column, String, DateTime, Numeric, Text, Index
from sqlalchemy.orm import relationship

from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed

# Status é texto livre; estes são os valores usados pela própria API.
STATUS_PENDENTE = "pendente"
STATUS_PAGO = "pago"
STATUS_RECUSADO = "recusado"
STATUS_CANCELADO = "cancelado"
STATUS_ESTORNADO = "estornado"


class PedidoModel(Base):
    """
    Cabeçalho do pedido.

    `id_pedido` é gerado pelo cliente (PWA) e é único: um reenvio com o mesmo id
    é ignorado pelo repositório (ON CONFLICT DO NOTHING).
    """
    __tablename__ = "pedidos"
    __table_args__ = (
        Index("idx_pedidos_data_hora_envio", "data_hora_envio"),
    )

    id_pedido = Column(String(64), primary_key=True)
    nome_cliente = Column(String(120), nullable=False)
    email_cliente = Column(String(255), nullable=True)

    # Modalidade: endereco_entrega para entrega, numero_mesa para consumo no local
    tipo_entrega = Column(String(40), nullable=False)
    endereco_entrega = Column(Text, nullable=True)
    numero_mesa = Column(String(20), nullable=True)

    observacoes = Column(Text, nullable=False, default="")
    metodo_pagamento = Column(String(40), nullable=False)
    troco_para = Column(Numeric(10, 2), nullable=True)
    valor_total = Column(Numeric(10, 2), nullable=False)
    status = Column(String(40), nullable=False, default=STATUS_PENDENTE)
    data_hora_envio = Column(DateTime(timezone=True), nullable=False, default=now_trimmed)

    itens = relationship(
        "PedidoItemModel",
        back_populates="pedido",
        order_by="PedidoItemModel.id_item_pedido",
    )
