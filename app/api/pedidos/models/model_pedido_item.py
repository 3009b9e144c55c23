# app/api/pedidos/models/model_pedido_item.py
from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Index
from sqlalchemy.orm import relationship

from app.database.db_connection import Base


class PedidoItemModel(Base):
    __tablename__ = "itens_do_pedido"
    __table_args__ = (
        Index("idx_itens_do_pedido_pedido", "id_pedido"),
    )

    id_item_pedido = Column(Integer, primary_key=True, autoincrement=True)
    id_pedido = Column(String(64), ForeignKey("pedidos.id_pedido"), nullable=False)

    # Sem FK para produtos: o catálogo é substituído em massa e os
    # snapshots abaixo não podem mudar o passado.
    id_produto = Column(Integer, nullable=False)
    nome_produto = Column(String(120), nullable=False)
    quantidade = Column(Integer, nullable=False)
    preco_base_produto = Column(Numeric(10, 2), nullable=False)
    preco_unitario_com_complementos = Column(Numeric(10, 2), nullable=False)
    total_item_preco = Column(Numeric(10, 2), nullable=False)

    pedido = relationship("PedidoModel", back_populates="itens")
    complementos = relationship(
        "PedidoItemComplementoModel",
        back_populates="item",
        order_by="PedidoItemComplementoModel.id",
    )
