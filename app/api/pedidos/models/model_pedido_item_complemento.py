from __future__ import annotations

from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, Index
from sqlalchemy.orm import relationship

from app.database.db_connection import Base


class PedidoItemComplementoModel(Base):
    """
    Complementos escolhidos para um item do pedido.

    Nome e preço são snapshots do momento do pedido (para não “mudar o passado”).
    """

    __tablename__ = "complementos_do_item"
    __table_args__ = (
        Index("idx_complementos_do_item_item", "id_item_pedido"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    id_item_pedido = Column(
        Integer,
        ForeignKey("itens_do_pedido.id_item_pedido"),
        nullable=False,
    )
    item = relationship("PedidoItemModel", back_populates="complementos")

    id_complemento_disponivel = Column(Integer, nullable=False)
    nome_complemento = Column(String(120), nullable=False)
    preco_complemento = Column(Numeric(10, 2), nullable=False)
