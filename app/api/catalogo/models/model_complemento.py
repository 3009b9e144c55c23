from pydantic import ConfigDict
from sqlalchemy import Column, Integer, String, Numeric
from app.database.db_connection import Base


class ComplementoDisponivelModel(Base):
    """Complemento (adicional) que o cliente pode escolher para um produto."""

    __tablename__ = "complementos_disponiveis"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(120), nullable=False)
    preco = Column(Numeric(10, 2), nullable=False, default=0)
    categoria = Column(String(80), nullable=False)

    model_config = ConfigDict(from_attributes=True)
