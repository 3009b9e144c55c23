from pydantic import ConfigDict
from sqlalchemy import Column, Integer, String, Numeric, Text
from app.database.db_connection import Base


class ProdutoModel(Base):
    __tablename__ = "produtos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(120), nullable=False)
    descricao = Column(Text, nullable=True)
    preco = Column(Numeric(10, 2), nullable=False)
    categoria = Column(String(80), nullable=False, index=True)
    imagem_url = Column(String(255), nullable=True)

    # quantidade de complementos que acompanham o produto sem custo
    num_complementos_gratis = Column(Integer, nullable=False, default=0)

    model_config = ConfigDict(from_attributes=True)
