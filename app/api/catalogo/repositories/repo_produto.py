from typing import Iterable, List

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_produto import ProdutoModel


class ProdutoRepository:
    """Repository para leitura e substituição em massa de produtos."""

    def __init__(self, db: Session):
        self.db = db

    def listar_ordenados(self) -> List[ProdutoModel]:
        """Lista todos os produtos ordenados por categoria e nome."""
        return (
            self.db.query(ProdutoModel)
            .order_by(ProdutoModel.categoria, ProdutoModel.nome)
            .all()
        )

    def remover_todos(self) -> int:
        result = self.db.execute(delete(ProdutoModel))
        return result.rowcount or 0

    def inserir_varios(self, produtos: Iterable[dict]) -> List[ProdutoModel]:
        objs = [ProdutoModel(**data) for data in produtos]
        self.db.add_all(objs)
        self.db.flush()
        return objs
