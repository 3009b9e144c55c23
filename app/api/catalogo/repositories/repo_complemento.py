from typing import List
from sqlalchemy.orm import Session
from app.api.catalogo.models.model_complemento import ComplementoDisponivelModel


class ComplementoRepository:
    """Repository de leitura dos complementos disponíveis."""

    def __init__(self, db: Session):
        self.db = db

    def listar_ordenados(self) -> List[ComplementoDisponivelModel]:
        return (
            self.db.query(ComplementoDisponivelModel)
            .order_by(ComplementoDisponivelModel.categoria, ComplementoDisponivelModel.nome)
            .all()
        )
