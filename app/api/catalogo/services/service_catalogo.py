from typing import Dict, Iterable, List

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.catalogo.models.model_complemento import ComplementoDisponivelModel
from app.api.catalogo.repositories.repo_complemento import ComplementoRepository
from app.api.catalogo.repositories.repo_produto import ProdutoRepository
from app.api.catalogo.schemas.schema_complemento import ComplementoFormatadoOut
from app.api.catalogo.schemas.schema_produtos import ProdutoIn, ProdutoOut, SubstituirProdutosResponse
from app.utils.database_utils import to_float
from app.utils.logger import logger


def agrupar_por_categoria(produtos: Iterable[ProdutoOut]) -> Dict[str, List[ProdutoOut]]:
    """
    Agrupa produtos por categoria.

    As chaves seguem a ordem em que cada categoria aparece pela primeira vez;
    dentro de cada categoria a ordem de entrada é mantida.
    """
    agrupados: Dict[str, List[ProdutoOut]] = {}
    for produto in produtos:
        agrupados.setdefault(produto.categoria, []).append(produto)
    return agrupados


def formatar_complementos(
    complementos: Iterable[ComplementoDisponivelModel],
) -> Dict[str, ComplementoFormatadoOut]:
    """Indexa os complementos pelo id, com nomes de campo do front e preço numérico."""
    return {
        str(c.id): ComplementoFormatadoOut(
            name=c.nome,
            price=to_float(c.preco) or 0.0,
            category=c.categoria,
        )
        for c in complementos
    }


class CatalogoService:
    def __init__(self, db: Session):
        self.db = db
        self.repo_produto = ProdutoRepository(db)
        self.repo_complemento = ComplementoRepository(db)

    def listar_produtos_agrupados(self) -> Dict[str, List[ProdutoOut]]:
        produtos = [ProdutoOut.model_validate(p) for p in self.repo_produto.listar_ordenados()]
        return agrupar_por_categoria(produtos)

    def listar_complementos(self) -> Dict[str, ComplementoFormatadoOut]:
        return formatar_complementos(self.repo_complemento.listar_ordenados())

    def substituir_produtos(self, produtos: List[ProdutoIn]) -> SubstituirProdutosResponse:
        """
        Substitui o catálogo inteiro: remove todos os produtos e insere a lista recebida,
        na mesma transação.
        """
        try:
            removidos = self.repo_produto.remover_todos()
            self.repo_produto.inserir_varios(
                p.model_dump(exclude_none=True) for p in produtos
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[Catalogo] Erro ao substituir produtos: {e}")
            raise HTTPException(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                {"message": "Erro ao atualizar produtos.", "error": str(e)},
            )

        logger.info(f"[Catalogo] Catálogo substituído - removidos={removidos} inseridos={len(produtos)}")
        return SubstituirProdutosResponse(
            message="Produtos atualizados com sucesso.",
            total=len(produtos),
        )
