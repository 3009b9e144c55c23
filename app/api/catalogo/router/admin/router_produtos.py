from typing import List

from fastapi import APIRouter, Body, Depends, status

from app.api.catalogo.schemas.schema_produtos import ProdutoIn, SubstituirProdutosResponse
from app.api.catalogo.services.dependencies import get_catalogo_service
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.utils.logger import logger

router = APIRouter(prefix="/api", tags=["Admin - Catalogo - Produtos"])


@router.put("/produtos", response_model=SubstituirProdutosResponse, status_code=status.HTTP_200_OK)
def substituir_produtos(
    produtos: List[ProdutoIn] = Body(...),
    svc: CatalogoService = Depends(get_catalogo_service),
):
    """
    Substitui todo o catálogo de produtos pela lista enviada.

    Leitores concorrentes podem enxergar o catálogo vazio ou parcial durante a troca.
    """
    logger.info(f"[Catalogo Admin] Substituir produtos - total={len(produtos)}")
    return svc.substituir_produtos(produtos)
