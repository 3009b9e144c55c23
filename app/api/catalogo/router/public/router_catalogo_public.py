from fastapi import APIRouter, Depends, status

from app.api.catalogo.schemas.schema_complemento import ComplementosResponse
from app.api.catalogo.schemas.schema_produtos import ProdutosAgrupadosResponse
from app.api.catalogo.services.dependencies import get_catalogo_service
from app.api.catalogo.services.service_catalogo import CatalogoService
from app.utils.logger import logger

router = APIRouter(prefix="/api", tags=["Public - Catalogo"])


@router.get("/produtos", response_model=ProdutosAgrupadosResponse, status_code=status.HTTP_200_OK)
def listar_produtos(svc: CatalogoService = Depends(get_catalogo_service)):
    """Retorna todos os produtos agrupados por categoria."""
    logger.info("[Catalogo Public] Listar produtos")
    return svc.listar_produtos_agrupados()


@router.get("/complementos", response_model=ComplementosResponse, status_code=status.HTTP_200_OK)
def listar_complementos(svc: CatalogoService = Depends(get_catalogo_service)):
    """Retorna os complementos disponíveis indexados pelo id."""
    logger.info("[Catalogo Public] Listar complementos")
    return svc.listar_complementos()
