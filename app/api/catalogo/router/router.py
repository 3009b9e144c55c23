from fastapi import APIRouter

from app.api.catalogo.router.admin import router_produtos
from app.api.catalogo.router.public import router_catalogo_public

router = APIRouter()

# Rotas públicas (cardápio)
router.include_router(router_catalogo_public.router)

# Rotas admin (substituição do catálogo)
router.include_router(router_produtos.router)
