# Public routers
from . import router_catalogo_public

__all__ = [
    "router_catalogo_public",
]
