from .service_catalogo import CatalogoService, agrupar_por_categoria, formatar_complementos

__all__ = [
    "CatalogoService",
    "agrupar_por_categoria",
    "formatar_complementos",
]
