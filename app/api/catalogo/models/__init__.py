from .model_produto import ProdutoModel
from .model_complemento import ComplementoDisponivelModel

__all__ = [
    "ProdutoModel",
    "ComplementoDisponivelModel",
]
