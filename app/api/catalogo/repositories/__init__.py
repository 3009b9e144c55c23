from .repo_produto import ProdutoRepository
from .repo_complemento import ComplementoRepository

__all__ = [
    "ProdutoRepository",
    "ComplementoRepository",
]
