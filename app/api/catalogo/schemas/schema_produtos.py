from typing import Optional, List, Dict

from pydantic import BaseModel, ConfigDict, Field, condecimal


# ------ Requests ------
class ProdutoIn(BaseModel):
    """Produto recebido na substituição completa do catálogo."""
    id: Optional[int] = Field(None, ge=1)
    nome: str = Field(..., min_length=1, max_length=120)
    descricao: Optional[str] = None
    preco: condecimal(max_digits=10, decimal_places=2, ge=0)
    categoria: str = Field(..., min_length=1, max_length=80)
    imagem_url: Optional[str] = Field(None, max_length=255)
    num_complementos_gratis: int = Field(0, ge=0)


# ------ Responses ------
class ProdutoOut(BaseModel):
    id: int
    nome: str
    descricao: Optional[str] = None
    preco: float
    categoria: str
    imagem_url: Optional[str] = None
    num_complementos_gratis: int = 0

    model_config = ConfigDict(from_attributes=True)


ProdutosAgrupadosResponse = Dict[str, List[ProdutoOut]]


class SubstituirProdutosResponse(BaseModel):
    message: str
    total: int
