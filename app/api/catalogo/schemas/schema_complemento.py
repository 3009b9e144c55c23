from typing import Dict

from pydantic import BaseModel


class ComplementoFormatadoOut(BaseModel):
    """Complemento no formato consumido pelo front (chaves em inglês)."""
    name: str
    price: float
    category: str


ComplementosResponse = Dict[str, ComplementoFormatadoOut]
