"""
Schemas compartilhados entre diferentes domínios
"""

from app.api.shared.schemas.schema_shared_enums import (
    PagamentoStatusEnum,
    PagamentoTipoEnum,
)

__all__ = [
    "PagamentoStatusEnum",
    "PagamentoTipoEnum",
]
