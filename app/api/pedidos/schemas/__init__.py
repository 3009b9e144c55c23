"""
Schemas (DTOs) do bounded context de Pedidos.

Os campos seguem nomes em português; os aliases em camelCase são o contrato
JSON com o PWA.
"""

from .schema_pedido import (
    # Request schemas
    ComplementoItemRequest,
    ItemPedidoRequest,
    OpcaoEntregaRequest,
    PedidoCreateRequest,
    AtualizarStatusRequest,
    # Response schemas
    ComplementoItemResponse,
    ItemPedidoResponse,
    OpcaoEntregaResponse,
    PedidoResponse,
    PedidoCriadoResponse,
    AtualizarStatusResponse,
)

__all__ = [
    "ComplementoItemRequest",
    "ItemPedidoRequest",
    "OpcaoEntregaRequest",
    "PedidoCreateRequest",
    "AtualizarStatusRequest",
    "ComplementoItemResponse",
    "ItemPedidoResponse",
    "OpcaoEntregaResponse",
    "PedidoResponse",
    "PedidoCriadoResponse",
    "AtualizarStatusResponse",
]
