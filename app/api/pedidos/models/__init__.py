"""
Models do bounded context de Pedidos.
"""

from .model_pedido import (
    PedidoModel,
    STATUS_PENDENTE,
    STATUS_PAGO,
    STATUS_RECUSADO,
    STATUS_CANCELADO,
    STATUS_ESTORNADO,
)
from .model_pedido_item import PedidoItemModel
from .model_pedido_item_complemento import PedidoItemComplementoModel

__all__ = [
    "PedidoModel",
    "PedidoItemModel",
    "PedidoItemComplementoModel",
    "STATUS_PENDENTE",
    "STATUS_PAGO",
    "STATUS_RECUSADO",
    "STATUS_CANCELADO",
    "STATUS_ESTORNADO",
]
