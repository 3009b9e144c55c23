from .service_pedido import PedidoService

__all__ = ["PedidoService"]
