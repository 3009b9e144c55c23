from fastapi import Depends, Request

from app.api.pagamentos.services.service_pagamento import PagamentoService
from app.api.pagamentos.services.service_pagamento_gateway import PaymentGatewayClient
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedido import PedidoService


def get_payment_gateway(request: Request) -> PaymentGatewayClient:
    return request.app.state.gateway


def get_pagamento_service(
    gateway: PaymentGatewayClient = Depends(get_payment_gateway),
    pedido_service: PedidoService = Depends(get_pedido_service),
) -> PagamentoService:
    return PagamentoService(gateway, pedido_service)
