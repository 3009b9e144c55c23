from .service_pagamento import PagamentoService
from .service_pagamento_gateway import PaymentGatewayClient, PaymentResult, PreferenceResult

__all__ = ["PagamentoService", "PaymentGatewayClient", "PaymentResult", "PreferenceResult"]
