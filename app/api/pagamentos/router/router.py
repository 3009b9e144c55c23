"""
Router principal do bounded context de Pagamentos.
"""
from fastapi import APIRouter

from app.api.pagamentos.router.router_pagamentos import router as router_pagamentos

api_pagamentos = APIRouter()

api_pagamentos.include_router(router_pagamentos)
