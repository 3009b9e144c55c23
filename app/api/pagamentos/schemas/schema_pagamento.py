from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.api.shared.schemas.schema_shared_enums import PagamentoStatusEnum


# ------ Requests ------
class IdentificacaoPagador(BaseModel):
    tipo: str = Field("CPF", alias="type")
    numero: str = Field(..., alias="number", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class PagamentoPixRequest(BaseModel):
    id_pedido: str = Field(..., alias="orderId", min_length=1)
    valor: Decimal = Field(..., alias="total", gt=0)
    nome_cliente: str = Field(..., alias="customerName", min_length=1)
    email_cliente: str = Field(..., alias="customerEmail", min_length=3)
    descricao: Optional[str] = Field(None, alias="description")
    identificacao: Optional[IdentificacaoPagador] = Field(None, alias="identification")

    model_config = ConfigDict(populate_by_name=True)


class PagamentoCartaoRequest(BaseModel):
    id_pedido: str = Field(..., alias="orderId", min_length=1)
    valor: Decimal = Field(..., alias="total", gt=0)
    token: str = Field(..., min_length=1)
    parcelas: int = Field(1, alias="installments", ge=1)
    payment_method_id: str = Field(..., alias="paymentMethodId", min_length=1)
    issuer_id: Optional[str] = Field(None, alias="issuerId")
    email_cliente: str = Field(..., alias="customerEmail", min_length=3)
    descricao: Optional[str] = Field(None, alias="description")
    identificacao: Optional[IdentificacaoPagador] = Field(None, alias="identification")

    model_config = ConfigDict(populate_by_name=True)


class ItemPreferenciaRequest(BaseModel):
    titulo: str = Field(..., alias="title", min_length=1)
    quantidade: int = Field(..., alias="quantity", ge=1)
    preco_unitario: Decimal = Field(..., alias="unitPrice", gt=0)

    model_config = ConfigDict(populate_by_name=True)


class PreferenciaRequest(BaseModel):
    id_pedido: str = Field(..., alias="orderId", min_length=1)
    itens: List[ItemPreferenciaRequest] = Field(..., alias="items", min_length=1)
    email_cliente: Optional[str] = Field(None, alias="customerEmail")

    model_config = ConfigDict(populate_by_name=True)


class WebhookDados(BaseModel):
    id: Optional[str] = None


class WebhookNotificacao(BaseModel):
    """Notificação do Mercado Pago (formato Webhooks; `topic` cobre o IPN legado)."""
    type: Optional[str] = None
    topic: Optional[str] = None
    action: Optional[str] = None
    data: Optional[WebhookDados] = None

    model_config = ConfigDict(extra="allow")


# ------ Responses ------
class PagamentoResponse(BaseModel):
    payment_id: str = Field(..., alias="paymentId")
    status: PagamentoStatusEnum
    status_gateway: str = Field(..., alias="gatewayStatus")
    status_detail: Optional[str] = Field(None, alias="statusDetail")
    external_reference: Optional[str] = Field(None, alias="orderId")
    qr_code: Optional[str] = Field(None, alias="qrCode")
    qr_code_base64: Optional[str] = Field(None, alias="qrCodeBase64")
    ticket_url: Optional[str] = Field(None, alias="ticketUrl")

    model_config = ConfigDict(populate_by_name=True)


class PreferenciaResponse(BaseModel):
    preference_id: str = Field(..., alias="preferenceId")
    init_point: Optional[str] = Field(None, alias="initPoint")
    sandbox_init_point: Optional[str] = Field(None, alias="sandboxInitPoint")

    model_config = ConfigDict(populate_by_name=True)


class WebhookResponse(BaseModel):
    message: str
    pedido_atualizado: bool = False
    detalhes: Dict[str, Any] = Field(default_factory=dict)
