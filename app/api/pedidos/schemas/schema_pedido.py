from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _vazio_para_none(valor):
    """O front envia "" (ou "N/A") para campos opcionais não preenchidos."""
    if isinstance(valor, str) and valor.strip() in ("", "N/A"):
        return None
    return valor


# ======================================================================
# ============================ REQUESTS ================================
# ======================================================================
class ComplementoItemRequest(BaseModel):
    """Complemento escolhido para o item (snapshot de nome e preço)."""
    id_complemento: int = Field(..., alias="id")
    nome: str = Field(..., alias="name", min_length=1)
    preco: Decimal = Field(..., alias="price", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class ItemPedidoRequest(BaseModel):
    id_produto: int = Field(..., alias="productId")
    nome: str = Field(..., alias="name", min_length=1)
    quantidade: int = Field(..., alias="quantity", ge=1)
    preco_base: Decimal = Field(..., alias="basePrice", ge=0)
    preco_unitario_com_complementos: Decimal = Field(..., alias="unitPriceWithComplements", ge=0)
    total_item: Decimal = Field(..., alias="totalItemPrice", ge=0)
    complementos: List[ComplementoItemRequest] = Field(default_factory=list, alias="complements")

    model_config = ConfigDict(populate_by_name=True)


class OpcaoEntregaRequest(BaseModel):
    """
    Modalidade do pedido.

    `type` identifica a modalidade (ex.: "delivery", "mesa"); `address` acompanha
    a entrega em endereço e `tableNumber` o consumo no local.
    """
    tipo: str = Field(..., alias="type", min_length=1)
    endereco: Optional[str] = Field(None, alias="address")
    numero_mesa: Optional[Union[int, str]] = Field(None, alias="tableNumber")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("endereco", "numero_mesa", mode="before")
    @classmethod
    def normalizar_vazios(cls, v):
        return _vazio_para_none(v)


class PedidoCreateRequest(BaseModel):
    id_pedido: str = Field(..., alias="orderId", min_length=1, max_length=64)
    nome_cliente: str = Field(..., alias="customerName", min_length=1)
    email_cliente: Optional[str] = Field(None, alias="customerEmail")
    itens: List[ItemPedidoRequest] = Field(..., alias="items")
    opcao_entrega: OpcaoEntregaRequest = Field(..., alias="deliveryOption")
    observacoes: Optional[str] = Field(None, alias="observations")
    metodo_pagamento: str = Field(..., alias="paymentMethod", min_length=1)
    troco_para: Optional[Decimal] = Field(None, alias="trocoPara", ge=0)
    valor_total: Decimal = Field(..., alias="total", ge=0)
    status: Optional[str] = None
    data_hora_envio: Optional[datetime] = Field(None, alias="sentAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("email_cliente", "troco_para", "status", "data_hora_envio", mode="before")
    @classmethod
    def normalizar_vazios(cls, v):
        return _vazio_para_none(v)


class AtualizarStatusRequest(BaseModel):
    """Entrada do lote de status; entradas incompletas são ignoradas pelo serviço."""
    id_pedido: Optional[str] = Field(None, alias="orderId")
    status: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


# ======================================================================
# ============================ RESPONSES ===============================
# ======================================================================
class ComplementoItemResponse(BaseModel):
    id: int
    name: str
    price: float


class ItemPedidoResponse(BaseModel):
    item_id: int = Field(..., alias="itemId")
    id_produto: int = Field(..., alias="productId")
    nome: str = Field(..., alias="name")
    quantidade: int = Field(..., alias="quantity")
    preco_base: float = Field(..., alias="basePrice")
    preco_unitario_com_complementos: float = Field(..., alias="unitPriceWithComplements")
    total_item: float = Field(..., alias="totalItemPrice")
    complementos: List[ComplementoItemResponse] = Field(default_factory=list, alias="complements")

    model_config = ConfigDict(populate_by_name=True)


class OpcaoEntregaResponse(BaseModel):
    tipo: str = Field(..., alias="type")
    endereco: Optional[str] = Field(None, alias="address")
    numero_mesa: Optional[str] = Field(None, alias="tableNumber")

    model_config = ConfigDict(populate_by_name=True)


class PedidoResponse(BaseModel):
    id_pedido: str = Field(..., alias="orderId")
    nome_cliente: str = Field(..., alias="customerName")
    email_cliente: Optional[str] = Field(None, alias="customerEmail")
    opcao_entrega: OpcaoEntregaResponse = Field(..., alias="deliveryOption")
    observacoes: str = Field("", alias="observations")
    metodo_pagamento: str = Field(..., alias="paymentMethod")
    troco_para: Optional[float] = Field(None, alias="trocoPara")
    valor_total: float = Field(..., alias="total")
    status: str
    data_hora_envio: datetime = Field(..., alias="sentAt")
    itens: List[ItemPedidoResponse] = Field(default_factory=list, alias="items")

    model_config = ConfigDict(populate_by_name=True)


class PedidoCriadoResponse(BaseModel):
    message: str
    order_id: str = Field(..., alias="orderId")

    model_config = ConfigDict(populate_by_name=True)


class AtualizarStatusResponse(BaseModel):
    message: str
    atualizados: int
    ignorados: int
