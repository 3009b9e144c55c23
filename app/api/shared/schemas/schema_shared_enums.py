from enum import Enum


class PagamentoStatusEnum(str, Enum):
    PENDENTE = "PENDENTE"
    AUTORIZADO = "AUTORIZADO"
    PAGO = "PAGO"
    RECUSADO = "RECUSADO"
    CANCELADO = "CANCELADO"
    ESTORNADO = "ESTORNADO"


class PagamentoTipoEnum(str, Enum):
    PIX = "PIX"
    CARTAO = "CARTAO"
    PREFERENCIA = "PREFERENCIA"
