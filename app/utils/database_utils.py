from datetime import datetime
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo
#

def now_trimmed():
    """Retorna datetime atual em timezone de São Paulo, sem microsegundos"""
    tz_sp = ZoneInfo('America/Sao_Paulo')
    return datetime.now(tz_sp).replace(microsecond=0)


def to_float(valor: Any) -> float | None:
    """Converte NUMERIC/Decimal/str vindos do banco para float (None permanece None)."""
    if valor is None:
        return None
    if isinstance(valor, Decimal):
        return float(valor)
    return float(str(valor))
