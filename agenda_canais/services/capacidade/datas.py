"""
Conversao de datas e horas vindas do formulario e do Monday.

Formatos aceitos para data:
- YYYY-MM-DD (ISO, usado pelo Monday)
- DD/MM/YYYY (formulario)
"""
import re
from datetime import date, datetime

from agenda_canais.core.exceptions import ValidationError

_RE_ISO = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_RE_BR = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_RE_HORA = re.compile(r"^([01]?\d|2[0-3]):[0-5]\d$")

MENSAGEM_FORMATO_DATA = "Formato de data invalido. Use DD/MM/YYYY ou YYYY-MM-DD"


def parse_data(valor) -> date:
    """
    Converte string de data em date.

    Args:
        valor: "2025-12-25", "25/12/2025" ou um date/datetime

    Returns:
        date correspondente

    Raises:
        ValidationError: formato diferente dos dois aceitos ou data inexistente
    """
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor

    texto = str(valor or "").strip()

    match = _RE_ISO.match(texto)
    if match:
        ano, mes, dia = match.groups()
    else:
        match = _RE_BR.match(texto)
        if not match:
            raise ValidationError(MENSAGEM_FORMATO_DATA, details={"data": texto})
        dia, mes, ano = match.groups()

    try:
        return date(int(ano), int(mes), int(dia))
    except ValueError as e:
        raise ValidationError(
            f"Data inexistente: {texto}", details={"data": texto}, original_error=e
        ) from e


def hora_valida(hora: str) -> bool:
    """Valida hora no formato HH:MM."""
    return bool(_RE_HORA.match(str(hora or "").strip()))
