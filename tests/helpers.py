"""
Factories de mocks e entidades compartilhadas pelos testes.

Usage:
    from tests.helpers import criar_mock_supabase, criar_reserva
"""
from datetime import date
from typing import Any
from unittest.mock import MagicMock

from agenda_canais.services.capacidade.types import Reserva, TipoReserva


def criar_mock_supabase(dados_retorno: list[dict[str, Any]] | None = None) -> MagicMock:
    """
    Cria mock do cliente Supabase com chain de métodos configurado.

    Args:
        dados_retorno: Lista de dicts que será retornada em .execute().data

    Example:
        mock = criar_mock_supabase([{"id": "123", "qtd": 10}])
        mock.table("channel_schedules").select("*").execute().data
    """
    mock = MagicMock()
    for metodo in (
        "table", "select", "insert", "update", "upsert", "delete",
        "eq", "neq", "in_", "order", "limit", "range",
    ):
        getattr(mock, metodo).return_value = mock

    response = MagicMock()
    response.data = dados_retorno if dados_retorno is not None else []
    response.count = len(response.data)
    mock.execute.return_value = response

    return mock


def criar_mock_http_response(status_code: int = 200, json_data: dict | None = None) -> MagicMock:
    """Cria mock de resposta httpx."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data if json_data is not None else {}
    response.text = str(json_data)
    return response


def criar_reserva(
    hora: str,
    qtd: float,
    tipo: TipoReserva = TipoReserva.AGENDAMENTO,
    area: str | None = None,
    id: str = "r-1",
    id_canal: str = "111",
    data: date = date(2025, 12, 25),
) -> Reserva:
    """Cria Reserva em memória."""
    return Reserva(
        id=id,
        id_canal=id_canal,
        data=data,
        hora=hora,
        qtd=qtd,
        area_solicitante=area,
        tipo=tipo,
    )
