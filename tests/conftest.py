"""
Configuração global de testes - Fixtures compartilhadas.

Usage:
    Fixtures aqui definidas são automaticamente disponíveis em todos os testes.
    Factories de mocks ficam em tests/helpers.py.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from agenda_canais.services.capacidade.types import Canal, Reserva
from tests.helpers import criar_mock_supabase


@pytest.fixture
def mock_supabase():
    """Mock do Supabase sem dados."""
    return criar_mock_supabase()


@pytest.fixture
def canal_push():
    """Canal com limite de 10 por hora."""
    return Canal(item_id="111", nome="Push", max_por_hora=10.0)


@pytest.fixture
def itens_repo(canal_push):
    """ItemBoardRepository falso: conhece apenas o canal Push."""
    canais = {canal_push.nome: canal_push}
    repo = MagicMock()
    repo.canais = canais
    repo.buscar_canal_por_nome = AsyncMock(side_effect=lambda nome: canais.get(nome))
    repo.buscar_canal_por_id = AsyncMock(
        side_effect=lambda item_id: next((c for c in canais.values() if c.item_id == item_id), None)
    )
    repo.listar_ativos = AsyncMock(return_value=[])
    return repo


def _inserir(**kw) -> Reserva:
    return Reserva(
        id="novo",
        id_canal=kw["id_canal"],
        data=kw["data"],
        hora=kw["hora"],
        qtd=kw["qtd"],
        area_solicitante=kw["area_solicitante"],
        tipo=kw["tipo"],
        solicitante=kw.get("solicitante"),
        user_id=kw.get("user_id"),
    )


@pytest.fixture
def reserva_repo():
    """ReservaRepository falso com AsyncMocks."""
    repo = MagicMock()
    repo.somar_reservado = AsyncMock(return_value=0.0)
    repo.listar_por_canal_data = AsyncMock(return_value=[])
    repo.buscar_para_reagendamento = AsyncMock(return_value=[])
    repo.deletar_em_lote = AsyncMock(side_effect=lambda ids: len(ids))
    repo.buscar_por_id = AsyncMock(return_value=None)
    repo.atualizar = AsyncMock()
    repo.inserir = AsyncMock(side_effect=_inserir)
    return repo


@pytest.fixture
def catalogo():
    """CatalogoHorarios falso com grade de tres horarios."""
    mock = MagicMock()
    mock.resolver = AsyncMock(return_value=["08:00", "08:30", "09:00"])
    return mock
