"""
Dependency Injection para Repositories e servicos de capacidade.

Uso em endpoints:
    from agenda_canais.repositories.deps import get_alocador

    @router.post("/alocacoes")
    async def alocar(alocador: AlocadorCapacidade = Depends(get_alocador)):
        ...

Em testes, sobrescrever com app.dependency_overrides[get_alocador].
"""
from functools import lru_cache

from agenda_canais.core.config import settings
from agenda_canais.services.capacidade import (
    AgendamentoService,
    AlocadorCapacidade,
    CatalogoHorarios,
    DisponibilidadeService,
)
from agenda_canais.services.monday import MondayClient, SincronizacaoBoards
from agenda_canais.services.supabase import get_supabase_client
from .itens_board import ItemBoardRepository
from .reservas import ReservaRepository


@lru_cache()
def get_reserva_repo() -> ReservaRepository:
    """Retorna instancia singleton do ReservaRepository."""
    return ReservaRepository(get_supabase_client())


@lru_cache()
def get_itens_board_repo() -> ItemBoardRepository:
    """Retorna instancia singleton do ItemBoardRepository."""
    return ItemBoardRepository(get_supabase_client(), board_canais_id=settings.BOARD_CANAIS_ID)


@lru_cache()
def get_monday_client() -> MondayClient:
    return MondayClient()


def get_catalogo_horarios() -> CatalogoHorarios:
    return CatalogoHorarios(get_itens_board_repo(), get_monday_client())


def get_disponibilidade_service() -> DisponibilidadeService:
    return DisponibilidadeService(get_itens_board_repo(), get_reserva_repo(), get_catalogo_horarios())


def get_alocador() -> AlocadorCapacidade:
    return AlocadorCapacidade(get_itens_board_repo(), get_reserva_repo(), get_catalogo_horarios())


def get_agendamento_service() -> AgendamentoService:
    return AgendamentoService(get_itens_board_repo(), get_reserva_repo())


def get_sincronizacao() -> SincronizacaoBoards:
    # Sincronizacao grava itens de qualquer board, sem filtro de canais
    return SincronizacaoBoards(get_monday_client(), ItemBoardRepository(get_supabase_client()))


# Factory functions para testes
def create_reserva_repo(db_client) -> ReservaRepository:
    """Cria ReservaRepository com cliente de banco customizado."""
    return ReservaRepository(db_client)


def create_itens_board_repo(db_client, board_canais_id: str = None) -> ItemBoardRepository:
    """Cria ItemBoardRepository com cliente de banco customizado."""
    return ItemBoardRepository(db_client, board_canais_id=board_canais_id)
