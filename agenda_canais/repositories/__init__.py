"""
Repositories - Camada de acesso a dados.

Uso com dependency injection:
    from fastapi import Depends
    from agenda_canais.repositories import ReservaRepository
    from agenda_canais.repositories.deps import get_reserva_repo

    @router.get("/agendamentos/{id}")
    async def buscar(id: str, repo: ReservaRepository = Depends(get_reserva_repo)):
        return await repo.buscar_por_id(id)

Uso em testes:
    repo = ReservaRepository(MockDatabase())

Entidades disponiveis:
- Reserva: registro de capacidade em channel_schedules
- ItemBoard: item de board do Monday (canais e horarios)
"""

from .base import BaseRepository
from .itens_board import ItemBoard, ItemBoardRepository
from .reservas import ReservaRepository

__all__ = [
    "BaseRepository",
    "ItemBoard",
    "ItemBoardRepository",
    "ReservaRepository",
]
