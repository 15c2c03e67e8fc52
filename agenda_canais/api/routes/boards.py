"""
Endpoints de sincronizacao dos boards de referencia do Monday.
"""
from fastapi import APIRouter, Depends

from agenda_canais.repositories.deps import get_sincronizacao
from agenda_canais.services.monday import SincronizacaoBoards

router = APIRouter(prefix="/boards", tags=["boards"])


@router.post("/{board_id}/sync")
async def sincronizar_board(
    board_id: str,
    sincronizacao: SincronizacaoBoards = Depends(get_sincronizacao),
):
    """Recarrega os itens do board na tabela local."""
    gravados = await sincronizacao.sincronizar(board_id)
    return {"success": True, "board_id": board_id, "itens": gravados}
