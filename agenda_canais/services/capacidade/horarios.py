"""
Grade de horarios usada para distribuir a capacidade dos canais.

Ordem de resolucao:
1. Itens ativos do board de horarios na tabela local (ordenados pelo nome)
2. Itens do board via API do Monday (na ordem da API)
3. Grade padrao fixa (06:00 a 22:00)
"""

import logging
from typing import List

from agenda_canais.core.config import CapacidadeConfig

logger = logging.getLogger(__name__)


def _sem_repeticao(horarios: List[str]) -> List[str]:
    # Horario repetido faria o proximo horario apontar para ele mesmo
    return list(dict.fromkeys(h.strip() for h in horarios if h and h.strip()))


class CatalogoHorarios:
    """Resolve a grade de horarios de um board."""

    def __init__(self, itens_repo, monday):
        """
        Args:
            itens_repo: ItemBoardRepository (espelho local)
            monday: MondayClient (fallback remoto)
        """
        self.itens_repo = itens_repo
        self.monday = monday

    async def resolver(self, board_id: str) -> List[str]:
        """
        Retorna os horarios (HH:MM) do board, nunca vazio e sem repeticao.

        Falha de banco local sobe; falha do Monday vira lista vazia
        e cai na grade padrao.
        """
        locais = await self.itens_repo.listar_ativos(board_id)
        horarios = _sem_repeticao(sorted(item.name.strip() for item in locais if item.name))
        if horarios:
            logger.debug(f"{len(horarios)} horarios encontrados na tabela local")
            return horarios

        logger.warning(f"Tabela local sem horarios para o board {board_id}, buscando no Monday")
        horarios = _sem_repeticao(await self._buscar_remoto(board_id))
        if horarios:
            logger.info(f"{len(horarios)} horarios obtidos via API")
            return horarios

        logger.warning("Nenhum horario retornado pelo Monday, usando grade padrao")
        return list(CapacidadeConfig.HORARIOS_PADRAO)

    async def _buscar_remoto(self, board_id: str) -> List[str]:
        try:
            return await self.monday.listar_horarios(board_id)
        except Exception as e:
            logger.warning(f"Erro ao buscar horarios no Monday: {e}")
            return []
