"""
Sincronizacao de boards do Monday para a tabela local monday_items.

Mantem o cadastro de canais (max_value por hora) e a grade de horarios
disponiveis para a agenda de capacidade.
"""

import logging
from typing import List, Optional

from agenda_canais.core.config import CapacidadeConfig
from agenda_canais.repositories.itens_board import ItemBoard, ItemBoardRepository
from agenda_canais.services.monday.client import MondayClient

logger = logging.getLogger(__name__)


def extrair_status(item: dict) -> str:
    """
    Status do item: coluna "Status" (ou ids status/status__1).

    Sem coluna de status, o item e considerado ativo.
    """
    colunas = item.get("column_values") or []
    for coluna in colunas:
        titulo = (coluna.get("column") or {}).get("title")
        if titulo == "Status" or coluna.get("id") in CapacidadeConfig.COLUNAS_STATUS:
            texto = (coluna.get("text") or "").strip()
            if texto:
                return texto
    return CapacidadeConfig.STATUS_ATIVO


def extrair_max_value(item: dict) -> Optional[float]:
    """Valor numerico da coluna "Max Volume Hora"."""
    for coluna in item.get("column_values") or []:
        titulo = (coluna.get("column") or {}).get("title")
        if titulo != CapacidadeConfig.COLUNA_MAX_VOLUME:
            continue
        texto = (coluna.get("text") or "").strip().replace(",", ".")
        try:
            return float(texto)
        except ValueError:
            return None
    return None


class SincronizacaoBoards:
    """Copia itens de um board do Monday para o banco local."""

    def __init__(self, monday: MondayClient, itens_repo: ItemBoardRepository):
        self.monday = monday
        self.itens_repo = itens_repo

    async def sincronizar(self, board_id: str) -> int:
        """
        Sincroniza um board.

        Args:
            board_id: ID numerico do board no Monday

        Returns:
            Quantidade de itens gravados
        """
        logger.info(f"Sincronizando board {board_id}")
        brutos = await self.monday.listar_itens_board(board_id)

        itens: List[ItemBoard] = [
            ItemBoard(
                item_id=str(bruto["id"]),
                name=(bruto.get("name") or "").strip(),
                board_id=str(board_id),
                status=extrair_status(bruto),
                max_value=extrair_max_value(bruto),
            )
            for bruto in brutos
            if bruto.get("id")
        ]

        gravados = await self.itens_repo.substituir_itens(str(board_id), itens)
        logger.info(f"Board {board_id} sincronizado: {gravados}/{len(brutos)} item(ns)")
        return gravados
