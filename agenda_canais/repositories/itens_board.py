"""
Repository para o espelho local dos itens de boards do Monday (monday_items).

Os canais (com max_value) e os horarios da grade de disparo sao
itens de boards sincronizados para esta tabela.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from agenda_canais.core.config import CapacidadeConfig
from agenda_canais.services.capacidade.types import Canal
from .base import BaseRepository

logger = logging.getLogger(__name__)


@dataclass
class ItemBoard:
    """Item de um board do Monday, como guardado localmente."""

    item_id: str
    name: str
    board_id: str
    status: str = CapacidadeConfig.STATUS_ATIVO
    max_value: Optional[float] = None
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ItemBoard":
        """Cria ItemBoard a partir de dict do banco."""
        max_value = data.get("max_value")
        return cls(
            id=data.get("id"),
            item_id=str(data.get("item_id", "")),
            name=data.get("name", ""),
            board_id=str(data.get("board_id", "")),
            status=data.get("status") or CapacidadeConfig.STATUS_ATIVO,
            max_value=float(max_value) if max_value is not None else None,
        )

    def to_dict(self) -> dict:
        """Converte para dict (para inserts)."""
        return {
            "item_id": self.item_id,
            "name": self.name,
            "board_id": self.board_id,
            "status": self.status,
            "max_value": self.max_value,
        }

    def to_canal(self) -> Canal:
        return Canal(
            item_id=self.item_id,
            nome=self.name,
            max_por_hora=self.max_value or 0.0,
        )


class ItemBoardRepository(BaseRepository[ItemBoard]):
    """
    Repository para itens de board.

    Uso:
        repo = ItemBoardRepository(get_supabase_client(), board_canais_id="7400353565")
        canal = await repo.buscar_canal_por_nome("Push")
    """

    def __init__(self, db_client, board_canais_id: Optional[str] = None):
        super().__init__(db_client)
        self.board_canais_id = board_canais_id

    @property
    def table_name(self) -> str:
        return "monday_items"

    def _query_canais(self):
        query = (
            self.db.table(self.table_name)
            .select("*")
            .eq("status", CapacidadeConfig.STATUS_ATIVO)
        )
        if self.board_canais_id:
            query = query.eq("board_id", self.board_canais_id)
        return query

    async def buscar_por_id(self, id: str) -> Optional[ItemBoard]:
        """Busca item pelo ID local."""
        response = self._executar(
            self.db.table(self.table_name).select("*").eq("id", id),
            "buscar item",
        )
        if response.data:
            return ItemBoard.from_dict(response.data[0])
        return None

    async def listar(self, limit: int = 100, offset: int = 0, **filters) -> List[ItemBoard]:
        """Lista itens com filtros (board_id, status, name)."""
        query = self.db.table(self.table_name).select("*")
        for campo in ("board_id", "status", "name"):
            if filters.get(campo) is not None:
                query = query.eq(campo, filters[campo])

        response = self._executar(
            query.order("name").range(offset, offset + limit - 1),
            "listar itens",
        )
        return [ItemBoard.from_dict(row) for row in response.data or []]

    async def criar(self, data: dict) -> ItemBoard:
        """Insere um item."""
        response = self._executar(
            self.db.table(self.table_name).insert(data),
            "inserir item",
        )
        return ItemBoard.from_dict(response.data[0] if response.data else data)

    async def deletar(self, id: str) -> bool:
        response = self._executar(
            self.db.table(self.table_name).delete().eq("id", id),
            "deletar item",
        )
        return bool(response.data)

    async def buscar_canal_por_nome(self, nome: str) -> Optional[Canal]:
        """Canal ativo pelo nome exibido no Monday."""
        response = self._executar(
            self._query_canais().eq("name", nome.strip()).limit(1),
            "buscar canal por nome",
        )
        if not response.data:
            return None
        return ItemBoard.from_dict(response.data[0]).to_canal()

    async def buscar_canal_por_id(self, item_id: str) -> Optional[Canal]:
        """Canal ativo pelo item_id do Monday."""
        response = self._executar(
            self._query_canais().eq("item_id", str(item_id)).limit(1),
            "buscar canal por id",
        )
        if not response.data:
            return None
        return ItemBoard.from_dict(response.data[0]).to_canal()

    async def listar_ativos(self, board_id: str) -> List[ItemBoard]:
        """Itens ativos de um board, ordenados pelo nome."""
        response = self._executar(
            self.db.table(self.table_name)
            .select("*")
            .eq("board_id", board_id)
            .eq("status", CapacidadeConfig.STATUS_ATIVO)
            .order("name"),
            "listar itens ativos",
        )
        return [ItemBoard.from_dict(row) for row in response.data or []]

    async def substituir_itens(self, board_id: str, itens: List[ItemBoard]) -> int:
        """
        Recarrega os itens de um board: remove os atuais e insere os novos.

        Returns:
            Quantidade de itens inseridos
        """
        self._executar(
            self.db.table(self.table_name).delete().eq("board_id", board_id),
            "limpar itens do board",
        )
        if not itens:
            return 0

        response = self._executar(
            self.db.table(self.table_name).insert([item.to_dict() for item in itens]),
            "inserir itens do board",
        )
        inseridos = len(response.data or [])
        logger.info(f"Board {board_id}: {inseridos} item(ns) gravado(s)")
        return inseridos
