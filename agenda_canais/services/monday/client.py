"""
Monday API Client - GraphQL.

Docs: https://developer.monday.com/api-reference/docs
"""
import httpx
import logging
from typing import Any, Dict, List, Optional

from agenda_canais.core.config import settings, CapacidadeConfig
from agenda_canais.core.exceptions import ConfigurationError, ExternalAPIError

logger = logging.getLogger(__name__)

SERVICE = "monday"

QUERY_ITENS_BOARD = """
query ($boardId: [ID!], $limit: Int!, $colunas: [String!]) {
  boards(ids: $boardId) {
    id
    name
    items_page(limit: $limit) {
      cursor
      items {
        id
        name
        column_values(ids: $colunas) {
          id
          text
          value
          column { id title }
        }
      }
    }
  }
}
"""

QUERY_PROXIMA_PAGINA = """
query ($cursor: String!, $limit: Int!, $colunas: [String!]) {
  next_items_page(cursor: $cursor, limit: $limit) {
    cursor
    items {
      id
      name
      column_values(ids: $colunas) {
        id
        text
        value
        column { id title }
      }
    }
  }
}
"""


class MondayClient:
    """Cliente para API GraphQL do Monday."""

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.token = token if token is not None else settings.MONDAY_API_TOKEN
        self.api_url = api_url or settings.MONDAY_API_URL
        self.timeout = timeout or settings.MONDAY_TIMEOUT_SEGUNDOS
        self.headers = {
            "Authorization": f"Bearer {self.token}" if self.token else "",
            "Content-Type": "application/json",
            "API-Version": settings.MONDAY_API_VERSION,
        }

    def _check_token(self):
        """Verifica se token esta configurado."""
        if not self.token:
            raise ConfigurationError("MONDAY_API_TOKEN nao configurado")

    async def executar(self, query: str, variaveis: Optional[Dict[str, Any]] = None) -> dict:
        """
        Executa query/mutation GraphQL.

        Args:
            query: Documento GraphQL
            variaveis: Variaveis da query

        Returns:
            Conteudo de "data" da resposta

        Raises:
            ExternalAPIError: HTTP >= 400 ou erros GraphQL
        """
        self._check_token()

        payload: Dict[str, Any] = {"query": query}
        if variaveis:
            payload["variables"] = variaveis

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    headers=self.headers,
                    json=payload,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logger.error(f"[Monday] Falha de comunicacao: {e}")
            raise ExternalAPIError(
                "Falha na comunicacao com Monday API", service=SERVICE, original_error=e
            ) from e

        if response.status_code >= 400:
            logger.error(f"[Monday] HTTP {response.status_code}: {response.text}")
            raise ExternalAPIError(
                f"Monday API retornou HTTP {response.status_code}",
                service=SERVICE,
                details={"status_code": response.status_code},
            )

        corpo = response.json() or {}
        if corpo.get("errors"):
            logger.error(f"[Monday] Erros GraphQL: {corpo['errors']}")
            raise ExternalAPIError(
                "Monday API retornou erros",
                service=SERVICE,
                details={"errors": corpo["errors"]},
            )

        return corpo.get("data") or {}

    async def listar_itens_board(
        self,
        board_id: str,
        colunas: Optional[List[str]] = None,
    ) -> List[dict]:
        """
        Busca todos os itens de um board, seguindo a paginacao por cursor.

        Args:
            board_id: ID numerico do board
            colunas: IDs de colunas a trazer em column_values (None = todas)

        Returns:
            Lista de itens como retornados pela API (id, name, column_values)
        """
        limite = CapacidadeConfig.TAMANHO_PAGINA
        data = await self.executar(
            QUERY_ITENS_BOARD,
            {"boardId": [str(board_id)], "limit": limite, "colunas": colunas},
        )

        boards = data.get("boards") or []
        if not boards:
            logger.warning(f"[Monday] Board {board_id} nao encontrado")
            return []

        pagina = boards[0].get("items_page") or {}
        itens = list(pagina.get("items") or [])
        cursor = pagina.get("cursor")

        while cursor:
            data = await self.executar(
                QUERY_PROXIMA_PAGINA,
                {"cursor": cursor, "limit": limite, "colunas": colunas},
            )
            pagina = data.get("next_items_page") or {}
            novos = pagina.get("items") or []
            if not novos:
                break
            itens.extend(novos)
            cursor = pagina.get("cursor")

        logger.info(f"[Monday] Board {board_id}: {len(itens)} item(ns)")
        return itens

    async def listar_horarios(self, board_id: str) -> List[str]:
        """Nomes dos itens do board de horarios, na ordem da API."""
        itens = await self.listar_itens_board(board_id, colunas=[])
        return [str(item.get("name") or "").strip() for item in itens if item.get("name")]
