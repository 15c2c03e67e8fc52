"""
Integracao com o Monday.com.

Estrutura:
- client: Cliente GraphQL (httpx) com paginacao por cursor
- sincronizacao: Copia de boards de referencia para monday_items
"""
from agenda_canais.services.monday.client import MondayClient
from agenda_canais.services.monday.sincronizacao import SincronizacaoBoards

__all__ = [
    "MondayClient",
    "SincronizacaoBoards",
]
