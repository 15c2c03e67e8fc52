"""
Testes para MondayClient (GraphQL via httpx).
"""
import httpx
import pytest
from unittest.mock import AsyncMock, patch

from agenda_canais.core.exceptions import ConfigurationError, ExternalAPIError
from agenda_canais.services.monday.client import (
    QUERY_ITENS_BOARD,
    QUERY_PROXIMA_PAGINA,
    MondayClient,
)
from tests.helpers import criar_mock_http_response


def criar_mock_client(*respostas):
    """AsyncClient falso que devolve as respostas em sequencia."""
    mock_client = AsyncMock()
    mock_client.__aenter__.return_value = mock_client
    mock_client.__aexit__.return_value = None
    mock_client.post.side_effect = list(respostas)
    return mock_client


def pagina_board(itens, cursor=None):
    return criar_mock_http_response(200, {
        "data": {"boards": [{"id": "769", "name": "Horarios", "items_page": {"cursor": cursor, "items": itens}}]}
    })


def proxima_pagina(itens, cursor=None):
    return criar_mock_http_response(200, {"data": {"next_items_page": {"cursor": cursor, "items": itens}}})


@pytest.fixture
def client():
    return MondayClient(token="token-teste", api_url="https://monday.test/v2", timeout=5)


class TestExecutar:
    """Testes para MondayClient.executar."""

    @pytest.mark.asyncio
    async def test_retorna_data(self, client):
        mock_client = criar_mock_client(criar_mock_http_response(200, {"data": {"me": {"id": 1}}}))

        with patch("httpx.AsyncClient", return_value=mock_client):
            data = await client.executar("query { me { id } }", {"x": 1})

        assert data == {"me": {"id": 1}}
        kwargs = mock_client.post.await_args.kwargs
        assert kwargs["json"] == {"query": "query { me { id } }", "variables": {"x": 1}}
        assert kwargs["headers"]["Authorization"] == "Bearer token-teste"
        assert kwargs["timeout"] == 5

    @pytest.mark.asyncio
    async def test_sem_token(self):
        client = MondayClient(token="")

        with pytest.raises(ConfigurationError):
            await client.executar("query { me { id } }")

    @pytest.mark.asyncio
    async def test_http_erro(self, client):
        mock_client = criar_mock_client(criar_mock_http_response(500, {"error": "boom"}))

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ExternalAPIError) as exc_info:
                await client.executar("query { me { id } }")

        assert exc_info.value.service == "monday"
        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_erros_graphql(self, client):
        mock_client = criar_mock_client(
            criar_mock_http_response(200, {"errors": [{"message": "Field not found"}]})
        )

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ExternalAPIError) as exc_info:
                await client.executar("query { nada }")

        assert exc_info.value.details["errors"][0]["message"] == "Field not found"

    @pytest.mark.asyncio
    async def test_falha_de_rede(self, client):
        mock_client = criar_mock_client(httpx.ConnectError("connection refused"))

        with patch("httpx.AsyncClient", return_value=mock_client):
            with pytest.raises(ExternalAPIError) as exc_info:
                await client.executar("query { me { id } }")

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)


class TestListarItensBoard:
    """Paginacao por cursor."""

    @pytest.mark.asyncio
    async def test_segue_cursor(self, client):
        mock_client = criar_mock_client(
            pagina_board([{"id": "1", "name": "08:00"}], cursor="c1"),
            proxima_pagina([{"id": "2", "name": "08:30"}], cursor="c2"),
            proxima_pagina([{"id": "3", "name": "09:00"}], cursor=None),
        )

        with patch("httpx.AsyncClient", return_value=mock_client):
            itens = await client.listar_itens_board("769")

        assert [i["id"] for i in itens] == ["1", "2", "3"]
        chamadas = mock_client.post.await_args_list
        assert chamadas[0].kwargs["json"]["query"] == QUERY_ITENS_BOARD
        assert chamadas[0].kwargs["json"]["variables"]["boardId"] == ["769"]
        assert chamadas[1].kwargs["json"]["query"] == QUERY_PROXIMA_PAGINA
        assert chamadas[1].kwargs["json"]["variables"]["cursor"] == "c1"
        assert chamadas[2].kwargs["json"]["variables"]["cursor"] == "c2"

    @pytest.mark.asyncio
    async def test_pagina_vazia_encerra(self, client):
        mock_client = criar_mock_client(
            pagina_board([{"id": "1", "name": "08:00"}], cursor="c1"),
            proxima_pagina([], cursor="c2"),
        )

        with patch("httpx.AsyncClient", return_value=mock_client):
            itens = await client.listar_itens_board("769")

        assert len(itens) == 1
        assert mock_client.post.await_count == 2

    @pytest.mark.asyncio
    async def test_board_inexistente(self, client):
        mock_client = criar_mock_client(criar_mock_http_response(200, {"data": {"boards": []}}))

        with patch("httpx.AsyncClient", return_value=mock_client):
            assert await client.listar_itens_board("000") == []

    @pytest.mark.asyncio
    async def test_listar_horarios(self, client):
        mock_client = criar_mock_client(
            pagina_board([{"id": "1", "name": " 09:00 "}, {"id": "2", "name": "08:00"}, {"id": "3", "name": None}])
        )

        with patch("httpx.AsyncClient", return_value=mock_client):
            horarios = await client.listar_horarios("769")

        assert horarios == ["09:00", "08:00"]
        assert mock_client.post.await_args.kwargs["json"]["variables"]["colunas"] == []
