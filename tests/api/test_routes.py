"""
Testes para as rotas HTTP da agenda de canais.

Dependencias sao substituidas via app.dependency_overrides.
"""
import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from agenda_canais.main import app
from agenda_canais.repositories.deps import (
    get_agendamento_service,
    get_alocador,
    get_disponibilidade_service,
    get_reserva_repo,
    get_sincronizacao,
)
from agenda_canais.services.capacidade import (
    AgendamentoService,
    AlocadorCapacidade,
    DisponibilidadeService,
)
from tests.helpers import criar_reserva


@pytest.fixture
def client(itens_repo, reserva_repo, catalogo):
    """TestClient com servicos montados sobre repositories falsos."""
    app.dependency_overrides[get_disponibilidade_service] = lambda: DisponibilidadeService(
        itens_repo, reserva_repo, catalogo, board_horarios_id="horarios"
    )
    app.dependency_overrides[get_alocador] = lambda: AlocadorCapacidade(
        itens_repo, reserva_repo, catalogo, board_horarios_id="horarios"
    )
    app.dependency_overrides[get_agendamento_service] = lambda: AgendamentoService(itens_repo, reserva_repo)
    app.dependency_overrides[get_reserva_repo] = lambda: reserva_repo

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"


class TestDisponibilidade:
    """GET /canais/{nome}/disponibilidade"""

    def test_retorna_horas(self, client, reserva_repo):
        reserva_repo.listar_por_canal_data.return_value = [criar_reserva("09:00", 4)]

        response = client.get("/canais/Push/disponibilidade", params={"data": "25/12/2025"})

        assert response.status_code == 200
        horas = response.json()["disponivelHoras"]
        assert [h["hora"] for h in horas] == ["08:00", "08:30", "09:00"]
        assert horas[2] == {"hora": "09:00", "available": "6.00", "totalUsado": "4.00", "maxValue": "10.00"}

    def test_contexto_form_expoe_mesma_area(self, client):
        response = client.get(
            "/canais/Push/disponibilidade",
            params={"data": "2025-12-25", "area_solicitante": "CRM", "contexto": "form"},
        )

        assert response.json()["disponivelHoras"][0]["totalReservadoMesmaArea"] == "0.00"

    def test_data_invalida(self, client):
        response = client.get("/canais/Push/disponibilidade", params={"data": "2025/12/25"})

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_canal_desconhecido(self, client):
        response = client.get("/canais/Fax/disponibilidade", params={"data": "25/12/2025"})

        assert response.status_code == 200
        assert response.json()["disponivelHoras"] == []


class TestAlocacoes:
    """POST /alocacoes"""

    def test_aloca_sem_persistir(self, client, reserva_repo):
        response = client.post("/alocacoes", json={
            "itens": [{"canal": "Push", "data": "25/12/2025", "hora": "08:00", "qtd": 6}],
            "area_solicitante": "CRM",
        })

        assert response.status_code == 200
        dados = response.json()
        assert [(i["hora"], i["qtd"]) for i in dados["itens"]] == [("08:00", 5), ("08:30", 1)]
        assert all(i["area_solicitante"] == "CRM" for i in dados["itens"])
        assert "agendamentos" not in dados
        reserva_repo.inserir.assert_not_awaited()

    def test_aloca_e_persiste(self, client, reserva_repo):
        response = client.post("/alocacoes", json={
            "itens": [{"canal": "Push", "data": "25/12/2025", "hora": "08:00", "qtd": 6}],
            "area_solicitante": "CRM",
            "persistir": True,
            "tipo": "reserva",
        })

        dados = response.json()
        assert len(dados["agendamentos"]) == 2
        assert {a["tipo"] for a in dados["agendamentos"]} == {"reserva"}
        assert reserva_repo.inserir.await_count == 2

    def test_data_invalida_no_lote(self, client):
        response = client.post("/alocacoes", json={
            "itens": [{"canal": "Push", "data": "2025/12/25", "hora": "08:00", "qtd": 6}],
        })

        assert response.status_code == 400


class TestAgendamentos:
    """CRUD de /agendamentos"""

    def test_criar(self, client):
        response = client.post("/agendamentos", json={
            "id_canal": "111",
            "data": "25/12/2025",
            "hora": "09:00",
            "qtd": 4,
            "area_solicitante": "CRM",
            "user_id": "u-1",
        })

        assert response.status_code == 201
        assert response.json()["tipo"] == "agendamento"
        assert response.json()["data"] == "25/12/2025"

    def test_criar_sem_capacidade(self, client):
        response = client.post("/agendamentos", json={
            "id_canal": "111",
            "data": "25/12/2025",
            "hora": "08:00",
            "qtd": 6,
            "area_solicitante": "CRM",
        })

        assert response.status_code == 409
        dados = response.json()
        assert dados["error"] == "CapacidadeInsuficienteError"
        assert dados["details"]["disponivel"] == 5

    def test_criar_canal_inexistente(self, client):
        response = client.post("/agendamentos", json={
            "id_canal": "999",
            "data": "25/12/2025",
            "hora": "09:00",
            "qtd": 1,
            "area_solicitante": "CRM",
        })

        assert response.status_code == 404

    def test_buscar(self, client, reserva_repo):
        reserva_repo.buscar_por_id.return_value = criar_reserva("09:00", 4, id="r-1")

        response = client.get("/agendamentos/r-1")

        assert response.status_code == 200
        assert response.json()["id"] == "r-1"

    def test_buscar_inexistente(self, client):
        response = client.get("/agendamentos/nada")

        assert response.status_code == 404
        assert response.json()["details"]["id"] == "nada"

    def test_atualizar_inexistente(self, client):
        response = client.put("/agendamentos/nada", json={"qtd": 2})

        assert response.status_code == 404

    def test_listar_por_data(self, client, reserva_repo):
        reserva_repo.listar = AsyncMock(return_value=[criar_reserva("09:00", 4)])

        response = client.get("/agendamentos", params={"data": "25/12/2025", "id_canal": "111"})

        assert response.status_code == 200
        assert len(response.json()) == 1
        kwargs = reserva_repo.listar.await_args.kwargs
        assert kwargs["data"] == date(2025, 12, 25)
        assert kwargs["id_canal"] == "111"

    def test_excluir(self, client, reserva_repo):
        reserva_repo.buscar_para_reagendamento.return_value = [criar_reserva("09:00", 4, id="r-1")]

        response = client.delete(
            "/agendamentos",
            params={"id_canal": "111", "data": "25/12/2025", "hora": "09:00", "area_solicitante": "CRM"},
        )

        assert response.status_code == 200
        assert response.json() == {"removidos": 1}

    def test_reagendar_touchpoint(self, client, reserva_repo):
        reserva_repo.buscar_para_reagendamento.return_value = [criar_reserva("08:00", 4, id="old")]

        response = client.post("/agendamentos/reagendamentos", json={
            "touchpoint_id": "tp-1",
            "canal_antigo": "Push",
            "data_antiga": "25/12/2025",
            "hora_antiga": "08:00",
            "canal_novo": "Push",
            "data_nova": "26/12/2025",
            "hora_nova": "09:00",
            "volume": 4,
            "area_solicitante": "CRM",
        })

        assert response.status_code == 200
        agendamento = response.json()["agendamento"]
        assert agendamento["data"] == "26/12/2025"
        assert agendamento["tipo"] == "agendamento"
        reserva_repo.deletar_em_lote.assert_awaited_once_with(["old"])

    def test_reagendar_sem_volume(self, client):
        response = client.post("/agendamentos/reagendamentos", json={"touchpoint_id": "tp-1"})

        assert response.json() == {"agendamento": None}


class TestBoards:
    """POST /boards/{board_id}/sync"""

    def test_sincroniza(self, client):
        sincronizacao = MagicMock()
        sincronizacao.sincronizar = AsyncMock(return_value=3)
        app.dependency_overrides[get_sincronizacao] = lambda: sincronizacao

        response = client.post("/boards/769/sync")

        assert response.status_code == 200
        assert response.json() == {"success": True, "board_id": "769", "itens": 3}
        sincronizacao.sincronizar.assert_awaited_once_with("769")
