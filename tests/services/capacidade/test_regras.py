"""
Testes para as regras de capacidade compartilhadas.
"""
import pytest

from agenda_canais.services.capacidade.regras import (
    eh_horario_dividido,
    limite_efetivo,
    proximo_horario,
    somar_ocupado,
)
from agenda_canais.services.capacidade.types import TipoReserva
from tests.helpers import criar_reserva


class TestLimiteEfetivo:
    """08:00 e 08:30 dividem o limite do canal."""

    @pytest.mark.parametrize("hora", ["08:00", "08:30", "08:00:00"])
    def test_horarios_divididos_recebem_metade(self, hora):
        assert eh_horario_dividido(hora)
        assert limite_efetivo(1000, hora) == 500

    @pytest.mark.parametrize("hora", ["07:30", "09:00", "22:00"])
    def test_demais_horarios_recebem_limite_cheio(self, hora):
        assert not eh_horario_dividido(hora)
        assert limite_efetivo(1000, hora) == 1000


class TestSomarOcupado:
    """Testes para somar_ocupado."""

    def test_agendamento_sempre_conta(self):
        reservas = [criar_reserva("09:00", 30, TipoReserva.AGENDAMENTO, area="CRM")]

        assert somar_ocupado(reservas, "CRM") == 30
        assert somar_ocupado(reservas, "Marketing") == 30
        assert somar_ocupado(reservas) == 30

    def test_reserva_da_mesma_area_nao_conta(self):
        reservas = [criar_reserva("09:00", 20, TipoReserva.RESERVA, area="CRM")]

        assert somar_ocupado(reservas, "CRM") == 0

    def test_reserva_de_outra_area_conta(self):
        reservas = [criar_reserva("09:00", 20, TipoReserva.RESERVA, area="CRM")]

        assert somar_ocupado(reservas, "Marketing") == 20

    def test_sem_area_solicitante_toda_reserva_conta(self):
        reservas = [
            criar_reserva("09:00", 20, TipoReserva.RESERVA, area="CRM"),
            criar_reserva("09:00", 5, TipoReserva.AGENDAMENTO, area="CRM"),
        ]

        assert somar_ocupado(reservas) == 25

    def test_lista_vazia(self):
        assert somar_ocupado([], "CRM") == 0


class TestProximoHorario:
    """Testes para proximo_horario (pela posicao na grade)."""

    HORARIOS = ["08:00", "08:30", "09:00"]

    def test_retorna_horario_seguinte(self):
        assert proximo_horario(self.HORARIOS, "08:00") == "08:30"
        assert proximo_horario(self.HORARIOS, "08:30") == "09:00"

    def test_ultimo_horario_nao_tem_proximo(self):
        assert proximo_horario(self.HORARIOS, "09:00") is None

    def test_hora_fora_da_grade_vai_para_o_primeiro(self):
        assert proximo_horario(self.HORARIOS, "07:15") == "08:00"

    def test_normaliza_segundos(self):
        assert proximo_horario(self.HORARIOS, "08:30:00") == "09:00"

    def test_grade_vazia(self):
        assert proximo_horario([], "08:00") is None

    def test_usa_posicao_e_nao_ordem_alfabetica(self):
        """Grade vinda da API pode nao estar ordenada."""
        assert proximo_horario(["10:00", "09:00"], "10:00") == "09:00"
