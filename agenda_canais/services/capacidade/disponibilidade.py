"""
Disponibilidade de um canal por horario em uma data.

Regras de contagem:
- agendamento: sempre conta como usado
- reserva:
  * contexto form: so conta se for de outra area; a da mesma area
    vai para total_reservado_mesma_area e pode ser reaproveitada
  * contexto admin: sempre conta; a da mesma area tambem aparece
    em total_reservado_mesma_area (apenas informativo, nao exposto)
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from agenda_canais.core.config import settings
from agenda_canais.services.capacidade.datas import parse_data
from agenda_canais.services.capacidade.regras import limite_efetivo
from agenda_canais.services.capacidade.types import (
    ContextoConsulta,
    DisponibilidadeHora,
    Reserva,
    TipoReserva,
)

logger = logging.getLogger(__name__)


def calcular_disponibilidade(
    horarios: Iterable[str],
    reservas: Iterable[Reserva],
    max_valor: float,
    area_solicitante: Optional[str] = None,
    contexto: ContextoConsulta = ContextoConsulta.ADMIN,
) -> List[DisponibilidadeHora]:
    """
    Calcula uso e disponibilidade de cada horario da grade.

    Args:
        horarios: Grade de horarios (HH:MM)
        reservas: Reservas do canal na data
        max_valor: Limite por hora do canal
        area_solicitante: Area de quem consulta
        contexto: form (solicitante) ou admin (operacao)

    Returns:
        Lista ordenada por hora
    """
    contexto = ContextoConsulta(contexto)

    por_hora: Dict[str, List[Reserva]] = defaultdict(list)
    for reserva in reservas:
        por_hora[reserva.hora_curta].append(reserva)

    resultado = []
    for hora in horarios:
        hora = str(hora).strip()
        max_efetivo = limite_efetivo(max_valor, hora)

        total_usado = 0.0
        mesma_area = 0.0
        for reserva in por_hora.get(hora, []):
            if reserva.tipo == TipoReserva.AGENDAMENTO:
                total_usado += reserva.qtd
                continue

            eh_mesma_area = bool(area_solicitante) and reserva.area_solicitante == area_solicitante
            if contexto == ContextoConsulta.FORM:
                if eh_mesma_area:
                    mesma_area += reserva.qtd
                else:
                    total_usado += reserva.qtd
            else:
                total_usado += reserva.qtd
                if eh_mesma_area:
                    mesma_area += reserva.qtd

        expor_mesma_area = bool(area_solicitante) and contexto == ContextoConsulta.FORM
        resultado.append(DisponibilidadeHora(
            hora=hora,
            disponivel=max(0.0, max_efetivo - total_usado),
            total_usado=total_usado,
            max_efetivo=max_efetivo,
            total_reservado_mesma_area=mesma_area if expor_mesma_area else None,
        ))

    resultado.sort(key=lambda d: d.hora)
    return resultado


class DisponibilidadeService:
    """Consulta de disponibilidade a partir do nome do canal."""

    def __init__(self, itens_repo, reserva_repo, catalogo, board_horarios_id: Optional[str] = None):
        self.itens_repo = itens_repo
        self.reserva_repo = reserva_repo
        self.catalogo = catalogo
        self.board_horarios_id = board_horarios_id or settings.BOARD_HORARIOS_ID

    async def consultar(
        self,
        nome_canal: str,
        data: Union[str, date],
        area_solicitante: Optional[str] = None,
        contexto: ContextoConsulta = ContextoConsulta.ADMIN,
    ) -> List[DisponibilidadeHora]:
        """
        Disponibilidade por hora de um canal em uma data.

        Canal inexistente ou inativo retorna lista vazia.

        Raises:
            ValidationError: data em formato invalido (antes de qualquer consulta)
        """
        data_consulta = parse_data(data)

        logger.info(
            f"Buscando disponibilidade - Canal: {nome_canal}, Data: {data_consulta}, "
            f"Area: {area_solicitante or 'Nao informada'}, Contexto: {ContextoConsulta(contexto).value}"
        )

        canal = await self.itens_repo.buscar_canal_por_nome(nome_canal)
        if not canal:
            logger.info(f"Canal \"{nome_canal}\" nao encontrado ou inativo")
            return []

        horarios = await self.catalogo.resolver(self.board_horarios_id)
        reservas = await self.reserva_repo.listar_por_canal_data(canal.item_id, data_consulta)
        logger.info(
            f"{len(reservas)} registro(s) para o canal {nome_canal} em {data_consulta} "
            f"(limite {canal.max_por_hora}/hora)"
        )

        return calcular_disponibilidade(
            horarios,
            reservas,
            canal.max_por_hora,
            area_solicitante=area_solicitante,
            contexto=contexto,
        )
