"""
Regras de capacidade compartilhadas pela consulta de disponibilidade,
pelo alocador e pela validacao de novos agendamentos.
"""
from typing import Iterable, Optional, Sequence

from agenda_canais.core.config import CapacidadeConfig
from agenda_canais.services.capacidade.types import Reserva, TipoReserva, normalizar_hora


def eh_horario_dividido(hora: str) -> bool:
    """08:00 e 08:30 dividem o limite do canal."""
    return normalizar_hora(hora) in CapacidadeConfig.HORARIOS_DIVIDIDOS


def limite_efetivo(max_valor: float, hora: str) -> float:
    """Limite do horario: metade do max_valor nos horarios divididos."""
    return max_valor / 2 if eh_horario_dividido(hora) else max_valor


def somar_ocupado(reservas: Iterable[Reserva], area_solicitante: Optional[str] = None) -> float:
    """
    Soma o que ja ocupa capacidade para quem esta solicitando.

    - agendamento: sempre conta
    - reserva: so conta se for de outra area (ou se nao ha area solicitante)
    """
    total = 0.0
    for reserva in reservas:
        if reserva.tipo == TipoReserva.AGENDAMENTO:
            total += reserva.qtd
        elif not area_solicitante or reserva.area_solicitante != area_solicitante:
            total += reserva.qtd
    return total


def proximo_horario(horarios: Sequence[str], hora_atual: str) -> Optional[str]:
    """
    Horario seguinte na grade, pela posicao.

    Se a hora atual nao estiver na grade, retorna o primeiro horario.
    None quando nao ha proximo.
    """
    atual = normalizar_hora(hora_atual)
    indice = next(
        (i for i, h in enumerate(horarios) if str(h).strip() == atual),
        -1,
    )
    proximo = indice + 1 if indice >= 0 else 0
    if proximo >= len(horarios):
        return None
    return str(horarios[proximo]).strip()
