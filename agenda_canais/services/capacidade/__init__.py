"""
Modulo de capacidade dos canais.

Estrutura:
- types: Tipos e enums
- regras: Limite efetivo, contagem de reservas, proximo horario
- datas: Conversao de datas e horas
- horarios: Grade de horarios (tabela local, Monday, padrao)
- disponibilidade: Uso/disponivel por hora
- alocador: Distribuicao de demanda entre horarios
- agendamento: Escrita validada no livro de capacidade
"""
from agenda_canais.services.capacidade.agendamento import (
    AgendamentoService,
    AtualizacaoReserva,
    NovaReserva,
    Reagendamento,
)
from agenda_canais.services.capacidade.alocador import AlocadorCapacidade
from agenda_canais.services.capacidade.disponibilidade import (
    DisponibilidadeService,
    calcular_disponibilidade,
)
from agenda_canais.services.capacidade.horarios import CatalogoHorarios
from agenda_canais.services.capacidade.types import (
    Canal,
    ContextoConsulta,
    DisponibilidadeHora,
    ItemDemanda,
    Reserva,
    ResultadoAlocacao,
    ResultadoItem,
    StatusAlocacao,
    TipoReserva,
)

__all__ = [
    "AgendamentoService",
    "AtualizacaoReserva",
    "NovaReserva",
    "Reagendamento",
    "AlocadorCapacidade",
    "DisponibilidadeService",
    "calcular_disponibilidade",
    "CatalogoHorarios",
    "Canal",
    "ContextoConsulta",
    "DisponibilidadeHora",
    "ItemDemanda",
    "Reserva",
    "ResultadoAlocacao",
    "ResultadoItem",
    "StatusAlocacao",
    "TipoReserva",
]
