"""
Endpoints para registros de capacidade dos canais (channel_schedules).
"""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from agenda_canais.core.exceptions import NotFoundError
from agenda_canais.repositories.deps import get_agendamento_service, get_reserva_repo
from agenda_canais.repositories.reservas import ReservaRepository
from agenda_canais.services.capacidade import (
    AgendamentoService,
    AtualizacaoReserva,
    NovaReserva,
    Reagendamento,
    TipoReserva,
)
from agenda_canais.services.capacidade.datas import parse_data

router = APIRouter(prefix="/agendamentos", tags=["agendamentos"])


class CriarAgendamento(BaseModel):
    id_canal: str
    data: str  # DD/MM/YYYY
    hora: str  # HH:MM
    qtd: float
    area_solicitante: str
    solicitante: Optional[str] = None
    user_id: Optional[str] = None
    tipo: Optional[TipoReserva] = None


class AtualizarAgendamento(BaseModel):
    id_canal: Optional[str] = None
    data: Optional[str] = None
    hora: Optional[str] = None
    qtd: Optional[float] = None
    area_solicitante: Optional[str] = None
    solicitante: Optional[str] = None
    tipo: Optional[TipoReserva] = None


@router.post("", status_code=201)
async def criar_agendamento(
    dados: CriarAgendamento,
    service: AgendamentoService = Depends(get_agendamento_service),
):
    """Cria registro validando a capacidade do horario."""
    reserva = await service.criar(NovaReserva(**dados.model_dump()))
    return reserva.to_dict()


@router.get("")
async def listar_agendamentos(
    data: Optional[str] = None,
    id_canal: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
    repo: ReservaRepository = Depends(get_reserva_repo),
):
    """Lista registros filtrando por data e/ou canal."""
    filtros = {"id_canal": id_canal}
    if data:
        filtros["data"] = parse_data(data)
    reservas = await repo.listar(limit=limit, offset=offset, **filtros)
    return [r.to_dict() for r in reservas]


@router.get("/{id}")
async def buscar_agendamento(id: str, repo: ReservaRepository = Depends(get_reserva_repo)):
    reserva = await repo.buscar_por_id(id)
    if not reserva:
        raise NotFoundError("Agendamento", identifier=id)
    return reserva.to_dict()


@router.put("/{id}")
async def atualizar_agendamento(
    id: str,
    dados: AtualizarAgendamento,
    service: AgendamentoService = Depends(get_agendamento_service),
):
    reserva = await service.atualizar(id, AtualizacaoReserva(**dados.model_dump()))
    if not reserva:
        raise NotFoundError("Agendamento", identifier=id)
    return reserva.to_dict()


@router.delete("")
async def excluir_agendamentos(
    id_canal: str,
    data: str,
    hora: str,
    area_solicitante: Optional[str] = None,
    service: AgendamentoService = Depends(get_agendamento_service),
):
    """Remove os registros do canal/data/hora (e da area, se informada)."""
    removidos = await service.excluir_por_horario(id_canal, data, hora, area_solicitante)
    return {"removidos": removidos}


class ReagendarTouchpoint(BaseModel):
    touchpoint_id: str
    canal_antigo: Optional[str] = None
    data_antiga: Optional[str] = None
    hora_antiga: Optional[str] = None
    canal_novo: Optional[str] = None
    data_nova: Optional[str] = None
    hora_nova: Optional[str] = None
    volume: float = 0
    area_solicitante: Optional[str] = None
    primeiro_preenchimento: bool = False


@router.post("/reagendamentos")
async def reagendar_touchpoint(
    dados: ReagendarTouchpoint,
    service: AgendamentoService = Depends(get_agendamento_service),
):
    """Move a capacidade de um touchpoint para o novo canal/data/hora."""
    reserva = await service.reagendar_touchpoint(Reagendamento(**dados.model_dump()))
    return {"agendamento": reserva.to_dict() if reserva else None}
