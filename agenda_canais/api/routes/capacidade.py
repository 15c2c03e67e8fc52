"""
Endpoints de capacidade: disponibilidade por hora e alocacao de demanda.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from agenda_canais.repositories.deps import (
    get_agendamento_service,
    get_alocador,
    get_disponibilidade_service,
)
from agenda_canais.services.capacidade import (
    AgendamentoService,
    AlocadorCapacidade,
    ContextoConsulta,
    DisponibilidadeService,
    ItemDemanda,
    TipoReserva,
)

router = APIRouter(tags=["capacidade"])


class ItemDemandaIn(BaseModel):
    canal: str
    data: str
    hora: str
    qtd: float
    area_solicitante: Optional[str] = None
    extras: Dict[str, Any] = Field(default_factory=dict)


class AlocacaoIn(BaseModel):
    itens: List[ItemDemandaIn]
    area_solicitante: Optional[str] = None
    persistir: bool = False
    tipo: TipoReserva = TipoReserva.AGENDAMENTO
    solicitante: Optional[str] = None
    user_id: Optional[str] = None


@router.get("/canais/{nome}/disponibilidade")
async def disponibilidade_canal(
    nome: str,
    data: str = Query(..., description="DD/MM/YYYY ou YYYY-MM-DD"),
    area_solicitante: Optional[str] = None,
    contexto: ContextoConsulta = ContextoConsulta.ADMIN,
    service: DisponibilidadeService = Depends(get_disponibilidade_service),
):
    """Uso e disponibilidade por hora do canal na data."""
    horas = await service.consultar(nome, data, area_solicitante, contexto)
    return {"disponivelHoras": [h.to_dict() for h in horas]}


@router.post("/alocacoes")
async def alocar_demanda(
    dados: AlocacaoIn,
    alocador: AlocadorCapacidade = Depends(get_alocador),
    agendamentos: AgendamentoService = Depends(get_agendamento_service),
):
    """
    Distribui os itens entre os horarios com capacidade.

    Com persistir=true grava um registro por item final.
    """
    itens = [
        ItemDemanda(
            canal=i.canal,
            data=i.data,
            hora=i.hora,
            qtd=i.qtd,
            area_solicitante=i.area_solicitante or dados.area_solicitante,
            extras=i.extras,
        )
        for i in dados.itens
    ]
    resultado = await alocador.alocar(itens, dados.area_solicitante)

    resposta = resultado.to_dict()
    if dados.persistir:
        criadas = await agendamentos.persistir_alocacao(
            resultado, dados.tipo, solicitante=dados.solicitante, user_id=dados.user_id
        )
        resposta["agendamentos"] = [r.to_dict() for r in criadas]
    return resposta
