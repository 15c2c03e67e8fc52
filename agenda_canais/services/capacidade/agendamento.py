"""
Servico de agendamentos de canal.

Responsavel por:
- Criar/atualizar registros em channel_schedules validando capacidade
- Reagendar touchpoints (remove o horario antigo, cria o novo)
- Persistir a saida do alocador
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from agenda_canais.core.exceptions import (
    CapacidadeInsuficienteError,
    NotFoundError,
    ValidationError,
)
from agenda_canais.services.capacidade.datas import hora_valida, parse_data
from agenda_canais.services.capacidade.regras import (
    eh_horario_dividido,
    limite_efetivo,
    somar_ocupado,
)
from agenda_canais.services.capacidade.types import (
    Reserva,
    ResultadoAlocacao,
    TipoReserva,
    normalizar_hora,
)

logger = logging.getLogger(__name__)


@dataclass
class NovaReserva:
    """Dados para criar um registro de capacidade."""

    id_canal: str
    data: str
    hora: str
    qtd: float
    area_solicitante: str
    solicitante: Optional[str] = None
    user_id: Optional[str] = None
    tipo: Optional[TipoReserva] = None


@dataclass
class AtualizacaoReserva:
    """Campos alteraveis de um registro existente."""

    id_canal: Optional[str] = None
    data: Optional[str] = None
    hora: Optional[str] = None
    qtd: Optional[float] = None
    area_solicitante: Optional[str] = None
    solicitante: Optional[str] = None
    tipo: Optional[TipoReserva] = None


@dataclass
class Reagendamento:
    """Mudanca de canal/data/hora de um touchpoint."""

    touchpoint_id: str
    canal_antigo: Optional[str]
    data_antiga: Optional[str]
    hora_antiga: Optional[str]
    canal_novo: Optional[str]
    data_nova: Optional[str]
    hora_nova: Optional[str]
    volume: float
    area_solicitante: Optional[str] = None
    primeiro_preenchimento: bool = False


def _formatar_numero(valor: float) -> str:
    """1234.5 -> '1.234,5' (padrao pt-BR)."""
    texto = f"{valor:,.2f}".rstrip("0").rstrip(".")
    return texto.replace(",", "_").replace(".", ",").replace("_", ".")


class AgendamentoService:
    """Operacoes de escrita no livro de capacidade."""

    def __init__(self, itens_repo, reserva_repo):
        self.itens_repo = itens_repo
        self.reserva_repo = reserva_repo

    async def validar_capacidade(
        self,
        id_canal: str,
        data: date,
        hora: str,
        qtd: float,
        area_solicitante: Optional[str] = None,
        excluir_id: Optional[str] = None,
    ) -> None:
        """
        Garante que qtd cabe no horario para a area solicitante.

        Reservas da propria area nao contam: elas sao substituidas
        pelo agendamento que esta sendo criado.

        Raises:
            NotFoundError: canal inexistente ou inativo
            CapacidadeInsuficienteError: qtd maior que o disponivel
        """
        hora_curta = normalizar_hora(hora)

        canal = await self.itens_repo.buscar_canal_por_id(id_canal)
        if not canal:
            raise NotFoundError("Canal", identifier=str(id_canal))

        limite = limite_efetivo(canal.max_por_hora, hora_curta)

        existentes = [
            r for r in await self.reserva_repo.listar_por_canal_data(id_canal, data, hora_curta)
            if r.id != excluir_id
        ]
        usado = somar_ocupado(existentes, area_solicitante)
        reutilizavel = sum(r.qtd for r in existentes) - usado
        disponivel = limite - usado

        logger.info(
            f"Validando {hora_curta}: limite={limite}, usado={usado}, "
            f"reutilizavel={reutilizavel}, solicitado={qtd}, disponivel={disponivel}"
        )

        if qtd > disponivel:
            info_limite = ""
            if eh_horario_dividido(hora_curta):
                info_limite = (
                    f" (horario especial com limite dividido: {_formatar_numero(limite)} "
                    f"de {_formatar_numero(canal.max_por_hora)} total do canal)"
                )
            raise CapacidadeInsuficienteError(
                f"Capacidade insuficiente para {hora_curta}{info_limite}",
                details={
                    "limite": limite,
                    "usado": usado,
                    "reutilizavel": reutilizavel,
                    "solicitado": qtd,
                    "disponivel": disponivel,
                },
            )

    async def criar(self, dados: NovaReserva) -> Reserva:
        """
        Cria registro validando formato e capacidade.

        Tipo: o informado; sem tipo, agendamento quando ha user_id
        (veio do formulario) e reserva caso contrario (veio do admin).
        """
        data = parse_data(dados.data)
        if not hora_valida(dados.hora):
            raise ValidationError("Formato de hora invalido. Use HH:MM", details={"hora": dados.hora})
        if dados.qtd is None or dados.qtd <= 0:
            raise ValidationError("Quantidade deve ser maior que zero", details={"qtd": dados.qtd})
        if not (dados.area_solicitante or "").strip():
            raise ValidationError("Area solicitante e obrigatoria")

        await self.validar_capacidade(
            dados.id_canal, data, dados.hora, dados.qtd, dados.area_solicitante
        )

        if dados.tipo is not None:
            tipo = TipoReserva(dados.tipo)
        else:
            tipo = TipoReserva.AGENDAMENTO if dados.user_id else TipoReserva.RESERVA

        return await self.reserva_repo.inserir(
            id_canal=dados.id_canal,
            data=data,
            hora=dados.hora,
            qtd=dados.qtd,
            area_solicitante=dados.area_solicitante,
            tipo=tipo,
            solicitante=dados.solicitante,
            user_id=dados.user_id,
        )

    async def atualizar(self, id: str, dados: AtualizacaoReserva) -> Optional[Reserva]:
        """
        Atualiza registro revalidando capacidade com os valores finais.

        Returns:
            Reserva atualizada ou None se nao encontrada
        """
        existente = await self.reserva_repo.buscar_por_id(id)
        if not existente:
            return None

        if dados.hora is not None and not hora_valida(dados.hora):
            raise ValidationError("Formato de hora invalido. Use HH:MM", details={"hora": dados.hora})
        if dados.qtd is not None and dados.qtd <= 0:
            raise ValidationError("Quantidade deve ser maior que zero", details={"qtd": dados.qtd})

        id_canal = dados.id_canal or existente.id_canal
        data = parse_data(dados.data) if dados.data else existente.data
        hora = dados.hora or existente.hora_curta
        qtd = dados.qtd if dados.qtd is not None else existente.qtd
        area = dados.area_solicitante or existente.area_solicitante

        await self.validar_capacidade(id_canal, data, hora, qtd, area, excluir_id=id)

        campos = {
            "id_canal": id_canal,
            "data": data.isoformat(),
            "hora": normalizar_hora(hora),
            "qtd": qtd,
            "area_solicitante": area,
        }
        if dados.solicitante is not None:
            campos["solicitante"] = dados.solicitante
        if dados.tipo is not None:
            campos["tipo"] = TipoReserva(dados.tipo).value

        return await self.reserva_repo.atualizar(id, campos)

    async def excluir_por_horario(
        self,
        id_canal: str,
        data: str,
        hora: str,
        area_solicitante: Optional[str] = None,
    ) -> int:
        """
        Remove os registros de um canal/data/hora (e area, se informada).

        Returns:
            Quantidade removida
        """
        data_parseada = parse_data(data)
        alvos = await self.reserva_repo.buscar_para_reagendamento(
            id_canal, data_parseada, hora, area_solicitante
        )
        if not alvos:
            logger.info(f"Nenhum agendamento para remover: canal={id_canal} data={data} hora={hora}")
            return 0
        return await self.reserva_repo.deletar_em_lote([r.id for r in alvos])

    async def reagendar_touchpoint(self, dados: Reagendamento) -> Optional[Reserva]:
        """
        Move a capacidade de um touchpoint para o novo canal/data/hora.

        1. Remove os registros do horario antigo (exceto no primeiro preenchimento)
        2. Cria agendamento no horario novo

        Returns:
            Registro criado, ou None se nada foi criado
        """
        canal_antigo = dados.canal_antigo or dados.canal_novo

        if not dados.primeiro_preenchimento and canal_antigo and dados.data_antiga and dados.hora_antiga:
            canal = await self.itens_repo.buscar_canal_por_nome(canal_antigo)
            if canal:
                antigos = await self.reserva_repo.buscar_para_reagendamento(
                    canal.item_id,
                    parse_data(dados.data_antiga),
                    dados.hora_antiga,
                    dados.area_solicitante,
                )
                if antigos:
                    await self.reserva_repo.deletar_em_lote([r.id for r in antigos])
                    logger.info(
                        f"Touchpoint {dados.touchpoint_id}: {len(antigos)} agendamento(s) "
                        f"removido(s) de {canal_antigo} {dados.hora_antiga}"
                    )
            else:
                logger.warning(f"Canal antigo {canal_antigo} nao encontrado, nada removido")

        if not (dados.canal_novo and dados.data_nova and dados.hora_nova):
            return None
        if dados.volume <= 0:
            logger.info(f"Touchpoint {dados.touchpoint_id} sem volume, agendamento nao criado")
            return None

        canal = await self.itens_repo.buscar_canal_por_nome(dados.canal_novo)
        if not canal:
            logger.warning(f"Canal novo {dados.canal_novo} nao encontrado, agendamento nao criado")
            return None

        reserva = await self.reserva_repo.inserir(
            id_canal=canal.item_id,
            data=parse_data(dados.data_nova),
            hora=dados.hora_nova,
            qtd=dados.volume,
            area_solicitante=dados.area_solicitante,
            tipo=TipoReserva.AGENDAMENTO,
        )
        logger.info(
            f"Touchpoint {dados.touchpoint_id}: agendamento criado em "
            f"{dados.canal_novo} / {dados.hora_nova} / {_formatar_numero(dados.volume)}"
        )
        return reserva

    async def persistir_alocacao(
        self,
        resultado: ResultadoAlocacao,
        tipo: TipoReserva,
        solicitante: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Reserva]:
        """
        Grava um registro por item final do alocador.

        Itens cujo canal nao existe sao ignorados (nao ha id_canal a gravar).
        """
        criadas = []
        for item in resultado.itens:
            canal = await self.itens_repo.buscar_canal_por_nome(item.canal)
            if not canal:
                logger.warning(f"Canal {item.canal} nao encontrado, item nao persistido")
                continue
            criadas.append(await self.reserva_repo.inserir(
                id_canal=canal.item_id,
                data=parse_data(item.data),
                hora=item.hora,
                qtd=item.qtd,
                area_solicitante=item.area_solicitante,
                tipo=tipo,
                solicitante=solicitante,
                user_id=user_id,
            ))
        return criadas
