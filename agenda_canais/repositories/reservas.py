"""
Repository do livro de reservas de capacidade (channel_schedules).

Cada linha compromete uma quantidade de um canal em uma data/hora,
como agendamento (firme) ou reserva (provisoria de uma area).

Erros de banco sobem como DatabaseError: quem aloca capacidade
precisa saber que o estado do livro ficou desconhecido.
"""

import logging
from datetime import date
from typing import List, Optional

from agenda_canais.core.exceptions import DatabaseError, ValidationError
from agenda_canais.services.capacidade.regras import somar_ocupado
from agenda_canais.services.capacidade.types import Reserva, TipoReserva, normalizar_hora
from .base import BaseRepository

logger = logging.getLogger(__name__)


class ReservaRepository(BaseRepository[Reserva]):
    """
    Repository para operacoes de Reserva.

    Uso:
        repo = ReservaRepository(get_supabase_client())
        ocupado = await repo.somar_reservado("7400", date(2025, 12, 25), "09:00", "CRM")
    """

    FILTROS_PERMITIDOS = ("id_canal", "user_id", "area_solicitante", "tipo")

    @property
    def table_name(self) -> str:
        return "channel_schedules"

    async def buscar_por_id(self, id: str) -> Optional[Reserva]:
        """Busca reserva por ID."""
        response = self._executar(
            self.db.table(self.table_name).select("*").eq("id", id),
            "buscar reserva",
        )
        if response.data:
            return Reserva.from_db_row(response.data[0])
        return None

    async def listar(self, limit: int = 100, offset: int = 0, **filters) -> List[Reserva]:
        """
        Lista reservas ordenadas por data e hora.

        Filtros aceitos: id_canal, user_id, area_solicitante, tipo, data.
        """
        query = self.db.table(self.table_name).select("*")

        for campo in self.FILTROS_PERMITIDOS:
            if filters.get(campo) is not None:
                valor = filters[campo]
                query = query.eq(campo, valor.value if isinstance(valor, TipoReserva) else valor)
        if filters.get("data") is not None:
            query = query.eq("data", filters["data"].isoformat())

        query = query.order("data").order("hora").range(offset, offset + limit - 1)
        response = self._executar(query, "listar reservas")
        return [Reserva.from_db_row(row) for row in response.data or []]

    async def criar(self, data: dict) -> Reserva:
        """
        Insere reserva a partir de dict ja no formato da tabela.

        Raises:
            ValidationError: qtd <= 0 (nunca persistimos reserva vazia)
            DatabaseError: insert sem linha retornada
        """
        if float(data.get("qtd") or 0) <= 0:
            raise ValidationError(
                "Quantidade deve ser maior que zero",
                details={"qtd": data.get("qtd")},
            )

        response = self._executar(
            self.db.table(self.table_name).insert(data),
            "inserir reserva",
        )
        if not response.data:
            logger.error(f"Insert em {self.table_name} nao retornou dados: {data}")
            raise DatabaseError(
                f"Insert em {self.table_name} nao retornou a reserva criada",
                details={"tabela": self.table_name},
            )
        return Reserva.from_db_row(response.data[0])

    async def atualizar(self, id: str, data: dict) -> Optional[Reserva]:
        """Atualiza campos de uma reserva."""
        response = self._executar(
            self.db.table(self.table_name).update(data).eq("id", id),
            "atualizar reserva",
        )
        if response.data:
            return Reserva.from_db_row(response.data[0])
        return None

    async def deletar(self, id: str) -> bool:
        """Deleta uma reserva."""
        return await self.deletar_em_lote([id]) > 0

    async def inserir(
        self,
        id_canal: str,
        data: date,
        hora: str,
        qtd: float,
        area_solicitante: Optional[str],
        tipo: TipoReserva,
        solicitante: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Reserva:
        """
        Persiste uma nova reserva.

        Args:
            id_canal: item_id do canal no Monday
            data: Data do disparo
            hora: Horario HH:MM
            qtd: Quantidade (> 0)
            area_solicitante: Area que pediu
            tipo: agendamento ou reserva
        """
        reserva = await self.criar({
            "id_canal": id_canal,
            "data": data.isoformat(),
            "hora": normalizar_hora(hora),
            "qtd": qtd,
            "area_solicitante": area_solicitante,
            "tipo": tipo.value,
            "solicitante": solicitante,
            "user_id": user_id,
        })
        logger.info(
            f"Reserva criada: canal={id_canal} data={data} hora={hora} "
            f"qtd={qtd} tipo={tipo.value} area={area_solicitante}"
        )
        return reserva

    async def deletar_em_lote(self, ids: List[str]) -> int:
        """
        Remove reservas por ID.

        Returns:
            Quantidade de linhas removidas
        """
        if not ids:
            return 0

        response = self._executar(
            self.db.table(self.table_name).delete().in_("id", list(ids)),
            "deletar reservas",
        )
        removidas = len(response.data or [])
        logger.info(f"{removidas} reserva(s) removida(s) de {len(ids)} solicitada(s)")
        return removidas

    async def listar_por_canal_data(
        self,
        id_canal: str,
        data: date,
        hora: Optional[str] = None,
    ) -> List[Reserva]:
        """
        Reservas de um canal em uma data, opcionalmente de uma hora.

        A hora e comparada truncada (HH:MM), pois a coluna e do tipo time.
        """
        response = self._executar(
            self.db.table(self.table_name)
            .select("*")
            .eq("id_canal", id_canal)
            .eq("data", data.isoformat()),
            "buscar reservas do canal",
        )
        reservas = [Reserva.from_db_row(row) for row in response.data or []]

        if hora is not None:
            hora_curta = normalizar_hora(hora)
            reservas = [r for r in reservas if r.hora_curta == hora_curta]

        return reservas

    async def somar_reservado(
        self,
        id_canal: str,
        data: date,
        hora: str,
        area_solicitante: Optional[str] = None,
    ) -> float:
        """
        Soma o que ja ocupa o horario para a area solicitante.

        Agendamentos sempre contam; reservas so contam se forem de outra area.
        """
        reservas = await self.listar_por_canal_data(id_canal, data, hora)
        total = somar_ocupado(reservas, area_solicitante)
        logger.debug(
            f"Canal {id_canal}, data {data}, hora {hora}: "
            f"{len(reservas)} registro(s), ocupado={total}"
        )
        return total

    async def buscar_para_reagendamento(
        self,
        id_canal: str,
        data: date,
        hora: str,
        area_solicitante: Optional[str] = None,
    ) -> List[Reserva]:
        """
        Reservas do horario antigo de um touchpoint, a remover antes de reagendar.

        Se area_solicitante for informada, so retorna as reservas da mesma area.
        """
        reservas = await self.listar_por_canal_data(id_canal, data, hora)
        if area_solicitante:
            reservas = [r for r in reservas if r.area_solicitante == area_solicitante]
        return reservas
