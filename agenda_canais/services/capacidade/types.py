"""
Tipos e enums da agenda de capacidade dos canais.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class TipoReserva(str, Enum):
    """Tipo de registro em channel_schedules."""

    AGENDAMENTO = "agendamento"  # compromisso firme, sempre ocupa capacidade
    RESERVA = "reserva"  # reserva provisoria de uma area


class ContextoConsulta(str, Enum):
    """Quem esta consultando a disponibilidade."""

    FORM = "form"
    ADMIN = "admin"


class StatusAlocacao(str, Enum):
    """Desfecho de um item de demanda apos a alocacao."""

    ALOCADO = "alocado"
    SEM_LIMITE = "sem_limite"
    DESCARTADO_SEM_CAPACIDADE = "descartado_sem_capacidade"
    DESCARTADO_INVALIDO = "descartado_invalido"


def normalizar_hora(hora: Any) -> str:
    """'08:00:00' -> '08:00'."""
    return str(hora or "").strip()[:5]


@dataclass
class Canal:
    """Canal de disparo com limite de envios por hora."""

    item_id: str
    nome: str
    max_por_hora: float = 0.0

    @classmethod
    def from_db_row(cls, row: dict) -> "Canal":
        """Cria a partir de linha de monday_items."""
        max_value = row.get("max_value")
        return cls(
            item_id=str(row.get("item_id", "")),
            nome=row.get("name", ""),
            max_por_hora=float(max_value) if max_value is not None else 0.0,
        )


@dataclass
class Reserva:
    """Linha de channel_schedules."""

    id: str
    id_canal: str
    data: date
    hora: str
    qtd: float
    area_solicitante: Optional[str] = None
    tipo: TipoReserva = TipoReserva.AGENDAMENTO
    solicitante: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def hora_curta(self) -> str:
        return normalizar_hora(self.hora)

    @classmethod
    def from_db_row(cls, row: dict) -> "Reserva":
        """Cria a partir de linha do banco."""
        data_raw = row.get("data")
        if isinstance(data_raw, str):
            # Supabase pode devolver "2025-12-25" ou timestamp completo
            data_raw = date.fromisoformat(data_raw[:10])
        elif isinstance(data_raw, datetime):
            data_raw = data_raw.date()

        tipo_raw = row.get("tipo") or TipoReserva.AGENDAMENTO.value
        try:
            tipo = TipoReserva(tipo_raw)
        except ValueError:
            tipo = TipoReserva.AGENDAMENTO

        return cls(
            id=str(row.get("id", "")),
            id_canal=str(row.get("id_canal", "")),
            data=data_raw,
            hora=str(row.get("hora", "")),
            qtd=float(row.get("qtd") or 0),
            area_solicitante=row.get("area_solicitante"),
            tipo=tipo,
            solicitante=row.get("solicitante"),
            user_id=row.get("user_id"),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict:
        """Converte para dicionario (resposta da API)."""
        return {
            "id": self.id,
            "id_canal": self.id_canal,
            "data": self.data.strftime("%d/%m/%Y") if self.data else None,
            "hora": self.hora_curta,
            "qtd": self.qtd,
            "area_solicitante": self.area_solicitante,
            "solicitante": self.solicitante,
            "tipo": self.tipo.value,
        }


@dataclass
class DisponibilidadeHora:
    """Capacidade de um horario em uma data."""

    hora: str
    disponivel: float
    total_usado: float
    max_efetivo: float
    total_reservado_mesma_area: Optional[float] = None

    def to_dict(self) -> dict:
        resultado = {
            "hora": self.hora,
            "available": f"{self.disponivel:.2f}",
            "totalUsado": f"{self.total_usado:.2f}",
            "maxValue": f"{self.max_efetivo:.2f}",
        }
        if self.total_reservado_mesma_area is not None:
            resultado["totalReservadoMesmaArea"] = f"{self.total_reservado_mesma_area:.2f}"
        return resultado


@dataclass
class ItemDemanda:
    """
    Volume que um solicitante quer disparar em um canal/data/hora.

    Nao e persistido: o alocador pode reduzir a quantidade, trocar
    a hora ou dividir o item em dois. `extras` acompanha o item
    (ex: colunas do touchpoint) em todas as divisoes.
    """

    canal: str
    data: str
    hora: str
    qtd: float
    area_solicitante: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def esta_completo(self) -> bool:
        return bool(
            str(self.canal or "").strip()
            and str(self.data or "").strip()
            and str(self.hora or "").strip()
            and (self.qtd or 0) > 0
        )

    def to_dict(self) -> dict:
        return {
            "canal": self.canal,
            "data": self.data,
            "hora": self.hora,
            "qtd": self.qtd,
            "area_solicitante": self.area_solicitante,
            "extras": self.extras,
        }


@dataclass
class ResultadoItem:
    """Item com o motivo do seu desfecho."""

    item: ItemDemanda
    status: StatusAlocacao
    motivo: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            **self.item.to_dict(),
            "status": self.status.value,
            "motivo": self.motivo,
        }


@dataclass
class ResultadoAlocacao:
    """Saida do alocador: itens finais e o que ficou de fora."""

    resultados: List[ResultadoItem] = field(default_factory=list)
    descartados: List[ResultadoItem] = field(default_factory=list)

    @property
    def itens(self) -> List[ItemDemanda]:
        """Itens finais, sempre com qtd > 0."""
        return [r.item for r in self.resultados if r.item.qtd > 0]

    def to_dict(self) -> dict:
        return {
            "itens": [r.to_dict() for r in self.resultados if r.item.qtd > 0],
            "descartados": [r.to_dict() for r in self.descartados],
        }
