"""
Alocador de capacidade dos canais.

Recebe itens de demanda (canal + data + hora + quantidade) e ajusta
cada item ao que cabe no horario:
- cabe inteiro: mantem
- horario lotado: move o item inteiro para o proximo horario da grade
- cabe em parte: reduz ao disponivel e cria um novo item com o
  restante no proximo horario

A lista e reprocessada do inicio a cada mudanca estrutural (remocao,
troca de hora, divisao) ate uma passada terminar sem mudancas. Cada
passada recomeca a contagem do que ja foi alocado em memoria, entao
os itens anteriores sao revalidados com os totais atualizados.

Itens de canal desconhecido ou sem limite configurado passam sem ajuste.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from agenda_canais.core.config import settings
from agenda_canais.services.capacidade.datas import parse_data
from agenda_canais.services.capacidade.regras import limite_efetivo, proximo_horario
from agenda_canais.services.capacidade.types import (
    Canal,
    ItemDemanda,
    ResultadoAlocacao,
    ResultadoItem,
    StatusAlocacao,
    normalizar_hora,
)

logger = logging.getLogger(__name__)

# (id_canal, data, hora)
ChaveHorario = Tuple[str, date, str]


@dataclass
class _Passada:
    """Saida de uma passada sobre a fila de itens."""

    resultados: List[ResultadoItem]
    mudou: bool = False


class AlocadorCapacidade:
    """Distribui demanda entre os horarios da grade respeitando o limite dos canais."""

    def __init__(self, itens_repo, reserva_repo, catalogo, board_horarios_id: Optional[str] = None):
        """
        Args:
            itens_repo: ItemBoardRepository (busca de canais)
            reserva_repo: ReservaRepository (o que ja esta reservado)
            catalogo: CatalogoHorarios (grade de horarios)
            board_horarios_id: Board da grade (default: settings)
        """
        self.itens_repo = itens_repo
        self.reserva_repo = reserva_repo
        self.catalogo = catalogo
        self.board_horarios_id = board_horarios_id or settings.BOARD_HORARIOS_ID

    async def alocar(
        self,
        itens: Sequence[ItemDemanda],
        area_solicitante: Optional[str] = None,
    ) -> ResultadoAlocacao:
        """
        Ajusta os itens a capacidade disponivel.

        Args:
            itens: Itens de demanda (nao sao alterados)
            area_solicitante: Area que pede; suas proprias reservas nao ocupam

        Returns:
            ResultadoAlocacao com os itens finais (qtd > 0) e os descartados

        Raises:
            ValidationError: data em formato invalido
            DatabaseError: falha ao consultar canais ou reservas
        """
        fila = [replace(item, extras=dict(item.extras)) for item in itens]

        # Datas invalidas abortam antes de qualquer consulta
        for item in fila:
            if str(item.data or "").strip():
                parse_data(item.data)

        horarios = await self.catalogo.resolver(self.board_horarios_id)
        if not horarios:
            logger.error("Nenhum horario disponivel, impossivel distribuir capacidade")

        descartados: List[ResultadoItem] = []
        canais: Dict[str, Optional[Canal]] = {}
        passadas = 0

        while True:
            passadas += 1
            passada = await self._executar_passada(
                fila, horarios, area_solicitante, canais, descartados
            )
            if not passada.mudou:
                break
            fila = [r.item for r in passada.resultados]

        logger.info(
            f"Alocacao concluida em {passadas} passada(s): "
            f"{len(passada.resultados)} item(ns), {len(descartados)} descartado(s)"
        )
        return ResultadoAlocacao(
            resultados=[r for r in passada.resultados if r.item.qtd > 0],
            descartados=descartados,
        )

    async def _executar_passada(
        self,
        fila: List[ItemDemanda],
        horarios: Sequence[str],
        area_solicitante: Optional[str],
        canais: Dict[str, Optional[Canal]],
        descartados: List[ResultadoItem],
    ) -> _Passada:
        """
        Percorre a fila uma vez.

        Na primeira mudanca estrutural devolve a fila reconstruida
        (itens ja vistos + substituicao + itens restantes) com mudou=True.
        """
        alocado: Dict[ChaveHorario, float] = {}
        saida: List[ResultadoItem] = []

        def reconstruir(indice: int, substitutos: List[ItemDemanda]) -> _Passada:
            restantes = [ResultadoItem(i, StatusAlocacao.ALOCADO) for i in substitutos + fila[indice + 1:]]
            return _Passada(resultados=saida + restantes, mudou=True)

        for indice, item in enumerate(fila):
            if not item.esta_completo():
                logger.warning(f"Item incompleto removido: {item.to_dict()}")
                descartados.append(ResultadoItem(
                    item, StatusAlocacao.DESCARTADO_INVALIDO, "canal, data, hora ou quantidade ausente"
                ))
                return reconstruir(indice, [])

            canal = await self._buscar_canal(item.canal, canais)
            if canal is None:
                logger.warning(f"Canal {item.canal} nao encontrado, item mantido sem ajuste")
                saida.append(ResultadoItem(item, StatusAlocacao.SEM_LIMITE, "canal nao encontrado"))
                continue
            if not canal.max_por_hora:
                saida.append(ResultadoItem(item, StatusAlocacao.SEM_LIMITE, "canal sem limite por hora"))
                continue

            hora = normalizar_hora(item.hora)
            data = parse_data(item.data)
            chave = (canal.item_id, data, hora)

            limite = limite_efetivo(canal.max_por_hora, hora)
            ocupado = await self.reserva_repo.somar_reservado(
                canal.item_id, data, hora, area_solicitante
            )
            ja_alocado = alocado.get(chave, 0.0)
            disponivel = max(0.0, limite - (ocupado + ja_alocado))

            logger.info(
                f"{item.canal} {data} {hora}: Limite={limite}, Ocupado={ocupado}, "
                f"Alocado={ja_alocado}, Disponivel={disponivel}, Demanda={item.qtd}"
            )

            if item.qtd <= disponivel:
                alocado[chave] = ja_alocado + item.qtd
                saida.append(ResultadoItem(item, StatusAlocacao.ALOCADO))
                continue

            proximo = proximo_horario(horarios, hora)

            if disponivel <= 0:
                if proximo is None:
                    logger.warning(f"Sem proximo horario apos {hora}, {item.qtd} descartado(s)")
                    descartados.append(ResultadoItem(
                        item, StatusAlocacao.DESCARTADO_SEM_CAPACIDADE, f"sem horario apos {hora}"
                    ))
                    return reconstruir(indice, [])

                logger.info(f"Movendo {item.qtd} de {hora} para {proximo}")
                return reconstruir(indice, [replace(item, hora=proximo)])

            restante = item.qtd - disponivel
            atual = replace(item, qtd=disponivel)
            alocado[chave] = ja_alocado + disponivel

            if proximo is None:
                logger.warning(f"Sem proximo horario apos {hora}. Restante {restante} perdido")
                descartados.append(ResultadoItem(
                    replace(item, qtd=restante),
                    StatusAlocacao.DESCARTADO_SEM_CAPACIDADE,
                    f"sem horario apos {hora}",
                ))
                saida.append(ResultadoItem(atual, StatusAlocacao.ALOCADO))
                continue

            logger.info(f"Dividindo demanda: {disponivel} em {hora}, restante {restante} em {proximo}")
            return reconstruir(indice, [atual, replace(item, hora=proximo, qtd=restante)])

        return _Passada(resultados=saida)

    async def _buscar_canal(self, nome: str, canais: Dict[str, Optional[Canal]]) -> Optional[Canal]:
        """Busca canal pelo nome, uma vez por alocacao."""
        nome = str(nome).strip()
        if nome not in canais:
            canais[nome] = await self.itens_repo.buscar_canal_por_nome(nome)
        return canais[nome]
