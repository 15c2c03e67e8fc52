"""
Base Repository - Interface comum para todos os repositories.

Este modulo define a interface base que todos os repositories
devem implementar, garantindo consistencia e facilitando testes.
"""
from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional, List, Any

from agenda_canais.core.exceptions import DatabaseError

# Type variable para entidades
T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Interface base para repositories.

    Attributes:
        db: Cliente de banco de dados (Supabase, Mock, etc.)
        table_name: Nome da tabela no banco de dados

    Example:
        class ReservaRepository(BaseRepository[Reserva]):
            @property
            def table_name(self) -> str:
                return "channel_schedules"
    """

    def __init__(self, db_client: Any):
        """
        Inicializa o repository.

        Args:
            db_client: Cliente de banco de dados (Supabase, Mock, etc.)
        """
        self.db = db_client

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Nome da tabela no banco."""
        pass

    @abstractmethod
    async def buscar_por_id(self, id: str) -> Optional[T]:
        """
        Busca entidade por ID.

        Returns:
            Entidade ou None se nao encontrada
        """
        pass

    @abstractmethod
    async def listar(
        self,
        limit: int = 100,
        offset: int = 0,
        **filters
    ) -> List[T]:
        """
        Lista entidades com filtros opcionais.

        Args:
            limit: Maximo de resultados
            offset: Pular N primeiros resultados
            **filters: Filtros adicionais (ex: id_canal="123")
        """
        pass

    @abstractmethod
    async def criar(self, data: dict) -> T:
        """Cria nova entidade e retorna com ID."""
        pass

    @abstractmethod
    async def deletar(self, id: str) -> bool:
        """
        Deleta entidade.

        Returns:
            True se deletou, False se nao encontrada
        """
        pass

    # Metodos utilitarios (implementacao padrao)

    def _executar(self, query, operacao: str):
        """
        Executa query do Supabase convertendo falhas em DatabaseError.

        Falhas de banco nunca sao engolidas aqui: quem chama decide.
        """
        try:
            return query.execute()
        except Exception as e:
            raise DatabaseError(
                f"Erro ao {operacao} em {self.table_name}",
                details={"tabela": self.table_name},
                original_error=e,
            ) from e
