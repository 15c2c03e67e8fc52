"""
Exceptions customizadas da Agenda de Canais.
"""
from typing import Optional


class AgendaException(Exception):
    """Base exception para todos os erros do sistema."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class DatabaseError(AgendaException):
    """Erro de banco de dados (Supabase)."""
    pass


class ExternalAPIError(AgendaException):
    """Erro de API externa (Monday)."""

    def __init__(
        self,
        message: str,
        service: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None
    ):
        self.service = service
        super().__init__(message, details, original_error)


class ValidationError(AgendaException):
    """Erro de validacao de dados de entrada."""
    pass


class CapacidadeInsuficienteError(ValidationError):
    """Quantidade solicitada excede o disponivel no horario."""
    pass


class NotFoundError(AgendaException):
    """Recurso nao encontrado."""

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None
    ):
        message = f"{resource} nao encontrado"
        details = {}
        if identifier:
            details["id"] = identifier
        super().__init__(message, details)


class ConfigurationError(AgendaException):
    """Erro de configuracao do sistema."""
    pass
