"""
Configurações da aplicação.
Carrega variáveis de ambiente.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Configurações carregadas do .env"""

    # App
    APP_NAME: str = "Agenda de Canais"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_KEY: str = ""

    # Monday.com (GraphQL)
    MONDAY_API_URL: str = "https://api.monday.com/v2"
    MONDAY_API_TOKEN: str = ""
    MONDAY_API_VERSION: str = "2023-10"
    MONDAY_TIMEOUT_SEGUNDOS: float = 30.0

    # Boards de referencia
    # BOARD_CANAIS_ID: board com os canais (coluna "Max Volume Hora")
    # BOARD_HORARIOS_ID: board com os horarios da grade de disparo
    BOARD_CANAIS_ID: str = "7400353565"
    BOARD_HORARIOS_ID: str = "7696913518"

    # CORS - origens permitidas (separadas por vírgula)
    CORS_ORIGINS: str = "*"  # "*" apenas para desenvolvimento

    @property
    def cors_origins_list(self) -> list[str]:
        """Retorna lista de origens CORS permitidas."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignora variáveis extras do .env


class CapacidadeConfig:
    """
    Regras fixas da grade de capacidade dos canais.

    08:00 e 08:30 dividem o mesmo limite: cada um tem direito
    a metade do max_value do canal.
    """

    HORARIOS_DIVIDIDOS: tuple = ("08:00", "08:30")

    # Usado quando nem a tabela local nem o Monday retornam horarios
    HORARIOS_PADRAO: tuple = (
        "06:00", "07:00", "07:30", "08:00", "08:30", "09:00", "10:00",
        "11:00", "12:00", "13:00", "14:00", "15:00", "16:00", "17:00",
        "18:00", "19:00", "20:00", "21:00", "22:00",
    )

    STATUS_ATIVO: str = "Ativo"

    # Monday: coluna com o limite por hora do canal
    COLUNA_MAX_VOLUME: str = "Max Volume Hora"
    COLUNAS_STATUS: tuple = ("status", "status__1")

    # Paginacao items_page (maximo aceito pela API)
    TAMANHO_PAGINA: int = 500


@lru_cache()
def get_settings() -> Settings:
    """Retorna instância cacheada das configurações."""
    return Settings()


settings = get_settings()
