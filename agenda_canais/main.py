"""
Agenda de Canais - API Principal
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agenda_canais.api.error_handlers import register_exception_handlers
from agenda_canais.api.routes import agendamentos, boards, capacidade, health
from agenda_canais.core.config import settings
from agenda_canais.core.logging import setup_logging

# Configurar logging
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gerencia startup e shutdown da aplicação."""
    logger.info(f"Iniciando {settings.APP_NAME}...")
    yield
    logger.info(f"Encerrando {settings.APP_NAME}...")


app = FastAPI(
    title=settings.APP_NAME,
    description="Agenda de capacidade dos canais de disparo",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Rotas
app.include_router(health.router, tags=["Health"])
app.include_router(capacidade.router)
app.include_router(agendamentos.router)
app.include_router(boards.router)


@app.get("/")
async def root():
    """Endpoint raiz."""
    return {
        "app": settings.APP_NAME,
        "status": "running",
        "docs": "/docs",
    }
