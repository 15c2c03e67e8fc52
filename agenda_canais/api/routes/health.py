"""
Rota de health check (liveness).
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from agenda_canais.core.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    """Sempre 200 se a aplicacao esta rodando."""
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
