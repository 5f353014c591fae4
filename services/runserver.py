"""Servidor de desarrollo local.

Lee host/puerto/nivel de log de la configuración y arranca Uvicorn con la app
del cotizador.
"""

from __future__ import annotations

import os

import uvicorn
from uvicorn.config import LOG_LEVELS

from agent_core.config import settings


def uvicorn_log_level(raw: str | None) -> str:
    """Nivel aceptado por Uvicorn; valores desconocidos caen a ``info``."""
    level = (raw or "").strip().lower()
    return level if level in LOG_LEVELS else "info"


def main() -> None:
    reload = os.getenv("RELOAD", "0") == "1"
    uvicorn.run(
        "services.api:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_level=uvicorn_log_level(settings.log_level),
        access_log=True,
    )


if __name__ == "__main__":
    main()
