# NG-HEADER: Nombre de archivo: config.py
# NG-HEADER: Ubicación: agent_core/config.py
# NG-HEADER: Descripción: Constantes y configuración central del cotizador.
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Configuración central del cotizador."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Carga automática de variables definidas en .env
load_dotenv()


def _expand_local(origins: list[str]) -> list[str]:
    """Duplica ``localhost``/``127.0.0.1`` para evitar errores de CORS en desarrollo."""
    out: set[str] = set()
    for o in origins:
        o = o.strip()
        if not o:
            continue
        out.add(o)
        if o.startswith("http://localhost:"):
            out.add(o.replace("http://localhost:", "http://127.0.0.1:"))
        if o.startswith("http://127.0.0.1:"):
            out.add(o.replace("http://127.0.0.1:", "http://localhost:"))
    return sorted(out)


@dataclass
class Settings:
    """Parámetros de configuración leídos de variables de entorno."""

    env: str = os.getenv("ENV", "dev")
    db_url: str = os.getenv("DB_URL", "")
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Vida de una entrada del caché de cotizaciones (por región)
    quotes_cache_ttl_seconds: float = float(os.getenv("QUOTES_CACHE_TTL_SECONDS", "60"))
    # Timeout fijo aplicado a cada fuente; no hay reintentos
    fetch_timeout_seconds: float = float(os.getenv("FETCH_TIMEOUT_SECONDS", "12"))
    allowed_origins: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.db_url:
            if self.env == "dev":
                # Fallback local: archivo SQLite junto al proceso
                self.db_url = "sqlite+aiosqlite:///./quotes.db"
            else:
                raise RuntimeError("DB_URL debe definirse en el entorno")

        if self.quotes_cache_ttl_seconds < 0:
            raise RuntimeError("QUOTES_CACHE_TTL_SECONDS no puede ser negativo")
        if self.fetch_timeout_seconds <= 0:
            raise RuntimeError("FETCH_TIMEOUT_SECONDS debe ser mayor a cero")

        raw = os.getenv("ALLOWED_ORIGINS", "").split(",")
        origins = [o.strip() for o in raw if o.strip()]
        if self.env == "dev":
            # En dev la API queda abierta, igual que un cors() sin opciones
            origins = _expand_local(origins) if origins else ["*"]
        elif not origins:
            raise RuntimeError(
                "En producción, ALLOWED_ORIGINS debe definir al menos un origen"
            )
        self.allowed_origins = origins


settings = Settings()
