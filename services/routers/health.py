# NG-HEADER: Nombre de archivo: health.py
# NG-HEADER: Ubicación: services/routers/health.py
# NG-HEADER: Descripción: Endpoints de healthcheck y estado de servicios.
# NG-HEADER: Lineamientos: Ver AGENTS.md
from __future__ import annotations

"""Endpoints de health.

- Liveness básico (`/health`), con timestamp en epoch ms
- Conectividad con la base de observaciones (`/health/db`)
"""

import time
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_db


router = APIRouter(prefix="/health", tags=["health"])
START_TIME = time.monotonic()


def _status(ok: bool, detail: str | None = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"ok": ok}
    if detail:
        out["detail"] = detail
    return out


@router.get("")
async def health_root() -> Dict[str, Any]:
    """Liveness simple del backend (si responde, está vivo)."""
    return {"status": "ok", "ts": int(time.time() * 1000)}


@router.get("/db")
async def health_db(db: AsyncSession = Depends(get_db)) -> Dict[str, Any]:
    """Valida conexión a la base de datos (SELECT 1)."""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        return _status(False, detail=f"{type(e).__name__}: {e}")
    out = _status(True)
    out["uptime_s"] = round(time.monotonic() - START_TIME, 1)
    return out
