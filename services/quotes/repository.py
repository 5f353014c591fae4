# NG-HEADER: Nombre de archivo: repository.py
# NG-HEADER: Ubicación: services/quotes/repository.py
# NG-HEADER: Descripción: Escritura del registro append-only de cotizaciones
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Persistencia de observaciones de cotizaciones (sólo escritura)."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.models import QuoteObservation
from services.quotes.models import Quote

logger = logging.getLogger(__name__)


def to_row(quote: Quote) -> QuoteObservation:
    return QuoteObservation(
        source=quote.source,
        buy_price=quote.buy_price,
        sell_price=quote.sell_price,
        region=quote.region.value,
        retrieved_at=quote.retrieved_at,
    )


class QuoteRepository:
    """Agrega una fila por cotización y ciclo. Los errores de base se propagan."""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None) -> None:
        if session_factory is None:
            from db.session import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory

    async def append(self, quotes: Sequence[Quote]) -> int:
        if not quotes:
            return 0
        async with self._session_factory() as session:
            session.add_all([to_row(q) for q in quotes])
            await session.commit()
        logger.debug(f"[quotes] {len(quotes)} observaciones guardadas ({quotes[0].region.value})")
        return len(quotes)
