# NG-HEADER: Nombre de archivo: models.py
# NG-HEADER: Ubicación: db/models.py
# NG-HEADER: Descripción: Modelo ORM del registro append-only de cotizaciones.
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Modelos de la base de datos."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import BigInteger, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class QuoteObservation(Base):
    """Una fila por cotización obtenida en cada ciclo de fetch.

    La tabla sólo se escribe desde la app; queda para análisis offline.
    ``retrieved_at`` se guarda en epoch milisegundos.
    """

    __tablename__ = "quotes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    source: Mapped[str] = mapped_column(Text)
    buy_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    sell_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    region: Mapped[str] = mapped_column(String(2), index=True)
    retrieved_at: Mapped[int] = mapped_column(BigInteger, index=True)

    def __repr__(self) -> str:
        return (
            f"<QuoteObservation(region='{self.region}', source='{self.source}', "
            f"buy={self.buy_price}, sell={self.sell_price})>"
        )
