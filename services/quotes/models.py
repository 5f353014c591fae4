# NG-HEADER: Nombre de archivo: models.py
# NG-HEADER: Ubicación: services/quotes/models.py
# NG-HEADER: Descripción: Tipos de dominio de cotizaciones (región, cotización, estadísticas)
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Tipos de dominio del cotizador."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


class InvalidRegionError(ValueError):
    """La región pedida no es ``ar`` ni ``br``."""


class Region(str, Enum):
    AR = "ar"
    BR = "br"

    @classmethod
    def parse(cls, raw: Optional[str], default: "Region | None" = None) -> "Region":
        """Región sin distinguir mayúsculas; no recorta espacios. ``None``/vacío usa ``default``."""
        value = (raw or "").lower()
        if not value and default is not None:
            return default
        try:
            return cls(value)
        except ValueError:
            raise InvalidRegionError(f"region must be 'br' or 'ar' (got {raw!r})") from None


@dataclass(frozen=True)
class Quote:
    """Cotización de una fuente en un ciclo de fetch. ``retrieved_at`` en epoch ms."""

    source: str
    region: Region
    buy_price: Optional[float]
    sell_price: Optional[float]
    retrieved_at: int

    def as_public(self) -> dict[str, Any]:
        return {"buy_price": self.buy_price, "sell_price": self.sell_price, "source": self.source}

    def as_detail(self) -> dict[str, Any]:
        out = self.as_public()
        out["retrieved_at"] = self.retrieved_at
        return out


@dataclass(frozen=True)
class AverageStats:
    average_buy_price: Optional[float] = None
    average_sell_price: Optional[float] = None

    def as_dict(self) -> dict[str, Optional[float]]:
        return asdict(self)


@dataclass(frozen=True)
class SlippageRecord:
    source: str
    buy_price_slippage: Optional[float] = None
    sell_price_slippage: Optional[float] = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
