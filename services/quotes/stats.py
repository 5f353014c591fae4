# NG-HEADER: Nombre de archivo: stats.py
# NG-HEADER: Ubicación: services/quotes/stats.py
# NG-HEADER: Descripción: Promedio y slippage de cotizaciones entre fuentes
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Estadísticas sobre un conjunto de cotizaciones.

- Promedio por lado (compra/venta) sobre los valores presentes y finitos.
- Slippage: desvío relativo ``(precio - promedio) / promedio`` por fuente.

Todo se redondea a 6 decimales con empate hacia arriba (no al par). Un lado
sin datos queda en ``None`` (nunca 0).
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, Sequence

from services.quotes.models import AverageStats, Quote, Region, SlippageRecord

_QUANTUM = Decimal("0.000001")


def _round(value: float) -> float:
    # Decimal(value) es el valor binario exacto del float
    return float(Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def _mean(values: Iterable[Optional[float]]) -> Optional[float]:
    present = [v for v in values if v is not None and math.isfinite(v)]
    if not present:
        return None
    return _round(sum(present) / len(present))


def _relative(value: Optional[float], average: Optional[float]) -> Optional[float]:
    # Promedio 0 o precio no finito: se informa como ausente
    if value is None or average is None or average == 0 or not math.isfinite(value):
        return None
    return _round((value - average) / average)


def compute_average(quotes: Sequence[Quote]) -> AverageStats:
    return AverageStats(
        average_buy_price=_mean(q.buy_price for q in quotes),
        average_sell_price=_mean(q.sell_price for q in quotes),
    )


def compute_slippage(quotes: Sequence[Quote], average: AverageStats) -> list[SlippageRecord]:
    return [
        SlippageRecord(
            source=q.source,
            buy_price_slippage=_relative(q.buy_price, average.average_buy_price),
            sell_price_slippage=_relative(q.sell_price, average.average_sell_price),
        )
        for q in quotes
    ]


def build_summary(region: Region, quotes: Sequence[Quote]) -> dict[str, Any]:
    """Cotizaciones, promedio y slippage en un único payload."""
    average = compute_average(quotes)
    return {
        "region": region.value,
        "quotes": [q.as_detail() for q in quotes],
        "average": average.as_dict(),
        "slippage": [s.as_dict() for s in compute_slippage(quotes, average)],
    }
