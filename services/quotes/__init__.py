# NG-HEADER: Nombre de archivo: __init__.py
# NG-HEADER: Ubicación: services/quotes/__init__.py
# NG-HEADER: Descripción: Cotizaciones por región: caché, agregación, estadísticas
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Cotizaciones de dólar por región."""

from services.quotes.aggregator import QuoteAggregator
from services.quotes.cache import RegionQuoteCache
from services.quotes.models import AverageStats, InvalidRegionError, Quote, Region, SlippageRecord
from services.quotes.stats import build_summary, compute_average, compute_slippage

__all__ = [
    "QuoteAggregator",
    "RegionQuoteCache",
    "AverageStats",
    "InvalidRegionError",
    "Quote",
    "Region",
    "SlippageRecord",
    "build_summary",
    "compute_average",
    "compute_slippage",
]
