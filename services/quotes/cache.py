# NG-HEADER: Nombre de archivo: cache.py
# NG-HEADER: Ubicación: services/quotes/cache.py
# NG-HEADER: Descripción: Caché en memoria de cotizaciones con TTL por región
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Caché en memoria de cotizaciones, una entrada por región.

Proceso single-worker; si se despliega multi-proceso conviene un backend
compartido. Cada región vence por su cuenta, así que alternar entre ``ar`` y
``br`` no invalida la otra.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from services.quotes.models import Quote, Region


@dataclass(frozen=True)
class CacheEntry:
    region: Region
    timestamp: float
    quotes: tuple[Quote, ...]


class RegionQuoteCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[Region, CacheEntry] = {}

    def get(self, region: Region) -> Optional[tuple[Quote, ...]]:
        """Devuelve las cotizaciones si la entrada sigue vigente; si venció la descarta."""
        entry = self._entries.get(region)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            self._entries.pop(region, None)
            return None
        return entry.quotes

    def set(self, region: Region, quotes: Sequence[Quote]) -> CacheEntry:
        entry = CacheEntry(region=region, timestamp=self._clock(), quotes=tuple(quotes))
        self._entries[region] = entry
        return entry

    def invalidate(self, region: Optional[Region] = None) -> None:
        if region is None:
            self._entries.clear()
        else:
            self._entries.pop(region, None)
