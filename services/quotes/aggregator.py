# NG-HEADER: Nombre de archivo: aggregator.py
# NG-HEADER: Ubicación: services/quotes/aggregator.py
# NG-HEADER: Descripción: Fan-out de fetch+extracción por región con caché y persistencia
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Obtención de cotizaciones de todas las fuentes de una región.

En cada ciclo se lanza una tarea por fuente y se espera a que terminen todas.
Una fuente que falla produce una cotización vacía (compra/venta en None) y
nunca aborta el lote. El resultado se persiste y después se cachea.

No hay deduplicación de requests concurrentes: dos llamadas con el caché
vencido disparan dos ciclos completos.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Mapping, Optional, Sequence

import httpx

from services.quotes.cache import RegionQuoteCache
from services.quotes.models import Quote, Region
from services.quotes.repository import QuoteRepository
from services.quotes.sources import SOURCES
from workers.scraping.page_fetcher import fetch_page, make_client
from workers.scraping.quote_extractor import extract

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, httpx.AsyncClient], Awaitable[Optional[str]]]
Persister = Callable[[Sequence[Quote]], Awaitable[object]]


def _now_ms() -> int:
    return int(time.time() * 1000)


async def _default_fetcher(url: str, client: httpx.AsyncClient) -> Optional[str]:
    return await fetch_page(url, client=client)


class QuoteAggregator:
    def __init__(
        self,
        cache: RegionQuoteCache,
        sources: Mapping[Region, Sequence[str]] = SOURCES,
        fetcher: Fetcher = _default_fetcher,
        persist: Optional[Persister] = None,
        client_factory: Callable[[], httpx.AsyncClient] = make_client,
        now_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self.cache = cache
        self.sources = sources
        self._fetcher = fetcher
        self._persist = persist if persist is not None else QuoteRepository().append
        self._client_factory = client_factory
        self._now_ms = now_ms

    async def _fetch_one(
        self, url: str, region: Region, client: httpx.AsyncClient, retrieved_at: int
    ) -> Quote:
        try:
            markup = await self._fetcher(url, client)
            pair = extract(markup)
        except Exception as e:
            logger.warning(f"[quotes] Fuente {url} falló: {type(e).__name__}: {e}")
            return Quote(source=url, region=region, buy_price=None, sell_price=None, retrieved_at=retrieved_at)
        if pair.buy is None and pair.sell is None:
            logger.warning(f"[quotes] Sin precios en {url} ({region.value})")
        return Quote(
            source=url,
            region=region,
            buy_price=pair.buy,
            sell_price=pair.sell,
            retrieved_at=retrieved_at,
        )

    async def refresh(self, region: Region) -> list[Quote]:
        """Descarga todas las fuentes de la región, persiste y actualiza el caché."""
        urls = list(self.sources.get(region, ()))
        retrieved_at = self._now_ms()
        started = time.perf_counter()
        async with self._client_factory() as client:
            quotes = list(
                await asyncio.gather(
                    *(self._fetch_one(url, region, client, retrieved_at) for url in urls)
                )
            )
        logger.info(
            "[quotes] %s: %d fuentes, %d con datos (%.0fms)",
            region.value,
            len(quotes),
            sum(1 for q in quotes if q.buy_price is not None or q.sell_price is not None),
            (time.perf_counter() - started) * 1000,
        )
        await self._persist(quotes)
        self.cache.set(region, quotes)
        return quotes

    async def get_quotes(self, region: Region) -> list[Quote]:
        cached = self.cache.get(region)
        if cached is not None:
            logger.debug(f"[quotes] Cache hit para {region.value}")
            return list(cached)
        return await self.refresh(region)
