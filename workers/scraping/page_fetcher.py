#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: page_fetcher.py
# NG-HEADER: Ubicación: workers/scraping/page_fetcher.py
# NG-HEADER: Descripción: Descarga de páginas de cotizaciones con cabeceras de navegador
# NG-HEADER: Lineamientos: Ver AGENTS.md

"""
Descarga del HTML de las fuentes de cotizaciones.

Cada request usa cabeceras fijas de navegador y un timeout fijo. No hay
reintentos: un fetch fallido devuelve None y se registra como warning; el
extractor lo convierte en un par vacío.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from agent_core.config import settings

logger = logging.getLogger(__name__)


# Headers para evitar bloqueos básicos
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://www.google.com/",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
}


def make_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Cliente compartido por un ciclo de fetch (cerrarlo al terminar)."""
    return httpx.AsyncClient(
        timeout=timeout or settings.fetch_timeout_seconds,
        headers=BROWSER_HEADERS,
        follow_redirects=True,
    )


async def fetch_page(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """
    Descarga una página y devuelve su cuerpo como texto.

    Args:
        url: URL de la fuente
        client: Cliente httpx reutilizable; si falta se crea uno para esta llamada
        timeout: Timeout en segundos (default: ``FETCH_TIMEOUT_SECONDS``)

    Returns:
        El HTML como str, o None ante cualquier error de red, timeout o HTTP.
    """
    if client is None:
        async with make_client(timeout) as own_client:
            return await fetch_page(url, client=own_client)

    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException:
        logger.warning(f"[fetch] Timeout al acceder a {url}")
        return None
    except httpx.HTTPStatusError as e:
        logger.warning(f"[fetch] Error HTTP {e.response.status_code} al acceder a {url}")
        return None
    except httpx.HTTPError as e:
        logger.warning(f"[fetch] Error de red al acceder a {url}: {type(e).__name__}: {e}")
        return None

    logger.debug(f"[fetch] {url} -> {response.status_code} ({len(response.content)} bytes)")
    return response.text
