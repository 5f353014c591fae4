#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: __init__.py
# NG-HEADER: Ubicación: workers/scraping/__init__.py
# NG-HEADER: Descripción: Módulo de scraping de cotizaciones desde páginas públicas
# NG-HEADER: Lineamientos: Ver AGENTS.md

"""
Módulo de scraping para obtener cotizaciones de dólar desde páginas públicas.

Este módulo proporciona:
- Descarga de páginas con cabeceras de navegador (httpx)
- Extracción heurística de compra/venta desde HTML (BeautifulSoup)
- Normalización de números con separadores ambiguos
"""

from workers.scraping.page_fetcher import fetch_page
from workers.scraping.price_normalizer import normalize
from workers.scraping.quote_extractor import PricePair, extract

__all__ = [
    "fetch_page",
    "normalize",
    "extract",
    "PricePair",
]
