# NG-HEADER: Nombre de archivo: sources.py
# NG-HEADER: Ubicación: services/quotes/sources.py
# NG-HEADER: Descripción: Fuentes configuradas por región
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Páginas públicas consultadas por región, en el orden en que se reportan."""
from __future__ import annotations

from typing import Mapping, Sequence

from services.quotes.models import Region

SOURCES: Mapping[Region, Sequence[str]] = {
    Region.AR: (
        "https://dolarhoy.com",
        "https://www.dolarhoy.com",
        "https://www.cronista.com/MercadosOnline/moneda.html?id=ARSB",
        "https://dolarhoy.com/cotizaciondolarblue",
    ),
    Region.BR: (
        "https://wise.com/es/currency-converter/brl-to-usd-rate",
        "https://nubank.com.br/taxas-conversao/",
        "https://www.nomadglobal.com",
    ),
}
