#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: quote_extractor.py
# NG-HEADER: Ubicación: workers/scraping/quote_extractor.py
# NG-HEADER: Descripción: Extracción heurística de precios de compra/venta desde HTML
# NG-HEADER: Lineamientos: Ver AGENTS.md

"""
Extracción de cotizaciones (compra/venta) desde HTML de estructura desconocida.

El HTML se parsea una sola vez con BeautifulSoup y se le aplica una cadena
ordenada de estrategias. Cada estrategia es una función pura
``(PageView) -> PricePair`` y sólo completa los lados que las anteriores
dejaron vacíos:

1. Texto etiquetado ("compra: 850,50", "venta 870")
2. Selectores CSS conocidos (.compra, .buy-price, .venta, ...)
3. Patrón "1 USD = X" (mismo valor para ambos lados)
4. Candidatos numéricos del texto visible, filtrados por banda 1 < n < 10000

Uso:
    from workers.scraping.quote_extractor import extract

    pair = extract(html)
    pair.buy, pair.sell   # floats o None
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from bs4 import BeautifulSoup

from workers.scraping.price_normalizer import normalize

logger = logging.getLogger(__name__)


RawMarkup = Union[str, bytes]

# Tags cuyo texto no se ve en la página
INVISIBLE_TAGS = ["script", "style", "noscript", "template"]

BUY_SELECTORS = (".compra", ".buy", ".valor-compra", ".price--buy", ".buy-price")
SELL_SELECTORS = (".venta", ".sell", ".valor-venta", ".price--sell", ".sell-price")

BUY_LABEL_RE = re.compile(r"compra[:\s]*([0-9.,]+)")
SELL_LABEL_RE = re.compile(r"venta[:\s]*([0-9.,]+)")
ONE_UNIT_RE = re.compile(r"(?<![0-9.,])1\s*(?:USD|Dólar|Dolar)\s*[=:\-]\s*([0-9.,]+)", re.IGNORECASE)
CANDIDATE_RE = re.compile(r"[0-9]+(?:[.,][0-9]{1,4})?")

MAX_CANDIDATES = 20
PLAUSIBLE_MIN = 1.0
PLAUSIBLE_MAX = 10000.0


@dataclass(frozen=True)
class PricePair:
    """Par compra/venta; cada lado puede faltar de forma independiente."""

    buy: Optional[float] = None
    sell: Optional[float] = None

    @property
    def complete(self) -> bool:
        return self.buy is not None and self.sell is not None

    def fill_missing(self, other: "PricePair") -> "PricePair":
        """Completa sólo los lados vacíos con los de ``other``."""
        return PricePair(
            buy=self.buy if self.buy is not None else other.buy,
            sell=self.sell if self.sell is not None else other.sell,
        )


@dataclass(frozen=True)
class PageView:
    """HTML ya parseado y texto visible, compartidos por todas las estrategias."""

    soup: BeautifulSoup
    visible_text: str


def _as_price(value: Optional[float]) -> Optional[float]:
    # 0 o negativo no es una cotización
    if value is None or value <= 0:
        return None
    return value


def _collapse(text: str) -> str:
    return " ".join(text.split()).casefold()


def parse_page(markup: RawMarkup) -> PageView:
    """Parsea el HTML descartando el texto no visible (scripts, estilos)."""
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup.find_all(INVISIBLE_TAGS):
        tag.decompose()
    root = soup.body or soup
    # Sin separador entre tags: "850<sup>,50</sup>" se lee como "850,50"
    return PageView(soup=soup, visible_text=root.get_text())


def extract_labeled_text(page: PageView) -> PricePair:
    """Busca "compra"/"venta" seguidos de un número, en orden de documento."""
    buy: Optional[float] = None
    sell: Optional[float] = None
    for element in page.soup.find_all(True):
        if buy is not None and sell is not None:
            break
        text = _collapse(element.get_text())
        if not text:
            continue
        if buy is None and "compra" in text:
            match = BUY_LABEL_RE.search(text)
            if match:
                buy = _as_price(normalize(match.group(1)))
        if sell is None and "venta" in text:
            match = SELL_LABEL_RE.search(text)
            if match:
                sell = _as_price(normalize(match.group(1)))
    return PricePair(buy=buy, sell=sell)


def _first_selector_value(page: PageView, selectors: Sequence[str]) -> Optional[float]:
    for selector in selectors:
        element = page.soup.select_one(selector)
        if element is None:
            continue
        value = _as_price(normalize(element.get_text()))
        if value is not None:
            return value
    return None


def extract_known_selectors(page: PageView) -> PricePair:
    """Prueba clases CSS habituales en widgets de cotización."""
    return PricePair(
        buy=_first_selector_value(page, BUY_SELECTORS),
        sell=_first_selector_value(page, SELL_SELECTORS),
    )


def extract_one_unit_rate(page: PageView) -> PricePair:
    """Patrón "1 USD = X": un único valor que sirve para compra y venta."""
    match = ONE_UNIT_RE.search(page.visible_text)
    if not match:
        return PricePair()
    value = _as_price(normalize(match.group(1)))
    return PricePair(buy=value, sell=value)


def plausible_candidates(text: str) -> list[float]:
    """
    Números con forma de precio en orden de primera aparición.

    Se deduplican los textos, se toman los primeros 20 y se descartan los
    valores fuera de la banda (1, 10000) para evitar años, ids o píxeles
    grandes. Un año como 2024 cae dentro de la banda y puede colarse.
    """
    tokens = list(dict.fromkeys(CANDIDATE_RE.findall(text)))[:MAX_CANDIDATES]
    values: list[float] = []
    for token in tokens:
        value = normalize(token)
        if value is not None and PLAUSIBLE_MIN < value < PLAUSIBLE_MAX:
            values.append(value)
    return values


def extract_numeric_fallback(page: PageView) -> PricePair:
    """Primer candidato como compra, segundo como venta (o el primero si hay uno solo)."""
    candidates = plausible_candidates(page.visible_text)
    if not candidates:
        return PricePair()
    sell = candidates[1] if len(candidates) > 1 else candidates[0]
    return PricePair(buy=candidates[0], sell=sell)


Strategy = Callable[[PageView], PricePair]

STRATEGIES: tuple[Strategy, ...] = (
    extract_labeled_text,
    extract_known_selectors,
    extract_one_unit_rate,
    extract_numeric_fallback,
)


def extract(markup: Optional[RawMarkup], strategies: Sequence[Strategy] = STRATEGIES) -> PricePair:
    """
    Obtiene el mejor par compra/venta posible a partir del HTML.

    Args:
        markup: HTML crudo de la página, o None si el fetch falló
        strategies: Cadena ordenada de estrategias (por defecto las cuatro)

    Returns:
        PricePair con cada lado resuelto o None. Nunca lanza excepciones:
        una estrategia que falla se registra y se saltea.
    """
    if not markup:
        return PricePair()

    try:
        page = parse_page(markup)
    except Exception as e:
        logger.warning(f"[extract] No se pudo parsear el HTML: {type(e).__name__}: {e}")
        return PricePair()

    result = PricePair()
    for strategy in strategies:
        if result.complete:
            break
        name = getattr(strategy, "__name__", repr(strategy))
        try:
            found = strategy(page)
        except Exception as e:
            logger.warning(f"[extract] Estrategia {name} falló: {e}")
            continue
        if found.buy is not None or found.sell is not None:
            logger.debug(f"[extract] {name} -> compra={found.buy} venta={found.sell}")
        result = result.fill_missing(found)
    return result
