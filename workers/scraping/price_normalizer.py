#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: price_normalizer.py
# NG-HEADER: Ubicación: workers/scraping/price_normalizer.py
# NG-HEADER: Descripción: Normalización de números con separadores ambiguos
# NG-HEADER: Lineamientos: Ver AGENTS.md

"""
Normalización de valores numéricos extraídos de páginas de cotizaciones.

Las páginas publican números con coma o punto como separador decimal o de
miles sin declarar el formato. Este módulo infiere el formato y devuelve un
float, o None si el texto no contiene un número utilizable.

Uso:
    from workers.scraping.price_normalizer import normalize

    normalize("$ 1.234,56")   # 1234.56
    normalize("1,234.56")     # 1234.56
    normalize("sin dato")     # None
"""

import logging
import math
import re
from typing import Optional

logger = logging.getLogger(__name__)


# Todo lo que no sea dígito, separador o signo
_NON_NUMERIC_RE = re.compile(r"[^0-9.,\-]")
# Prefijo numérico válido más largo (equivalente a un parseFloat)
_FLOAT_PREFIX_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def strip_non_numeric(raw: str) -> str:
    """
    Elimina símbolos de moneda, espacios y texto dejando dígitos, ``,``, ``.`` y ``-``.

    Examples:
        >>> strip_non_numeric("US$ 1.250,00")
        '1.250,00'
        >>> strip_non_numeric("Compra: -3,5 %")
        '-3,5'
    """
    return _NON_NUMERIC_RE.sub("", raw.strip())


def normalize_separators(clean_text: str) -> str:
    """
    Lleva un número con separadores ambiguos al formato ``XXXX.XX``.

    Reglas:
    - Con coma y punto: el separador que aparece más a la derecha es el
      decimal; el otro se descarta como separador de miles.
    - Sólo coma: la coma es decimal (convención es-AR / pt-BR). Una coma sola
      nunca se interpreta como separador de miles.
    - Sólo punto o ninguno: el punto es decimal.

    Examples:
        >>> normalize_separators("1.234,56")
        '1234.56'
        >>> normalize_separators("1,234.56")
        '1234.56'
        >>> normalize_separators("1234,56")
        '1234.56'
    """
    if "," in clean_text and "." in clean_text:
        if clean_text.rfind(".") < clean_text.rfind(","):
            # Formato europeo: 1.234,56
            return clean_text.replace(".", "").replace(",", ".", 1)
        # Formato americano: 1,234.56
        return clean_text.replace(",", "")
    if "," in clean_text:
        return clean_text.replace(".", "").replace(",", ".", 1)
    return clean_text.replace(",", "")


def normalize(raw: Optional[str]) -> Optional[float]:
    """
    Convierte un texto numérico con formato regional ambiguo a float.

    Args:
        raw: Texto crudo (puede incluir símbolos, espacios y signo)

    Returns:
        El valor como float si es finito; None si el texto no tiene un número.
        No lanza excepciones: la ausencia es un resultado esperado.

    Examples:
        >>> normalize("1.234,56")
        1234.56
        >>> normalize("abc") is None
        True
    """
    if raw is None or not isinstance(raw, str):
        return None

    clean_text = strip_non_numeric(raw)
    if not clean_text:
        return None

    normalized = normalize_separators(clean_text)
    match = _FLOAT_PREFIX_RE.match(normalized)
    if not match:
        logger.debug(f"Sin número utilizable en '{raw}' (normalizado: '{normalized}')")
        return None

    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value
