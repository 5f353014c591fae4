#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: quotes.py
# NG-HEADER: Ubicación: services/routers/quotes.py
# NG-HEADER: Descripción: Endpoints de cotizaciones, promedio, slippage y resumen
# NG-HEADER: Lineamientos: Ver AGENTS.md

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from agent_core.config import settings
from services.quotes.aggregator import QuoteAggregator
from services.quotes.cache import RegionQuoteCache
from services.quotes.models import InvalidRegionError, Quote, Region
from services.quotes.stats import build_summary, compute_average, compute_slippage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["quotes"])


# Schemas de respuesta
class QuoteItem(BaseModel):
    buy_price: Optional[float] = Field(None, description="Precio de compra publicado por la fuente")
    sell_price: Optional[float] = Field(None, description="Precio de venta publicado por la fuente")
    source: str = Field(description="URL de la fuente")


class QuoteDetail(QuoteItem):
    retrieved_at: int = Field(description="Momento de la descarga (epoch ms)")


class AverageResponse(BaseModel):
    average_buy_price: Optional[float] = None
    average_sell_price: Optional[float] = None


class SlippageItem(BaseModel):
    source: str
    buy_price_slippage: Optional[float] = Field(None, description="(compra - promedio) / promedio")
    sell_price_slippage: Optional[float] = Field(None, description="(venta - promedio) / promedio")


class SummaryResponse(BaseModel):
    region: Region
    quotes: list[QuoteDetail]
    average: AverageResponse
    slippage: list[SlippageItem]


_aggregator: Optional[QuoteAggregator] = None


def get_aggregator() -> QuoteAggregator:
    """Agregador único del proceso (sobrescribible en tests vía dependency_overrides)."""
    global _aggregator
    if _aggregator is None:
        _aggregator = QuoteAggregator(cache=RegionQuoteCache(settings.quotes_cache_ttl_seconds))
    return _aggregator


def region_param(
    region: Optional[str] = Query("ar", description="Región: 'ar' o 'br' (sin distinguir mayúsculas)"),
) -> Region:
    try:
        return Region.parse(region, default=Region.AR)
    except InvalidRegionError:
        raise HTTPException(status_code=400, detail="region must be 'br' or 'ar'")


async def _load(aggregator: QuoteAggregator, region: Region, action: str) -> list[Quote]:
    try:
        return await aggregator.get_quotes(region)
    except Exception as e:
        logger.error(f"[quotes] Error en {action} ({region.value}): {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"failed to {action}")


@router.get("/quotes", response_model=list[QuoteItem], summary="Cotizaciones crudas por fuente")
async def list_quotes(
    region: Region = Depends(region_param),
    aggregator: QuoteAggregator = Depends(get_aggregator),
):
    quotes = await _load(aggregator, region, "fetch quotes")
    return [q.as_public() for q in quotes]


@router.get("/average", response_model=AverageResponse, summary="Promedio de compra y venta")
async def average_quotes(
    region: Region = Depends(region_param),
    aggregator: QuoteAggregator = Depends(get_aggregator),
):
    quotes = await _load(aggregator, region, "compute average")
    return compute_average(quotes).as_dict()


@router.get("/slippage", response_model=list[SlippageItem], summary="Desvío de cada fuente respecto del promedio")
async def slippage_quotes(
    region: Region = Depends(region_param),
    aggregator: QuoteAggregator = Depends(get_aggregator),
):
    quotes = await _load(aggregator, region, "compute slippage")
    average = compute_average(quotes)
    return [s.as_dict() for s in compute_slippage(quotes, average)]


@router.get("/summary", response_model=SummaryResponse, summary="Cotizaciones, promedio y slippage combinados")
async def summary_quotes(
    region: Region = Depends(region_param),
    aggregator: QuoteAggregator = Depends(get_aggregator),
):
    quotes = await _load(aggregator, region, "fetch summary")
    return build_summary(region, quotes)
