#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: conftest.py
# NG-HEADER: Ubicación: tests/conftest.py
# NG-HEADER: Descripción: Fixtures y configuración compartida de Pytest.
# NG-HEADER: Lineamientos: Ver AGENTS.md
import os
import sys
from pathlib import Path
from typing import Optional

import pytest
import pytest_asyncio

# Asegurar path del proyecto antes de importar módulos internos
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.append(str(project_root))

# -------- Entorno base de tests --------
# DB en memoria compartida; el engine la convierte a URI con StaticPool
os.environ["DB_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("ENV", "dev")

import db.models  # noqa: F401,E402
from db.base import Base  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from services.api import app  # noqa: E402
from services.quotes.aggregator import QuoteAggregator  # noqa: E402
from services.quotes.cache import RegionQuoteCache  # noqa: E402
from services.quotes.models import Region  # noqa: E402
from services.routers.quotes import get_aggregator  # noqa: E402


@pytest_asyncio.fixture
async def session_factory():
    """DB limpia por test (SQLite en memoria, engine propio). Retorna el sessionmaker."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


class FakeClock:
    """Reloj manual para el caché (segundos)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAsyncClient:
    """Sustituto de httpx.AsyncClient: sólo se usa como context manager."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class PageServer:
    """Fetcher en memoria: URL -> HTML (o excepción). Registra cada llamada."""

    def __init__(self, pages: dict) -> None:
        self.pages = pages
        self.calls: list[str] = []

    async def __call__(self, url: str, client) -> Optional[str]:
        self.calls.append(url)
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        return page


class RecordingPersister:
    def __init__(self) -> None:
        self.batches: list = []

    async def __call__(self, quotes) -> int:
        self.batches.append(list(quotes))
        return len(quotes)


TEST_SOURCES = {
    Region.AR: ("https://ar-uno.test", "https://ar-dos.test", "https://ar-tres.test"),
    Region.BR: ("https://br-uno.test",),
}

TEST_PAGES = {
    "https://ar-uno.test": "<div class='cotizacion'>Compra: 850,00 Venta: 870,00</div>",
    "https://ar-dos.test": "<div><span class='compra'>860</span><span class='venta'>880</span></div>",
    "https://ar-tres.test": None,
    "https://br-uno.test": "<p>1 USD = 5,40</p>",
}


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def page_server() -> PageServer:
    return PageServer(dict(TEST_PAGES))


@pytest.fixture()
def persister() -> RecordingPersister:
    return RecordingPersister()


@pytest.fixture()
def aggregator(clock, page_server, persister) -> QuoteAggregator:
    return QuoteAggregator(
        cache=RegionQuoteCache(60, clock=clock),
        sources=TEST_SOURCES,
        fetcher=page_server,
        persist=persister,
        client_factory=FakeAsyncClient,
        now_ms=lambda: 1_700_000_000_000,
    )


@pytest.fixture()
def api_client(aggregator):
    """Cliente HTTP con el agregador de prueba inyectado (sin red)."""
    app.dependency_overrides[get_aggregator] = lambda: aggregator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_aggregator, None)
