#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: test_quotes_api.py
# NG-HEADER: Ubicación: tests/test_quotes_api.py
# NG-HEADER: Descripción: Tests de los endpoints /quotes, /average, /slippage y /summary
# NG-HEADER: Lineamientos: Ver AGENTS.md

"""Endpoints de cotizaciones con el agregador de prueba (páginas en memoria)."""

import pytest

AR_SOURCES = ["https://ar-uno.test", "https://ar-dos.test", "https://ar-tres.test"]
INVALID_REGION = {"detail": "region must be 'br' or 'ar'"}


def test_quotes_default_region_is_ar(api_client):
    r = api_client.get("/quotes")
    assert r.status_code == 200
    assert r.json() == [
        {"buy_price": 850.0, "sell_price": 870.0, "source": AR_SOURCES[0]},
        {"buy_price": 860.0, "sell_price": 880.0, "source": AR_SOURCES[1]},
        {"buy_price": None, "sell_price": None, "source": AR_SOURCES[2]},
    ]


@pytest.mark.parametrize("region", ["br", "BR", "Br"])
def test_quotes_region_case_insensitive(api_client, region):
    r = api_client.get("/quotes", params={"region": region})
    assert r.status_code == 200
    assert r.json() == [{"buy_price": 5.4, "sell_price": 5.4, "source": "https://br-uno.test"}]


def test_empty_region_uses_default(api_client):
    r = api_client.get("/quotes?region=")
    assert r.status_code == 200
    assert [q["source"] for q in r.json()] == AR_SOURCES


@pytest.mark.parametrize("path", ["/quotes", "/average", "/slippage", "/summary"])
def test_invalid_region_is_400(api_client, page_server, path):
    r = api_client.get(path, params={"region": "cl"})
    assert r.status_code == 400
    assert r.json() == INVALID_REGION
    # no se consulta ninguna fuente
    assert page_server.calls == []


@pytest.mark.parametrize("query", ["region=ar&region=xx", "region=123", "region=%20ar%20", "region[]=ar&region=cl"])
def test_odd_region_values_are_400_never_422(api_client, query):
    r = api_client.get(f"/quotes?{query}")
    assert r.status_code == 400
    assert r.json() == INVALID_REGION


def test_average(api_client):
    r = api_client.get("/average", params={"region": "ar"})
    assert r.status_code == 200
    assert r.json() == {"average_buy_price": 855.0, "average_sell_price": 875.0}


def test_average_without_data_is_null(api_client, page_server):
    page_server.pages.clear()
    r = api_client.get("/average", params={"region": "br"})
    assert r.status_code == 200
    assert r.json() == {"average_buy_price": None, "average_sell_price": None}


def test_slippage(api_client):
    r = api_client.get("/slippage")
    assert r.status_code == 200
    data = r.json()
    assert [s["source"] for s in data] == AR_SOURCES
    assert data[0]["buy_price_slippage"] == pytest.approx(-0.005848)
    assert data[0]["sell_price_slippage"] == pytest.approx(-0.005714)
    assert data[1]["buy_price_slippage"] == pytest.approx(0.005848)
    assert data[2] == {"source": AR_SOURCES[2], "buy_price_slippage": None, "sell_price_slippage": None}


def test_summary(api_client):
    r = api_client.get("/summary", params={"region": "AR"})
    assert r.status_code == 200
    data = r.json()
    assert data["region"] == "ar"
    assert [q["source"] for q in data["quotes"]] == AR_SOURCES
    assert all(q["retrieved_at"] == 1_700_000_000_000 for q in data["quotes"])
    assert data["average"] == {"average_buy_price": 855.0, "average_sell_price": 875.0}
    assert len(data["slippage"]) == 3


def test_endpoints_share_cached_cycle(api_client, page_server):
    for path in ("/quotes", "/average", "/slippage", "/summary"):
        assert api_client.get(path).status_code == 200
    assert sorted(page_server.calls) == sorted(AR_SOURCES)


@pytest.mark.parametrize("path,detail", [
    ("/quotes", "failed to fetch quotes"),
    ("/average", "failed to compute average"),
    ("/slippage", "failed to compute slippage"),
    ("/summary", "failed to fetch summary"),
])
def test_internal_failure_is_generic_500(api_client, aggregator, path, detail):
    async def broken_persist(quotes):
        raise RuntimeError("database is locked")

    aggregator._persist = broken_persist
    r = api_client.get(path)
    assert r.status_code == 500
    assert r.json() == {"detail": detail}
    assert "locked" not in r.text


def test_correlation_id_header(api_client):
    r = api_client.get("/quotes", headers={"X-Correlation-Id": "abc-123"})
    assert r.headers["X-Correlation-Id"] == "abc-123"
    assert api_client.get("/average").headers["X-Correlation-Id"].startswith("req-")
