#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: test_runserver.py
# NG-HEADER: Ubicación: tests/unit/test_runserver.py
# NG-HEADER: Descripción: Tests del entry point (nivel de log pasado a Uvicorn)
# NG-HEADER: Lineamientos: Ver AGENTS.md

import pytest

from agent_core.config import settings
from services import runserver


@pytest.mark.parametrize("raw,expected", [
    ("INFO", "info"),
    ("debug", "debug"),
    (" Warning ", "warning"),
    ("verbose", "info"),
    ("", "info"),
    (None, "info"),
])
def test_uvicorn_log_level(raw, expected):
    assert runserver.uvicorn_log_level(raw) == expected


def test_main_with_unknown_level_falls_back_to_info(monkeypatch):
    calls = []
    monkeypatch.setattr(runserver.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(settings, "log_level", "verbose")

    runserver.main()

    [(app, kwargs)] = calls
    assert app == "services.api:app"
    assert kwargs["log_level"] == "info"
    assert kwargs["port"] == settings.port
