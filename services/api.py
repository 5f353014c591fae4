# NG-HEADER: Nombre de archivo: api.py
# NG-HEADER: Ubicación: services/api.py
# NG-HEADER: Descripción: Aplicación FastAPI del cotizador, logging y middleware
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Aplicación FastAPI principal del cotizador."""

import logging
from logging.handlers import RotatingFileHandler
import os
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi import HTTPException as FastHTTPException
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from agent_core.config import settings
from db.session import engine, init_schema
from .routers import health, quotes

raw_level = settings.log_level or "INFO"
level_name = raw_level.strip().upper()
if level_name not in logging._nameToLevel:
    level_name = "INFO"
logger = logging.getLogger("cotizador")
logger.setLevel(level_name)
LOG_DIR = Path(__file__).resolve().parents[1] / "logs"
try:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
except OSError:
    pass
fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
stream_handler = logging.StreamHandler()
stream_handler.setFormatter(fmt)

file_handler = None
log_path = LOG_DIR / "backend.log"
try:
    with open(log_path, "a", encoding="utf-8"):
        pass
    # delay=True evita abrir el archivo hasta el primer log
    file_handler = RotatingFileHandler(
        str(log_path), maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8", delay=True
    )
    file_handler.setFormatter(fmt)
except OSError:
    # Sin permisos o archivo bloqueado: continuar solo con consola
    file_handler = None

handlers = [h for h in (file_handler, stream_handler) if h is not None]

# Los loggers de módulo (workers.*, services.*) escriben en los mismos handlers
for _name in ("cotizador", "services", "workers", "db"):
    _lg = logging.getLogger(_name)
    _lg.setLevel(level_name)
    if not _lg.handlers:
        for _h in handlers:
            _lg.addHandler(_h)

for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).handlers = handlers
    logging.getLogger(_name).setLevel(level_name)

# `redirect_slashes=False` evita redirecciones 307 entre `/ruta` y `/ruta/`,
# lo que rompe las solicitudes *preflight* de CORS.
app = FastAPI(title="Cotizador AR/BR", redirect_slashes=False)

ENDPOINTS = ("/quotes", "/average", "/slippage", "/summary")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Registra cada solicitud y captura excepciones con un correlation-id."""
    start = time.perf_counter()
    corr = request.headers.get("x-correlation-id") or request.headers.get("x-request-id")
    if not corr:
        # id liviano: epoch-ms + pid
        corr = f"req-{int(time.time()*1000):x}-{os.getpid():x}"
    try:
        resp = await call_next(request)
    except (FastHTTPException, StarletteHTTPException):
        # Deja que FastAPI maneje HTTPException (400/404, etc.)
        raise
    except Exception:
        dur = (time.perf_counter() - start) * 1000
        logger.exception("EXC %s %s cid=%s (%.2fms)", request.method, request.url.path, corr, dur)
        return JSONResponse({"detail": "internal server error"}, status_code=500)
    dur = (time.perf_counter() - start) * 1000
    resp.headers["X-Correlation-Id"] = corr
    logger.info("%s %s -> %s cid=%s (%.2fms)", request.method, request.url.path, resp.status_code, corr, dur)
    return resp


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials="*" not in settings.allowed_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(quotes.router)
app.include_router(health.router)


@app.on_event("startup")
async def _init_db():
    """Crea la tabla de observaciones si no existe."""
    try:
        await init_schema()
        logger.info("DB effective URL: %s", str(engine.url))
    except Exception:
        # Sin base el servicio arranca igual; cada escritura fallida responde 500
        logger.exception("No se pudo inicializar el esquema de cotizaciones")
    base = f"http://{settings.host}:{settings.port}"
    logger.info("Cotizador AR/BR escuchando en %s", base)
    for region in ("br", "ar"):
        for path in ENDPOINTS:
            logger.info("  %s%s?region=%s", base, path, region)
