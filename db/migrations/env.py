# NG-HEADER: Nombre de archivo: env.py
# NG-HEADER: Ubicación: db/migrations/env.py
# NG-HEADER: Descripción: Script de entorno Alembic: carga .env, prepara logging y ejecuta migraciones
# NG-HEADER: Lineamientos: Ver AGENTS.md
import os
import logging
import traceback
from pathlib import Path
from logging.config import fileConfig
from urllib.parse import urlsplit

from alembic import context
from alembic.script import ScriptDirectory
from alembic.runtime.migration import MigrationContext
from sqlalchemy import engine_from_config
from sqlalchemy.pool import NullPool
from dotenv import load_dotenv

# Logger estandar para todas las operaciones del módulo
logger = logging.getLogger("alembic.env")

# Config Alembic
config = context.config

# Logging (si alembic.ini tiene secciones de logging)
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

script = ScriptDirectory.from_config(config)

# === Cargar variables desde .env (raíz del repo, dos niveles hacia arriba) ===
REPO_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(REPO_ROOT / ".env")

# === Cargar DB_URL desde entorno ===
db_url = os.getenv("DB_URL")
if not db_url:
    raise RuntimeError("DB_URL no definida en entorno/.env")


def sync_url(url: str) -> str:
    """La app usa drivers async; Alembic corre con el driver síncrono equivalente."""
    return url.replace("+aiosqlite", "")


db_url = sync_url(db_url)
parts = urlsplit(db_url)
if "@" in parts.netloc:
    # Log seguro del DB_URL sin credenciales
    user = parts.netloc.split("@")[0].split(":")[0]
    host = parts.netloc.split("@")[1]
    logger.info("DB_URL: %s", parts._replace(netloc=f"{user}:***@{host}").geturl())
else:
    logger.info("DB_URL: %s", db_url)

# === Importar metadatos del proyecto ===
from db.base import Base  # noqa: E402
import db.models  # noqa: F401,E402

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = db_url
    connectable = engine_from_config(
        section,
        prefix="sqlalchemy.",
        poolclass=NullPool,
        future=True,
    )
    with connectable.connect() as connection:
        current_rev = MigrationContext.configure(connection).get_current_revision()
        logger.info("Revisión actual: %s", current_rev)
        logger.info("Heads: %s", ", ".join(script.get_heads()))

        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        try:
            with context.begin_transaction():
                context.run_migrations()
            logger.info("Migraciones aplicadas con éxito")
        except Exception:  # pragma: no cover - logging
            logger.error("Error al ejecutar migraciones:\n%s", traceback.format_exc())
            raise
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
