# NG-HEADER: Nombre de archivo: base.py
# NG-HEADER: Ubicación: db/base.py
# NG-HEADER: Descripción: Declaración base de SQLAlchemy para las observaciones de cotizaciones.
# NG-HEADER: Lineamientos: Ver AGENTS.md
"""Declarative base con convención de nombres para índices y constraints."""
from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))
