"""Persistencia de observaciones de cotizaciones (SQLAlchemy async)."""
