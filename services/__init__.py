"""Servicios HTTP y de dominio del cotizador."""
