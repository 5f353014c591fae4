"""Configuración compartida del cotizador."""
