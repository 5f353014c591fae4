"""Routers FastAPI."""
