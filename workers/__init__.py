"""Scraping de páginas de cotizaciones."""
