#!/usr/bin/env python
# NG-HEADER: Nombre de archivo: test_price_normalizer.py
# NG-HEADER: Ubicación: tests/unit/test_price_normalizer.py
# NG-HEADER: Descripción: Tests unitarios para normalización de números
# NG-HEADER: Lineamientos: Ver AGENTS.md

"""
Tests unitarios para normalización de números con separadores ambiguos.

Cubre:
- Formato europeo (1.234,56) y americano (1,234.56)
- Coma sola como decimal
- Símbolos de moneda y texto alrededor del número
- Inputs sin número utilizable (vacíos, texto, None)
"""

import pytest

from workers.scraping.price_normalizer import (
    normalize,
    normalize_separators,
    strip_non_numeric,
)


class TestNormalizeValid:
    """Tests de normalización de valores válidos"""

    @pytest.mark.parametrize("raw,expected", [
        ("850,50", 850.5),
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("1234,56", 1234.56),
        ("870.25", 870.25),
        ("900", 900.0),
        ("$ 900", 900.0),
        ("R$ 5,40", 5.4),
        ("  870.25  ", 870.25),
        ("Compra: 1.250,00", 1250.0),
        ("-3,5", -3.5),
    ])
    def test_valid_formats(self, raw, expected):
        assert normalize(raw) == pytest.approx(expected)

    def test_dot_only_is_decimal(self):
        """Con sólo punto, el punto es decimal aunque parezca de miles"""
        assert normalize("1.250") == pytest.approx(1.25)

    def test_single_comma_never_thousands(self):
        assert normalize("1,250") == pytest.approx(1.25)

    def test_repeated_commas_keep_numeric_prefix(self):
        """Sólo la primera coma pasa a punto; se toma el prefijo numérico válido"""
        assert normalize("1,234,567") == pytest.approx(1.234)


class TestNormalizeInvalid:
    """Tests de inputs sin número"""

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "sin dato", "...", ",", "-"])
    def test_no_number_returns_none(self, raw):
        assert normalize(raw) is None

    @pytest.mark.parametrize("raw", ["８５０", "٨٥٠", "US$ ８５０,５０"])
    def test_non_ascii_digits_ignored(self, raw):
        assert normalize(raw) is None

    def test_none_returns_none(self):
        assert normalize(None) is None

    @pytest.mark.parametrize("raw", [123, 12.5, b"850", ["850"]])
    def test_non_string_returns_none(self, raw):
        assert normalize(raw) is None


class TestHelpers:
    """Tests de funciones auxiliares"""

    @pytest.mark.parametrize("raw,expected", [
        ("US$ 1.250,00", "1.250,00"),
        ("Compra: -3,5 %", "-3,5"),
        ("ARS 870", "870"),
        ("texto", ""),
    ])
    def test_strip_non_numeric(self, raw, expected):
        assert strip_non_numeric(raw) == expected

    @pytest.mark.parametrize("clean,expected", [
        ("1.234,56", "1234.56"),
        ("1,234.56", "1234.56"),
        ("1234,56", "1234.56"),
        ("1234.56", "1234.56"),
        ("1234", "1234"),
    ])
    def test_normalize_separators(self, clean, expected):
        assert normalize_separators(clean) == expected
