"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from quote_reconciler.core.config import ComparisonRules, ValidationRules
from quote_reconciler.models.scheme import Coverage, QuotationRecord
from quote_reconciler.services.comparison_service import ComparisonBuilder
from quote_reconciler.services.validation_service import RecordValidator


@pytest.fixture
def validator() -> RecordValidator:
    """Validator with the default rule set."""
    return RecordValidator(ValidationRules())


@pytest.fixture
def builder() -> ComparisonBuilder:
    """Comparison builder with the default rule set."""
    return ComparisonBuilder(ComparisonRules())


@pytest.fixture
def generated_at() -> datetime:
    return datetime(2025, 3, 14, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    """Factory for quotation records with sensible defaults.

    Returns:
        Callable building a QuotationRecord; keyword arguments override defaults
    """
    def _make(insurer="Sura", premium=1000.0, coverages=None, **kwargs) -> QuotationRecord:
        if coverages is None:
            coverages = [Coverage(name="Incendio", included=True)]
        return QuotationRecord(
            insurer=insurer,
            total_premium=premium,
            coverages=coverages,
            **kwargs
        )
    return _make


@pytest.fixture
def extracted_document() -> dict:
    """Quotation as produced by the extraction collaborator."""
    return {
        "aseguradora": "Seguros Bolívar",
        "cliente": "Constructora Bogotá",
        "ramo": "Todo Riesgo Daños Materiales",
        "prima_total": 45200000,
        "prima_iva_incluido": 53788000,
        "valor_asegurado": 12000000000,
        "moneda": "COP",
        "vigencia": {"desde": "2025-01-01", "hasta": "2025-12-31"},
        "coberturas": [
            {
                "nombre": "Incendio",
                "incluida": True,
                "sub_limite": None,
                "deducible_porcentaje": 10,
                "deducible_minimo": 2000000,
                "observaciones": None
            },
            {
                "nombre": "Terremoto",
                "incluida": True,
                "sub_limite": 5000000000,
                "deducible_porcentaje": 3,
                "deducible_minimo": None,
                "observaciones": "Sobre el valor asegurable"
            },
            {
                "nombre": "Hurto calificado",
                "incluida": False,
                "sub_limite": None,
                "deducible_porcentaje": None,
                "deducible_minimo": None,
                "observaciones": None
            }
        ],
        "exclusiones": ["Guerra", "Terrorismo"],
        "condiciones_especiales": ["Pago a 30 días"],
        "clausulas_aplicadas": ["Cláusula de restablecimiento automático"],
        "_metadata": {
            "modelo_usado": "gpt-4o",
            "tokens_usados": 3150,
            "fecha_extraccion": "2025-01-10T08:00:00Z",
            "version_extractor": "1.0.0"
        }
    }
