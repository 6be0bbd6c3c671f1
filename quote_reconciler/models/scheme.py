"""
Pydantic models for insurance quotation reconciliation.

Attribute names are English; aliases carry the keys of the extraction
document (aseguradora, prima_total, coberturas...). Both spellings are
accepted on input, dumping ``by_alias=True`` reproduces the document.
"""

from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Currency(str, Enum):
    """Currencies quoted by the insurers."""

    COP = "COP"
    USD = "USD"


# ========================================================================
# EXTRACTED QUOTATION
# ========================================================================

class CoveragePeriod(BaseModel):
    """Policy validity window. An inverted window is reported by the validator, not rejected here."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start: Optional[date] = Field(None, alias="desde", description="First day of coverage")
    end: Optional[date] = Field(None, alias="hasta", description="Last day of coverage")

    @property
    def is_inverted(self) -> bool:
        return self.start is not None and self.end is not None and self.start > self.end


class Coverage(BaseModel):
    """
    One line item within a quotation.

    ``name`` is the cross-insurer join key. It is only absent on the synthetic
    placeholder cells the comparison matrix creates for missing coverages.
    A coverage with ``included=False`` and no limits is legal: it names an
    exclusion by omission.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Optional[str] = Field(None, alias="nombre", description="Coverage name as written by the insurer")
    included: bool = Field(False, alias="incluida", description="Whether the quotation includes the coverage")
    sub_limit: Optional[float] = Field(None, alias="sub_limite", description="Sub-limit amount")
    deductible_percentage: Optional[float] = Field(None, alias="deducible_porcentaje", description="Deductible as % of loss")
    minimum_deductible: Optional[float] = Field(None, alias="deducible_minimo", description="Minimum deductible amount")
    observations: Optional[str] = Field(None, alias="observaciones", description="Free-text notes")

    @field_validator("included", mode="before")
    @classmethod
    def parse_included(cls, v):
        """Extractors emit null when inclusion is unknown; treat it as not included."""
        if v is None:
            return False
        return v

    @classmethod
    def not_included(cls, text: str) -> "Coverage":
        """Placeholder cell for an insurer whose quotation lacks the coverage."""
        return cls(included=False, observations=text)


class ExtractionMetadata(BaseModel):
    """Informational data attached by the extractor. Never used by validation or comparison."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, protected_namespaces=())

    model_used: Optional[str] = Field(None, alias="modelo_usado")
    tokens_used: Optional[int] = Field(None, alias="tokens_usados")
    extracted_at: Optional[datetime] = Field(None, alias="fecha_extraccion")
    extractor_version: Optional[str] = Field(None, alias="version_extractor")


class QuotationRecord(BaseModel):
    """
    One insurer's offer for one risk line.

    Every field the extractor could not find is ``None``, never a fabricated
    default, so the validator can tell absence from a real zero.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Identity
    insurer: Optional[str] = Field(None, alias="aseguradora", description="Insurer display name")
    insurer_id: Optional[str] = Field(
        None,
        alias="aseguradora_id",
        description="Explicit column key; falls back to the insurer name when absent"
    )
    client_name: Optional[str] = Field(None, alias="cliente", description="Client the quotation was issued for")
    risk_line: Optional[str] = Field(None, alias="ramo", description="Risk line, e.g. Todo Riesgo Daños Materiales")

    # Pricing
    total_premium: Optional[float] = Field(None, alias="prima_total", description="Total premium before tax")
    premium_with_tax: Optional[float] = Field(None, alias="prima_iva_incluido", description="Premium including VAT")
    insured_value: Optional[float] = Field(None, alias="valor_asegurado", description="Total insured value")
    currency: Optional[Currency] = Field(None, alias="moneda")
    period: Optional[CoveragePeriod] = Field(None, alias="vigencia")

    # Coverage details
    coverages: Optional[List[Coverage]] = Field(None, alias="coberturas")
    exclusions: Optional[List[str]] = Field(None, alias="exclusiones")
    special_conditions: Optional[List[str]] = Field(None, alias="condiciones_especiales")
    applied_clauses: Optional[List[str]] = Field(None, alias="clausulas_aplicadas")

    # Metadata
    metadata: Optional[ExtractionMetadata] = Field(None, alias="_metadata")

    @property
    def column_key(self) -> Optional[str]:
        """Key of this record's column in a comparison matrix."""
        return self.insurer_id or self.insurer

    @property
    def coverages_detected(self) -> int:
        return len(self.coverages or [])


# ========================================================================
# DERIVED VALUES
# ========================================================================

class ValidationResult(BaseModel):
    """Verdict for a single quotation record. Recomputed on demand, never stored."""

    model_config = ConfigDict(populate_by_name=True)

    valid: bool = Field(..., alias="valido")
    errors: List[str] = Field(default_factory=list, alias="errores")
    warnings: List[str] = Field(default_factory=list)
    requires_manual_review: bool = Field(..., alias="requiere_revision_manual")


class PremiumRange(BaseModel):
    """Lowest and highest total premium in a batch (None when no record has a premium)."""

    model_config = ConfigDict(populate_by_name=True)

    minimum: Optional[float] = Field(None, alias="min")
    maximum: Optional[float] = Field(None, alias="max")


class ComparisonSummary(BaseModel):
    """Aggregate statistics of a comparison batch."""

    model_config = ConfigDict(populate_by_name=True)

    total_quotations: int = Field(..., alias="total_cotizaciones")
    insurers: List[str] = Field(default_factory=list, alias="aseguradoras", description="Insurer names in input order")
    premium_range: PremiumRange = Field(..., alias="rango_primas")
    coverage_count: int = Field(0, alias="total_coberturas", description="Distinct coverage identities")
    currencies: List[Currency] = Field(default_factory=list, alias="monedas")


class ComparisonRow(BaseModel):
    """One coverage identity compared across every insurer of the batch."""

    model_config = ConfigDict(populate_by_name=True)

    coverage: str = Field(..., alias="cobertura")
    comparison: Dict[str, Coverage] = Field(
        default_factory=dict,
        alias="comparacion",
        description="Column key -> the insurer's coverage or a not-included placeholder"
    )
    included_count: int = Field(0, alias="incluida_en", description="Insurers that include this coverage")


class ComparisonMatrix(BaseModel):
    """Cross-insurer comparison for one client and risk line."""

    model_config = ConfigDict(populate_by_name=True)

    client_name: Optional[str] = Field(None, alias="cliente")
    risk_line: Optional[str] = Field(None, alias="ramo")
    generated_at: datetime = Field(..., alias="fecha_comparativo")
    summary: ComparisonSummary = Field(..., alias="resumen")
    quotations: List[QuotationRecord] = Field(default_factory=list, alias="cotizaciones")
    rows: List[ComparisonRow] = Field(default_factory=list, alias="matriz_comparativa")

    def row(self, coverage: str) -> Optional[ComparisonRow]:
        """Return the row whose identity matches ``coverage`` case-insensitively."""
        wanted = coverage.lower()
        for row in self.rows:
            if row.coverage.lower() == wanted:
                return row
        return None

    def to_document(self, indent: Optional[int] = 2) -> str:
        """Serialize to the JSON comparison document."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_document(cls, document: str) -> "ComparisonMatrix":
        """Parse a JSON comparison document produced by ``to_document``."""
        return cls.model_validate_json(document)
