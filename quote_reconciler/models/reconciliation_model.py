"""
Pipeline outcome models: per-quotation verdicts and per-batch comparisons.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from quote_reconciler.models.scheme import ComparisonMatrix, QuotationRecord, ValidationResult


class QuotationOutcome(BaseModel):
    """A record together with its validation verdict."""

    record: QuotationRecord
    validation: ValidationResult
    success: bool = Field(..., description="True when the record has no validation errors")
    coverages_detected: int = Field(0, description="Number of coverage entries in the record")


class BatchComparison(BaseModel):
    """Result of comparing one client / risk-line batch."""

    client_name: Optional[str] = None
    risk_line: Optional[str] = None
    outcomes: List[QuotationOutcome] = Field(default_factory=list, description="One per input record, input order")
    included_insurers: List[str] = Field(default_factory=list, description="Column keys that made it into the matrix")
    matrix: Optional[ComparisonMatrix] = Field(None, description="None when the batch failed a precondition")
    error: Optional[str] = Field(None, description="Precondition failure message, if any")

    @property
    def succeeded(self) -> bool:
        return self.matrix is not None
