"""
Quote Reconciler
================
Validation and cross-insurer comparison of extracted insurance quotations.
"""

from .models.scheme import (
    QuotationRecord,
    Coverage,
    ValidationResult,
    ComparisonMatrix,
)
from .services.validation_service import RecordValidator, validate_quotation
from .services.coverage_matcher import CaseInsensitiveMatcher, collect_coverage_identities
from .services.comparison_service import (
    ComparisonBuilder,
    ComparisonError,
    EmptyBatchError,
    MissingInsurerError,
    DuplicateInsurerError,
    BatchConsistencyError,
    build_comparison,
)
from .services.reconciliation_service import ReconciliationService

__all__ = [
    "QuotationRecord",
    "Coverage",
    "ValidationResult",
    "ComparisonMatrix",
    "RecordValidator",
    "validate_quotation",
    "CaseInsensitiveMatcher",
    "collect_coverage_identities",
    "ComparisonBuilder",
    "ComparisonError",
    "EmptyBatchError",
    "MissingInsurerError",
    "DuplicateInsurerError",
    "BatchConsistencyError",
    "build_comparison",
    "ReconciliationService"
]
