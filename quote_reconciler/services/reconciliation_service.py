"""
Reconciliation pipeline: validate each extracted quotation, keep the ones
fit for comparison, then build the comparison matrix for the batch.

A precondition failure stops only the affected batch; sibling batches in
``compare_batches`` keep running.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from quote_reconciler.models.reconciliation_model import BatchComparison, QuotationOutcome
from quote_reconciler.models.scheme import QuotationRecord
from quote_reconciler.services.comparison_service import (
    ComparisonBuilder,
    ComparisonError,
    comparison_builder,
)
from quote_reconciler.services.validation_service import RecordValidator, record_validator

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Validates quotation records and compares them per client and risk line."""

    def __init__(
        self,
        validator: Optional[RecordValidator] = None,
        builder: Optional[ComparisonBuilder] = None
    ):
        self.validator = validator or record_validator
        self.builder = builder or comparison_builder

    def process_quotation(
        self,
        record: QuotationRecord,
        extra: Optional[Dict[str, Any]] = None
    ) -> QuotationOutcome:
        """
        Validate one record.

        Args:
            record: Extracted quotation
            extra: Caller metadata (field names or document keys) stamped
                onto a copy of the record before validation

        Returns:
            QuotationOutcome with the (possibly stamped) record and its verdict
        """
        if extra:
            # Document keys (aseguradora, cliente...) map onto field names; re-validate the merge
            aliases = {f.alias: name for name, f in QuotationRecord.model_fields.items() if f.alias}
            stamped = {aliases.get(key, key): value for key, value in extra.items()}
            record = QuotationRecord.model_validate({**record.model_dump(), **stamped})

        validation = self.validator.validate(record)
        return QuotationOutcome(
            record=record,
            validation=validation,
            success=validation.valid,
            coverages_detected=record.coverages_detected
        )

    def compare(
        self,
        client_name: Optional[str],
        risk_line: Optional[str],
        records: Sequence[QuotationRecord],
        include_flagged: bool = False
    ) -> BatchComparison:
        """
        Validate a batch and build its comparison matrix.

        Records with validation errors are always left out. Valid records
        flagged for manual review are compared only when ``include_flagged``.

        Args:
            client_name: Client of the batch
            risk_line: Risk line of the batch
            records: Extracted quotations, one per insurer
            include_flagged: Compare records that require manual review

        Returns:
            BatchComparison; ``matrix`` is None and ``error`` set when the
            batch violates a comparison precondition
        """
        outcomes = [self.process_quotation(record) for record in records]

        selected: List[QuotationRecord] = []
        for outcome in outcomes:
            if not outcome.success:
                logger.warning(f"⚠️ Excluding {outcome.record.insurer}: {outcome.validation.errors}")
                continue
            if outcome.validation.requires_manual_review and not include_flagged:
                logger.warning(f"⚠️ Excluding {outcome.record.insurer}: pending manual review")
                continue
            selected.append(outcome.record)

        batch = BatchComparison(client_name=client_name, risk_line=risk_line, outcomes=outcomes)

        try:
            matrix = self.builder.build(client_name, risk_line, selected)
        except ComparisonError as e:
            logger.error(f"❌ Comparison failed for {client_name} - {risk_line}: {e}")
            batch.error = str(e)
            return batch

        batch.matrix = matrix
        batch.client_name = matrix.client_name
        batch.risk_line = matrix.risk_line
        batch.included_insurers = [r.column_key for r in selected]
        logger.info(f"✨ Comparison ready for {matrix.client_name} - {matrix.risk_line}")
        return batch

    def compare_batches(
        self,
        batches: Iterable[Tuple[Optional[str], Optional[str], Sequence[QuotationRecord]]],
        include_flagged: bool = False
    ) -> List[BatchComparison]:
        """Run ``compare`` for each (client_name, risk_line, records) batch independently."""
        results = []
        for client_name, risk_line, records in batches:
            results.append(self.compare(client_name, risk_line, records, include_flagged))

        failed = sum(1 for r in results if not r.succeeded)
        logger.info(f"📊 {len(results) - failed}/{len(results)} batches compared")
        return results


reconciliation_service = ReconciliationService()
