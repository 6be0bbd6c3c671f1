"""
Comparison Matrix Builder
=========================
Merges the quotations of several insurers for one client and risk line into
a single matrix: one row per coverage identity, one cell per insurer.

Callers must hand over records that already went through the validator;
the builder does not re-validate. Batch preconditions (non-empty, unique
insurer keys, consistent client and risk line) are enforced up front and
raise ``ComparisonError`` subclasses instead of producing degenerate output.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from quote_reconciler.core.config import ComparisonRules, settings
from quote_reconciler.models.scheme import (
    ComparisonMatrix,
    ComparisonRow,
    ComparisonSummary,
    Coverage,
    Currency,
    PremiumRange,
    QuotationRecord,
)
from quote_reconciler.services.coverage_matcher import (
    CoverageMatcher,
    collect_coverage_identities,
    default_matcher,
)
from quote_reconciler.utils.helpers import normalize_label

logger = logging.getLogger(__name__)


class ComparisonError(Exception):
    """Base exception for batch precondition violations."""
    pass


class EmptyBatchError(ComparisonError):
    """No quotation records were supplied."""
    pass


class MissingInsurerError(ComparisonError):
    """A record has neither an insurer identifier nor an insurer name."""
    pass


class DuplicateInsurerError(ComparisonError):
    """Two records would write to the same matrix column."""
    pass


class BatchConsistencyError(ComparisonError):
    """Records of one batch disagree on client or risk line."""
    pass


class ComparisonBuilder:
    """Builds comparison matrices from batches of quotation records."""

    def __init__(
        self,
        rules: Optional[ComparisonRules] = None,
        matcher: Optional[CoverageMatcher] = None
    ):
        self.rules = rules or settings.COMPARISON
        self.matcher = matcher or default_matcher

    def build(
        self,
        client_name: Optional[str],
        risk_line: Optional[str],
        records: Sequence[QuotationRecord],
        generated_at: Optional[datetime] = None
    ) -> ComparisonMatrix:
        """
        Build the comparison matrix for one batch.

        Args:
            client_name: Client of the batch (first record's value when None, or always
                when batch consistency is not enforced and the record carries one)
            risk_line: Risk line of the batch (same fallback as client_name)
            records: Validated quotation records, one per insurer
            generated_at: Timestamp of the comparison (now, UTC, when None)

        Returns:
            ComparisonMatrix with rows in coverage first-seen order

        Raises:
            EmptyBatchError: records is empty
            MissingInsurerError: a record has no column key
            DuplicateInsurerError: two records share a column key
            BatchConsistencyError: client or risk line differ within the batch
        """
        records = list(records)
        self._check_preconditions(client_name, risk_line, records)

        first = records[0]
        if self.rules.enforce_batch_consistency:
            client_name = client_name if client_name is not None else first.client_name
            risk_line = risk_line if risk_line is not None else first.risk_line
        else:
            # Unchecked batch: the first record speaks for all of them
            client_name = first.client_name if first.client_name is not None else client_name
            risk_line = first.risk_line if first.risk_line is not None else risk_line

        logger.info(f"🏗️ Building comparison for {client_name} - {risk_line} ({len(records)} quotations)")

        identities = collect_coverage_identities(records, self.matcher)
        rows = self._build_rows(identities, records)
        summary = self._summarize(records, identities)

        logger.info(
            f"📊 {summary.coverage_count} coverages across {summary.total_quotations} insurers, "
            f"premiums {summary.premium_range.minimum} - {summary.premium_range.maximum}"
        )

        return ComparisonMatrix(
            client_name=client_name,
            risk_line=risk_line,
            generated_at=generated_at or datetime.now(timezone.utc),
            summary=summary,
            quotations=records,
            rows=rows
        )

    def _check_preconditions(
        self,
        client_name: Optional[str],
        risk_line: Optional[str],
        records: List[QuotationRecord]
    ) -> None:
        if not records:
            logger.error("❌ Cannot build a comparison from an empty batch")
            raise EmptyBatchError("No quotation records provided")

        seen_keys = set()
        for index, record in enumerate(records):
            key = record.column_key
            if not key or not key.strip():
                logger.error(f"❌ Record #{index} has no insurer name or identifier")
                raise MissingInsurerError(f"Record #{index} has no insurer name or identifier")
            if key in seen_keys:
                logger.error(f"❌ Duplicate insurer column '{key}' in batch")
                raise DuplicateInsurerError(
                    f"Insurer '{key}' appears more than once; provide a distinct insurer_id per quotation"
                )
            seen_keys.add(key)

        if self.rules.enforce_batch_consistency:
            self._check_consistency("client", client_name, [r.client_name for r in records])
            self._check_consistency("risk line", risk_line, [r.risk_line for r in records])

    @staticmethod
    def _check_consistency(field: str, expected: Optional[str], values: List[Optional[str]]) -> None:
        """All non-null values (and the explicit argument, if any) must agree."""
        candidates = [v for v in [expected, *values] if v is not None]
        distinct = {normalize_label(v) for v in candidates}
        if len(distinct) > 1:
            logger.error(f"❌ Inconsistent {field} in batch: {sorted(set(candidates))}")
            raise BatchConsistencyError(f"Batch mixes several values for {field}: {sorted(set(candidates))}")

    def _build_rows(self, identities: List[str], records: List[QuotationRecord]) -> List[ComparisonRow]:
        # First coverage of each record per identity
        by_record: List[Dict[str, Coverage]] = []
        for record in records:
            found: Dict[str, Coverage] = {}
            for coverage in record.coverages or []:
                if coverage.name is None:
                    continue
                identity = self.matcher.resolve(coverage.name, identities)
                found.setdefault(identity, coverage)
            by_record.append(found)

        rows = []
        for identity in identities:
            comparison: Dict[str, Coverage] = {}
            for record, found in zip(records, by_record):
                cell = found.get(identity)
                if cell is None:
                    cell = Coverage.not_included(self.rules.not_included_text)
                comparison[record.column_key] = cell
            rows.append(ComparisonRow(
                coverage=identity,
                comparison=comparison,
                included_count=sum(1 for cell in comparison.values() if cell.included)
            ))
        return rows

    @staticmethod
    def _summarize(records: List[QuotationRecord], identities: List[str]) -> ComparisonSummary:
        premiums = [
            r.total_premium for r in records
            if r.total_premium is not None and not math.isnan(r.total_premium)
        ]

        currencies: List[Currency] = []
        for record in records:
            if record.currency is not None and record.currency not in currencies:
                currencies.append(record.currency)

        return ComparisonSummary(
            total_quotations=len(records),
            insurers=[r.insurer or r.column_key for r in records],
            premium_range=PremiumRange(
                minimum=min(premiums) if premiums else None,
                maximum=max(premiums) if premiums else None
            ),
            coverage_count=len(identities),
            currencies=currencies
        )


def build_comparison(
    client_name: Optional[str],
    risk_line: Optional[str],
    records: Sequence[QuotationRecord],
    rules: Optional[ComparisonRules] = None,
    matcher: Optional[CoverageMatcher] = None
) -> ComparisonMatrix:
    """Build a comparison matrix with ``rules`` (process defaults when omitted)."""
    return ComparisonBuilder(rules, matcher).build(client_name, risk_line, records)


comparison_builder = ComparisonBuilder()
