"""
Record Validator
================
Checks a single extracted quotation for internal coherence.

Problems are data, not exceptions: every rule runs and appends to the error
or warning list so the caller sees all of them at once. Absent optional data
counts as "nothing detected" and never raises.
"""

import logging
from typing import List, Optional

from quote_reconciler.core.config import ValidationRules, settings
from quote_reconciler.models.scheme import QuotationRecord, ValidationResult

logger = logging.getLogger(__name__)


class RecordValidator:
    """Heuristic validation of extracted quotation records."""

    def __init__(self, rules: Optional[ValidationRules] = None):
        self.rules = rules or settings.VALIDATION

    def validate(self, record: QuotationRecord) -> ValidationResult:
        """
        Validate one quotation record.

        Rules run in a fixed order:
            1. missing insurer name (error)
            2. premium absent or not strictly positive (error)
            3. no coverages (warning)
            4. coverages present but none included (warning)
            then the supplementary coherence checks enabled in the rule set.

        Args:
            record: Extracted quotation

        Returns:
            ValidationResult with every error and warning found
        """
        rules = self.rules
        errors: List[str] = []
        warnings: List[str] = []

        if not record.insurer or not record.insurer.strip():
            errors.append(rules.missing_insurer_message)

        # NaN fails the comparison too
        if not (record.total_premium is not None and record.total_premium > 0):
            errors.append(rules.invalid_premium_message)

        coverages = record.coverages or []
        if not coverages:
            warnings.append(rules.no_coverages_message)
        elif not any(c.included for c in coverages):
            warnings.append(rules.none_included_message)

        warnings.extend(self._coherence_warnings(record))

        result = ValidationResult(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            requires_manual_review=bool(errors) or len(warnings) > rules.review_warning_threshold
        )

        label = record.insurer or "<unknown insurer>"
        if not result.valid:
            logger.warning(f"❌ {label}: invalid quotation {errors}")
        elif result.requires_manual_review:
            logger.warning(f"⚠️ {label}: manual review required {warnings}")
        else:
            logger.info(f"✅ {label}: quotation valid ({len(warnings)} warnings)")

        return result

    def _coherence_warnings(self, record: QuotationRecord) -> List[str]:
        """Checks that only fire on data that is present but contradictory."""
        rules = self.rules
        warnings: List[str] = []

        if rules.check_coverage_period and record.period is not None and record.period.is_inverted:
            warnings.append(rules.inverted_period_message)

        if (
            rules.check_tax_premium
            and record.premium_with_tax is not None
            and record.total_premium is not None
            and record.premium_with_tax < record.total_premium
        ):
            warnings.append(rules.tax_premium_message)

        if rules.check_insured_value and record.insured_value is not None and record.insured_value < 0:
            warnings.append(rules.insured_value_message)

        coverages = record.coverages or []

        if rules.check_coverage_names and any(not (c.name or "").strip() for c in coverages):
            warnings.append(rules.unnamed_coverage_message)

        if rules.check_duplicate_coverages:
            seen = {}
            reported = set()
            for coverage in coverages:
                if not coverage.name:
                    continue
                key = coverage.name.lower()
                if key in seen and key not in reported:
                    warnings.append(rules.duplicate_coverage_message.format(name=seen[key]))
                    reported.add(key)
                seen.setdefault(key, coverage.name)

        return warnings


def validate_quotation(record: QuotationRecord, rules: Optional[ValidationRules] = None) -> ValidationResult:
    """Validate ``record`` with ``rules`` (process defaults when omitted)."""
    return RecordValidator(rules).validate(record)


record_validator = RecordValidator()
