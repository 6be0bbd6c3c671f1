"""
Coverage identity resolution across insurers.

The default matcher treats two coverage names as the same identity only when
they are equal ignoring case. "Incendio" and "incendio" merge; "Incendio "
(trailing space), plurals, abbreviations and synonyms stay distinct. Semantic
matching can be plugged in later by implementing ``CoverageMatcher``.
"""

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from quote_reconciler.models.scheme import QuotationRecord

logger = logging.getLogger(__name__)


class CoverageMatcher(Protocol):
    """Maps a coverage name onto one of the identities seen so far."""

    def resolve(self, name: str, known_identities: Sequence[str]) -> str:
        """Return the known identity ``name`` belongs to, or ``name`` itself when it is new."""
        ...


class CaseInsensitiveMatcher:
    """Exact string match ignoring case. No trimming, stemming or fuzzy matching."""

    @staticmethod
    def _key(name: str) -> str:
        return name.lower()

    def resolve(self, name: str, known_identities: Sequence[str]) -> str:
        key = self._key(name)
        for identity in known_identities:
            if self._key(identity) == key:
                return identity
        return name


def _named_coverages(record: QuotationRecord) -> Iterable[str]:
    for coverage in record.coverages or []:
        if coverage.name is not None:
            yield coverage.name


def collect_coverage_identities(
    records: Sequence[QuotationRecord],
    matcher: Optional[CoverageMatcher] = None
) -> List[str]:
    """
    Distinct coverage identities across all records.

    Order is first-seen: records in the given order, coverages in list order.
    The first spelling encountered becomes the identity label.

    Args:
        records: Quotation records of one batch
        matcher: Identity resolver (defaults to case-insensitive exact match)

    Returns:
        Ordered list of identity labels
    """
    matcher = matcher or default_matcher
    identities: List[str] = []

    for record in records:
        for name in _named_coverages(record):
            identity = matcher.resolve(name, identities)
            if identity not in identities:
                identities.append(identity)

    logger.debug(f"Resolved {len(identities)} coverage identities from {len(records)} records")
    return identities


default_matcher = CaseInsensitiveMatcher()
