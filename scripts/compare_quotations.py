"""
Build a comparison document from already-extracted quotation JSON files.

Usage:
    python scripts/compare_quotations.py "Constructora Bogotá" "Todo Riesgo Daños Materiales" sura.json allianz.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from quote_reconciler.core.config import settings
from quote_reconciler.core.logging_config import configure_logging
from quote_reconciler.models.scheme import QuotationRecord
from quote_reconciler.services.reconciliation_service import reconciliation_service
from quote_reconciler.utils.helpers import format_currency

logger = logging.getLogger(__name__)


def load_record(path: Path) -> QuotationRecord:
    """Read one extracted quotation; the insurer defaults to the file name."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    data.setdefault("aseguradora", path.stem)
    return QuotationRecord.model_validate(data)


def main() -> int:
    parser = argparse.ArgumentParser(description=settings.APP_DESCRIPTION)
    parser.add_argument("client", help="Client name")
    parser.add_argument("risk_line", help="Risk line")
    parser.add_argument("files", nargs="+", type=Path, help="Extracted quotation JSON files")
    parser.add_argument("--include-flagged", action="store_true", help="Compare quotations pending manual review")
    parser.add_argument("--output", type=Path, help="Write the comparison document to this file")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    logger.info("=" * 80)
    logger.info(f"  {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info("=" * 80)

    records = [load_record(path) for path in args.files]
    batch = reconciliation_service.compare(args.client, args.risk_line, records, args.include_flagged)

    if batch.matrix is None:
        logger.error(f"❌ {batch.error}")
        return 1

    summary = batch.matrix.summary
    currency = summary.currencies[0].value if summary.currencies else "COP"
    logger.info(f"  Quotations compared: {summary.total_quotations}")
    logger.info(f"  Lowest premium:  {format_currency(summary.premium_range.minimum, currency)}")
    logger.info(f"  Highest premium: {format_currency(summary.premium_range.maximum, currency)}")

    document = batch.matrix.to_document()
    if args.output:
        args.output.write_text(document, encoding="utf-8")
        logger.info(f"  ✅ Comparison written to {args.output}")
    else:
        print(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
