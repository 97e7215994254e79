"""
Statement Import - Main Pipeline
Orchestrates loading, transaction extraction, validation and output.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from statement_import.config import config
from statement_import.extractors.regex_extractor import (
    NoTransactionsFoundError,
    TransactionExtractor,
    TransactionRecord,
)
from statement_import.loaders.pdf_loader import StatementLoadError, load_statement_text
from statement_import.logging_config import get_logger, setup_logging
from statement_import.output.writer import generate_pdf_report, write_json
from statement_import.validators.financial_validator import TransactionValidator, ValidationError

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_TRANSACTIONS = 2


class StatementImporter:
    """Main orchestrator for the statement import pipeline."""

    def __init__(self, strict_mode: Optional[bool] = None):
        """
        Initialize importer.

        Args:
            strict_mode: Raise on invalid records instead of dropping them
                (defaults to config.STRICT_MODE)
        """
        self.strict_mode = config.STRICT_MODE if strict_mode is None else strict_mode
        self.stats = {
            "characters_loaded": 0,
            "total_extracted": 0,
            "valid_transactions": 0,
        }
        self.extraction_stats: dict = {}

    def process_text(self, text: str) -> list[TransactionRecord]:
        """
        Extract and validate transactions from statement text.

        Raises:
            NoTransactionsFoundError: If nothing was recognized, or nothing
                survived validation
            ValidationError: If strict mode is on and a record is invalid
        """
        extractor = TransactionExtractor()
        transactions = extractor.extract_transactions(text)
        self.extraction_stats = extractor.get_stats()
        self.stats["total_extracted"] = len(transactions)

        if not transactions:
            raise NoTransactionsFoundError(
                "No transactions found. Please ensure it's a valid bank statement."
            )

        validator = TransactionValidator(strict_mode=self.strict_mode)
        valid_transactions = validator.validate_transactions(transactions)
        self.stats["valid_transactions"] = len(valid_transactions)

        if not valid_transactions:
            raise NoTransactionsFoundError("No valid transactions remained after validation.")

        return valid_transactions

    def process(
        self,
        statement_path: str,
        json_path: Optional[str] = None,
        report_path: Optional[str] = None
    ) -> list[TransactionRecord]:
        """
        Import one statement file.

        Args:
            statement_path: Path to a .pdf or .txt statement
            json_path: Optional path for the JSON import payload
            report_path: Optional path for the PDF preview report

        Returns:
            Validated transactions in statement order

        Raises:
            StatementLoadError: If the statement cannot be read
            NoTransactionsFoundError: If no transaction was recognized
        """
        logger.info("=" * 80)
        logger.info(f"Importing statement: {statement_path}")
        logger.info("=" * 80)

        text = load_statement_text(statement_path)
        self.stats["characters_loaded"] = len(text)

        transactions = self.process_text(text)

        if json_path:
            write_json(transactions, json_path)
        if report_path:
            generate_pdf_report(report_path, transactions, Path(statement_path).name)

        self._log_summary()
        return transactions

    def _log_summary(self):
        """Log extraction summary."""
        logger.info("=" * 80)
        logger.info("IMPORT SUMMARY")
        logger.info(f"Characters loaded:       {self.stats['characters_loaded']}")
        logger.info(f"Transactions extracted:  {self.stats['total_extracted']}")
        logger.info(f"Valid transactions:      {self.stats['valid_transactions']}")
        logger.info(f"Lines skipped:           {self.extraction_stats.get('lines_skipped', 0)}")
        logger.info(f"Recognizer hits:         {self.extraction_stats.get('recognizer_hits', {})}")
        logger.info("=" * 80)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statement-import",
        description="Recover transactions from a bank or wallet statement."
    )
    parser.add_argument("statement", help="Statement file (.pdf or .txt)")
    parser.add_argument("--json", dest="json_path", help="Write the import payload as JSON")
    parser.add_argument("--report", dest="report_path", help="Write a PDF preview report")
    parser.add_argument("--strict", action="store_true", help="Fail on invalid records")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--log-file", default=None, help="Also log to this file in LOG_DIR")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Command line entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(log_level=args.log_level, log_file=args.log_file)

    importer = StatementImporter(strict_mode=args.strict or None)

    try:
        transactions = importer.process(
            args.statement,
            json_path=args.json_path,
            report_path=args.report_path
        )

    except NoTransactionsFoundError as e:
        logger.warning(str(e))
        print(f"\n⚠️  {e}")
        return EXIT_NO_TRANSACTIONS

    except (StatementLoadError, ValidationError) as e:
        logger.error(f"Import failed: {e}")
        print(f"\n❌ Error: {e}")
        return EXIT_ERROR

    except Exception as e:
        logger.error(f"Import failed with unexpected error: {e}", exc_info=True)
        print(f"\n❌ Error: {e}")
        return EXIT_ERROR

    for txn in transactions:
        print(
            f"{txn.date:%Y-%m-%d %H:%M}  {txn.amount_display:>14}  "
            f"{txn.category:<15} {txn.description}"
        )
    print(f"\n✅ Found {len(transactions)} transactions")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
