"""
Regex Extractor Module
Scans statement text line by line, hands each position to the format
recognizers, and assembles classified transaction records from their matches.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from .financial_rules import (
    Direction,
    categorize_transaction,
    classify_direction,
    format_amount_display,
)
from .normalizers import NormalizationError, combine_date_time, parse_amount
from .recognizers import RawMatch, Recognizer, default_recognizers

logger = logging.getLogger(__name__)


class NoTransactionsFoundError(Exception):
    """Raised when a statement text yields no recognizable transaction."""
    pass


@dataclass(frozen=True)
class TransactionRecord:
    """Represents a single recognized statement transaction."""
    date: datetime
    amount: Decimal
    description: str
    direction: Direction
    category: str

    @property
    def amount_display(self) -> str:
        return format_amount_display(self.amount, self.direction)

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-ready dictionary."""
        return {
            "date": self.date.isoformat(),
            "amount": f"{self.amount:.2f}",
            "description": self.description,
            "type": self.direction.value,
            "category": self.category
        }

    def to_expense_payload(self) -> dict:
        """Convert transaction to the entity shape the expense ledger stores."""
        return {
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "note": self.description or "Imported from PDF",
            "type": self.direction.value,
            "payment_method": "digital"
        }

    def __repr__(self) -> str:
        return (
            f"TransactionRecord(date={self.date}, "
            f"desc={self.description[:30]}..., amount={self.amount}, "
            f"category={self.category})"
        )


class TransactionExtractor:
    """
    Extracts transactions from statement text.

    Keeps a cursor over the lines. At each position the multi-line
    recognizers are tried first, then the single-line ones in priority order.
    The first recognizer whose candidate assembles into a valid record wins
    and the cursor jumps past the lines it consumed; otherwise the line is
    skipped. Calls are independent, so one extractor can serve many statements.
    """

    def __init__(
        self,
        recognizers: Optional[Sequence[Recognizer]] = None,
        income_threshold: Optional[Decimal] = None
    ):
        """
        Initialize extractor.

        Args:
            recognizers: Recognizer chain in priority order (defaults to
                default_recognizers())
            income_threshold: Override for the amount-based income heuristic
        """
        if recognizers is None:
            recognizers = default_recognizers()
        self.multi_line = [r for r in recognizers if r.multi_line]
        self.single_line = [r for r in recognizers if not r.multi_line]
        self.income_threshold = income_threshold
        self.stats = self._new_stats()

    @staticmethod
    def _new_stats() -> dict:
        return {
            "lines_processed": 0,
            "lines_consumed": 0,
            "lines_skipped": 0,
            "candidates_rejected": 0,
            "transactions_found": 0,
            "recognizer_hits": Counter()
        }

    def extract_transactions(self, text: str) -> list[TransactionRecord]:
        """
        Extract all transactions from statement text.

        Each call starts from fresh statistics; get_stats() reports the
        most recent call.

        Args:
            text: Full statement text

        Returns:
            New list of TransactionRecord objects in source order (may be empty)
        """
        self.stats = self._new_stats()

        if not text or not isinstance(text, str) or not text.strip():
            logger.warning("Empty text provided for extraction")
            return []

        lines = [line.strip() for line in text.splitlines()]
        logger.info(f"Starting extraction from {len(lines)} lines")

        transactions: list[TransactionRecord] = []
        index = 0
        while index < len(lines):
            self.stats["lines_processed"] += 1
            consumed = self._process_position(lines, index, transactions)
            if consumed:
                self.stats["lines_consumed"] += consumed
                index += consumed
            else:
                self.stats["lines_consumed"] += 1
                self.stats["lines_skipped"] += 1
                if lines[index]:
                    logger.debug(f"Skipping line {index}: {lines[index][:50]}")
                index += 1

        logger.info(
            f"Extraction complete: {self.stats['transactions_found']} transactions found, "
            f"{self.stats['lines_skipped']} lines skipped, "
            f"{self.stats['candidates_rejected']} candidates rejected"
        )

        if not transactions:
            logger.warning(f"No transactions found in {len(lines)} lines")

        return transactions

    def _process_position(
        self,
        lines: Sequence[str],
        index: int,
        transactions: list[TransactionRecord]
    ) -> int:
        """
        Try every recognizer at the cursor, appending the winning record.

        Returns:
            Number of lines consumed, or 0 when nothing matched
        """
        if not lines[index]:
            return 0

        for recognizer in (*self.multi_line, *self.single_line):
            candidate = recognizer.match(lines, index)
            if candidate is None:
                continue

            record = self._assemble(candidate, index)
            if record is None:
                continue

            transactions.append(record)
            self.stats["transactions_found"] += 1
            self.stats["recognizer_hits"][recognizer.name] += 1
            return candidate.consumed

        return 0

    def _assemble(self, candidate: RawMatch, index: int) -> Optional[TransactionRecord]:
        """
        Normalize and classify a recognizer's raw fields into a record.

        Returns:
            TransactionRecord, or None when the candidate is malformed
        """
        try:
            description = candidate.description.strip()
            if not description:
                raise NormalizationError("Empty description")

            date = combine_date_time(candidate.date_token, candidate.time_token)
            amount, sign = parse_amount(candidate.amount_token)

        except NormalizationError as e:
            self.stats["candidates_rejected"] += 1
            logger.debug(f"Rejected {candidate.recognizer} candidate at line {index}: {e}")
            return None

        direction = classify_direction(
            description,
            amount,
            indicator=candidate.indicator,
            sign=sign,
            threshold=self.income_threshold
        )
        category = categorize_transaction(description, direction)

        record = TransactionRecord(
            date=date,
            amount=amount,
            description=description,
            direction=direction,
            category=category
        )
        logger.debug(
            f"Parsed {candidate.recognizer}: {date:%Y-%m-%d} | {description[:30]} | "
            f"{record.amount_display} | {category}"
        )
        return record

    def get_stats(self) -> dict:
        """Get extraction statistics."""
        stats = self.stats.copy()
        stats["recognizer_hits"] = dict(self.stats["recognizer_hits"])
        return stats


def extract_transactions_from_text(text: str) -> list[TransactionRecord]:
    """
    Convenience function to extract transactions from text.

    Args:
        text: Statement text

    Returns:
        List of TransactionRecord objects (empty when nothing was recognized)
    """
    extractor = TransactionExtractor()
    return extractor.extract_transactions(text)


def import_statement_text(text: str) -> list[TransactionRecord]:
    """
    Extract transactions, treating an empty result as a failed import.

    Raises:
        NoTransactionsFoundError: If the text holds no recognizable transaction
    """
    transactions = extract_transactions_from_text(text)
    if not transactions:
        raise NoTransactionsFoundError(
            "No transactions found. Please ensure it's a valid bank statement."
        )
    return transactions
