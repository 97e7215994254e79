"""
Financial Validator Module
Validates extracted transaction records before they are handed to the ledger.
"""

import logging
from datetime import datetime
from decimal import Decimal

from statement_import.extractors.financial_rules import Direction, category_taxonomy
from statement_import.extractors.regex_extractor import TransactionRecord

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class TransactionValidator:
    """Validates transaction records."""

    def __init__(self, strict_mode: bool = False):
        """
        Initialize validator.

        Args:
            strict_mode: If True, raise exceptions on invalid data.
                        If False, log warnings and skip invalid transactions.
        """
        self.strict_mode = strict_mode
        self.reset_stats()

    def validate_transaction(self, transaction: TransactionRecord) -> bool:
        """
        Validate a single transaction.

        Args:
            transaction: TransactionRecord to validate

        Returns:
            True if valid, False if invalid

        Raises:
            ValidationError: If strict_mode is True and validation fails
        """
        self.validation_stats["total_validated"] += 1

        checks = (
            ("invalid_date", self._validate_date(transaction.date),
             f"Invalid date: {transaction.date!r}"),
            ("invalid_amount", self._validate_amount(transaction.amount),
             f"Invalid amount: {transaction.amount!r}"),
            ("invalid_description", self._validate_description(transaction.description),
             "Invalid description: empty"),
            ("invalid_category",
             self._validate_direction_and_category(transaction.direction, transaction.category),
             f"Invalid type/category: {transaction.direction}/{transaction.category}"),
        )

        for stat_key, passed, msg in checks:
            if passed:
                continue
            self.validation_stats[stat_key] += 1
            self.validation_stats["invalid"] += 1
            if self.strict_mode:
                raise ValidationError(msg)
            logger.warning(f"{msg} in transaction: {transaction}")
            return False

        self.validation_stats["valid"] += 1
        return True

    def validate_transactions(self, transactions: list[TransactionRecord]) -> list[TransactionRecord]:
        """
        Validate a list of transactions.

        Args:
            transactions: List of TransactionRecord objects

        Returns:
            List of valid transactions (invalid ones filtered out)
        """
        valid_transactions = [txn for txn in transactions if self.validate_transaction(txn)]

        logger.info(
            f"Validation complete: {self.validation_stats['valid']} valid, "
            f"{self.validation_stats['invalid']} invalid out of "
            f"{self.validation_stats['total_validated']} total"
        )

        return valid_transactions

    @staticmethod
    def _validate_date(date: datetime) -> bool:
        return isinstance(date, datetime)

    @staticmethod
    def _validate_amount(amount: Decimal) -> bool:
        """Amount must be a finite Decimal strictly greater than zero."""
        if not isinstance(amount, Decimal) or not amount.is_finite():
            return False
        return amount > 0

    @staticmethod
    def _validate_description(description: str) -> bool:
        return isinstance(description, str) and bool(description.strip())

    @staticmethod
    def _validate_direction_and_category(direction: Direction, category: str) -> bool:
        """Category must belong to the taxonomy of the record's direction."""
        if not isinstance(direction, Direction):
            return False
        return category in category_taxonomy(direction)

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()

    def reset_stats(self):
        """Reset validation statistics."""
        self.validation_stats = {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_date": 0,
            "invalid_amount": 0,
            "invalid_description": 0,
            "invalid_category": 0
        }


def validate_transactions(
    transactions: list[TransactionRecord],
    strict_mode: bool = False
) -> list[TransactionRecord]:
    """
    Convenience function to validate a list of transactions.

    Args:
        transactions: List of TransactionRecord objects
        strict_mode: If True, raise exceptions on invalid data

    Returns:
        List of valid transactions
    """
    validator = TransactionValidator(strict_mode=strict_mode)
    return validator.validate_transactions(transactions)
