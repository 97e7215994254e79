"""
Statement Import - recover transactions from bank and wallet statement text.
"""

from statement_import.extractors import (
    Direction,
    NoTransactionsFoundError,
    TransactionExtractor,
    TransactionRecord,
    extract_transactions_from_text,
    import_statement_text,
)

__version__ = "1.0.0"

__all__ = [
    'Direction',
    'NoTransactionsFoundError',
    'TransactionExtractor',
    'TransactionRecord',
    'extract_transactions_from_text',
    'import_statement_text',
]
