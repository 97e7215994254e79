"""
Extractors Module - Transaction recognition and classification.
"""

from .regex_extractor import (
    TransactionRecord,
    TransactionExtractor,
    NoTransactionsFoundError,
    extract_transactions_from_text,
    import_statement_text
)

from .financial_rules import (
    Direction,
    categorize_transaction,
    category_taxonomy,
    classify_direction,
    format_amount_display
)

from .normalizers import (
    NormalizationError,
    DateNormalizationError,
    AmountNormalizationError,
    combine_date_time,
    parse_amount,
    parse_date
)

from .recognizers import (
    RawMatch,
    Recognizer,
    default_recognizers
)

__all__ = [
    'TransactionRecord',
    'TransactionExtractor',
    'NoTransactionsFoundError',
    'extract_transactions_from_text',
    'import_statement_text',
    'Direction',
    'categorize_transaction',
    'category_taxonomy',
    'classify_direction',
    'format_amount_display',
    'NormalizationError',
    'DateNormalizationError',
    'AmountNormalizationError',
    'combine_date_time',
    'parse_amount',
    'parse_date',
    'RawMatch',
    'Recognizer',
    'default_recognizers',
]
