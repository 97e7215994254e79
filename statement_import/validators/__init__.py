"""
Validators Module - Record invariants checked before ledger hand-off.
"""

from .financial_validator import (
    TransactionValidator,
    validate_transactions,
    ValidationError
)

__all__ = [
    'TransactionValidator',
    'validate_transactions',
    'ValidationError',
]
