"""
Financial Rules Module
Defines income/expense direction detection and keyword-based categorization.
"""

import logging
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Optional

from statement_import.config import config

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Transaction direction enumeration."""
    INCOME = "income"
    EXPENSE = "expense"


# Indicator fragments, checked as case-insensitive substrings.
# Income fragments are checked first: "CREDIT" must not fall through to "DR".
INCOME_INDICATORS = ("CR", "CREDIT", "RECEIVED", "ADDED")
EXPENSE_INDICATORS = ("DR", "DEBIT", "PAID", "SENT")

# Description keywords that mark an unmarked amount as income
INCOME_HINT_KEYWORDS = ("salary", "credit", "refund", "cashback", "interest")

INCOME_CATEGORIES = (
    ("Salary", ("salary", "wages")),
    ("Investment", ("interest", "dividend")),
    ("Refund", ("refund", "return")),
)

EXPENSE_CATEGORIES = (
    ("Food", ("food", "restaurant", "cafe", "swiggy", "zomato")),
    ("Transportation", ("fuel", "petrol", "gas", "transport", "uber", "ola")),
    ("Groceries", ("grocery", "supermarket", "mart")),
    ("Shopping", ("shopping", "amazon", "flipkart")),
    ("Healthcare", ("medical", "hospital", "pharmacy")),
    ("Utilities", ("electricity", "water", "gas", "internet", "mobile")),
    ("Entertainment", ("movie", "entertainment", "netflix", "spotify")),
)

CATEGORY_TABLES = MappingProxyType({
    Direction.INCOME: INCOME_CATEGORIES,
    Direction.EXPENSE: EXPENSE_CATEGORIES,
})

DEFAULT_CATEGORIES = MappingProxyType({
    Direction.INCOME: "Other Income",
    Direction.EXPENSE: "Other",
})


def direction_from_indicator(indicator: Optional[str]) -> Optional[Direction]:
    """
    Map an explicit indicator token (CR, DEBIT, Received, ...) to a direction.

    Returns:
        Direction, or None when the token is empty or carries no known marker
    """
    if not indicator:
        return None

    token = indicator.strip().upper()
    if any(fragment in token for fragment in INCOME_INDICATORS):
        return Direction.INCOME
    if any(fragment in token for fragment in EXPENSE_INDICATORS):
        return Direction.EXPENSE

    logger.debug(f"Unrecognized indicator token: {indicator!r}")
    return None


def classify_direction(
    description: str,
    amount: Decimal,
    indicator: Optional[str] = None,
    sign: Optional[str] = None,
    threshold: Optional[Decimal] = None
) -> Direction:
    """
    Decide whether a transaction is income or expense.

    Priority:
    1. Explicit indicator token
    2. Leading +/- on the raw amount
    3. Income keywords in the description, then amount above threshold

    Args:
        description: Transaction description
        amount: Amount magnitude
        indicator: Raw indicator token, if the line carried one
        sign: "+" or "-" when the raw amount was signed
        threshold: Income threshold override (defaults to config)

    Returns:
        Direction of the transaction
    """
    direction = direction_from_indicator(indicator)
    if direction is not None:
        return direction

    if sign == "+":
        return Direction.INCOME
    if sign == "-":
        return Direction.EXPENSE

    desc_lower = description.lower()
    if any(keyword in desc_lower for keyword in INCOME_HINT_KEYWORDS):
        return Direction.INCOME

    if threshold is None:
        threshold = config.INCOME_AMOUNT_THRESHOLD
    if amount > threshold:
        logger.debug(f"Amount {amount} above income threshold {threshold}")
        return Direction.INCOME

    return Direction.EXPENSE


def categorize_transaction(description: str, direction: Direction) -> str:
    """
    Assign a category from the keyword table of the given direction.

    The first group (in table order) with a keyword contained in the
    description wins; no match yields the direction's default category.
    """
    desc_lower = description.lower()
    for category, keywords in CATEGORY_TABLES[direction]:
        if any(keyword in desc_lower for keyword in keywords):
            return category
    return DEFAULT_CATEGORIES[direction]


def category_taxonomy(direction: Direction) -> frozenset[str]:
    """Get every category label a record of this direction may carry."""
    labels = {category for category, _ in CATEGORY_TABLES[direction]}
    labels.add(DEFAULT_CATEGORIES[direction])
    return frozenset(labels)


def format_amount_display(amount: Decimal, direction: Direction) -> str:
    """
    Format amount for display with explicit sign.

    Income: +1600.00
    Expense: -250.00
    """
    prefix = "+" if direction == Direction.INCOME else "-"
    return f"{prefix}{abs(amount):.2f}"
