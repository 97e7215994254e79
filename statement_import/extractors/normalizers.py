"""
Normalizers Module
Turns raw date, time and amount tokens from statement text into values.
"""

import re
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

logger = logging.getLogger(__name__)


class NormalizationError(ValueError):
    """Raised when a raw token cannot be turned into a valid value."""
    pass


class DateNormalizationError(NormalizationError):
    """Raised for unparseable or out-of-range dates and times."""
    pass


class AmountNormalizationError(NormalizationError):
    """Raised for non-numeric or zero amounts."""
    pass


# Leading currency markers, longest first so "Rs." wins over "Rs"
CURRENCY_PREFIX = re.compile(r'^(?:₹|\$|INR|Rs\.?)\s*', re.IGNORECASE)

# "0805 pm" style times lack the colon
COMPACT_TIME = re.compile(r'^(\d{1,2})(\d{2})(\s*[ap]m)$', re.IGNORECASE)
MERIDIEM_SUFFIX = re.compile(r'\s*([ap]m)$', re.IGNORECASE)


def parse_date(date_str: str) -> datetime:
    """
    Parse a date token into a datetime at midnight.

    Supports formats:
    - DD/MM/YYYY
    - YYYY-MM-DD (exactly 10 characters, first dash at index 4)
    - DD-MM-YYYY (any other dash-delimited token)
    - Mon DD, YYYY (e.g. "Jul 20, 2025")

    Raises:
        DateNormalizationError: If the token matches no family or a
            component is out of range
    """
    token = date_str.strip()

    if '/' in token:
        fmt = '%d/%m/%Y'
    elif '-' in token:
        if len(token) == 10 and token.index('-') == 4:
            fmt = '%Y-%m-%d'
        else:
            fmt = '%d-%m-%Y'
    elif ',' in token:
        fmt = '%b %d, %Y'
    else:
        raise DateNormalizationError(f"Unsupported date format: {date_str!r}")

    try:
        return datetime.strptime(token, fmt)
    except ValueError as e:
        raise DateNormalizationError(f"Invalid date {date_str!r}: {e}") from e


def normalize_time(time_str: str) -> str:
    """
    Normalize a 12-hour time token to "H:MM am".

    "0805 pm" -> "08:05 pm", "8:05pm" -> "8:05 pm". Tokens without am/pm
    are returned stripped.
    """
    token = time_str.strip()
    compact = COMPACT_TIME.match(token)
    if compact:
        token = f"{compact.group(1)}:{compact.group(2)}{compact.group(3)}"
    return MERIDIEM_SUFFIX.sub(r' \1', token)


def parse_time(time_str: str) -> tuple[int, int, int]:
    """
    Parse a time token into (hour, minute, second).

    Accepts "H:MM am/pm" (colon optional) and 24-hour "HH:MM[:SS]".

    Raises:
        DateNormalizationError: If the time is malformed or out of range
    """
    token = normalize_time(time_str)
    if MERIDIEM_SUFFIX.search(token):
        formats = ('%I:%M %p',)
    else:
        formats = ('%H:%M:%S', '%H:%M')

    for fmt in formats:
        try:
            parsed = datetime.strptime(token, fmt)
            return parsed.hour, parsed.minute, parsed.second
        except ValueError:
            continue

    raise DateNormalizationError(f"Invalid time: {time_str!r}")


def combine_date_time(date_str: str, time_str: Optional[str] = None) -> datetime:
    """
    Build the transaction instant from a date token and optional time token.

    Raises:
        DateNormalizationError: If either token is invalid
    """
    date = parse_date(date_str)
    if not time_str:
        return date

    hour, minute, second = parse_time(time_str)
    return date.replace(hour=hour, minute=minute, second=second)


def parse_amount(amount_str: str) -> tuple[Decimal, Optional[str]]:
    """
    Parse a raw amount token.

    Strips whitespace, a leading sign, a leading currency marker and
    thousands separators.

    Returns:
        (magnitude, sign) where sign is "+", "-" or None

    Raises:
        AmountNormalizationError: If the amount is non-numeric or zero
    """
    if amount_str is None:
        raise AmountNormalizationError("Amount is required")

    clean = amount_str.strip()
    sign = None

    # Sign may sit on either side of the currency marker: "-₹50", "₹-50"
    for _ in range(2):
        if clean[:1] in ('+', '-'):
            sign = sign or clean[0]
            clean = clean[1:].lstrip()
        clean = CURRENCY_PREFIX.sub('', clean)

    clean = clean.replace(',', '').replace(' ', '')

    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise AmountNormalizationError(f"Invalid amount format: {amount_str!r}") from e

    if not amount.is_finite():
        raise AmountNormalizationError(f"Invalid amount format: {amount_str!r}")

    if amount.is_signed():
        # Leftover sign from a malformed token such as "---5"
        raise AmountNormalizationError(f"Invalid amount format: {amount_str!r}")

    if amount == 0:
        raise AmountNormalizationError(f"Zero amount: {amount_str!r}")

    return amount, sign
