"""
Format Recognizers Module
One pattern matcher per known statement layout. Each recognizer looks at the
line under the scanner's cursor (and, for multi-line layouts, a bounded window
around it) and returns the raw transaction fields it found, or None.
"""

import re
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from statement_import.config import config
from statement_import.extractors.normalizers import AmountNormalizationError, parse_amount

logger = logging.getLogger(__name__)


# Shared token patterns
WORD_DATE = r'[A-Za-z]{3} \d{1,2}, \d{4}'
CLOCK_TIME = r'\d{1,2}:?\d{2} ?(?:am|pm)'
AMOUNT = r'[\d,]+\.?\d*'
INDICATOR = r'DEBIT|CREDIT'
# Text glued to an amount must not start with a digit, or "₹30" would split as "3" + "0"
GLUED_TEXT = r'\s*[^\d\s,.].*'

BARE_DATE_LINE = re.compile(rf'^({WORD_DATE})$')
BARE_TIME_LINE = re.compile(rf'^({CLOCK_TIME})$', re.IGNORECASE)
BARE_INDICATOR_LINE = re.compile(rf'^({INDICATOR})$', re.IGNORECASE)
BARE_AMOUNT_LINE = re.compile(rf'^₹\s*({AMOUNT})$')

# DEBIT₹30Paid to JOGI SUPER STORE
COMPACT_DETAIL = re.compile(
    rf'^(?P<indicator>{INDICATOR})₹\s*(?P<amount>{AMOUNT})(?P<description>{GLUED_TEXT})$',
    re.IGNORECASE
)
# Paid to JOGI SUPER STORE DEBIT ₹30
SPACED_DETAIL = re.compile(
    rf'^(?P<description>.+?)\s+(?P<indicator>{INDICATOR})\s+₹\s*(?P<amount>{AMOUNT})$',
    re.IGNORECASE
)

# Label lines inside a wallet block that never describe the payee
BOILERPLATE_LINE = re.compile(r'^(Transaction ID|UTR No\.|Paid by)', re.IGNORECASE)


def _usable_amount(token: str) -> bool:
    """True when the amount token normalizes to a positive value."""
    try:
        parse_amount(token)
    except AmountNormalizationError:
        return False
    return True


@dataclass(frozen=True)
class RawMatch:
    """Raw, un-normalized fields extracted by a recognizer."""
    recognizer: str
    date_token: str
    description: str
    amount_token: str
    indicator: Optional[str] = None
    time_token: Optional[str] = None
    consumed: int = 1

    def __post_init__(self):
        if self.consumed < 1:
            raise ValueError(f"{self.recognizer} match must consume at least one line")


class Recognizer:
    """
    Base class for statement layout recognizers.

    Subclasses set ``name`` and implement ``match``. Multi-line recognizers
    are tried by the scanner before single-line ones.
    """

    name = "recognizer"
    multi_line = False

    def match(self, lines: Sequence[str], index: int) -> Optional[RawMatch]:
        """
        Attempt to extract a transaction anchored at ``lines[index]``.

        Args:
            lines: All statement lines, already stripped
            index: Cursor position

        Returns:
            RawMatch with ``consumed`` >= 1, or None
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class TabularRowRecognizer(Recognizer):
    """Jul 20, 2025 [08:05 pm] Paid to X DEBIT ₹30 on a single line."""

    name = "tabular_row"
    PATTERN = re.compile(
        rf'^(?P<date>{WORD_DATE})(?:\s+(?P<time>{CLOCK_TIME}))?\s+'
        rf'(?P<description>.+?)\s+(?P<indicator>{INDICATOR})\s+₹\s*(?P<amount>{AMOUNT})$',
        re.IGNORECASE
    )

    def match(self, lines, index):
        row = self.PATTERN.match(lines[index])
        if not row:
            return None
        return RawMatch(
            recognizer=self.name,
            date_token=row.group('date'),
            time_token=row.group('time'),
            description=row.group('description'),
            amount_token=row.group('amount'),
            indicator=row.group('indicator'),
        )


class CompactRowRecognizer(Recognizer):
    """Jul 20, 2025 [08:05 pm] DEBIT₹30Paid to X, indicator glued to the amount."""

    name = "compact_row"
    PATTERN = re.compile(
        rf'^(?P<date>{WORD_DATE})(?:\s+(?P<time>{CLOCK_TIME}))?\s+'
        rf'(?P<indicator>{INDICATOR})₹\s*(?P<amount>{AMOUNT})(?P<description>{GLUED_TEXT})$',
        re.IGNORECASE
    )

    def match(self, lines, index):
        row = self.PATTERN.match(lines[index])
        if not row:
            return None
        return RawMatch(
            recognizer=self.name,
            date_token=row.group('date'),
            time_token=row.group('time'),
            description=row.group('description'),
            amount_token=row.group('amount'),
            indicator=row.group('indicator'),
        )


class DateTimeBlockRecognizer(Recognizer):
    """
    Wallet export block spread over several lines:

        Jul 20, 2025
        08:05 pm
        DEBIT₹30Paid to JOGI SUPER STORE

    The detail may sit anywhere in the lookahead window below the time line,
    either as a compact row, as "<description> DEBIT ₹30", or split into a
    bare indicator line followed by a bare amount line. In the split form the
    description is the first non-boilerplate line between time and indicator.
    Details whose amount is zero or unreadable are passed over and the window
    search continues.
    """

    name = "date_time_block"
    multi_line = True

    def __init__(self, lookahead: Optional[int] = None):
        self.lookahead = config.DETAIL_LOOKAHEAD_LINES if lookahead is None else lookahead

    def match(self, lines, index):
        date_line = BARE_DATE_LINE.match(lines[index])
        if not date_line or index + 1 >= len(lines):
            return None

        time_line = BARE_TIME_LINE.match(lines[index + 1])
        if not time_line:
            return None

        date_token = date_line.group(1)
        time_token = time_line.group(1)
        detail_start = index + 2
        window_end = min(detail_start + self.lookahead, len(lines))

        for j in range(detail_start, window_end):
            line = lines[j]

            # Next block starts here; this one had no detail
            if BARE_DATE_LINE.match(line):
                logger.debug(f"Block at line {index} ended without detail at line {j}")
                return None

            detail = COMPACT_DETAIL.match(line) or SPACED_DETAIL.match(line)
            if detail and _usable_amount(detail.group('amount')):
                return RawMatch(
                    recognizer=self.name,
                    date_token=date_token,
                    time_token=time_token,
                    description=detail.group('description'),
                    amount_token=detail.group('amount'),
                    indicator=detail.group('indicator'),
                    consumed=j + 1 - index,
                )

            if BARE_INDICATOR_LINE.match(line) and j + 1 < window_end:
                amount_line = BARE_AMOUNT_LINE.match(lines[j + 1])
                if amount_line and _usable_amount(amount_line.group(1)):
                    return RawMatch(
                        recognizer=self.name,
                        date_token=date_token,
                        time_token=time_token,
                        description=self._find_description(lines, detail_start, j),
                        amount_token=amount_line.group(1),
                        indicator=line,
                        consumed=j + 2 - index,
                    )

        return None

    @staticmethod
    def _find_description(lines: Sequence[str], start: int, stop: int) -> str:
        """First non-empty, non-boilerplate line in lines[start:stop]."""
        for line in lines[start:stop]:
            if line and not BOILERPLATE_LINE.match(line):
                return line
        return "Unknown Transaction"


class BackReferencedDetailRecognizer(Recognizer):
    """
    A compact detail row with no date of its own. The date comes from the
    nearest bare date line within the lookback window above it.
    """

    name = "back_referenced_detail"

    def __init__(self, lookback: Optional[int] = None):
        self.lookback = config.DATE_LOOKBACK_LINES if lookback is None else lookback

    def match(self, lines, index):
        detail = COMPACT_DETAIL.match(lines[index])
        if not detail:
            return None

        date_token = self._find_anchor_date(lines, index)
        if date_token is None:
            logger.debug(f"No anchor date within {self.lookback} lines above line {index}")
            return None

        return RawMatch(
            recognizer=self.name,
            date_token=date_token,
            description=detail.group('description'),
            amount_token=detail.group('amount'),
            indicator=detail.group('indicator'),
        )

    def _find_anchor_date(self, lines: Sequence[str], index: int) -> Optional[str]:
        stop = max(0, index - self.lookback)
        for k in range(index - 1, stop - 1, -1):
            anchor = BARE_DATE_LINE.match(lines[k])
            if anchor:
                return anchor.group(1)
        return None


class LegacyRowRecognizer(Recognizer):
    """
    Single-line bank export row matched by one regular expression.

    The pattern must define ``date``, ``description`` and ``amount`` groups
    and may define ``time`` and ``indicator``. Lines shorter than
    ``min_line_length`` are never tried.
    """

    def __init__(self, name: str, pattern: str, min_line_length: Optional[int] = None):
        self.name = name
        self.pattern = re.compile(pattern, re.IGNORECASE)
        self.min_line_length = (
            config.MIN_LINE_LENGTH if min_line_length is None else min_line_length
        )

    def match(self, lines, index):
        line = lines[index]
        if len(line) < self.min_line_length:
            return None

        row = self.pattern.search(line)
        if not row:
            return None

        fields = row.groupdict()
        return RawMatch(
            recognizer=self.name,
            date_token=fields['date'],
            time_token=fields.get('time'),
            description=fields['description'],
            amount_token=fields['amount'],
            indicator=fields.get('indicator'),
        )


# Numeric date families; the lookbehind keeps "2024-02-01" from being read
# as a day-first date starting mid-token.
_DATE_START = r'(?<![\d/-])'
SLASH_DATE = r'\d{1,2}/\d{1,2}/\d{4}'
DASH_DATE = r'\d{1,2}-\d{1,2}-\d{4}'
ISO_DATE = r'\d{4}-\d{1,2}-\d{1,2}'
SIGNED_AMOUNT = rf'[+-]?{AMOUNT}'
BANK_INDICATOR = r'CR|DR|CREDIT|DEBIT'

LEGACY_FORMATS = (
    # 01/02/2024 10:15:00 Tea stall ₹120 Paid
    ("timed_rupee_row",
     rf'{_DATE_START}(?P<date>{SLASH_DATE})\s+(?P<time>\d{{1,2}}:\d{{2}}:\d{{2}})\s+'
     rf'(?P<description>.+?)\s+₹\s*(?P<amount>{AMOUNT})\s*'
     rf'(?P<indicator>Sent|Received|Paid|Added)?\s*$'),
    # 01/02/2024 Cashback ₹50 Received
    ("rupee_row",
     rf'{_DATE_START}(?P<date>{SLASH_DATE}|{DASH_DATE})\s+(?P<description>.+?)\s*₹\s*'
     rf'(?P<amount>{AMOUNT})\s*(?P<indicator>{BANK_INDICATOR}|Sent|Received)?\s*$'),
    # 01/02/2024 NEFT Transfer 2,500.00 N123456789012
    ("reference_row",
     rf'{_DATE_START}(?P<date>{SLASH_DATE}|{DASH_DATE})\s+(?P<description>.+?)\s+'
     rf'(?P<amount>{AMOUNT})\s+[A-Z0-9]{{10,}}\s*$'),
    # 01/02/2024 Grocery Store 150.00 DR
    ("slash_date_row",
     rf'{_DATE_START}(?P<date>{SLASH_DATE})\s+(?P<description>.+?)\s+'
     rf'(?P<amount>{SIGNED_AMOUNT})\s*(?P<indicator>{BANK_INDICATOR})?\s*$'),
    # 15-06-2024 ATM Withdrawal 2,000.00 DR
    ("dash_date_row",
     rf'{_DATE_START}(?P<date>{DASH_DATE})\s+(?P<description>.+?)\s+'
     rf'(?P<amount>{SIGNED_AMOUNT})\s*(?P<indicator>{BANK_INDICATOR})?\s*$'),
    # 2024-02-01 Salary Credit +50000
    ("iso_date_row",
     rf'{_DATE_START}(?P<date>{ISO_DATE})\s+(?P<description>.+?)\s+'
     rf'(?P<amount>{SIGNED_AMOUNT})\s*(?P<indicator>{BANK_INDICATOR})?\s*$'),
)


def default_recognizers(
    lookback: Optional[int] = None,
    lookahead: Optional[int] = None,
    min_line_length: Optional[int] = None
) -> tuple[Recognizer, ...]:
    """
    Build the recognizer chain in priority order, most structured first.

    Window sizes and the legacy minimum line length default to config.
    """
    return (
        TabularRowRecognizer(),
        CompactRowRecognizer(),
        DateTimeBlockRecognizer(lookahead=lookahead),
        BackReferencedDetailRecognizer(lookback=lookback),
        *(
            LegacyRowRecognizer(name, pattern, min_line_length=min_line_length)
            for name, pattern in LEGACY_FORMATS
        ),
    )
