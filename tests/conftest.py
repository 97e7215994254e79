"""Shared statement fixtures.

``MIXED_STATEMENT_LINES`` interleaves every layout the extractor knows with
the header, reference and footer noise real exports carry, so scanner tests
can check ordering, consumed-line accounting and recognizer hits together.
"""

from pathlib import Path

import pytest

MIXED_STATEMENT_LINES = [
    "PhonePe Statement",
    "Jul 20, 2025",
    "08:05 pm",
    "DEBIT₹30Paid to JOGI SUPER STORE",
    "Transaction ID T2507201234",
    "UTR No. 123456789012",
    "DEBIT₹120Paid to Swiggy",
    "Jul 21, 2025",
    "09:15 am",
    "Transaction ID T2507215678",
    "Received from RAHUL KUMAR",
    "CREDIT",
    "₹1,500",
    "Page 1 of 1",
    "01/02/2024 Grocery Store 150.00 DR",
    "2024-02-01 Salary Credit +50000",
]

NOISE_LINES = [
    "STATEMENT OF ACCOUNT",
    "Customer Name: A. Sharma",
    "Page 1 of 2",
    "Thank you for banking with us",
]


@pytest.fixture
def mixed_statement_lines() -> list[str]:
    return list(MIXED_STATEMENT_LINES)


@pytest.fixture
def mixed_statement_text() -> str:
    return "\n".join(MIXED_STATEMENT_LINES)


@pytest.fixture
def noise_text() -> str:
    return "\n".join(NOISE_LINES)


@pytest.fixture
def write_statement(tmp_path: Path):
    """Write text to a statement file under tmp_path and return its path."""

    def _write(text: str, name: str = "statement.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
