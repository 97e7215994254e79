import json
from datetime import datetime
from decimal import Decimal

import pytest

from statement_import.extractors.financial_rules import Direction
from statement_import.extractors.regex_extractor import TransactionRecord
from statement_import.output.writer import (
    build_import_payload,
    generate_pdf_report,
    summarize,
    write_json,
)


@pytest.fixture
def records():
    return [
        TransactionRecord(datetime(2024, 2, 1), Decimal("150.00"), "Grocery Store",
                          Direction.EXPENSE, "Groceries"),
        TransactionRecord(datetime(2024, 2, 1), Decimal("50000"), "Salary Credit",
                          Direction.INCOME, "Salary"),
        TransactionRecord(datetime(2024, 2, 2), Decimal("50.50"), "Big Bazaar mart",
                          Direction.EXPENSE, "Groceries"),
    ]


def test_payload(records):
    payload = build_import_payload(records)
    assert payload["success"] is True
    assert payload["message"] == "Found 3 transactions"
    assert payload["data"][1] == {
        "date": "2024-02-01T00:00:00",
        "amount": "50000.00",
        "description": "Salary Credit",
        "type": "income",
        "category": "Salary",
    }


def test_empty_payload():
    payload = build_import_payload([])
    assert payload["success"] is False
    assert payload["data"] == []


def test_write_json(records, tmp_path):
    path = write_json(records, str(tmp_path / "out" / "import.json"))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [item["amount"] for item in data["data"]] == ["150.00", "50000.00", "50.50"]


def test_summarize(records):
    summary = summarize(records)
    assert summary["income"] == Decimal("50000")
    assert summary["expense"] == Decimal("200.50")
    assert summary["net"] == Decimal("49799.50")
    assert summary["categories"] == {
        (Direction.EXPENSE, "Groceries"): Decimal("200.50"),
        (Direction.INCOME, "Salary"): Decimal("50000"),
    }


def test_pdf_report(records, tmp_path):
    path = tmp_path / "reports" / "preview.pdf"
    generate_pdf_report(str(path), records, "statement <june>.pdf")
    assert path.read_bytes().startswith(b"%PDF")


def test_pdf_report_without_records(tmp_path):
    path = tmp_path / "empty.pdf"
    generate_pdf_report(str(path), [], "statement.txt")
    assert path.read_bytes().startswith(b"%PDF")
