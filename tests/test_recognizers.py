import pytest

from statement_import.extractors.recognizers import (
    BackReferencedDetailRecognizer,
    CompactRowRecognizer,
    DateTimeBlockRecognizer,
    LEGACY_FORMATS,
    LegacyRowRecognizer,
    RawMatch,
    TabularRowRecognizer,
    default_recognizers,
)


def legacy(name: str) -> LegacyRowRecognizer:
    pattern = dict(LEGACY_FORMATS)[name]
    return LegacyRowRecognizer(name, pattern, min_line_length=10)


class TestTabularRow:
    def test_row_with_time(self):
        match = TabularRowRecognizer().match(
            ["Jul 20, 2025 08:05 pm Paid to JOGI SUPER STORE DEBIT ₹30"], 0
        )
        assert match == RawMatch(
            recognizer="tabular_row",
            date_token="Jul 20, 2025",
            time_token="08:05 pm",
            description="Paid to JOGI SUPER STORE",
            amount_token="30",
            indicator="DEBIT",
        )

    def test_row_without_time(self):
        match = TabularRowRecognizer().match(["Jul 21, 2025 Received from RAHUL CREDIT ₹1,500"], 0)
        assert match.time_token is None
        assert match.description == "Received from RAHUL"
        assert match.amount_token == "1,500"
        assert match.indicator == "CREDIT"

    def test_rejects_compact_layout(self):
        assert TabularRowRecognizer().match(["Jul 20, 2025 DEBIT₹30Paid to X"], 0) is None


class TestCompactRow:
    def test_glued_indicator_amount_and_description(self):
        match = CompactRowRecognizer().match(["Jul 20, 2025 08:05 pm DEBIT₹30Paid to JOGI"], 0)
        assert match.recognizer == "compact_row"
        assert match.date_token == "Jul 20, 2025"
        assert match.time_token == "08:05 pm"
        assert match.indicator == "DEBIT"
        assert match.amount_token == "30"
        assert match.description == "Paid to JOGI"
        assert match.consumed == 1

    def test_amount_digits_are_not_split_into_description(self):
        match = CompactRowRecognizer().match(["Jul 20, 2025 DEBIT₹1,250.50Paid to Swiggy"], 0)
        assert match.amount_token == "1,250.50"
        assert match.description == "Paid to Swiggy"


class TestDateTimeBlock:
    def test_compact_detail_below_time(self):
        lines = ["Jul 20, 2025", "08:05 pm", "DEBIT₹30Paid to JOGI SUPER STORE"]
        match = DateTimeBlockRecognizer(lookahead=6).match(lines, 0)
        assert match.date_token == "Jul 20, 2025"
        assert match.time_token == "08:05 pm"
        assert match.description == "Paid to JOGI SUPER STORE"
        assert match.consumed == 3

    def test_spaced_detail(self):
        lines = ["Jul 20, 2025", "0805 pm", "Paid to JOGI SUPER STORE DEBIT ₹30"]
        match = DateTimeBlockRecognizer(lookahead=6).match(lines, 0)
        assert match.time_token == "0805 pm"
        assert match.description == "Paid to JOGI SUPER STORE"
        assert match.indicator == "DEBIT"

    def test_split_indicator_and_amount_lines(self):
        lines = [
            "Jul 21, 2025",
            "09:15 am",
            "Transaction ID T2507215678",
            "Received from RAHUL KUMAR",
            "CREDIT",
            "₹1,500",
            "Page 1 of 1",
        ]
        match = DateTimeBlockRecognizer(lookahead=6).match(lines, 0)
        assert match.description == "Received from RAHUL KUMAR"
        assert match.indicator == "CREDIT"
        assert match.amount_token == "1,500"
        assert match.consumed == 6

    def test_split_form_with_only_boilerplate_uses_placeholder(self):
        lines = ["Jul 21, 2025", "09:15 am", "UTR No. 123456789012", "DEBIT", "₹99"]
        match = DateTimeBlockRecognizer(lookahead=6).match(lines, 0)
        assert match.description == "Unknown Transaction"
        assert match.consumed == 5

    def test_stops_at_next_date_line(self):
        lines = ["Jul 20, 2025", "08:05 pm", "Jul 21, 2025", "09:00 am", "DEBIT₹50Paid to X"]
        assert DateTimeBlockRecognizer(lookahead=6).match(lines, 0) is None

    def test_detail_outside_lookahead_is_not_found(self):
        lines = ["Jul 20, 2025", "08:05 pm", "Transaction ID T1", "UTR No. 1", "DEBIT₹30Paid to X"]
        assert DateTimeBlockRecognizer(lookahead=2).match(lines, 0) is None
        assert DateTimeBlockRecognizer(lookahead=3).match(lines, 0).consumed == 5

    def test_zero_amount_detail_is_passed_over(self):
        lines = ["Jul 20, 2025", "08:05 pm", "DEBIT₹0Paid to X", "DEBIT₹50Paid to Y"]
        match = DateTimeBlockRecognizer(lookahead=6).match(lines, 0)
        assert match.description == "Paid to Y"
        assert match.amount_token == "50"
        assert match.time_token == "08:05 pm"
        assert match.consumed == 4

    def test_split_amount_line_must_sit_inside_lookahead(self):
        lines = ["Jul 21, 2025", "09:15 am", "Received from RAHUL", "CREDIT", "₹1,500"]
        assert DateTimeBlockRecognizer(lookahead=2).match(lines, 0) is None
        assert DateTimeBlockRecognizer(lookahead=3).match(lines, 0).consumed == 5

    def test_requires_time_line(self):
        lines = ["Jul 20, 2025", "DEBIT₹30Paid to X"]
        assert DateTimeBlockRecognizer().match(lines, 0) is None

    def test_date_on_last_line(self):
        assert DateTimeBlockRecognizer().match(["Jul 20, 2025"], 0) is None

    def test_is_multi_line(self):
        assert DateTimeBlockRecognizer.multi_line is True


class TestBackReferencedDetail:
    def test_takes_nearest_date_above(self):
        lines = ["Jul 19, 2025", "Jul 20, 2025", "Transaction ID T1", "DEBIT₹120Paid to Swiggy"]
        match = BackReferencedDetailRecognizer(lookback=10).match(lines, 3)
        assert match.date_token == "Jul 20, 2025"
        assert match.time_token is None
        assert match.description == "Paid to Swiggy"
        assert match.amount_token == "120"
        assert match.consumed == 1

    def test_no_date_within_lookback(self):
        lines = ["Jul 20, 2025", "a", "b", "c", "DEBIT₹120Paid to Swiggy"]
        recognizer = BackReferencedDetailRecognizer(lookback=3)
        assert recognizer.match(lines, 4) is None
        assert BackReferencedDetailRecognizer(lookback=4).match(lines, 4) is not None

    def test_first_line_has_nothing_above(self):
        assert BackReferencedDetailRecognizer().match(["DEBIT₹120Paid to Swiggy"], 0) is None


class TestLegacyRows:
    @pytest.mark.parametrize(
        "name, line, expected",
        [
            ("slash_date_row", "01/02/2024 Grocery Store 150.00 DR",
             ("01/02/2024", "Grocery Store", "150.00", "DR")),
            ("slash_date_row", "01/02/2024 Coffee -45.50",
             ("01/02/2024", "Coffee", "-45.50", None)),
            ("dash_date_row", "15-06-2024 ATM Withdrawal 2,000.00 DR",
             ("15-06-2024", "ATM Withdrawal", "2,000.00", "DR")),
            ("iso_date_row", "2024-02-01 Salary Credit +50000",
             ("2024-02-01", "Salary Credit", "+50000", None)),
            ("rupee_row", "01/02/2024 Cashback ₹50 Received",
             ("01/02/2024", "Cashback", "50", "Received")),
            ("reference_row", "01/02/2024 NEFT Transfer 2,500.00 N123456789012",
             ("01/02/2024", "NEFT Transfer", "2,500.00", None)),
        ],
    )
    def test_fields(self, name, line, expected):
        match = legacy(name).match([line], 0)
        assert (match.date_token, match.description, match.amount_token, match.indicator) == expected
        assert match.recognizer == name

    def test_timed_rupee_row_keeps_time(self):
        match = legacy("timed_rupee_row").match(["01/02/2024 10:15:00 Tea stall ₹120 Paid"], 0)
        assert match.time_token == "10:15:00"
        assert match.description == "Tea stall"
        assert match.indicator == "Paid"

    def test_iso_date_is_not_read_as_dash_date(self):
        assert legacy("dash_date_row").match(["2024-02-01 Salary Credit +50000"], 0) is None

    def test_short_lines_are_skipped(self):
        assert LegacyRowRecognizer("slash_date_row", dict(LEGACY_FORMATS)["slash_date_row"],
                                   min_line_length=40).match(["01/02/2024 Tea 5.00"], 0) is None


def test_raw_match_must_consume_a_line():
    with pytest.raises(ValueError):
        RawMatch(
            recognizer="stub",
            date_token="01/02/2024",
            description="Tea",
            amount_token="5",
            consumed=0,
        )


def test_default_chain_order():
    names = [r.name for r in default_recognizers()]
    assert names == [
        "tabular_row",
        "compact_row",
        "date_time_block",
        "back_referenced_detail",
        "timed_rupee_row",
        "rupee_row",
        "reference_row",
        "slash_date_row",
        "dash_date_row",
        "iso_date_row",
    ]


def test_default_chain_passes_window_sizes():
    chain = {r.name: r for r in default_recognizers(lookback=3, lookahead=2, min_line_length=20)}
    assert chain["back_referenced_detail"].lookback == 3
    assert chain["date_time_block"].lookahead == 2
    assert chain["iso_date_row"].min_line_length == 20
