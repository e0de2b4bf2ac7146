"""Tests for record normalization and status classification."""

import math

import pytest

from ticketdash.helpers import format_idr, to_number, to_text
from ticketdash.model.ticket import TicketRecord, TicketStatus, classify_status


@pytest.mark.parametrize("raw, expected", [
    ("0", TicketStatus.UNPAID),
    (" 0 ", TicketStatus.UNPAID),
    (0, TicketStatus.UNPAID),
    ("1", TicketStatus.AWAITING_CHECKIN),
    (1, TicketStatus.AWAITING_CHECKIN),
    (1.0, TicketStatus.AWAITING_CHECKIN),
    (0.0, TicketStatus.UNPAID),
    (1.5, TicketStatus.UNKNOWN),
    ("check in", TicketStatus.CHECKED_IN),
    ("  Check In ", TicketStatus.CHECKED_IN),
    ("CHECK IN", TicketStatus.CHECKED_IN),
    ("checkin", TicketStatus.UNKNOWN),
    ("", TicketStatus.UNKNOWN),
    (None, TicketStatus.UNKNOWN),
    ("refunded", TicketStatus.UNKNOWN),
])
def test_classify_status(raw, expected):
    assert classify_status(raw) is expected


def test_status_labels():
    assert TicketStatus.CHECKED_IN.label == "Check In"
    assert TicketStatus.AWAITING_CHECKIN.label == "Awaiting Check-in"


@pytest.mark.parametrize("raw, expected", [
    (None, 0),
    ("", 0),
    ("abc", 0),
    ("12", 12),
    (" 7 ", 7),
    ("2.5", 2.5),
    (3, 3),
    (4.0, 4),
    (True, 1),
    (float("nan"), 0),
    ("inf", 0),
    ([1, 2], 0),
    ({"qty": 1}, 0),
])
def test_to_number(raw, expected):
    assert to_number(raw) == expected


def test_to_number_never_nan():
    assert not math.isnan(to_number("NaN"))


def test_to_text():
    assert to_text(None) == ""
    assert to_text("  VIP ") == "VIP"
    assert to_text(5) == "5"


def test_format_idr():
    assert format_idr(1250000) == "Rp 1.250.000"
    assert format_idr("garbage") == "Rp 0"


def test_from_raw_coerces_fields():
    rec = TicketRecord.from_raw({
        "qty": "abc", "total_paid": "150000", "status": " 1 ",
        "clock_in": None, "type_ticket": " VIP ", "date_ticket": None,
    })
    assert rec.qty == 0
    assert rec.total_paid == 150000
    assert rec.status is TicketStatus.AWAITING_CHECKIN
    assert rec.clock_in == ""
    assert rec.type_ticket == "VIP"
    assert rec.date_ticket == ""


def test_from_raw_non_mapping_is_default():
    assert TicketRecord.from_raw("not a record") == TicketRecord()
    assert TicketRecord.from_raw(None) == TicketRecord()


def test_awaiting_is_sold():
    rec = TicketRecord.from_raw({"status": "1"})
    assert rec.is_sold
    assert rec.is_awaiting
    assert not rec.is_checked_in


def test_clock_in_makes_sold():
    rec = TicketRecord.from_raw({"status": "", "clock_in": "2024-01-01T09:00"})
    assert rec.is_sold
    assert not rec.is_checked_in


def test_unpaid_never_sold_even_with_clock_in():
    rec = TicketRecord.from_raw({"status": "0", "clock_in": "2024-01-01"})
    assert rec.is_unpaid
    assert not rec.is_sold


def test_checked_in_without_clock_in_is_not_sold():
    rec = TicketRecord.from_raw({"status": "check in"})
    assert rec.is_checked_in
    assert not rec.is_sold


def test_blank_clock_in_is_not_a_check_in():
    rec = TicketRecord.from_raw({"status": "refunded", "clock_in": "  "})
    assert not rec.is_sold
