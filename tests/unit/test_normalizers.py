"""Tests for field normalizers: casing, salary, dates, times, age, contacts."""

from datetime import date, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from src.profile.normalizers import (
    NOT_DISCLOSED,
    ValueShape,
    as_text,
    calculate_age,
    classify_date,
    classify_time,
    format_contact,
    format_date,
    format_salary,
    format_time,
    is_marriage_fixed,
    parse_age,
    title_case,
)

IST = ZoneInfo("Asia/Kolkata")


# ---------------------------------------------------------------------------
# title_case
# ---------------------------------------------------------------------------


class TestTitleCase:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("PRAVEEN", "Praveen"),
            ("praveen", "Praveen"),
            ("PRaveen", "Praveen"),
            ("  ravi  KIRAN ", "Ravi Kiran"),
            ("o'brien", "O'Brien"),
            ("b.tech (cse)", "B.Tech (Cse)"),
            ("", ""),
        ],
    )
    def test_casing(self, raw: str, expected: str) -> None:
        assert title_case(raw) == expected

    def test_none_is_empty(self) -> None:
        assert title_case(None) == ""

    def test_numbers_converted(self) -> None:
        assert title_case(2019) == "2019"
        assert title_case(2019.0) == "2019"

    @pytest.mark.parametrize(
        "raw",
        [
            "PRAVEEN kumar", "ß straße", "ǆemal", "éLAN vital", "x-ray_tech", "  ",
            "12th std", "İstanbul", "ŉ", "ǰn", "ΐn", "ẖn",
        ],
    )
    def test_idempotent(self, raw: str) -> None:
        once = title_case(raw)
        assert title_case(once) == once

    def test_multi_code_point_title_kept_lower(self) -> None:
        assert title_case("ŉ") == "ŉ"
        assert title_case("ǰN") == "ǰn"
        assert title_case("ß") == "ß"


# ---------------------------------------------------------------------------
# format_salary
# ---------------------------------------------------------------------------


class TestFormatSalary:
    def test_lakhs(self) -> None:
        assert format_salary(150000) == "₹1.5 LPA"

    def test_below_lakh(self) -> None:
        assert format_salary(50000) == "₹50,000"

    def test_zero(self) -> None:
        assert format_salary(0) == NOT_DISCLOSED

    def test_none(self) -> None:
        assert format_salary(None) == NOT_DISCLOSED

    def test_empty_string(self) -> None:
        assert format_salary("") == NOT_DISCLOSED

    def test_free_text(self) -> None:
        assert format_salary("Negotiable") == "Negotiable"
        assert format_salary("not disclosed YET") == "Not Disclosed Yet"

    def test_thousands_separators_stripped(self) -> None:
        assert format_salary("12,50,000") == "₹12.5 LPA"
        assert format_salary("1,200,000") == "₹12.0 LPA"

    def test_negative(self) -> None:
        assert format_salary("-5000") == NOT_DISCLOSED

    def test_string_zero(self) -> None:
        assert format_salary("0") == NOT_DISCLOSED

    def test_leading_number_wins(self) -> None:
        """Trailing text after a number is ignored, as with parseFloat."""
        assert format_salary("15 LPA") == "₹15"

    def test_boundary(self) -> None:
        assert format_salary(99999) == "₹99,999"
        assert format_salary(100000) == "₹1.0 LPA"

    def test_small_amount_rounded(self) -> None:
        assert format_salary("4500.4") == "₹4,500"

    def test_overflow_is_text(self) -> None:
        assert format_salary("1e400") == "1e400"
        assert format_salary(float("inf")) == "Inf"


# ---------------------------------------------------------------------------
# calculate_age / parse_age
# ---------------------------------------------------------------------------


class TestCalculateAge:
    def test_day_before_birthday(self) -> None:
        assert calculate_age(2000, 6, 15, today=date(2024, 6, 14)) == 23

    def test_on_birthday(self) -> None:
        assert calculate_age(2000, 6, 15, today=date(2024, 6, 15)) == 24

    def test_day_after_birthday(self) -> None:
        assert calculate_age(2000, 6, 15, today=date(2024, 6, 16)) == 24

    def test_earlier_month(self) -> None:
        assert calculate_age(2000, 12, 1, today=date(2024, 6, 16)) == 23

    def test_defaults_to_today(self) -> None:
        born = date.today() - timedelta(days=366 * 30)
        assert calculate_age(born.year, born.month, born.day) in (29, 30)


class TestParseAge:
    def test_slash_date(self) -> None:
        assert parse_age("06/15/2000", today=date(2024, 6, 14)) == 23
        assert parse_age("6/15/2000", today=date(2024, 6, 15)) == 24

    def test_timestamp_uses_local_date(self) -> None:
        # 18:30 UTC on the 14th is midnight on the 15th in IST.
        assert parse_age("2000-06-14T18:30:00.000Z", today=date(2024, 6, 15), tz=IST) == 24
        assert parse_age("2000-06-14T18:30:00.000Z", today=date(2024, 6, 15), tz=timezone.utc) == 24
        assert parse_age("2000-06-15T18:30:00.000Z", today=date(2024, 6, 15), tz=timezone.utc) == 24
        assert parse_age("2000-06-15T18:30:00.000Z", today=date(2024, 6, 15), tz=IST) == 23

    @pytest.mark.parametrize("raw", [None, "", 0, "unknown", "15-06-2000", "06/2000", "aa/bb/cccc", "TBD"])
    def test_unparseable_is_zero(self, raw: object) -> None:
        assert parse_age(raw, today=date(2024, 6, 15)) == 0

    def test_future_date_clamped(self) -> None:
        assert parse_age("01/01/2030", today=date(2024, 6, 15)) == 0


# ---------------------------------------------------------------------------
# format_date
# ---------------------------------------------------------------------------


class TestFormatDate:
    def test_canonical_passthrough(self) -> None:
        assert format_date("03/15/2024") == "03/15/2024"

    def test_short_canonical_passthrough(self) -> None:
        assert format_date("3/5/2024") == "3/5/2024"

    def test_local_midnight_timestamp(self) -> None:
        assert format_date("2024-03-15T00:00:00+05:30", tz=IST) == "03/15/2024"

    def test_naive_timestamp_is_local(self) -> None:
        assert format_date("2024-03-15T00:00:00") == "03/15/2024"

    def test_utc_shifted_export(self) -> None:
        assert format_date("2024-03-14T18:30:00.000Z", tz=IST) == "03/15/2024"
        assert format_date("2024-03-14T18:30:00.000Z", tz=timezone.utc) == "03/14/2024"

    def test_zero_padding(self) -> None:
        assert format_date("2001-01-05T00:00:00Z", tz=timezone.utc) == "01/05/2001"

    def test_unparseable_passthrough(self) -> None:
        assert format_date("15th March 2024") == "15th March 2024"

    def test_empty(self) -> None:
        assert format_date("") == ""
        assert format_date(None) == ""


# ---------------------------------------------------------------------------
# format_time
# ---------------------------------------------------------------------------


class TestFormatTime:
    def test_sheet_time_shifted_to_ist(self) -> None:
        assert format_time("1899-12-30T04:41:50.000Z") == "10:11:50 AM"

    def test_wraps_past_midnight(self) -> None:
        assert format_time("1899-12-30T18:30:00.000Z") == "12:00:00 AM"
        assert format_time("1899-12-30T20:15:09.000Z") == "1:45:09 AM"

    def test_noon(self) -> None:
        assert format_time("1899-12-30T06:30:05.000Z") == "12:00:05 PM"

    def test_afternoon(self) -> None:
        assert format_time("1899-12-30T10:00:00.000Z") == "3:30:00 PM"

    def test_offset_timestamp_read_in_utc(self) -> None:
        assert format_time("1899-12-30T10:11:50+05:30") == "10:11:50 AM"

    @pytest.mark.parametrize("raw", ["10:30:00 AM", "9:05 pm", "06:45:00 PM IST"])
    def test_readable_passthrough(self, raw: str) -> None:
        assert format_time(raw) == raw

    def test_unparseable_passthrough(self) -> None:
        assert format_time("early morning") == "early morning"

    def test_empty(self) -> None:
        assert format_time("") == ""
        assert format_time(None) == ""


class TestClassify:
    def test_date_shapes(self) -> None:
        assert classify_date("") is ValueShape.EMPTY
        assert classify_date("03/15/2024") is ValueShape.FORMATTED
        assert classify_date("2024-03-15T00:00:00Z") is ValueShape.TIMESTAMP
        assert classify_date("someday") is ValueShape.UNRECOGNIZED

    def test_time_shapes(self) -> None:
        assert classify_time(None) is ValueShape.EMPTY
        assert classify_time("10:11:50 AM") is ValueShape.FORMATTED
        assert classify_time("1899-12-30T04:41:50.000Z") is ValueShape.TIMESTAMP
        assert classify_time("noon-ish") is ValueShape.UNRECOGNIZED


# ---------------------------------------------------------------------------
# format_contact and helpers
# ---------------------------------------------------------------------------


class TestFormatContact:
    def test_ten_digits_prefixed(self) -> None:
        assert format_contact("9876543210") == "+91 9876543210"

    def test_numeric_input(self) -> None:
        assert format_contact(9876543210) == "+91 9876543210"
        assert format_contact(9876543210.0) == "+91 9876543210"

    def test_international_passthrough(self) -> None:
        assert format_contact("+19876543210") == "+19876543210"

    def test_trimmed(self) -> None:
        assert format_contact("  9876543210 ") == "+91 9876543210"

    def test_other_lengths_passthrough(self) -> None:
        assert format_contact("040-2345678") == "040-2345678"
        assert format_contact("98765 43210") == "98765 43210"

    def test_empty(self) -> None:
        assert format_contact(None) == ""
        assert format_contact("") == ""


class TestHelpers:
    @pytest.mark.parametrize("raw", ["yes", "Yes", " YES ", "yes\n"])
    def test_marriage_fixed(self, raw: str) -> None:
        assert is_marriage_fixed(raw) is True

    @pytest.mark.parametrize("raw", ["no", "", None, "yes, almost", 1])
    def test_marriage_not_fixed(self, raw: object) -> None:
        assert is_marriage_fixed(raw) is False

    def test_as_text(self) -> None:
        assert as_text(None) == ""
        assert as_text(0) == ""
        assert as_text(2019.0) == "2019"
        assert as_text(5.9) == "5.9"
        assert as_text("x") == "x"
