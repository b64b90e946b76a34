"""Field normalizers: pure, total functions from raw source values to display values.

Source timestamps arrive in two shapes:
  - a spreadsheet export that stores local wall-clock time as if it were UTC
    (``2000-06-14T18:30:00.000Z``, ``1899-12-30T04:41:50.000Z``)
  - a pre-formatted display string (``03/15/2024``, ``10:11:50 AM``)

The upstream format is not typed, so the shape is decided structurally by
``classify_date`` / ``classify_time`` before any conversion happens.
None of these functions raise; malformed input degrades to a per-field fallback.
"""

import enum
import math
import re
from datetime import date, datetime, timezone, tzinfo
from typing import Any

NOT_DISCLOSED = "Not Disclosed"
LAKH = 100_000
# Spreadsheet times are IST wall-clock stored as UTC.
IST_OFFSET_MINUTES = 5 * 60 + 30
_MINUTES_PER_DAY = 24 * 60

_WORD_START_RE = re.compile(r"\b\w")
_CANONICAL_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
_READABLE_TIME_RE = re.compile(r"\d{1,2}:\d{2}.*[AaPp][Mm]")
_LEADING_FLOAT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_TEN_DIGITS_RE = re.compile(r"[0-9]{10}")


class ValueShape(enum.Enum):
    """Structural classification of a raw date/time value."""

    EMPTY = "empty"
    FORMATTED = "formatted"
    TIMESTAMP = "timestamp"
    UNRECOGNIZED = "unrecognized"


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def is_blank(value: Any) -> bool:
    """True for None, empty string, zero, NaN and False."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (bool, int, float)):
        return not value
    return False


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def as_text(value: Any) -> str:
    """Render a raw value as text, mapping blank values to ``""``.

    Integral floats (JSON numbers such as ``2019.0``) lose the ``.0``.
    """
    if is_blank(value):
        return ""
    return _to_str(value)


def title_case(value: Any) -> str:
    """Trim, lower-case, then capitalise every word-leading character.

    >>> title_case("  PRAVEEN kumar ")
    'Praveen Kumar'
    """
    text = _to_str(value).strip().lower()
    return _WORD_START_RE.sub(_title_char, text)


def _title_char(match: re.Match[str]) -> str:
    # Multi-code-point title forms (U+0149, U+01F0) stay lower-case.
    char = match.group(0)
    titled = char.title()
    return titled if len(titled) == 1 else char


# ---------------------------------------------------------------------------
# Salary
# ---------------------------------------------------------------------------


def _parse_leading_float(text: str) -> float | None:
    match = _LEADING_FLOAT_RE.match(text)
    if match is None:
        return None
    return float(match.group(0))


def format_salary(value: Any) -> str:
    """Render an annual salary in INR.

    >= 1 lakh renders as LPA with one decimal, smaller positive amounts as a
    grouped rupee figure. Free text such as "negotiable" is title-cased.
    """
    if is_blank(value):
        return NOT_DISCLOSED
    amount = _parse_leading_float(_to_str(value).replace(",", "").strip())
    if amount is None or not math.isfinite(amount):
        return title_case(value)
    if amount >= LAKH:
        return f"₹{amount / LAKH:.1f} LPA"
    if amount > 0:
        return f"₹{amount:,.0f}"
    return NOT_DISCLOSED


# ---------------------------------------------------------------------------
# Dates and times
# ---------------------------------------------------------------------------


def _parse_timestamp(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.strip())
    except ValueError:
        return None


def _to_local(value: datetime, tz: tzinfo | None) -> datetime | None:
    """Convert an aware datetime to ``tz`` (host local when None); naive values are already local."""
    if value.tzinfo is None:
        return value
    try:
        return value.astimezone(tz)
    except (OverflowError, ValueError, OSError):
        return None


def classify_date(value: Any) -> ValueShape:
    if is_blank(value):
        return ValueShape.EMPTY
    text = _to_str(value)
    if _CANONICAL_DATE_RE.match(text):
        return ValueShape.FORMATTED
    if _parse_timestamp(text) is not None:
        return ValueShape.TIMESTAMP
    return ValueShape.UNRECOGNIZED


def classify_time(value: Any) -> ValueShape:
    if is_blank(value):
        return ValueShape.EMPTY
    text = _to_str(value)
    if _READABLE_TIME_RE.search(text):
        return ValueShape.FORMATTED
    if _parse_timestamp(text) is not None:
        return ValueShape.TIMESTAMP
    return ValueShape.UNRECOGNIZED


def format_date(value: Any, tz: tzinfo | None = None) -> str:
    """Render a date of birth as ``MM/DD/YYYY``.

    Already-canonical and unparseable values are returned verbatim.
    """
    shape = classify_date(value)
    if shape is ValueShape.EMPTY:
        return ""
    text = _to_str(value)
    if shape is not ValueShape.TIMESTAMP:
        return text

    parsed = _parse_timestamp(text)
    local = _to_local(parsed, tz) if parsed is not None else None
    if local is None:
        return text
    return f"{local.month:02d}/{local.day:02d}/{local.year}"


def format_time(value: Any) -> str:
    """Render a time of birth as ``H:MM:SS AM/PM``.

    Timestamps carry IST wall-clock time in their UTC fields, so the fixed
    +5:30 offset is applied to the UTC time-of-day (naive timestamps are read
    as UTC). Readable and unparseable values are returned verbatim.
    """
    shape = classify_time(value)
    if shape is ValueShape.EMPTY:
        return ""
    text = _to_str(value)
    if shape is not ValueShape.TIMESTAMP:
        return text

    parsed = _parse_timestamp(text)
    if parsed is not None and parsed.tzinfo is not None:
        parsed = _to_local(parsed, timezone.utc)
    if parsed is None:
        return text
    total = (parsed.hour * 60 + parsed.minute + IST_OFFSET_MINUTES) % _MINUTES_PER_DAY
    hour, minute = divmod(total, 60)
    suffix = "PM" if hour >= 12 else "AM"
    hour = hour % 12 or 12
    return f"{hour}:{minute:02d}:{parsed.second:02d} {suffix}"


def calculate_age(year: int, month: int, day: int, today: date | None = None) -> int:
    """Completed years between a birth date (1-indexed month) and ``today``."""
    today = today or date.today()
    age = today.year - year
    if (today.month, today.day) < (month, day):
        age -= 1
    return age


def _parse_leading_int(text: str) -> int | None:
    match = _LEADING_INT_RE.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_age(value: Any, today: date | None = None, tz: tzinfo | None = None) -> int:
    """Age in years from a timestamp or ``M/D/YYYY`` date of birth; 0 when unparseable."""
    if is_blank(value):
        return 0
    text = _to_str(value)

    if "T" in text:
        parsed = _parse_timestamp(text)
        local = _to_local(parsed, tz) if parsed is not None else None
        if local is not None:
            return max(0, calculate_age(local.year, local.month, local.day, today))

    parts = text.split("/")
    if len(parts) != 3:
        return 0
    month, day, year = (_parse_leading_int(p) for p in parts)
    if month is None or day is None or year is None:
        return 0
    return max(0, calculate_age(year, month, day, today))


# ---------------------------------------------------------------------------
# Contacts and flags
# ---------------------------------------------------------------------------


def format_contact(value: Any) -> str:
    """Prefix bare 10-digit numbers with the Indian country code."""
    if is_blank(value):
        return ""
    text = _to_str(value).strip()
    if text.startswith("+"):
        return text
    if _TEN_DIGITS_RE.fullmatch(text):
        return f"+91 {text}"
    return text


def is_marriage_fixed(value: Any) -> bool:
    return as_text(value).strip().lower() == "yes"
