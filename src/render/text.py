"""Plain-text rendering of cards, the detail panel and page controls.

Display formatting (title case, salary) is applied here at render time; the
stored Profile keeps source values.
"""

from collections.abc import Callable

from src.core.schemas import IndexedProfile, Profile
from src.pipeline.paginator import Page
from src.profile.normalizers import format_salary, title_case

EMPTY_STATE = "No profiles match your criteria"
LOAD_ERROR = "Error loading profiles. Please try again later."
FAVORITE_MARK = "★"

Accessor = Callable[[Profile], str]


def _raw(field: str) -> Accessor:
    return lambda p: str(getattr(p, field))


def _titled(field: str) -> Accessor:
    return lambda p: title_case(getattr(p, field))


def _years(p: Profile) -> str:
    return f"{p.max_age_gap} years" if p.max_age_gap else ""


CARD_ROWS: list[tuple[str, Accessor]] = [
    ("DOB", _raw("date_of_birth")),
    ("Place of Birth", _titled("place_of_birth")),
    ("Time of Birth", _raw("time_of_birth")),
    ("Star", _titled("birth_star")),
    ("Height", _raw("height")),
    ("Education", _titled("education")),
    ("Job", _titled("occupation")),
    ("Salary", lambda p: format_salary(p.salary)),
]

DETAIL_SECTIONS: list[tuple[str, list[tuple[str, Accessor]]]] = [
    ("Personal Details", [
        ("Name", _titled("name")),
        ("Surname", _titled("surname")),
        ("Gender", _titled("gender")),
        ("Date Of Birth", _raw("date_of_birth")),
        ("Age", _raw("age")),
        ("Height", _raw("height")),
        ("Complexion", _titled("complexion")),
        ("Marital Status", _titled("marital_status")),
        ("Resident Status", _titled("resident_status")),
        ("Profile Created By", _titled("profile_created_by")),
    ]),
    ("Community & Horoscope", [
        ("Subsect / Sakha", _raw("subsect")),
        ("Gothra", _titled("gothra")),
        ("Birth Star", _titled("birth_star")),
        ("Padam", _raw("padam")),
        ("Date Of Birth", _raw("date_of_birth")),
        ("Place Of Birth", _titled("place_of_birth")),
        ("Time Of Birth", _raw("time_of_birth")),
    ]),
    ("Family Details", [
        ("Father's Name", _titled("father_name")),
        ("Father's Occupation", _titled("father_occupation")),
        ("Mother's Name", _titled("mother_name")),
        ("Mother's Occupation", _titled("mother_occupation")),
        ("Native Place", _titled("native_place")),
    ]),
    ("Education & Career", [
        ("Highest Qualification", _titled("education")),
        ("College / University", _titled("college")),
        ("Passout Year", _raw("passout_year")),
        ("Designation", _titled("occupation")),
        ("Company", _titled("company")),
        ("Job Location", _titled("job_location")),
        ("Annual Salary", lambda p: format_salary(p.salary)),
    ]),
    ("Contact Details", [
        ("Primary Contact", _raw("primary_contact")),
        ("Secondary Contact", _raw("secondary_contact")),
    ]),
    ("Partner Preferences", [
        ("Max Age Gap", _years),
        ("Subsect Preference", _titled("subsect_preference")),
        ("Min Height", _raw("min_height_pref")),
        ("Max Height", _raw("max_height_pref")),
        ("Location Preference", _titled("location_preference")),
        ("Education Preference", _titled("education_preference")),
    ]),
]


def _rows(rows: list[tuple[str, Accessor]], profile: Profile, indent: str = "  ") -> list[str]:
    width = max(len(label) for label, _ in rows)
    return [f"{indent}{label + ':':<{width + 1}} {get(profile)}" for label, get in rows]


def render_card(entry: IndexedProfile) -> str:
    p = entry.profile
    star = f" {FAVORITE_MARK}" if p.favorite else ""
    header = f"[{entry.index}] {title_case(p.full_name)} ({title_case(p.gender)}){star}"
    return "\n".join([header, *_rows(CARD_ROWS, p)])


def render_page_controls(page: Page[IndexedProfile]) -> str:
    """``‹ 1 … 4 [5] 6 … 12 ›``; empty when there is a single page."""
    if page.total_pages <= 1:
        return ""
    parts = ["‹" if page.has_previous else " "]
    for link in page.links():
        if link is None:
            parts.append("…")
        elif link == page.page:
            parts.append(f"[{link}]")
        else:
            parts.append(str(link))
    parts.append("›" if page.has_next else " ")
    return " ".join(parts)


def render_summary(page: Page[IndexedProfile]) -> str:
    if page.is_empty:
        return "0 profiles"
    return (
        f"{page.total_count} profiles (Showing {page.range_start}-{page.range_end})"
        f"  |  Page {page.page} of {page.total_pages}"
    )


def render_page(page: Page[IndexedProfile]) -> str:
    """Full grid view: summary, cards, controls. Empty results get the empty state."""
    if page.is_empty:
        return f"{render_summary(page)}\n\n{EMPTY_STATE}"
    blocks = [render_summary(page), *(render_card(e) for e in page.items)]
    controls = render_page_controls(page)
    if controls:
        blocks.append(controls)
    return "\n\n".join(blocks)


def render_details(entry: IndexedProfile) -> str:
    """Sectioned detail panel for one profile."""
    p = entry.profile
    lines = [f"{title_case(p.full_name)}  ({title_case(p.gender)})"]
    if p.favorite:
        lines[0] += f"  {FAVORITE_MARK}"
    for title, rows in DETAIL_SECTIONS:
        section_rows = list(rows)
        if title == "Partner Preferences" and p.other_info:
            section_rows.append(("Other Info / Comments", _titled("other_info")))
        lines.append("")
        lines.append(title)
        lines.extend(_rows(section_rows, p))
    return "\n".join(lines)


FILTER_LABELS = {
    "gender": "--gender",
    "resident_status": "--resident",
    "marital_status": "--marital",
    "subsect": "--subsect",
}


def render_filter_options(options: dict[str, list[str]]) -> str:
    """Valid values for each categorical filter flag."""
    lines = []
    for field, flag in FILTER_LABELS.items():
        values = options.get(field, [])
        lines.append(f"{flag}: {', '.join(values) if values else '(none)'}")
    return "\n".join(lines)
