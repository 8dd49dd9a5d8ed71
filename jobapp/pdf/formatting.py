"""Value formatting shared by the application and I-9 fillers."""

from __future__ import annotations

import re
from datetime import date, datetime

EQUIPMENT_LABELS = {
    "none": "None",
    "basic": "Basic",
    "intermediate": "Intermediate",
    "advanced": "Advanced",
    "expert": "Expert",
}

_DATE_FORMATS = ["%m/%d/%Y", "%m-%d-%Y", "%m%d%Y"]


def parse_date(value: str) -> date | None:
    """Parse ISO dates (optionally with a time part) and US month-first dates."""
    raw = (value or "").strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def split_date(value: str) -> tuple[str, str, str] | None:
    """Return ``(MM, DD, YYYY)`` for the split month/day/year template fields."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed.month:02d}", f"{parsed.day:02d}", f"{parsed.year:04d}"


def i9_date(value: str) -> str:
    """Render a date as ``MMDDYYYY``; unparsable input is passed through."""
    parts = split_date(value)
    if parts is None:
        return (value or "").strip()
    return "".join(parts)


def ssn_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")[:9]


def ssn_parts(value: str) -> tuple[str, str, str]:
    """Split ``XXX-XX-XXXX`` into the three application SSN boxes."""
    digits = ssn_digits(value)
    return digits[:3], digits[3:5], digits[5:9]


def equipment_label(value: str) -> str:
    raw = (value or "").strip()
    return EQUIPMENT_LABELS.get(raw.lower(), raw)
