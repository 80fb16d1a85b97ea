"""
Record loading (normalized JSON -> Course objects).

The provider spreadsheets are mapped to the normalized record shape elsewhere;
this module only reads that shape, from a local JSON file or an http(s) URL:

    [{"id": "...", "title": "...", "location": "...", "start_date": "2026-03-02",
      "total_seats": 12, "available_seats": 4, "enrolled": 8}, ...]

or {"courses": [...]}.

Rules:
- 1 JSON object = 1 Course; rows without id or title are skipped
- missing/broken numbers -> 0, enrolled missing -> derived from seats
- unknown date formats -> no date (course stays, but never matches)
- empty or placeholder locations ("Unknown", "Desconocida") -> None
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Optional

import requests

from coursesynergy.matcher import UNKNOWN_LOCATIONS
from coursesynergy.model import Course


REQUEST_TIMEOUT = 30

_ALIASES = {
    "start_date": ("start_date", "startDate"),
    "total_seats": ("total_seats", "totalSeats"),
    "available_seats": ("available_seats", "availableSeats"),
}


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _field(row: dict[str, Any], name: str) -> Any:
    for key in _ALIASES.get(name, (name,)):
        if key in row:
            return row[key]
    return None


def _to_int(value: Any) -> Optional[int]:
    """
    Convert a JSON number/string to int. Returns None if not convertible.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


def parse_date(value: Any) -> Optional[date]:
    """
    Accept ISO 'YYYY-MM-DD' (optionally followed by a time) or 'dd/mm/yyyy'.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None

    for fmt, text in (("%Y-%m-%d", raw[:10]), ("%d/%m/%Y", raw)):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_location(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    loc = value.strip()
    if not loc or loc.lower() in UNKNOWN_LOCATIONS:
        return None
    return loc


def course_from_dict(row: dict[str, Any], source: str) -> Optional[Course]:
    """
    Build one Course from one normalized row. Returns None for unusable rows.
    """
    if not isinstance(row, dict):
        return None

    cid = str(row.get("id") or "").strip()
    title = str(row.get("title") or "").strip()
    if not cid or not title:
        return None

    return Course(
        id=cid,
        source=source,
        title=title,
        location=normalize_location(row.get("location")),
        start_date=parse_date(_field(row, "start_date")),
        total_seats=_to_int(_field(row, "total_seats")) or 0,
        available_seats=_to_int(_field(row, "available_seats")) or 0,
        enrolled=_to_int(row.get("enrolled")),
    )


def courses_from_payload(payload: Any, source: str) -> list[Course]:
    rows = payload.get("courses", []) if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        return []

    out: list[Course] = []
    for row in rows:
        course = course_from_dict(row, source)
        if course is not None:
            out.append(course)
    return out


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _is_url(location: str) -> bool:
    return location.startswith("http://") or location.startswith("https://")


def _load_json_file(path: Path) -> Any:
    """
    Never crash if data is missing or broken; return [] instead.
    """
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return []


def _fetch_json(url: str) -> Any:
    resp = requests.get(url, timeout=REQUEST_TIMEOUT)
    resp.raise_for_status()
    try:
        return resp.json()
    except ValueError:
        return []


def load_courses(location: str | Path, source: str) -> list[Course]:
    """
    Load normalized course records of one provider from a file path or URL.

    Network errors are raised as requests.RequestException.
    """
    text = str(location).strip()
    if _is_url(text):
        payload = _fetch_json(text)
    else:
        payload = _load_json_file(Path(text))
    return courses_from_payload(payload, source)


def upcoming_only(courses: Iterable[Course], today: date) -> list[Course]:
    """
    Keep courses starting on or after today (undated courses are dropped).
    """
    return [c for c in courses if c.start_date is not None and c.start_date >= today]


def course_to_dict(course: Course) -> dict[str, Any]:
    return {
        "id": course.id,
        "source": course.source,
        "title": course.title,
        "location": course.location,
        "start_date": course.start_date.isoformat() if course.start_date else None,
        "total_seats": course.total_seats,
        "available_seats": course.available_seats,
        "enrolled": course.enrolled_count,
    }
