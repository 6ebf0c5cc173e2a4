"""String ``format`` support: textual checks and date/time casting."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Callable, Final

DATE: Final[str] = "date"
DATE_TIME: Final[str] = "date-time"

_DATE_TIME_TEXT = "%Y-%m-%dT%H:%M:%SZ"

# Checked against the input text, before any parsing.
FORMAT_PATTERNS: Final[dict[str, re.Pattern[str]]] = {
    DATE: re.compile(r"\d{4}-\d{2}-\d{2}"),
    DATE_TIME: re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z"),
}


def is_valid_format(format_name: object, text: str) -> bool:
    """Return True when ``text`` satisfies ``format_name``; unknown formats always pass."""

    pattern = FORMAT_PATTERNS.get(str(format_name))
    if pattern is None:
        return True
    return pattern.fullmatch(text) is not None


def _parse_date(text: str) -> date:
    return date.fromisoformat(text.strip())


def _parse_date_time(text: str) -> datetime:
    token = text.strip()
    if token.endswith(("Z", "z")):
        token = token[:-1] + "+00:00"
    parsed = datetime.fromisoformat(token)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


_PARSERS: Final[dict[str, Callable[[str], Any]]] = {
    DATE: _parse_date,
    DATE_TIME: _parse_date_time,
}


def is_temporal_format(format_name: object) -> bool:
    return format_name in _PARSERS


def parse_temporal(format_name: str, text: str) -> Any:
    """Parse ``text`` for a date format; unparseable text is returned unchanged."""

    parser = _PARSERS[format_name]
    try:
        return parser(text)
    except ValueError:
        return text


def to_text(value: Any) -> str:
    """Return the canonical text for a value, so dates survive a second cast."""

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(_DATE_TIME_TEXT)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
