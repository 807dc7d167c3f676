"""Display formatting for dates, funding, headcount and gallery navigation.

Every function here is pure: same input, same output, no side effects.
"""
from __future__ import annotations

import re
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import urlsplit

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# "Jan 5 2024", "Jan 5, 2024", "January 5, 2024"
_MONTH_DAY_YEAR = re.compile(r"\b([A-Za-z]{3})[A-Za-z]*\.?\s+(\d{1,2}),?\s+(\d{4})")
_YEAR = re.compile(r"\d{4}")
_INTEGER = re.compile(r"^\d+$")

_FALLBACK_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d %b %Y", "%B %Y", "%b %Y")

_FUNDING_UNITS = (
    (Decimal(1_000_000_000), "B"),
    (Decimal(1_000_000), "M"),
    (Decimal(1_000), "K"),
)


def _month_day_year(value: str) -> tuple[str, int, int] | None:
    m = _MONTH_DAY_YEAR.search(value)
    if not m:
        return None
    return m.group(1).title(), int(m.group(2)), int(m.group(3))


def _parse_datetime(value: str) -> datetime | None:
    parts = _month_day_year(value)
    if parts and parts[0] in MONTHS:
        month, day, year = parts
        try:
            return datetime(year, MONTHS.index(month) + 1, day, tzinfo=UTC)
        except ValueError:
            return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
    if parsed is None:
        for fmt in _FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def format_date(value: object) -> str:
    """``"Jan 5 2024"`` → ``"Jan 5, 2024"``; anything else passes through."""
    if not value:
        return ""
    value = str(value).strip()
    parts = _month_day_year(value)
    if parts:
        month, day, year = parts
        return f"{month} {day}, {year}"
    return value


def format_date_short(value: object) -> str:
    """List display form: ``"Jan 5, 2024"`` → ``"Jan 2024"``."""
    if not value:
        return ""
    value = str(value).strip()
    parts = _month_day_year(value)
    if parts:
        month, _, year = parts
        return f"{month} {year}"
    parsed = _parse_datetime(value)
    if parsed is not None:
        return f"{MONTHS[parsed.month - 1]} {parsed.year}"
    return value


def parse_date_for_sort(value: object) -> int:
    """Epoch milliseconds for ordering; 0 when absent or unparseable."""
    if not value:
        return 0
    parsed = _parse_datetime(str(value).strip())
    if parsed is None:
        return 0
    return int(parsed.timestamp() * 1000)


def format_funding(value: object) -> str:
    """Amount only, the page supplies the currency sign.

    ``1900000`` → ``"1.9M"``, ``220000000`` → ``"220M"``, ``"$25K"`` → ``"25K"``.
    """
    if value is None or value == "":
        return ""
    s = str(value).strip()
    if s.startswith("$"):
        s = s[1:]
    if not _INTEGER.match(s):
        return s
    n = Decimal(int(s))
    for threshold, suffix in _FUNDING_UNITS:
        if n >= threshold:
            scaled = (n / threshold).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            text = f"{scaled:f}"
            if text.endswith(".0"):
                text = text[:-2]
            return text + suffix
    return str(int(n))


def funding_display(funding: object, stage: object) -> str:
    """Funding amount and stage joined, empty parts dropped: ``"1.9M Series B"``."""
    stage_text = str(stage).strip() if stage else ""
    return " ".join(p for p in (format_funding(funding), stage_text) if p)


def format_founded(value: object) -> str:
    """First four-digit run, e.g. ``"Founded in 2015"`` → ``"2015"``."""
    if not value:
        return ""
    value = str(value)
    m = _YEAR.search(value)
    return m.group(0) if m else value


def format_headcount(value: object) -> str:
    if value is None or value == "":
        return ""
    return str(value).strip()


def time_period(start: object, end: object) -> tuple[str, str]:
    """``(start, end)`` short dates for a tenure row; open-ended reads ``Present``."""
    return format_date_short(start), format_date_short(end) if end else "Present"


def website_host(url: object) -> str:
    """Host name without ``www.``; the raw value when it is not an absolute URL."""
    if not url or url == "#":
        return ""
    url = str(url).strip()
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        return url
    host = parts.hostname
    return host[4:] if host.startswith("www.") else host


def neighbour_id(ids: list[str], current: str, direction: str) -> str | None:
    """Id next to *current* in *direction* (``"right"``/``"left"``); ``None`` at either end."""
    if direction not in ("left", "right"):
        return None
    try:
        idx = ids.index(current)
    except ValueError:
        return None
    nxt = idx + 1 if direction == "right" else idx - 1
    if nxt < 0 or nxt >= len(ids):
        return None
    return ids[nxt]
