"""Date parsing shared by adapters and the timeline."""

from datetime import date, datetime, timezone


def parse_date(value) -> date | None:
    """Best-effort parse of an ISO-ish date or timestamp; None if unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    # "2013-10-04 00:00:00 UTC" and similar
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def years_since(value, today: date | None = None) -> int:
    """Whole calendar years between a date string and today (0 if unknown)."""
    parsed = parse_date(value)
    if parsed is None:
        return 0
    today = today or datetime.now(timezone.utc).date()
    return max(today.year - parsed.year, 0)


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()
