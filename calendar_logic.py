"""Month keys and month arithmetic — no UI dependencies."""

import re
from datetime import date
from typing import NamedTuple

DEFAULT_LABEL_FORMAT = "%Y/%m"

_KEY_RE = re.compile(r"([0-9]{4})-([0-9]{2})")
# "%%" must stay an escaped percent, so match it alongside "%Y"
_YEAR_DIRECTIVE_RE = re.compile(r"%[%Y]")

MIN_YEAR = 1
MAX_YEAR = 9999


class MonthKey(NamedTuple):
    """A calendar month, serialised as ``YYYY-MM``."""

    year: int
    month: int

    def __str__(self) -> str:
        return format_month_key(self)


def format_month_key(key: MonthKey) -> str:
    """Return the canonical ``YYYY-MM`` form of *key*."""
    return f"{key.year:04d}-{key.month:02d}"


def current_month(today: date | None = None) -> MonthKey:
    """Return the month containing *today* (defaults to the real date)."""
    today = today or date.today()
    return MonthKey(today.year, today.month)


def parse_month_key(text, today: date | None = None) -> MonthKey:
    """Parse ``YYYY-MM``.

    Anything that is not a valid month (wrong shape, month outside 1–12,
    year 0000, not a string at all) yields the current month instead of
    an error, so broken persisted state heals itself to "now".
    """
    if not isinstance(text, str):
        return current_month(today)
    match = _KEY_RE.fullmatch(text)
    if match is None:
        return current_month(today)
    year, month = int(match.group(1)), int(match.group(2))
    if year < MIN_YEAR or not 1 <= month <= 12:
        return current_month(today)
    return MonthKey(year, month)


def month_label(key: MonthKey, fmt: str = DEFAULT_LABEL_FORMAT) -> str:
    """Human-readable label for *key* (not the canonical key format).

    ``%Y`` is always four digits, like the key, whatever the platform strftime does.
    """
    fmt = _YEAR_DIRECTIVE_RE.sub(
        lambda m: f"{key.year:04d}" if m.group() == "%Y" else m.group(), fmt)
    return date(key.year, key.month, 1).strftime(fmt)


def prev_month(key: MonthKey) -> MonthKey:
    """Return the month before *key*; 0001-01 is returned unchanged."""
    if key.month > 1:
        return MonthKey(key.year, key.month - 1)
    if key.year <= MIN_YEAR:
        return key
    return MonthKey(key.year - 1, 12)


def next_month(key: MonthKey) -> MonthKey:
    """Return the month after *key*; 9999-12 is returned unchanged."""
    if key.month < 12:
        return MonthKey(key.year, key.month + 1)
    if key.year >= MAX_YEAR:
        return key
    return MonthKey(key.year + 1, 1)
