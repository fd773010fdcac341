"""Resolve the loose date text printed by job boards into absolute UTC instants.

Upstream boards never print an unambiguous date. They use relative words
("დღეს", "3 დღის წინ", "yesterday") or a day and month without a year
("15 მარ"). ``normalize_date`` turns any of these into an aware UTC
``datetime`` and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
import re
from typing import Iterable, Sequence


@dataclass(frozen=True)
class DateLocale:
    name: str
    today_tokens: tuple[str, ...] = ()
    yesterday_tokens: tuple[str, ...] = ()
    # Whole-text matches only, e.g. a "new" badge used in place of a date.
    exact_today_tokens: tuple[str, ...] = ()
    minute_units: tuple[str, ...] = ()
    hour_units: tuple[str, ...] = ()
    day_units: tuple[str, ...] = ()
    week_units: tuple[str, ...] = ()
    months: dict[str, int] = field(default_factory=dict)


GEORGIAN = DateLocale(
    name="ka",
    today_tokens=("დღეს",),
    yesterday_tokens=("გუშინ",),
    exact_today_tokens=("ახალი",),
    minute_units=("წუთ",),
    hour_units=("საათ",),
    day_units=("დღის", "დღე", "დღ"),
    week_units=("კვირ",),
    months={
        "იანვარი": 1, "იანვ": 1, "იან": 1,
        "თებერვალი": 2, "თებ": 2,
        "მარტი": 3, "მარ": 3,
        "აპრილი": 4, "აპრ": 4,
        "მაისი": 5, "მაი": 5,
        "ივნისი": 6, "ივნ": 6,
        "ივლისი": 7, "ივლ": 7,
        "აგვისტო": 8, "აგვ": 8,
        "სექტემბერი": 9, "სექ": 9,
        "ოქტომბერი": 10, "ოქტ": 10,
        "ნოემბერი": 11, "ნოე": 11,
        "დეკემბერი": 12, "დეკ": 12,
    },
)

ENGLISH = DateLocale(
    name="en",
    today_tokens=("today", "just now"),
    yesterday_tokens=("yesterday",),
    exact_today_tokens=("new", "now"),
    minute_units=("minute", "min"),
    hour_units=("hour", "hr"),
    day_units=("day",),
    week_units=("week", "wk"),
    months={
        "january": 1, "jan": 1,
        "february": 2, "feb": 2,
        "march": 3, "mar": 3,
        "april": 4, "apr": 4,
        "may": 5,
        "june": 6, "jun": 6,
        "july": 7, "jul": 7,
        "august": 8, "aug": 8,
        "september": 9, "sept": 9, "sep": 9,
        "october": 10, "oct": 10,
        "november": 11, "nov": 11,
        "december": 12, "dec": 12,
    },
)

DEFAULT_LOCALES: tuple[DateLocale, ...] = (GEORGIAN, ENGLISH)

_FALLBACK_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y", "%B %d, %Y", "%b %d, %Y")
_DAY_RE = re.compile(r"(?<!\d)(\d{1,2})(?!\d)")
_YEAR_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_within_window(posted_at: datetime | None, now: datetime, hours: int = 24) -> bool:
    """True when ``posted_at`` is no older than ``hours`` relative to ``now``."""
    if posted_at is None:
        return False
    return now - posted_at <= timedelta(hours=hours)


def month_pattern(locales: Iterable[DateLocale] = DEFAULT_LOCALES) -> str:
    """Regex alternation of every month form, longest first."""
    names = sorted({name for loc in locales for name in loc.months}, key=len, reverse=True)
    return "|".join(re.escape(name) for name in names)


def day_month_pattern(locales: Iterable[DateLocale] = DEFAULT_LOCALES) -> re.Pattern[str]:
    """Matches a day number followed by a month form, e.g. ``15 მარტი``."""
    return re.compile(rf"(?<!\d)(\d{{1,2}}\s*(?:{month_pattern(locales)})\w*)", re.IGNORECASE)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _relative_delta(text: str, locales: Sequence[DateLocale]) -> timedelta | None:
    steps = (
        ("minute_units", timedelta(minutes=1)),
        ("hour_units", timedelta(hours=1)),
        ("day_units", timedelta(days=1)),
        ("week_units", timedelta(weeks=1)),
    )
    for attr, unit in steps:
        units = [u for loc in locales for u in getattr(loc, attr)]
        if not units:
            continue
        alternation = "|".join(re.escape(u) for u in sorted(units, key=len, reverse=True))
        match = re.search(rf"(\d+)\s*(?:{alternation})", text)
        if match:
            try:
                return unit * int(match.group(1))
            except OverflowError:
                return None
    return None


def _find_month(text: str, locales: Sequence[DateLocale]) -> int | None:
    forms: dict[str, int] = {}
    for loc in locales:
        forms.update(loc.months)
    for name in sorted(forms, key=len, reverse=True):
        # Must not follow a letter; inflected forms ("მარტს") still hit their abbreviation.
        if re.search(rf"(?<![^\W\d_]){re.escape(name)}", text):
            return forms[name]
    return None


def _previous_year(value: datetime) -> datetime:
    try:
        return value.replace(year=value.year - 1)
    except ValueError:
        # 29 February rolled into a non-leap year.
        return value.replace(year=value.year - 1, day=28)


def _month_day(text: str, now: datetime, locales: Sequence[DateLocale]) -> datetime | None:
    month = _find_month(text, locales)
    if month is None:
        return None
    day_match = _DAY_RE.search(text)
    if not day_match:
        return None

    year_match = _YEAR_RE.search(text)
    year = int(year_match.group(1)) if year_match else now.year
    try:
        candidate = datetime(year, month, int(day_match.group(1)), tzinfo=timezone.utc)
    except ValueError:
        return None

    if candidate <= now:
        return candidate
    if year_match:
        # A printed year can still be in the future; never report a date after now.
        return now
    try:
        return _previous_year(candidate)
    except ValueError:
        return None


def parse_timestamp(raw: str) -> datetime | None:
    text = (raw or "").strip()
    if not text:
        return None
    iso = f"{text[:-1]}+00:00" if text.endswith("Z") else text
    try:
        return as_utc(datetime.fromisoformat(iso))
    except (ValueError, OverflowError):
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return as_utc(datetime.strptime(text, fmt))
        except (ValueError, OverflowError):
            continue
    return None


def normalize_date(
    text: str | None,
    now: datetime | None = None,
    locales: Sequence[DateLocale] = DEFAULT_LOCALES,
) -> datetime:
    """Return the absolute UTC instant described by ``text``.

    Resolution order: today/yesterday words, "N units ago", month name plus
    day (rolled back a year when it would land after ``now``), generic
    timestamp parsing, and finally ``now`` itself. No result is later than ``now``.
    """
    now = as_utc(now) if now is not None else utc_now()
    lower = " ".join((text or "").split()).lower()
    if not lower:
        return now

    if any(lower == tok for loc in locales for tok in loc.exact_today_tokens):
        return now
    if any(tok in lower for loc in locales for tok in loc.today_tokens):
        return now
    if any(tok in lower for loc in locales for tok in loc.yesterday_tokens):
        return now - timedelta(days=1)

    delta = _relative_delta(lower, locales)
    if delta is not None:
        try:
            return now - delta
        except OverflowError:
            pass

    dated = _month_day(lower, now, locales)
    if dated is not None:
        return dated

    parsed = parse_timestamp(text or "")
    if parsed is not None:
        return min(parsed, now)
    return now
