"""
Pure helpers for time arithmetic and track-type text normalization.

All timestamps are timezone-aware ``datetime`` values in the schedule's
reference timezone. Nothing here keeps state between events.
"""

import unicodedata
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo


def strip_diacritics(text: str) -> str:
    """
    Remove accent marks from text.

    Decomposes to NFD and drops combining marks, so 'Conférence' becomes
    'Conference'. Characters without a decomposition are kept as-is.

    Example:
        >>> strip_diacritics('Conférence')
        'Conference'
    """
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(c for c in decomposed if not unicodedata.combining(c))


def normalize_type_name(text: str) -> str:
    """Strip diacritics, surrounding whitespace and case for track-type lookup."""
    return strip_diacritics(text).strip().lower()


def combine_day_time(day: date, hours: int, minutes: int, tz: ZoneInfo) -> datetime:
    """
    Build the start timestamp of an event.

    Same calendar date as ``day``, hours/minutes from the <start> text,
    seconds and microseconds zeroed, anchored in ``tz``. A wall-clock time
    skipped by a DST switch resolves forward, e.g. 02:30 becomes 03:30 on a
    spring-forward night.

    Example:
        >>> combine_day_time(date(2024, 6, 1), 9, 30, ZoneInfo('Europe/Paris'))
        datetime.datetime(2024, 6, 1, 9, 30, tzinfo=zoneinfo.ZoneInfo(key='Europe/Paris'))
    """
    local = datetime.combine(day, time(hours, minutes), tzinfo=tz)
    return local.astimezone(timezone.utc).astimezone(tz)


def add_duration(start: datetime, hours: int, minutes: int) -> datetime:
    """
    Add a duration to an already-resolved start instant.

    The addition happens in UTC and the result is converted back to the
    start's timezone, so crossing midnight, month ends or a DST switch
    yields the real elapsed instant.
    """
    end = start.astimezone(timezone.utc) + timedelta(hours=hours, minutes=minutes)
    return end.astimezone(start.tzinfo)
