"""
Reusable validators for values read out of pentabarf XML.

Each validator takes the raw attribute or element text and returns the
converted value, raising ``ScheduleParseError`` with a descriptive message
when the text is missing or malformed. They are shared by the parser and
the Pydantic models.
"""

import re
from datetime import date, datetime
from typing import Optional, Tuple

from pentabarf_events.exceptions import ScheduleParseError

INTEGER_PATTERN = re.compile(r'^[+-]?[0-9]+$')
HHMM_PATTERN = re.compile(r'^\d{2}:\d{2}$')


def validate_int_attribute(value: Optional[str], element: str, attribute: str) -> int:
    """
    Convert a mandatory integer attribute.

    Args:
        value: Raw attribute text (None when the attribute is absent)
        element: Element name, used in the error message
        attribute: Attribute name, used in the error message

    Returns:
        The attribute as an int

    Raises:
        ScheduleParseError: If the attribute is absent or not an integer

    Example:
        >>> validate_int_attribute('42', 'event', 'id')
        42
        >>> validate_int_attribute(None, 'event', 'id')  # Raises ScheduleParseError
    """
    if value is None:
        raise ScheduleParseError(
            f"<{element}> is missing mandatory '{attribute}' attribute"
        )

    text = value.strip()
    if not INTEGER_PATTERN.match(text):
        raise ScheduleParseError(
            f"<{element}> attribute '{attribute}' must be an integer, got: '{value}'"
        )
    return int(text)


def validate_date_yyyy_mm_dd(value: Optional[str]) -> date:
    """
    Parse a calendar date in YYYY-MM-DD format.

    Args:
        value: Date string (e.g., '2024-06-01')

    Returns:
        The parsed ``datetime.date``

    Raises:
        ScheduleParseError: If the value is absent or not a valid YYYY-MM-DD date

    Example:
        >>> validate_date_yyyy_mm_dd('2024-06-01')
        datetime.date(2024, 6, 1)
        >>> validate_date_yyyy_mm_dd('01/06/2024')  # Raises ScheduleParseError
    """
    if value is None:
        raise ScheduleParseError("<day> is missing mandatory 'date' attribute")

    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError as e:
        raise ScheduleParseError(
            f"Date must be YYYY-MM-DD format, got: '{value}'\n"
            f"Example: '2024-06-01'"
        ) from e


def validate_hhmm(value: str) -> Tuple[int, int]:
    """
    Split a strict "HH:MM" string into hours and minutes.

    Exactly two digits, a colon, two digits. Minutes must be 00-59; hours
    are not bounded here because durations may exceed a day.

    Args:
        value: Time or duration string (e.g., '09:30')

    Returns:
        (hours, minutes) tuple

    Raises:
        ScheduleParseError: If the string is not in HH:MM format

    Example:
        >>> validate_hhmm('09:30')
        (9, 30)
        >>> validate_hhmm('9:30')  # Raises ScheduleParseError
    """
    if not HHMM_PATTERN.match(value):
        raise ScheduleParseError(
            f"Time must be HH:MM format, got: '{value}'\n"
            f"Example: '09:30'"
        )

    hours = int(value[0:2])
    minutes = int(value[3:5])
    if minutes > 59:
        raise ScheduleParseError(
            f"Minutes must be between 00 and 59, got: '{value}'"
        )

    return hours, minutes


def validate_time_of_day(value: str) -> Tuple[int, int]:
    """
    Like ``validate_hhmm`` but also requires hours in 00-23.

    Used for <start>, which names a wall-clock time on the current day.
    """
    hours, minutes = validate_hhmm(value)
    if hours > 23:
        raise ScheduleParseError(
            f"Hours must be between 00 and 23, got: '{value}'"
        )
    return hours, minutes
