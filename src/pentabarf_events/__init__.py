"""
pentabarf-events: streaming parser for pentabarf conference schedules.

Main package exports for user-facing API.
"""

from pentabarf_events.config import ParserSettings, get_settings
from pentabarf_events.exceptions import NotAScheduleError, ScheduleParseError
from pentabarf_events.models import Day, Event, Link, Person, Track, TrackType
from pentabarf_events.parsers import EventsParser, parse_events
from pentabarf_events.types import TrackTypes

__all__ = [
    'EventsParser',
    'parse_events',
    'ParserSettings',
    'get_settings',
    'ScheduleParseError',
    'NotAScheduleError',
    'Day',
    'Event',
    'Link',
    'Person',
    'Track',
    'TrackType',
    'TrackTypes',
]

__version__ = '0.1.0'
