"""
Streaming parsers for pentabarf schedule XML.

- PullReader: forward-only token cursor over lxml's iterparse
- EventsParser / parse_events: lazy Event producer
- text helpers: time arithmetic and track-type normalization
"""

from .pull_reader import PullReader
from .events_parser import EventsParser, parse_events
from .text import strip_diacritics, normalize_type_name, combine_day_time, add_duration

__all__ = [
    # Event stream
    'EventsParser',
    'parse_events',
    # Token cursor
    'PullReader',
    # Helpers
    'strip_diacritics',
    'normalize_type_name',
    'combine_day_time',
    'add_duration',
]
