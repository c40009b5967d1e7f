"""
Pydantic models for parsed schedule data.
"""

from pentabarf_events.models.schedule import Day, Event, Link, Person, Track, TrackType

__all__ = [
    'Day',
    'Event',
    'Link',
    'Person',
    'Track',
    'TrackType',
]
