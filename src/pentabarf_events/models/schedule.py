"""
Pydantic models for a pentabarf conference schedule.

Hierarchy as it appears in the feed: schedule -> day -> room -> event.
Only Event is yielded by the parser; Day and Track are shared by every
event parsed while they are current.
"""

import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

WEEKDAY_ABBREVIATIONS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')


class TrackType(str, Enum):
    """
    Known track types, keyed by their normalized <type> text.

    Unknown or empty <type> values map to the configured default
    (``conference`` unless overridden).
    """

    conference = 'conference'
    atelier = 'atelier'
    workshop = 'workshop'
    keynote = 'keynote'
    table_ronde = 'table_ronde'
    lightningtalk = 'lightningtalk'
    stand = 'stand'
    other = 'other'


class Day(BaseModel):
    """
    One conference day.

    Example:
        >>> day = Day(index=1, date=dt.date(2024, 6, 1))
        >>> day.name
        'Day 1'
    """

    index: int = Field(
        ...,
        description="1-based position of the day in document order",
        examples=[1]
    )

    date: dt.date = Field(
        ...,
        description="Calendar date of the day (no time of day)",
        examples=["2024-06-01"]
    )

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        return f"Day {self.index}"

    @property
    def short_name(self) -> str:
        """Abbreviated English weekday, e.g. 'Sat', independent of the process locale."""
        return WEEKDAY_ABBREVIATIONS[self.date.weekday()]


class Track(BaseModel):
    """
    Category grouping for events.

    Frozen, so two tracks with the same name and type compare equal and
    hash the same even when they are different instances.
    """

    name: str = Field(
        default='',
        description="Track name from <track>, empty when absent"
    )

    type: TrackType = Field(
        default=TrackType.conference,
        description="Normalized track type from <type>"
    )

    model_config = ConfigDict(frozen=True)


class Person(BaseModel):
    """Speaker of an event."""

    id: int
    name: str = ''

    model_config = ConfigDict(frozen=True)


class Link(BaseModel):
    """Related link of an event (slides, video, ...)."""

    url: Optional[str] = None
    description: str = ''

    model_config = ConfigDict(frozen=True)


class Event(BaseModel):
    """
    A fully parsed <event> element.

    Example:
        >>> event = Event(
        ...     id=42,
        ...     day=Day(index=1, date=dt.date(2024, 6, 1)),
        ...     room_name="Amphi A",
        ...     title="Opening keynote",
        ...     track=Track(name="Main", type=TrackType.keynote),
        ... )
        >>> event.persons_summary
        ''
    """

    # === Identity & context ===
    id: int = Field(..., description="Value of the event's id attribute")

    day: Optional[Day] = Field(
        default=None,
        description="Day the event belongs to (the last <day> seen before it)"
    )

    room_name: Optional[str] = Field(
        default=None,
        description="Name of the enclosing <room>, None when the room has no name"
    )

    # === Timing ===
    start_time: Optional[AwareDatetime] = None
    end_time: Optional[AwareDatetime] = None

    # === Text fields (verbatim element text) ===
    slug: Optional[str] = None
    title: Optional[str] = None
    sub_title: Optional[str] = None
    abstract_text: Optional[str] = None
    description: Optional[str] = None

    # === Grouping ===
    track: Track = Field(default_factory=Track)

    persons: List[Person] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode='after')
    def validate_time_span(self) -> 'Event':
        """An end time only exists together with a start time, never before it."""
        if self.end_time is not None:
            if self.start_time is None:
                raise ValueError("end_time requires start_time")
            if self.duration < dt.timedelta(0):
                raise ValueError(
                    f"end_time {self.end_time.isoformat()} is before "
                    f"start_time {self.start_time.isoformat()}"
                )
        return self

    @property
    def duration(self) -> Optional[dt.timedelta]:
        """Elapsed time between start and end, None unless both are known."""
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time.astimezone(dt.timezone.utc) - self.start_time.astimezone(dt.timezone.utc)

    @property
    def persons_summary(self) -> str:
        """Speaker names joined with ', ' in document order."""
        return ', '.join(person.name for person in self.persons)

    def is_running_at(self, moment: dt.datetime) -> bool:
        """
        Check whether the event is in progress at ``moment``.

        Start inclusive, end exclusive. Events without a full time span
        are never running.
        """
        if self.start_time is None or self.end_time is None:
            return False
        moment = moment.astimezone(dt.timezone.utc)
        return (self.start_time.astimezone(dt.timezone.utc)
                <= moment
                < self.end_time.astimezone(dt.timezone.utc))

    def __repr__(self) -> str:
        """Short repr; abstracts and descriptions can be long."""
        return (
            f"Event("
            f"id={self.id}, "
            f"title={self.title!r}, "
            f"room_name={self.room_name!r}, "
            f"start_time={self.start_time.isoformat() if self.start_time else None})"
        )
