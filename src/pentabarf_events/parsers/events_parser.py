"""
Streaming parser turning a pentabarf schedule into Event records.

The document is walked once, forward only:

    schedule -> day (context) -> room (context) -> event (yielded)

``<day>`` and ``<room>`` only update running context; each ``<event>`` is
assembled from its children and yielded before the next one is read.
Elements the parser does not know are skipped whole, so feeds carrying
extra data (``<conference>`` headers, ``<recording>``, ...) still parse.
"""

import logging
from typing import Dict, Iterator, List, Optional

from pentabarf_events.config import ParserSettings, get_settings
from pentabarf_events.exceptions import NotAScheduleError, ScheduleParseError
from pentabarf_events.models.schedule import Day, Event, Link, Person, Track, TrackType
from pentabarf_events.parsers.pull_reader import PullReader, XmlSource
from pentabarf_events.parsers.text import add_duration, combine_day_time, normalize_type_name
from pentabarf_events.validators import (
    validate_date_yyyy_mm_dd,
    validate_hhmm,
    validate_int_attribute,
    validate_time_of_day,
)

logger = logging.getLogger(__name__)

# <event> children copied verbatim into Event fields
TEXT_FIELDS: Dict[str, str] = {
    'slug': 'slug',
    'title': 'title',
    'subtitle': 'sub_title',
    'abstract': 'abstract_text',
    'description': 'description',
}


class EventsParser:
    """
    Lazy producer of Event records from one pentabarf document.

    Running context (current day, room, track) lives on the instance and
    is reset by ``parse()``. Use one parser per document being read; two
    iterators from the same instance would share that context.

    Args:
        settings: Parser options; defaults to the global ParserSettings

    Example:
        >>> parser = EventsParser()
        >>> for event in parser.parse('schedule.xml'):
        ...     print(event.title, event.start_time)
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or get_settings()
        self.current_day: Optional[Day] = None
        self.current_room: Optional[str] = None
        self.current_track: Optional[Track] = None

    def parse(self, source: XmlSource) -> Iterator[Event]:
        """
        Iterate over the events of a schedule document in document order.

        Nothing is read until the first ``next()``. A path source is opened
        then and closed when the iterator is exhausted or closed.

        Args:
            source: Path, raw bytes, or binary file object

        Yields:
            Event records, one per <event> element

        Raises:
            NotAScheduleError: If the document has no <schedule> root
            ScheduleParseError: On missing/malformed ids, day attributes or times
            lxml.etree.XMLSyntaxError: If the document is not well-formed XML
        """
        self.current_day = None
        self.current_room = None
        self.current_track = None

        count = 0
        with PullReader(source, huge_tree=self.settings.huge_tree) as reader:
            if not self._parse_header(reader):
                raise NotAScheduleError("Document has no <schedule> root element")

            try:
                for event in self._parse_schedule(reader):
                    count += 1
                    yield event
            except ScheduleParseError as e:
                logger.error(f"Schedule parsing aborted after {count} event(s): {e}")
                raise

        logger.info(f"Parsed {count} event(s) from schedule")

    # === Document structure ===

    def _parse_header(self, reader: PullReader) -> bool:
        """Advance to the <schedule> start tag; False if the document ends first."""
        while not reader.at_document_end():
            reader.advance()
            if reader.is_start_tag('schedule'):
                return True
        return False

    def _parse_schedule(self, reader: PullReader) -> Iterator[Event]:
        while not reader.is_next_end_tag('schedule'):
            if reader.is_end_tag('room') or reader.is_end_tag('day'):
                reader.release()
                continue
            if not reader.is_start_tag():
                continue

            tag = reader.tag
            if tag == 'day':
                self.current_day = self._parse_day(reader)
            elif tag == 'room':
                self.current_room = reader.attribute('name')
            elif tag == 'event':
                event = self._parse_event(reader)
                reader.release()
                yield event
            else:
                logger.debug(f"Skipping <{tag}> in schedule")
                reader.skip_subtree()

    def _parse_day(self, reader: PullReader) -> Day:
        index = validate_int_attribute(reader.attribute('index'), 'day', 'index')
        date = validate_date_yyyy_mm_dd(reader.attribute('date'))
        return Day(index=index, date=date)

    def _parse_event(self, reader: PullReader) -> Event:
        """
        Assemble one Event; the cursor is on <event> and ends on </event>.

        <start> and <duration> are combined once the whole element is read,
        since they may appear in any order.
        """
        event_id = validate_int_attribute(reader.attribute('id'), 'event', 'id')

        fields = {
            'id': event_id,
            'day': self.current_day,
            'room_name': self.current_room,
        }
        persons: List[Person] = []
        links: List[Link] = []

        start = None
        duration: Optional[str] = None
        track_name = ''
        track_type = self.settings.default_track_type

        while not reader.is_next_end_tag('event'):
            if not reader.is_start_tag():
                continue

            tag = reader.tag
            if tag == 'start':
                text = reader.element_text().strip()
                if text:
                    start = self._parse_start(text, event_id)
            elif tag == 'duration':
                duration = reader.element_text().strip()
            elif tag in TEXT_FIELDS:
                fields[TEXT_FIELDS[tag]] = reader.element_text()
            elif tag == 'track':
                track_name = reader.element_text()
            elif tag == 'type':
                track_type = self._parse_track_type(reader.element_text(), track_type)
            elif tag == 'persons':
                persons.extend(self._parse_persons(reader))
            elif tag == 'links':
                links.extend(self._parse_links(reader))
            else:
                logger.debug(f"Skipping <{tag}> in event {event_id}")
                reader.skip_subtree()

        end = None
        if start is not None and duration:
            try:
                hours, minutes = validate_hhmm(duration)
            except ScheduleParseError as e:
                raise ScheduleParseError(f"Event {event_id}: invalid <duration>: {e}") from e
            end = add_duration(start, hours, minutes)

        if (self.current_track is None
                or self.current_track.name != track_name
                or self.current_track.type != track_type):
            self.current_track = Track(name=track_name, type=track_type)

        return Event(
            **fields,
            start_time=start,
            end_time=end,
            track=self.current_track,
            persons=persons,
            links=links,
        )

    def _parse_persons(self, reader: PullReader) -> List[Person]:
        persons = []
        while not reader.is_next_end_tag('persons'):
            if reader.is_start_tag('person'):
                person_id = validate_int_attribute(reader.attribute('id'), 'person', 'id')
                persons.append(Person(id=person_id, name=reader.element_text()))
            elif reader.is_start_tag():
                reader.skip_subtree()
        return persons

    def _parse_links(self, reader: PullReader) -> List[Link]:
        links = []
        while not reader.is_next_end_tag('links'):
            if reader.is_start_tag('link'):
                url = reader.attribute('href')
                links.append(Link(url=url, description=reader.element_text()))
            elif reader.is_start_tag():
                reader.skip_subtree()
        return links

    # === Field conversion ===

    def _parse_start(self, text: str, event_id: int):
        if self.current_day is None:
            raise ScheduleParseError(f"Event {event_id} has a <start> but no enclosing <day>")
        try:
            hours, minutes = validate_time_of_day(text)
        except ScheduleParseError as e:
            raise ScheduleParseError(f"Event {event_id}: invalid <start>: {e}") from e
        return combine_day_time(self.current_day.date, hours, minutes, self.settings.tzinfo)

    def _parse_track_type(self, text: str, current: TrackType) -> TrackType:
        """
        Map <type> text to a TrackType.

        'Conférence', 'CONFERENCE' and 'conference' are the same type.
        Empty text keeps ``current``; unknown text gives the default.
        """
        if not text:
            return current
        cleaned = normalize_type_name(text)
        try:
            return TrackType(cleaned)
        except ValueError:
            logger.debug(
                f"Unknown track type '{text}', using '{self.settings.default_track_type.value}'"
            )
            return self.settings.default_track_type


def parse_events(source: XmlSource, settings: Optional[ParserSettings] = None) -> Iterator[Event]:
    """
    Iterate over the events of a pentabarf schedule.

    Convenience wrapper creating a fresh EventsParser for ``source``.

    Example:
        >>> events = list(parse_events(b'<schedule></schedule>'))
        >>> events
        []
    """
    return EventsParser(settings).parse(source)
