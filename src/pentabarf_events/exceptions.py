"""
Exceptions raised while turning a pentabarf schedule into events.

Only structural problems surface here. Tolerated oddities (unknown elements,
unknown track types, empty text) are resolved inside the parser.
"""


class ScheduleParseError(ValueError):
    """
    Fatal error in a schedule document.

    Raised out of the event iterator's ``next()``; the stream cannot
    continue after it. Subclasses ``ValueError`` so callers that already
    guard numeric/date conversions keep working.
    """


class NotAScheduleError(ScheduleParseError):
    """The document ended before a ``<schedule>`` root element was found."""
