"""
Pytest configuration for unit tests.

Provides schedule builders and settings fixtures shared by all unit tests.
"""

from pathlib import Path

import pytest

import pentabarf_events.config as config_module
from pentabarf_events.config import ParserSettings


SAMPLE_SCHEDULE = Path(__file__).parent.parent / 'data' / 'sample_schedule.xml'


@pytest.fixture(autouse=True, scope="function")
def reset_config_singletons(monkeypatch):
    """
    Reset cached settings and isolate tests from PENTABARF_* variables.

    Keeps a developer's environment from leaking into expectations.
    """
    for name in ('PENTABARF_TIMEZONE', 'PENTABARF_DEFAULT_TRACK_TYPE', 'PENTABARF_HUGE_TREE'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, '_settings', None)
    monkeypatch.setattr(config_module, '_track_types_config', None)
    yield


@pytest.fixture
def settings():
    """Default parser settings (Europe/Paris, conference fallback)."""
    return ParserSettings(_env_file=None)


@pytest.fixture
def sample_schedule_path():
    return SAMPLE_SCHEDULE


@pytest.fixture
def make_schedule():
    """
    Build a schedule document with one day and one room around ``body``.

    Example:
        >>> xml = make_schedule('<event id="1"><title>X</title></event>')
    """
    def _make(body: str, date: str = '2024-06-01', room: str = 'Room 1') -> bytes:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<schedule>'
            f'<day index="1" date="{date}">'
            f'<room name="{room}">{body}</room>'
            '</day>'
            '</schedule>'
        ).encode('utf-8')
    return _make
