"""
Discovery helper for the track type catalogue.

Provides user-facing access to the track types declared in
track_types.yaml, with their labels and colours.
"""

from typing import Dict, Union

from pentabarf_events.config import get_track_types_config
from pentabarf_events.models.schedule import TrackType


class TrackTypes:
    """
    Helper class for discovering available track types.

    All methods read the cached catalogue and return copies to prevent
    accidental mutations.

    Example:
        >>> TrackTypes.list_available()
        {'conference': 'Conférence', 'atelier': 'Atelier', ...}

        >>> TrackTypes.get_label('keynote')
        'Keynote'

        >>> TrackTypes.is_valid('keynote-special')
        False
    """

    @staticmethod
    def list_available() -> Dict[str, str]:
        """
        List all track type codes with their display labels.

        Returns:
            Dictionary mapping track type codes to labels
        """
        return get_track_types_config().labels.copy()

    @staticmethod
    def get_label(code: Union[str, TrackType]) -> str:
        """
        Get the display label for a track type.

        Falls back to the raw code when the catalogue has no label for a
        valid TrackType member.

        Raises:
            ValueError: If code is not a TrackType member

        Example:
            >>> TrackTypes.get_label(TrackType.table_ronde)
            'Table ronde'
        """
        track_type = TrackType(code)
        return get_track_types_config().labels.get(track_type.value, track_type.value)

    @staticmethod
    def get_color(code: Union[str, TrackType]) -> str:
        """
        Get the hex colour for a track type.

        Raises:
            ValueError: If code is not a TrackType member
            KeyError: If the catalogue defines no colour for it
        """
        track_type = TrackType(code)
        colors = get_track_types_config().colors
        if track_type.value not in colors:
            raise KeyError(f"No colour configured for track type: {track_type.value}")
        return colors[track_type.value]

    @staticmethod
    def is_valid(code: str) -> bool:
        """
        Check whether a (normalized) code names a track type.

        Example:
            >>> TrackTypes.is_valid('atelier')
            True
            >>> TrackTypes.is_valid('Atelier')
            False
        """
        return code in {t.value for t in TrackType}
