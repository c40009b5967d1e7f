"""
Configuration management using Pydantic Settings.

Two configuration sources:
- ParserSettings: runtime parser options from environment variables
  (prefix ``PENTABARF_``) and an optional ``.env`` file
- TrackTypesConfig: the track type catalogue (labels, colours) loaded
  from the ``track_types.yaml`` file shipped with the package
"""

from pathlib import Path
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pentabarf_events.models.schedule import TrackType

TRACK_TYPES_PATH = Path(__file__).parent / 'data' / 'track_types.yaml'


class ParserSettings(BaseSettings):
    """
    Runtime options for EventsParser.

    Environment Variables (from .env):
        PENTABARF_TIMEZONE: IANA name of the schedule's reference timezone
        PENTABARF_DEFAULT_TRACK_TYPE: Track type used for unknown/empty <type>
        PENTABARF_HUGE_TREE: Lift lxml's safety limits for very large feeds

    Attributes:
        timezone: Reference timezone for day dates and event times
        default_track_type: Fallback TrackType
        huge_tree: Passed through to lxml's iterparse

    Example:
        >>> settings = ParserSettings()
        >>> settings.timezone
        'Europe/Paris'
        >>> settings.tzinfo
        zoneinfo.ZoneInfo(key='Europe/Paris')
    """

    timezone: str = Field(
        default='Europe/Paris',
        description="IANA timezone the schedule's dates and times are expressed in"
    )

    default_track_type: TrackType = Field(
        default=TrackType.conference,
        description="Track type assigned when <type> is empty or unrecognized"
    )

    huge_tree: bool = Field(
        default=False,
        description="Disable lxml's security limits on tree depth and text size"
    )

    model_config = SettingsConfigDict(
        env_prefix='PENTABARF_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject names unknown to the zoneinfo database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: '{v}'") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """ZoneInfo for the configured timezone."""
        return ZoneInfo(self.timezone)


# Singleton pattern - loaded once, cached forever
_settings: Optional[ParserSettings] = None


def get_settings() -> ParserSettings:
    """
    Get global parser settings (lazy-loaded singleton).

    Returns:
        Singleton ParserSettings instance

    Example:
        >>> settings = get_settings()
        >>> settings is get_settings()
        True
    """
    global _settings
    if _settings is None:
        _settings = ParserSettings()
    return _settings


class TrackTypesConfig(BaseSettings):
    """
    Track type catalogue automatically loaded from track_types.yaml.

    Attributes:
        labels: TrackType code -> human-readable label
        colors: TrackType code -> hex colour used by schedule views

    Example:
        >>> config = TrackTypesConfig()
        >>> config.labels['conference']
        'Conférence'
    """

    labels: Dict[str, str] = Field(
        default_factory=dict,
        description="Display labels keyed by track type code"
    )
    colors: Dict[str, str] = Field(
        default_factory=dict,
        description="Hex colours keyed by track type code"
    )

    model_config = SettingsConfigDict(
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Load track_types.yaml if no values were provided.

        Tests pass explicit values, which are used as-is.
        """
        if data:
            return data

        if not TRACK_TYPES_PATH.exists():
            raise FileNotFoundError(
                f"Track types file not found at {TRACK_TYPES_PATH}. "
                f"Reinstall the package to restore its data files."
            )

        with open(TRACK_TYPES_PATH, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        return {
            'labels': yaml_data.get('labels', {}),
            'colors': yaml_data.get('colors', {})
        }

    @field_validator('labels', 'colors')
    @classmethod
    def validate_codes(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Every key must name a TrackType member."""
        valid = {t.value for t in TrackType}
        invalid = [code for code in v if code not in valid]
        if invalid:
            raise ValueError(
                f"Unknown track type codes: {invalid}\n"
                f"Valid codes: {sorted(valid)}"
            )
        return v


_track_types_config: Optional[TrackTypesConfig] = None


def get_track_types_config() -> TrackTypesConfig:
    """Get global track type catalogue (lazy-loaded singleton)."""
    global _track_types_config
    if _track_types_config is None:
        _track_types_config = TrackTypesConfig()
    return _track_types_config
