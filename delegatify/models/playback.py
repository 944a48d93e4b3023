"""Playback state from Spotify, normalized for display."""
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional, Tuple, Union


class RepeatMode(str, Enum):
    """Spotify repeat_state values."""
    OFF = "off"
    TRACK = "track"
    CONTEXT = "context"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class NormalizedPlaybackItem:
    """Track or episode projected onto one display shape."""
    name: str
    artists: Tuple[str, ...]
    duration: timedelta
    artwork_url: Optional[str] = None


@dataclass(frozen=True)
class PlaybackSnapshot:
    """Current item plus the player state it was fetched with."""
    item: NormalizedPlaybackItem
    elapsed: timedelta
    shuffle: bool
    repeat: RepeatMode


@dataclass(frozen=True)
class Unauthenticated:
    """No Spotify session has been installed yet."""


@dataclass(frozen=True)
class NothingPlaying:
    """Spotify has no active playback, or no concrete item (e.g. an ad)."""


@dataclass(frozen=True)
class Snapshot:
    snapshot: PlaybackSnapshot


PlaybackOutcome = Union[Unauthenticated, NothingPlaying, Snapshot]
