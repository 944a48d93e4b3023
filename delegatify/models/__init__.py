"""Data models for playback, cards and interactions."""
from delegatify.models.card import ActionEvent, Button, Card, CardField, CodeForm, Reply
from delegatify.models.playback import (
    NormalizedPlaybackItem,
    NothingPlaying,
    PlaybackOutcome,
    PlaybackSnapshot,
    RepeatMode,
    Snapshot,
    Unauthenticated,
)

__all__ = [
    "ActionEvent",
    "Button",
    "Card",
    "CardField",
    "CodeForm",
    "Reply",
    "NormalizedPlaybackItem",
    "NothingPlaying",
    "PlaybackOutcome",
    "PlaybackSnapshot",
    "RepeatMode",
    "Snapshot",
    "Unauthenticated",
]
