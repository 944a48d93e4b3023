"""Fetch current playback and normalize tracks and episodes to one shape."""
import asyncio
import logging
from datetime import timedelta
from typing import Optional

from delegatify.core import spotify_client
from delegatify.core.errors import QueryError
from delegatify.core.token_store import TokenStore
from delegatify.models.playback import (
    NormalizedPlaybackItem,
    NothingPlaying,
    PlaybackOutcome,
    PlaybackSnapshot,
    RepeatMode,
    Snapshot,
    Unauthenticated,
)

logger = logging.getLogger(__name__)


def _first_image(obj: Optional[dict]) -> Optional[str]:
    images = (obj or {}).get("images") or []
    return images[0].get("url") if images else None


def _is_track(item: dict) -> bool:
    kind = item.get("type")
    if kind in ("track", "episode"):
        return kind == "track"
    return bool(item.get("artists"))


def normalize_item(item: dict) -> NormalizedPlaybackItem:
    """Project a raw track or episode item onto NormalizedPlaybackItem.

    Tracks credit their artists and use the album cover. Episodes have a
    single "artist", the show name, and their own artwork (falling back to
    the show's).
    """
    duration = timedelta(milliseconds=int(item.get("duration_ms") or 0))
    name = item.get("name") or ""
    if _is_track(item):
        artists = tuple((a or {}).get("name") or "" for a in item.get("artists") or [])
        artwork = _first_image(item.get("album"))
    else:
        show = item.get("show") or {}
        artists = (show.get("name") or "",)
        artwork = _first_image(item) or _first_image(show)
    return NormalizedPlaybackItem(
        name=name,
        artists=artists,
        duration=duration,
        artwork_url=artwork,
    )


def _repeat_mode(value: Optional[str]) -> RepeatMode:
    try:
        return RepeatMode(value or RepeatMode.OFF.value)
    except ValueError as e:
        raise QueryError(f"unknown repeat_state {value!r}") from e


def build_snapshot(playback: Optional[dict]) -> PlaybackOutcome:
    """Map a current_playback() response to NothingPlaying or a Snapshot."""
    if not playback:
        return NothingPlaying()
    item = playback.get("item")
    if not item:
        # Ads and other slots without a concrete item
        return NothingPlaying()
    progress_ms = playback.get("progress_ms")
    if progress_ms is None:
        logger.warning("Playback has an item but no progress, treating as nothing playing")
        return NothingPlaying()
    return Snapshot(
        PlaybackSnapshot(
            item=normalize_item(item),
            elapsed=timedelta(milliseconds=int(progress_ms)),
            shuffle=bool(playback.get("shuffle_state", False)),
            repeat=_repeat_mode(playback.get("repeat_state")),
        )
    )


async def fetch(store: TokenStore) -> PlaybackOutcome:
    """Return the current playback outcome. QueryError propagates to the caller."""
    client = store.read()
    if client is None:
        return Unauthenticated()
    # The store is not held while the request is in flight
    playback = await asyncio.to_thread(spotify_client.current_playback, client)
    return build_snapshot(playback)
