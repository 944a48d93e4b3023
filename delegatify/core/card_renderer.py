"""Turn playback outcomes (and the auth prompt) into chat replies."""
from datetime import datetime, timedelta, timezone
from typing import Callable

from delegatify.config import BOT_NAME
from delegatify.models.card import ACCENT_BLUE, ACCENT_DARK_GREEN, Button, Card, Reply
from delegatify.models.playback import (
    NothingPlaying,
    PlaybackOutcome,
    Snapshot,
    Unauthenticated,
)

UNAUTHENTICATED_TEXT = "The application isn't authenticated.\nrun '/authenticate' to connect."
NOTHING_PLAYING_TEXT = "Nothing playing"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_delta(delta: timedelta) -> str:
    """Format as mm:ss, or h:mm:ss from one hour up."""
    total = int(delta.total_seconds())
    if total < 0:
        raise ValueError(f"negative duration: {delta}")
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def render(outcome: PlaybackOutcome, now: Clock = _utcnow) -> Reply:
    """Build the /current reply. Pure apart from the timestamp."""
    if isinstance(outcome, Unauthenticated):
        return Reply(text=UNAUTHENTICATED_TEXT)
    if isinstance(outcome, NothingPlaying):
        return Reply(text=NOTHING_PLAYING_TEXT)
    if not isinstance(outcome, Snapshot):
        raise TypeError(f"cannot render {type(outcome).__name__}")

    snapshot = outcome.snapshot
    item = snapshot.item
    card = Card(
        title=f"{item.name} - {', '.join(item.artists)}",
        color=ACCENT_DARK_GREEN,
        thumbnail_url=item.artwork_url,
        timestamp=now(),
        footer=BOT_NAME,
    )
    card.add_field("Duration", f"{format_delta(snapshot.elapsed)} / {format_delta(item.duration)}")
    card.add_field("Shuffle", "On" if snapshot.shuffle else "Off")
    card.add_field("Repeat", snapshot.repeat.label, inline=True)
    return Reply(card=card)


def render_auth_prompt(authorize_url: str, action_id: str, now: Clock = _utcnow) -> Reply:
    """Ephemeral prompt with the OAuth link and the button that opens the code form."""
    card = Card(
        title=f"Authenticating {BOT_NAME}",
        color=ACCENT_BLUE,
        description="In order for the application to work, a spotify account must be connected",
        timestamp=now(),
    )
    card.add_field(
        "Open URL Button",
        "This button opens a link to receive an authentication code. "
        "When you receive the code, click on the Authenticate button.",
    )
    card.add_field(
        "Authenticate Button",
        "This is the button you click when you have the code. "
        "It will ask you to input the code, and then you are good to go.",
    )
    return Reply(
        card=card,
        buttons=[
            Button(label="Open URL", url=authorize_url, style="primary"),
            Button(label="Authenticate", action_id=action_id, style="success"),
        ],
        ephemeral=True,
    )
