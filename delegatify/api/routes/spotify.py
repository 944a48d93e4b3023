"""Spotify link status."""
from fastapi import APIRouter, Depends

from delegatify import config
from delegatify.api.state import AppState, get_state

router = APIRouter()


@router.get("/status")
def get_status(state: AppState = Depends(get_state)):
    """Return whether the app is configured and whether a session is installed."""
    configured = bool(
        config.SPOTIFY_CLIENT_ID and config.SPOTIFY_CLIENT_SECRET and config.SPOTIFY_REDIRECT_URI
    )
    return {"configured": configured, "logged_in": state.token_store.is_authenticated}
