"""Now-playing card (Spotify current playback)."""
from fastapi import APIRouter, Depends, Query

from delegatify.api.interactions import WebInteraction
from delegatify.api.state import AppState, get_state
from delegatify.core import commands

router = APIRouter()


@router.get("/current")
async def get_current(
    user_id: str = Query(..., min_length=1),
    state: AppState = Depends(get_state),
):
    """Run /current for user_id and return the messages it produced.

    Not linked -> a text notice; nothing playing -> "Nothing playing";
    otherwise a card. Provider failures are reported in the text, not as 5xx.
    """
    # Answered inline, nothing to poll later, so it is not registered
    interaction = WebInteraction(user_id)
    await commands.current(interaction, state)
    return interaction.to_dict()
