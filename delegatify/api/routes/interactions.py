"""Slash-command interactions: /authenticate prompt, button presses, code form."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from delegatify.api.interactions import WebInteraction
from delegatify.api.state import AppState, get_state
from delegatify.config import CODE_MAX_LENGTH, CODE_MIN_LENGTH
from delegatify.core import commands
from delegatify.core.errors import ConfigError

router = APIRouter()


class StartBody(BaseModel):
    user_id: str = Field(..., min_length=1)


class ActionBody(BaseModel):
    user_id: str = Field(..., min_length=1)


class FormBody(BaseModel):
    """The pasted authorization code; length is checked before any exchange."""
    code: str = Field(..., min_length=CODE_MIN_LENGTH, max_length=CODE_MAX_LENGTH)


def _get_interaction(interaction_id: str, state: AppState) -> WebInteraction:
    interaction = state.interactions.get(interaction_id)
    if interaction is None:
        raise HTTPException(status_code=404, detail="Unknown interaction")
    return interaction


@router.post("/authenticate")
async def start_authenticate(body: StartBody, state: AppState = Depends(get_state)):
    """Start /authenticate; returns once the prompt is sent (or the command ended)."""
    interaction = state.interactions.create(body.user_id)
    await interaction.start(lambda ctx: commands.authenticate(ctx, state))
    task = interaction.task
    if task.done() and not task.cancelled() and isinstance(task.exception(), ConfigError):
        raise HTTPException(
            status_code=503,
            detail=f"Spotify not configured: {task.exception()}",
        )
    return interaction.to_dict()


@router.get("/{interaction_id}")
async def get_interaction(interaction_id: str, state: AppState = Depends(get_state)):
    """Messages sent so far, whether the flow is still waiting, and any open form."""
    return _get_interaction(interaction_id, state).to_dict()


@router.post("/{interaction_id}/actions/{action_id}")
async def press_action(
    interaction_id: str,
    action_id: str,
    body: ActionBody,
    state: AppState = Depends(get_state),
):
    """Press a trigger button on a prompt that is still waiting."""
    interaction = _get_interaction(interaction_id, state)
    if body.user_id != interaction.user_id:
        raise HTTPException(status_code=403, detail="This prompt belongs to another user.")
    if not interaction.trigger(action_id, body.user_id):
        raise HTTPException(
            status_code=409,
            detail="This prompt is no longer waiting for that action.",
        )
    return {"ok": True}


@router.post("/{interaction_id}/form")
async def submit_form(interaction_id: str, body: FormBody, state: AppState = Depends(get_state)):
    """Submit the code form."""
    interaction = _get_interaction(interaction_id, state)
    if not interaction.submit_form(body.code):
        raise HTTPException(status_code=409, detail="No form is open.")
    return {"ok": True}


@router.post("/{interaction_id}/form/dismiss")
async def dismiss_form(interaction_id: str, state: AppState = Depends(get_state)):
    """Close the code form without submitting."""
    interaction = _get_interaction(interaction_id, state)
    if not interaction.submit_form(None):
        raise HTTPException(status_code=409, detail="No form is open.")
    return {"ok": True}
