"""The two slash commands: /authenticate and /current."""
import logging
from typing import TYPE_CHECKING

from delegatify import config
from delegatify.core import playback_query
from delegatify.core.auth_flow import AuthFlow
from delegatify.core.card_renderer import render
from delegatify.core.chat import ChatContext
from delegatify.core.errors import ConfigError, QueryError

if TYPE_CHECKING:
    from delegatify.api.state import AppState

logger = logging.getLogger(__name__)

NOT_OWNER_TEXT = "Only the bot owner can connect a Spotify account."


def is_owner(user_id: str) -> bool:
    return not config.OWNER_IDS or user_id in config.OWNER_IDS


async def authenticate(ctx: ChatContext, state: "AppState") -> None:
    """Authenticates the application with a Spotify account (owners only)."""
    if not is_owner(ctx.user_id):
        logger.info("Rejected /authenticate from non-owner %s", ctx.user_id)
        await ctx.reply(NOT_OWNER_TEXT)
        return
    flow = AuthFlow(state.token_store, timeout=state.auth_timeout)
    try:
        await flow.run(ctx)
    except ConfigError as e:
        logger.error("Spotify is not configured: %s", e)
        await ctx.reply(f"Spotify is not configured: {e}")
        raise


async def current(ctx: ChatContext, state: "AppState") -> None:
    """Check the current playback."""
    if not state.cooldown.try_acquire(ctx.user_id):
        wait = state.cooldown.remaining(ctx.user_id)
        await ctx.reply(f"Slow down, try again in {wait:.0f}s.")
        return
    try:
        outcome = await playback_query.fetch(state.token_store)
    except QueryError as e:
        await ctx.reply(f"Failed to fetch playback:\n{e}")
        return
    await ctx.send(render(outcome))
