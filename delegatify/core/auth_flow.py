"""Interactive /authenticate flow: link, button, code form, token exchange.

The flow is a small state machine driven by one ChatContext:

    AWAITING_TRIGGER --button--> AWAITING_FORM_INPUT --code--> EXCHANGING
           ^    |                        |                         |
           |    +--timeout--> FINISHED   +--dismissed--------------+
           +-------------------------------------------------------+

Every state after EXCHANGING goes back to AWAITING_TRIGGER, so a failed
exchange can be retried and a successful one can be repeated, until the
user stops pressing the button for AUTH_TIMEOUT_SEC.
"""
import asyncio
import enum
import logging
import uuid
from typing import Optional

from delegatify import config
from delegatify.core import spotify_client
from delegatify.core.card_renderer import render_auth_prompt
from delegatify.core.chat import ChatContext
from delegatify.core.errors import AuthExchangeError, DismissedInput
from delegatify.core.token_store import TokenStore
from delegatify.models.card import ActionEvent, CodeForm

logger = logging.getLogger(__name__)

OPEN_FORM_ACTION = "open_modal"

NO_INPUT_TEXT = "No input provided"
SUCCESS_TEXT = "Successfully authenticated!"


class AuthState(enum.Enum):
    AWAITING_TRIGGER = "awaiting_trigger"
    AWAITING_FORM_INPUT = "awaiting_form_input"
    EXCHANGING = "exchanging"
    FINISHED = "finished"


class AuthFlow:
    """One run of the authenticate command for one user."""

    def __init__(
        self,
        store: TokenStore,
        timeout: float = config.AUTH_TIMEOUT_SEC,
        form: Optional[CodeForm] = None,
    ) -> None:
        self._store = store
        self._timeout = timeout
        self._form = form or CodeForm()
        self.action_id = f"{OPEN_FORM_ACTION}:{uuid.uuid4().hex}"
        self.state = AuthState.AWAITING_TRIGGER

    async def run(self, ctx: ChatContext) -> None:
        """Drive the flow until the trigger window elapses.

        ConfigError (no Spotify app credentials) and ChatError propagate;
        everything the user can correct is reported and the flow keeps going.
        """
        oauth = spotify_client.create_oauth()
        url = spotify_client.get_authorize_url(oauth)
        await ctx.send(render_auth_prompt(url, self.action_id))
        logger.info("Auth prompt sent to %s", ctx.user_id)

        event: Optional[ActionEvent] = None
        code: Optional[str] = None
        while self.state is not AuthState.FINISHED:
            if self.state is AuthState.AWAITING_TRIGGER:
                event = await ctx.wait_for_action(self.action_id, self._timeout)
                if event is None:
                    logger.debug("Auth prompt %s timed out", self.action_id)
                    self.state = AuthState.FINISHED
                else:
                    self.state = AuthState.AWAITING_FORM_INPUT

            elif self.state is AuthState.AWAITING_FORM_INPUT:
                try:
                    code = await self._collect_code(ctx, event)
                except DismissedInput:
                    await ctx.reply(NO_INPUT_TEXT)
                    self.state = AuthState.AWAITING_TRIGGER
                else:
                    self.state = AuthState.EXCHANGING

            elif self.state is AuthState.EXCHANGING:
                await self._exchange(ctx, oauth, code)
                code = None
                self.state = AuthState.AWAITING_TRIGGER

    async def _collect_code(self, ctx: ChatContext, event: ActionEvent) -> str:
        value = await ctx.open_form(event, self._form)
        code = self._form.validate(value)
        if code is None:
            raise DismissedInput()
        logger.info("Received code from %s", event.user_id)
        return code

    async def _exchange(self, ctx: ChatContext, oauth, code: str) -> None:
        try:
            client = await asyncio.to_thread(spotify_client.request_token, oauth, code)
        except AuthExchangeError as e:
            logger.warning("Token exchange failed: %s", e)
            await ctx.reply(f"Failed to authenticate:\n{e}")
            return
        self._store.replace(client)
        logger.info("Authenticated Spotify session for %s", ctx.user_id)
        await ctx.reply(SUCCESS_TEXT)
