"""ChatContext backed by HTTP: replies go to an outbox, button presses and
form submissions arrive through the interaction routes."""
import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from delegatify.config import FORM_TIMEOUT_SEC
from delegatify.core.chat import ChatContext
from delegatify.core.errors import ChatError
from delegatify.models.card import ActionEvent, CodeForm, Reply

logger = logging.getLogger(__name__)

# Finished interactions are kept for polling until the registry grows past this
MAX_INTERACTIONS = 256


@dataclass
class _FormResult:
    value: Optional[str]


class WebInteraction(ChatContext):
    """One command invocation driven over HTTP."""

    def __init__(self, user_id: str, form_timeout: float = FORM_TIMEOUT_SEC) -> None:
        self.interaction_id = uuid.uuid4().hex
        self._user_id = user_id
        self._form_timeout = form_timeout
        self.outbox: List[Reply] = []
        self.open_form_spec: Optional[CodeForm] = None
        self.error: Optional[str] = None
        self.task: Optional[asyncio.Task] = None
        self._actions: asyncio.Queue = asyncio.Queue()
        self._forms: asyncio.Queue = asyncio.Queue()
        self._form_answered = False
        self._ready = asyncio.Event()

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def running(self) -> bool:
        return self.task is not None and not self.task.done()

    def action_ids(self) -> List[str]:
        return [b.action_id for r in self.outbox for b in r.buttons if b.action_id]

    # ChatContext

    async def send(self, reply: Reply) -> None:
        self.outbox.append(reply)
        if reply.buttons:
            self._ready.set()

    async def wait_for_action(self, action_id: str, timeout: float) -> Optional[ActionEvent]:
        deadline = time.monotonic() + timeout
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            try:
                event = await asyncio.wait_for(self._actions.get(), timeout=remaining)
            except asyncio.TimeoutError:
                return None
            if event.action_id == action_id:
                return event
            logger.debug("Ignoring action %s while waiting for %s", event.action_id, action_id)

    async def open_form(self, event: ActionEvent, form: CodeForm) -> Optional[str]:
        if self.open_form_spec is not None:
            raise ChatError("a form is already open for this interaction")
        # One answer per opened form; anything left from an earlier form is stale
        while not self._forms.empty():
            self._forms.get_nowait()
        self._form_answered = False
        self.open_form_spec = form
        try:
            result = await asyncio.wait_for(self._forms.get(), timeout=self._form_timeout)
        except asyncio.TimeoutError:
            logger.debug("Form on %s expired", self.interaction_id)
            return None
        finally:
            self.open_form_spec = None
        return result.value

    # Inbound events from the routes

    def trigger(self, action_id: str, user_id: str) -> bool:
        if user_id != self._user_id:
            return False
        if not self.running or action_id not in self.action_ids():
            return False
        self._actions.put_nowait(ActionEvent(action_id=action_id, user_id=user_id))
        return True

    def submit_form(self, value: Optional[str]) -> bool:
        """Deliver a submitted value (None = dismissed) to the open form."""
        if self.open_form_spec is None or self._form_answered:
            return False
        self._form_answered = True
        self._forms.put_nowait(_FormResult(value))
        return True

    async def start(self, command: Callable[["WebInteraction"], Awaitable[None]]) -> None:
        """Run command in the background and return once it has prompted or finished."""
        self.task = asyncio.create_task(command(self))
        self.task.add_done_callback(self._on_done)
        await self._ready.wait()

    def _on_done(self, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            self.error = str(task.exception())
            logger.warning("Interaction %s failed: %s", self.interaction_id, task.exception())
        self._ready.set()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "interaction_id": self.interaction_id,
            "user_id": self._user_id,
            "running": self.running,
            "error": self.error,
            "form": (
                self.open_form_spec.to_dict()
                if self.open_form_spec and not self._form_answered
                else None
            ),
            "messages": [r.to_dict() for r in self.outbox],
        }


class InteractionRegistry:
    def __init__(self, max_interactions: int = MAX_INTERACTIONS) -> None:
        self._interactions: Dict[str, WebInteraction] = {}
        self._max_interactions = max_interactions

    def create(self, user_id: str) -> WebInteraction:
        if len(self._interactions) >= self._max_interactions:
            self.prune_finished()
        interaction = WebInteraction(user_id)
        self._interactions[interaction.interaction_id] = interaction
        return interaction

    def get(self, interaction_id: str) -> Optional[WebInteraction]:
        return self._interactions.get(interaction_id)

    def prune_finished(self) -> int:
        """Drop finished interactions; returns how many were removed."""
        done = [k for k, v in self._interactions.items() if v.task is None or v.task.done()]
        for key in done:
            del self._interactions[key]
        return len(done)

    def __len__(self) -> int:
        return len(self._interactions)

    async def cancel_running(self) -> int:
        """Cancel flows still waiting on the user and wait for them to unwind."""
        tasks = [v.task for v in self._interactions.values() if v.running]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        return len(tasks)
