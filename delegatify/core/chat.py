"""What the core needs from the chat platform for one command invocation."""
from abc import ABC, abstractmethod
from typing import Optional

from delegatify.models.card import ActionEvent, CodeForm, Reply


class ChatContext(ABC):
    """One invocation of a slash command by one user."""

    @property
    @abstractmethod
    def user_id(self) -> str:
        ...

    @abstractmethod
    async def send(self, reply: Reply) -> None:
        """Send a message to the channel (or only to the user if reply.ephemeral)."""

    @abstractmethod
    async def wait_for_action(self, action_id: str, timeout: float) -> Optional[ActionEvent]:
        """Wait for a press of the button with this action_id.

        Returns None when the timeout elapses first.
        """

    @abstractmethod
    async def open_form(self, event: ActionEvent, form: CodeForm) -> Optional[str]:
        """Open the form in response to event and return the submitted value.

        Returns None when the user dismisses the form. Raises ChatError if the
        form could not be opened at all.
        """

    async def reply(self, text: str) -> None:
        await self.send(Reply(text=text))
