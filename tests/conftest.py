"""Test configuration and fixtures"""

from typing import List, Optional
from unittest.mock import Mock

import pytest

from delegatify.api.state import AppState
from delegatify.core import spotify_client
from delegatify.core.chat import ChatContext
from delegatify.core.token_store import TokenStore
from delegatify.models.card import ActionEvent, CodeForm, Reply

VALID_CODE = "A" * 70
DISMISS = object()


class ScriptedChat(ChatContext):
    """ChatContext that replays a script of button presses and form answers.

    presses: how many times the trigger button gets pressed before the
    prompt times out. forms: one entry per press, either a string or DISMISS.
    """

    def __init__(self, presses: int = 0, forms: Optional[list] = None, user_id: str = "owner"):
        self._user_id = user_id
        self._presses = presses
        self._forms = list(forms or [])
        self.sent: List[Reply] = []
        self.waits = 0
        self.timeouts = 0
        self.forms_opened: List[CodeForm] = []

    @property
    def user_id(self) -> str:
        return self._user_id

    async def send(self, reply: Reply) -> None:
        self.sent.append(reply)

    async def wait_for_action(self, action_id, timeout):
        self.waits += 1
        if self._presses == 0:
            self.timeouts += 1
            return None
        self._presses -= 1
        return ActionEvent(action_id=action_id, user_id=self._user_id)

    async def open_form(self, event, form):
        self.forms_opened.append(form)
        answer = self._forms.pop(0)
        return None if answer is DISMISS else answer

    @property
    def texts(self) -> List[str]:
        return [r.text for r in self.sent if r.text]


@pytest.fixture
def store():
    return TokenStore()


@pytest.fixture
def app_state():
    return AppState()


@pytest.fixture
def oauth(monkeypatch):
    """Patch the Spotify boundary; returns the mocks for assertions."""
    mocks = Mock()
    mocks.oauth = Mock(name="SpotifyOAuth")
    mocks.client = Mock(name="Spotify")
    mocks.create_oauth = Mock(return_value=mocks.oauth)
    mocks.get_authorize_url = Mock(return_value="https://accounts.spotify.com/authorize?client_id=x")
    mocks.request_token = Mock(return_value=mocks.client)
    monkeypatch.setattr(spotify_client, "create_oauth", mocks.create_oauth)
    monkeypatch.setattr(spotify_client, "get_authorize_url", mocks.get_authorize_url)
    monkeypatch.setattr(spotify_client, "request_token", mocks.request_token)
    return mocks


@pytest.fixture
def sample_track_item():
    """Sample current_playback() item for a track"""
    return {
        "type": "track",
        "name": "Song",
        "duration_ms": 210000,  # 3:30
        "artists": [{"id": "a1", "name": "A"}, {"id": "b1", "name": "B"}],
        "album": {
            "name": "Album",
            "images": [
                {"url": "https://i.scdn.co/image/large", "height": 640, "width": 640},
                {"url": "https://i.scdn.co/image/small", "height": 64, "width": 64},
            ],
        },
    }


@pytest.fixture
def sample_episode_item():
    """Sample current_playback() item for a podcast episode"""
    return {
        "type": "episode",
        "name": "Monday Briefing",
        "duration_ms": 3_900_000,  # 1:05:00
        "images": [],
        "show": {
            "name": "Daily News",
            "images": [{"url": "https://i.scdn.co/image/show", "height": 640, "width": 640}],
        },
    }


@pytest.fixture
def sample_playback(sample_track_item):
    return {
        "is_playing": True,
        "progress_ms": 65000,
        "shuffle_state": True,
        "repeat_state": "context",
        "currently_playing_type": "track",
        "item": sample_track_item,
    }
