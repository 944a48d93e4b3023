"""Spotify API client via Spotipy; tokens are kept in memory only."""
import logging
from typing import Optional

from requests.exceptions import RequestException
from spotipy import Spotify
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from delegatify import config
from delegatify.core.errors import AuthExchangeError, ConfigError, QueryError

logger = logging.getLogger(__name__)

# Episodes come back as item=None unless explicitly requested
PLAYBACK_ADDITIONAL_TYPES = "track,episode"


def create_oauth() -> SpotifyOAuth:
    """Return an unauthenticated OAuth builder for one authenticate run."""
    missing = [
        name
        for name, value in (
            ("SPOTIFY_CLIENT_ID", config.SPOTIFY_CLIENT_ID),
            ("SPOTIFY_CLIENT_SECRET", config.SPOTIFY_CLIENT_SECRET),
            ("SPOTIFY_REDIRECT_URI", config.SPOTIFY_REDIRECT_URI),
        )
        if not value
    ]
    if missing:
        raise ConfigError(f"{', '.join(missing)} not set")
    try:
        return SpotifyOAuth(
            client_id=config.SPOTIFY_CLIENT_ID,
            client_secret=config.SPOTIFY_CLIENT_SECRET,
            redirect_uri=config.SPOTIFY_REDIRECT_URI,
            scope=config.SPOTIFY_SCOPES,
            cache_handler=MemoryCacheHandler(),
            open_browser=False,
            requests_timeout=config.SPOTIFY_REQUEST_TIMEOUT,
        )
    except SpotifyOauthError as e:
        raise ConfigError(str(e)) from e


def get_authorize_url(oauth: SpotifyOAuth) -> str:
    return oauth.get_authorize_url()


def request_token(oauth: SpotifyOAuth, code: str) -> Spotify:
    """Exchange an authorization code and return an authenticated client."""
    try:
        oauth.get_access_token(code=code, as_dict=False, check_cache=False)
    except (SpotifyOauthError, SpotifyException, RequestException) as e:
        raise AuthExchangeError(str(e)) from e
    return Spotify(
        auth_manager=oauth,
        requests_timeout=config.SPOTIFY_REQUEST_TIMEOUT,
        retries=0,
        status_retries=0,
    )


def current_playback(client: Spotify) -> Optional[dict]:
    """Return the raw current_playback() response, or None when nothing is active."""
    try:
        return client.current_playback(additional_types=PLAYBACK_ADDITIONAL_TYPES)
    except (SpotifyOauthError, SpotifyException, RequestException) as e:
        logger.warning("current_playback failed: %s", e)
        raise QueryError(str(e)) from e
