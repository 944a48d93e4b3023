"""Configuration: env, Spotify credentials, interaction timeouts."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of delegatify package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SPOTIFY_CLIENT_ID etc. are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("DELEGATIFY_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("DELEGATIFY_API_PORT", "8000"))
LOG_LEVEL = os.getenv("DELEGATIFY_LOG_LEVEL", "INFO").upper()

# Spotify (OAuth; tokens live in memory only, a restart needs /authenticate again)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET", "")
SPOTIFY_REDIRECT_URI = os.getenv("SPOTIFY_REDIRECT_URI", "")
SPOTIFY_SCOPES = "user-read-playback-state user-read-currently-playing"
SPOTIFY_REQUEST_TIMEOUT = float(os.getenv("SPOTIFY_REQUEST_TIMEOUT", "10"))

# Authenticate prompt: each wait for the button gets a fresh window
AUTH_TIMEOUT_SEC = float(os.getenv("DELEGATIFY_AUTH_TIMEOUT_SEC", "120"))
# How long an opened code form stays open before counting as dismissed
FORM_TIMEOUT_SEC = float(os.getenv("DELEGATIFY_FORM_TIMEOUT_SEC", "300"))
# Exchange codes are long opaque strings
CODE_MIN_LENGTH = 64
CODE_MAX_LENGTH = 512

# /current is rate limited per user
CURRENT_COOLDOWN_SEC = float(os.getenv("DELEGATIFY_CURRENT_COOLDOWN_SEC", "10"))

# Chat user ids allowed to run /authenticate (comma separated; empty = anyone)
OWNER_IDS = frozenset(
    uid.strip() for uid in os.getenv("DELEGATIFY_OWNER_IDS", "").split(",") if uid.strip()
)

BOT_NAME = "Delegatify"
