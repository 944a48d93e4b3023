"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from delegatify.config import LOG_LEVEL

# Configure logging in the worker process (so core INFO logs are visible with uvicorn --reload)
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)

from delegatify.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from delegatify.api.routes import interactions, playback, spotify

__all__ = ["app", "AppState", "get_state"]

_state = get_state()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger(__name__).info(
        "Delegatify API ready (spotify session: %s)",
        "present" if _state.token_store.is_authenticated else "absent",
    )
    yield

    # Flows still waiting for a button press are abandoned on shutdown
    cancelled = await _state.interactions.cancel_running()
    _state.interactions.prune_finished()
    logging.getLogger(__name__).info("Shutdown, cancelled %d waiting interactions", cancelled)


app = FastAPI(
    title="Delegatify API",
    description="Chat bot backend: Spotify authentication and now-playing cards",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(interactions.router, prefix="/api/interactions", tags=["interactions"])
app.include_router(playback.router, prefix="/api/playback", tags=["playback"])
app.include_router(spotify.router, prefix="/api/spotify", tags=["spotify"])
