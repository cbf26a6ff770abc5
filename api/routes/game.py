"""Game API endpoints."""

import logging
import time
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import (
    ActionRequest,
    BetRequest,
    GameStateResponse,
    SessionResponse,
)
from api.session import create_session, get_session, update_session
from config import config
from core.errors import EmptyShoeError, IllegalActionError, InvalidBetError
from core.game import BlackjackGame
from core.rules import RuleSet

logger = logging.getLogger(__name__)

router = APIRouter()

# Session data keys
SESSION_KEY_GAME = "game"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def _new_game() -> BlackjackGame:
    """Open a table with the configured rules and bankroll."""
    return BlackjackGame(
        rules=RuleSet.from_config(config.game),
        initial_bankroll=config.game.initial_bankroll,
    )


async def _get_game(session_id: str | None) -> tuple[BlackjackGame, dict]:
    """Resolve the session's game, or fail with 401."""
    if session_id is None:
        raise HTTPException(status_code=401, detail="Missing session")

    session_data = await get_session(session_id)
    if session_data is None or SESSION_KEY_GAME not in session_data:
        raise HTTPException(status_code=401, detail="Unknown or expired session")

    return session_data[SESSION_KEY_GAME], session_data


async def _touch(session_id: str, session_data: dict) -> None:
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    await update_session(session_id, session_data)


@router.post("/new")
async def new_game() -> SessionResponse:
    """Create a new game session."""
    now = int(time.time())
    session_id = await create_session(
        {
            SESSION_KEY_GAME: _new_game(),
            SESSION_KEY_CREATED_AT: now,
            SESSION_KEY_LAST_ACTIVITY: now,
        }
    )
    logger.info("Opened new table")
    return SessionResponse(session_id=session_id)


@router.get("/state")
async def get_state(
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> GameStateResponse:
    """Get current game state."""
    game, _ = await _get_game(session_id)
    return GameStateResponse.from_snapshot(game.snapshot())


@router.post("/bet")
async def place_bet(
    request: BetRequest,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> GameStateResponse:
    """Place a bet and deal cards."""
    game, session_data = await _get_game(session_id)

    try:
        snapshot = game.submit_bet(request.amount)
    except (InvalidBetError, IllegalActionError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except EmptyShoeError as exc:
        raise HTTPException(status_code=500, detail="Round aborted") from exc

    await _touch(session_id, session_data)
    return GameStateResponse.from_snapshot(snapshot)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> GameStateResponse:
    """Execute a player action."""
    game, session_data = await _get_game(session_id)

    try:
        snapshot = game.player_action(request.action)
    except (InvalidBetError, IllegalActionError) as exc:
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now: {exc}") from exc
    except EmptyShoeError as exc:
        raise HTTPException(status_code=500, detail="Round aborted") from exc

    await _touch(session_id, session_data)
    return GameStateResponse.from_snapshot(snapshot)
