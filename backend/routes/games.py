"""Game session endpoints: start, inspect, auto-play and manual play."""

from fastapi import APIRouter, Depends, HTTPException

from backend.registry import SessionRegistry
from mugloar.client import GameApiError
from mugloar.config import Settings
from mugloar.session import GameSession, SessionStateError

from .deps import get_registry, get_session, get_settings
from .models import AutoPlayBody, GameView

router = APIRouter()


def _upstream_error(e: GameApiError) -> HTTPException:
    return HTTPException(502, e.message)


@router.get("/games")
async def list_games(registry: SessionRegistry = Depends(get_registry)):
    """List ids of the games currently held by the server."""
    return {"games": registry.ids()}


@router.post("/games")
async def start_game(registry: SessionRegistry = Depends(get_registry)) -> GameView:
    """Start a new game on the remote service."""
    try:
        session = await registry.create()
    except GameApiError as e:
        raise _upstream_error(e)
    return GameView.of(session)


@router.get("/games/{game_id}")
async def get_game(session: GameSession = Depends(get_session)) -> GameView:
    """Current state of a game."""
    return GameView.of(session)


@router.delete("/games/{game_id}")
async def delete_game(game_id: str, registry: SessionRegistry = Depends(get_registry)):
    """Forget a game. The remote service is not told."""
    if not registry.remove(game_id):
        raise HTTPException(404, "Game not found")
    return {"ok": True}


@router.get("/games/{game_id}/log")
async def get_log(session: GameSession = Depends(get_session)):
    """Run log of a game, oldest entry first."""
    return {"log": session.log}


@router.post("/games/{game_id}/auto-play")
async def auto_play(
    body: AutoPlayBody | None = None,
    session: GameSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> GameView:
    """Let the bot play until the game ends or the turn budget runs out."""
    body = body or AutoPlayBody()
    max_turns = body.max_turns or settings.max_turns
    delay = settings.turn_delay if body.delay is None else body.delay
    try:
        await session.play(max_turns=max_turns, delay=delay)
    except SessionStateError as e:
        raise HTTPException(409, str(e))
    return GameView.of(session)


@router.get("/games/{game_id}/messages")
async def list_messages(session: GameSession = Depends(get_session)):
    """Quests on offer right now, decoded."""
    try:
        return await session.list_quests()
    except SessionStateError as e:
        raise HTTPException(409, str(e))
    except GameApiError as e:
        raise _upstream_error(e)


@router.post("/games/{game_id}/solve/{quest_id}")
async def solve_message(quest_id: str, session: GameSession = Depends(get_session)):
    """Attempt a quest by its decoded id."""
    try:
        return await session.attempt(quest_id)
    except SessionStateError as e:
        raise HTTPException(409, str(e))
    except GameApiError as e:
        raise _upstream_error(e)


@router.get("/games/{game_id}/shop")
async def list_shop(session: GameSession = Depends(get_session)):
    """Items for sale right now."""
    try:
        return {"items": await session.list_shop()}
    except SessionStateError as e:
        raise HTTPException(409, str(e))
    except GameApiError as e:
        raise _upstream_error(e)


@router.post("/games/{game_id}/shop/buy/{item_id}")
async def buy_item(item_id: str, session: GameSession = Depends(get_session)):
    """Buy an item, bypassing the shopping policy."""
    try:
        return await session.buy(item_id)
    except SessionStateError as e:
        raise HTTPException(409, str(e))
    except GameApiError as e:
        raise _upstream_error(e)


@router.get("/games/{game_id}/reputation")
async def get_reputation(session: GameSession = Depends(get_session)):
    """Reputation with the people, the state and the underworld."""
    try:
        return await session.reputation()
    except SessionStateError as e:
        raise HTTPException(409, str(e))
    except GameApiError as e:
        raise _upstream_error(e)
