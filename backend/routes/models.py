"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel, Field

from mugloar.models import GameState
from mugloar.session import GameSession


class AutoPlayBody(BaseModel):
    max_turns: int | None = Field(None, ge=1)
    delay: float | None = Field(None, ge=0)


class GameView(BaseModel):
    game_id: str
    status: str
    end_reason: str | None = None
    busy: bool = False
    turns_played: int
    lives: int
    gold: int
    level: int
    score: int
    high_score: int
    turn: int
    owned_item_ids: list[str]

    @classmethod
    def of(cls, session: GameSession) -> "GameView":
        state: GameState = session.state
        return cls(
            game_id=state.game_id,
            status=session.status.value,
            end_reason=session.end_reason,
            busy=session.busy,
            turns_played=session.turns_played,
            lives=state.lives,
            gold=state.gold,
            level=state.level,
            score=state.score,
            high_score=state.high_score,
            turn=state.turn,
            owned_item_ids=sorted(state.owned_item_ids),
        )
