"""Core domain models.

The remote API speaks camelCase JSON; these models accept the wire names via
aliases and expose snake_case attributes. Pydantic is used for validation at
every data boundary.

Quests exist in two shapes on purpose:

    RawQuest  - exactly what the server sent. Fields may be base64-armored.
    Quest     - decoded, immutable, ready for scoring and for attempting.

Only mugloar.codec.decode_quest turns one into the other.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

TARGET_SCORE = 30000

# Ordered worst → best. Anything not listed scores 0.
RISK_SCORES: dict[str, int] = {
    "Impossible": 0,
    "Suicide mission": 1,
    "Risky": 2,
    "Playing with fire": 3,
    "Gamble": 4,
    "Rather detrimental": 5,
    "Hmmm....": 6,
    "Quite likely": 7,
    "Walk in the park": 8,
    "Piece of cake": 9,
}


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Remote responses
# ---------------------------------------------------------------------------

class StartResponse(WireModel):
    game_id: str = Field(alias="gameId")
    lives: int
    gold: int
    level: int = 0
    score: int = 0
    high_score: int = Field(0, alias="highScore")
    turn: int = 0


class AttemptResponse(WireModel):
    success: bool
    lives: int
    gold: int
    score: int
    high_score: int = Field(0, alias="highScore")
    turn: int
    message: str = ""


class PurchaseResponse(WireModel):
    shopping_success: bool = Field(True, alias="shoppingSuccess")
    gold: int
    lives: int
    level: int
    turn: int


class Reputation(WireModel):
    people: float = 0
    state: float = 0
    underworld: float = 0


class ShopItem(WireModel):
    id: str
    name: str
    cost: int


# ---------------------------------------------------------------------------
# Quests
# ---------------------------------------------------------------------------

class RawQuest(WireModel):
    """A quest exactly as listed by the server."""

    ad_id: str = Field(alias="adId")
    message: str
    reward: int | str
    expires_in: int = Field(alias="expiresIn")
    encrypted: int | None = None
    probability: str

    @property
    def obfuscated(self) -> bool:
        return self.encrypted is not None


class Quest(BaseModel):
    """A decoded quest. `id` is the one to send when attempting it."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    reward: int
    expires_in: int
    risk_level: str
    obfuscated: bool = False

    @property
    def risk_score(self) -> int:
        return RISK_SCORES.get(self.risk_level, 0)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    TERMINATED = "terminated"


class GameState(BaseModel):
    """Mutable state of one play-through.

    Counters are always overwritten with the server's values; nothing here
    is advanced locally.
    """

    game_id: str
    lives: int
    gold: int
    level: int = 0
    score: int = 0
    high_score: int = 0
    turn: int = 0
    owned_item_ids: set[str] = Field(default_factory=set)
    log: list[str] = Field(default_factory=list)

    @classmethod
    def from_start(cls, resp: StartResponse) -> GameState:
        return cls(
            game_id=resp.game_id,
            lives=resp.lives,
            gold=resp.gold,
            level=resp.level,
            score=resp.score,
            high_score=resp.high_score,
            turn=resp.turn,
        )

    def apply_attempt(self, resp: AttemptResponse) -> None:
        self.lives = resp.lives
        self.gold = resp.gold
        self.score = resp.score
        self.high_score = resp.high_score
        self.turn = resp.turn

    def apply_purchase(self, item_id: str, resp: PurchaseResponse) -> None:
        self.gold = resp.gold
        self.lives = resp.lives
        self.level = resp.level
        self.turn = resp.turn
        if resp.shopping_success:
            self.owned_item_ids.add(item_id)

    def summary(self) -> str:
        return f"Lives: {self.lives}, Gold: {self.gold}, Score: {self.score}, Turn: {self.turn}"
