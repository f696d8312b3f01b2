"""Game session: runs one play-through end-to-end.

Turn flow:
  1. Shopping step: maybe buy one item (see mugloar.shopping). Failures are
     logged and the turn carries on; shopping is a bonus action.
  2. Fetch the quest listing. An empty listing ends the turn.
  3. Decode obfuscated quests and pick the best one (mugloar.selector).
  4. Attempt it with its decoded id and take lives/gold/score/turn from the
     server's answer.
  5. Sleep for the configured delay before the next turn.

The loop stops when lives hit 0, the score reaches TARGET_SCORE, or the turn
budget runs out. Any error fetching or attempting a quest stops it as well;
nothing is retried.

Turns on one session never overlap: while a loop or a manual attempt/buy is
in flight, further turn actions raise SessionStateError.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Literal

from mugloar.client import GameApi
from mugloar.codec import decode_quest
from mugloar.models import (
    TARGET_SCORE,
    AttemptResponse,
    GameState,
    PurchaseResponse,
    Quest,
    Reputation,
    SessionStatus,
    ShopItem,
)
from mugloar.selector import select_best
from mugloar.shopping import DEFAULT_RULES, ShoppingRules, run_shopping_step

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 300
DEFAULT_TURN_DELAY = 0.5

EndReason = Literal["no_lives", "target_score", "turn_budget", "error"]


class SessionStateError(RuntimeError):
    """Raised when an operation is called in the wrong session state."""


class GameSession:
    """One play-through against a GameApi.

    Sessions share nothing with each other; run as many side by side as you
    like.
    """

    def __init__(self, api: GameApi, rules: ShoppingRules = DEFAULT_RULES) -> None:
        self._api = api
        self._rules = rules
        self._state: GameState | None = None
        # held for the whole auto-play loop and for each manual turn action
        self._turn_lock = asyncio.Lock()
        self.status = SessionStatus.NOT_STARTED
        self.end_reason: EndReason | None = None
        self.turns_played = 0

    @property
    def state(self) -> GameState | None:
        return self._state

    @property
    def game_id(self) -> str | None:
        return self._state.game_id if self._state else None

    @property
    def log(self) -> list[str]:
        return self._state.log if self._state else []

    @property
    def busy(self) -> bool:
        """True while a turn loop or a manual action is in flight."""
        return self._turn_lock.locked()

    def _require_active(self) -> GameState:
        if self._state is None or self.status is SessionStatus.NOT_STARTED:
            raise SessionStateError("Game not started. Call start() first.")
        if self.status is SessionStatus.TERMINATED:
            raise SessionStateError(f"Game {self._state.game_id} has already ended.")
        return self._state

    def _require_idle(self) -> GameState:
        state = self._require_active()
        if self.busy:
            raise SessionStateError(f"Game {state.game_id} is already being played.")
        return state

    def _log(self, msg: str) -> None:
        if self._state is not None:
            logger.info("[%s] %s", self._state.game_id, msg)
            self._state.log.append(msg)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> GameState:
        """Start a fresh game on the server. Replaces any previous state."""
        if self.busy:
            raise SessionStateError(f"Game {self.game_id} is already being played.")
        resp = await self._api.start_game()
        self._state = GameState.from_start(resp)
        self.status = SessionStatus.ACTIVE
        self.end_reason = None
        self.turns_played = 0
        return self._state

    def _end_reason(self, max_turns: int, turns: int) -> EndReason | None:
        state = self._state
        assert state is not None
        if state.lives <= 0:
            return "no_lives"
        if state.score >= TARGET_SCORE:
            return "target_score"
        if turns >= max_turns:
            return "turn_budget"
        return None

    async def play(
        self,
        max_turns: int = DEFAULT_MAX_TURNS,
        delay: float = DEFAULT_TURN_DELAY,
    ) -> GameState:
        """Play turns until the game ends. Returns the final state.

        Raises SessionStateError if the game is not active or another loop
        or manual action is already running on it.
        """
        state = self._require_idle()
        async with self._turn_lock:
            self._log(f"Starting game {state.game_id}. {state.summary()}")

            turns = 0
            while (reason := self._end_reason(max_turns, turns)) is None:
                try:
                    await self._play_turn(state)
                except Exception as e:
                    logger.warning("Turn aborted in game %s: %s", state.game_id, e)
                    self._log(f"Error during turn: {e}")
                    reason = "error"
                    break
                turns += 1
                if delay > 0:
                    await asyncio.sleep(delay)

            self.status = SessionStatus.TERMINATED
            self.end_reason = reason
            self._log(f"Game ended ({reason}). Final score: {state.score}, Lives: {state.lives}")
        return state

    async def play_turn(self) -> Quest | None:
        """Play a single turn. Returns the quest attempted, if any."""
        state = self._require_idle()
        async with self._turn_lock:
            return await self._play_turn(state)

    async def _play_turn(self, state: GameState) -> Quest | None:
        self.turns_played += 1
        self._log(f"--- Turn {state.turn} ---")

        try:
            await run_shopping_step(self._api, state, self._rules)
        except Exception as e:
            logger.warning("Shopping failed in game %s: %s", state.game_id, e)
            self._log(f"Shopping failed: {e}")

        quests = await self.list_quests()
        if not quests:
            self._log("No quests available")
            return None

        obfuscated = sum(1 for q in quests if q.obfuscated)
        if obfuscated:
            self._log(f"Decoded {obfuscated} obfuscated quest(s)")

        quest = select_best(quests)
        if quest is not None:
            self._log(
                f'Attempting: "{quest.description}" '
                f"(Reward: {quest.reward}, Probability: {quest.risk_level})"
            )
            await self._attempt(state, quest.id)
        return quest

    # ------------------------------------------------------------------
    # Single actions
    # ------------------------------------------------------------------

    async def list_quests(self) -> list[Quest]:
        """Current quest listing, decoded."""
        state = self._require_active()
        raw = await self._api.list_quests(state.game_id)
        return [decode_quest(r) for r in raw]

    async def list_shop(self) -> list[ShopItem]:
        state = self._require_active()
        return await self._api.list_shop(state.game_id)

    async def reputation(self) -> Reputation:
        state = self._require_active()
        return await self._api.get_reputation(state.game_id)

    async def attempt(self, quest_id: str) -> AttemptResponse:
        """Attempt a quest by its decoded id and apply the outcome."""
        state = self._require_idle()
        async with self._turn_lock:
            return await self._attempt(state, quest_id)

    async def _attempt(self, state: GameState, quest_id: str) -> AttemptResponse:
        resp = await self._api.attempt_quest(state.game_id, quest_id)
        state.apply_attempt(resp)
        outcome = "Success!" if resp.success else "Failed!"
        self._log(f"{outcome} {resp.message}".rstrip())
        self._log(f"Current state: {state.summary()}")
        if state.lives <= 0:
            self.status = SessionStatus.TERMINATED
            self.end_reason = "no_lives"
        return resp

    async def buy(self, item_id: str) -> PurchaseResponse:
        """Buy an item outside the shopping policy (manual play)."""
        state = self._require_idle()
        async with self._turn_lock:
            resp = await self._api.buy_item(state.game_id, item_id)
            state.apply_purchase(item_id, resp)
            self._log(f"Bought {item_id}. {state.summary()}")
        return resp
