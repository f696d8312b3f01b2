"""Shop purchase policy.

Runs once per turn, before the quest step, and buys at most one item:

  emergency   - lives at or below the danger threshold and a healing item is
                affordable: buy the first such item and nothing else.
  collection  - otherwise buy the most expensive affordable item not yet
                owned this session.
  upgrade     - everything affordable is already owned: buy the most
                expensive affordable item again.

Healing items are only ever bought on the emergency path. The danger
threshold grows with the turn counter: later in a run the bot tolerates
fewer spare lives before healing.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from mugloar.client import GameApi
from mugloar.models import GameState, ShopItem

logger = logging.getLogger(__name__)

PurchaseReason = Literal["emergency", "collection", "upgrade"]


@dataclass(frozen=True)
class ShoppingRules:
    """Tunable knobs of the purchase policy."""

    min_gold: int = 50
    danger_turn_divisor: int = 20
    danger_margin: int = 2


@dataclass(frozen=True)
class PurchaseDecision:
    item: ShopItem
    reason: PurchaseReason


DEFAULT_RULES = ShoppingRules()


def danger_threshold(turn: int, rules: ShoppingRules = DEFAULT_RULES) -> int:
    """Lives at or below this count trigger an emergency heal."""
    # round half up, not Python's banker's rounding
    return math.floor(turn / rules.danger_turn_divisor + 0.5) + rules.danger_margin


def _is_healing(item: ShopItem) -> bool:
    return "healing" in item.name.lower()


def _most_expensive(items: Sequence[ShopItem]) -> ShopItem:
    # max() keeps the first of equally priced items
    return max(items, key=lambda i: i.cost)


def decide_purchase(
    state: GameState,
    items: Sequence[ShopItem],
    rules: ShoppingRules = DEFAULT_RULES,
) -> PurchaseDecision | None:
    """Pick the one item to buy this turn, or None."""
    affordable = [i for i in items if i.cost <= state.gold]

    if state.lives <= danger_threshold(state.turn, rules):
        for item in affordable:
            if _is_healing(item):
                return PurchaseDecision(item, "emergency")

    if not affordable:
        return None

    unowned = [i for i in affordable if i.id not in state.owned_item_ids]
    if unowned:
        decision = PurchaseDecision(_most_expensive(unowned), "collection")
    else:
        decision = PurchaseDecision(_most_expensive(affordable), "upgrade")

    if _is_healing(decision.item):
        return None
    return decision


async def run_shopping_step(
    api: GameApi,
    state: GameState,
    rules: ShoppingRules = DEFAULT_RULES,
) -> PurchaseDecision | None:
    """Fetch the shop, decide, and buy. Applies the purchase to `state`.

    Errors from the remote API propagate; the caller decides whether a
    failed shopping trip matters.
    """

    def _log(msg: str) -> None:
        logger.info("[%s] %s", state.game_id, msg)
        state.log.append(msg)

    if state.gold < rules.min_gold:
        return None

    items = await api.list_shop(state.game_id)
    decision = decide_purchase(state, items, rules)

    if decision is None:
        if not any(i.cost <= state.gold for i in items):
            _log(f"Holding gold ({state.gold}): nothing affordable in the shop")
        else:
            _log(f"Holding gold ({state.gold}): nothing worth buying")
        return None

    item = decision.item
    if decision.reason == "emergency":
        _log(f"EMERGENCY: lives low ({state.lives}), buying {item.name} for {item.cost} gold")
    elif decision.reason == "collection":
        _log(f"Collecting: buying new item {item.name} for {item.cost} gold")
    else:
        _log(f"Upgrading: buying {item.name} again for {item.cost} gold")

    resp = await api.buy_item(state.game_id, item.id)
    state.apply_purchase(item.id, resp)
    if resp.shopping_success:
        _log(f"Purchase done. {state.summary()}")
    else:
        _log(f"Shop refused the purchase of {item.name}. {state.summary()}")
    return decision
