"""Quest ranking.

Each turn the bot attempts exactly one quest. Ranking runs the offered
quests through three filters, each of which falls back to its input pool if
it would leave nothing, so a non-empty listing always yields a quest:

  1. viable    : risk score above "Suicide mission"
  2. lasting   : more than one turn before the quest expires
  3. ethical   : no stealing, unless the loot is shared with the people

The survivors are ordered safest first, then by highest reward.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from mugloar.models import RISK_SCORES, Quest

logger = logging.getLogger(__name__)

MIN_VIABLE_RISK_SCORE = 2
MIN_EXPIRES_IN = 2
STEAL_MARKER = "Steal"
SHARED_PROFITS_MARKER = "share some of the profits with the people"


def risk_score(risk_level: str) -> int:
    return RISK_SCORES.get(risk_level, 0)


def _is_viable(quest: Quest) -> bool:
    return quest.risk_score >= MIN_VIABLE_RISK_SCORE


def _is_lasting(quest: Quest) -> bool:
    return quest.expires_in >= MIN_EXPIRES_IN


def _is_ethical(quest: Quest) -> bool:
    text = quest.description
    return STEAL_MARKER not in text or SHARED_PROFITS_MARKER in text


def _narrow(pool: list[Quest], keep: Callable[[Quest], bool], stage: str) -> list[Quest]:
    narrowed = [q for q in pool if keep(q)]
    if not narrowed:
        logger.debug("%s filter left no quests; keeping all %d", stage, len(pool))
        return pool
    return narrowed


def rank_quests(quests: Sequence[Quest]) -> list[Quest]:
    """Return the quests worth attempting, best first."""
    pool = list(quests)
    pool = _narrow(pool, _is_viable, "viable")
    pool = _narrow(pool, _is_lasting, "lasting")
    pool = _narrow(pool, _is_ethical, "ethical")
    # sort is stable, so full ties keep listing order
    return sorted(pool, key=lambda q: (q.risk_score + 1, q.reward), reverse=True)


def select_best(quests: Sequence[Quest]) -> Quest | None:
    """Pick the quest to attempt this turn, or None for an empty listing."""
    ranked = rank_quests(quests)
    if not ranked:
        return None
    return ranked[0]
