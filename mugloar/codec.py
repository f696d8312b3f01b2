"""Base64 de-obfuscation of quest fields.

The server armors some quests (those with a non-null `encrypted` flag) by
base64-encoding their id, text and probability, and sometimes the reward.
This is a disguise, not a security boundary: the decoded id is what the
solve endpoint expects.
"""

from __future__ import annotations

import base64
import binascii
import logging

from mugloar.models import Quest, RawQuest

logger = logging.getLogger(__name__)


def decode(text: str) -> str:
    """Decode base64 `text` into UTF-8, or return it unchanged if that fails."""
    try:
        return base64.b64decode(text, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return text


def decode_quest(raw: RawQuest) -> Quest:
    """Build a plain Quest from a raw listing entry.

    All obfuscated fields are decoded together so the result is never half
    decoded.
    """
    if not raw.obfuscated:
        return Quest(
            id=raw.ad_id,
            description=raw.message,
            reward=_parse_reward(raw, raw.reward),
            expires_in=raw.expires_in,
            risk_level=raw.probability,
        )

    reward = raw.reward
    if isinstance(reward, str):
        reward = decode(reward)
    return Quest(
        id=decode(raw.ad_id),
        description=decode(raw.message),
        reward=_parse_reward(raw, reward),
        expires_in=raw.expires_in,
        risk_level=decode(raw.probability),
        obfuscated=True,
    )


def _parse_reward(raw: RawQuest, value: int | str) -> int:
    """Parse a reward, falling back to the raw listing value."""
    for candidate in (value, raw.reward):
        try:
            return int(candidate)
        except ValueError:
            continue
    # TODO: drop such quests from selection instead of scoring them as 0
    logger.warning("Quest %s has an unreadable reward %r; scoring it as 0", raw.ad_id, raw.reward)
    return 0
