"""Tests for mugloar.codec - base64 decoding of obfuscated quests."""

import base64

import pytest
from pydantic import ValidationError

from mugloar.codec import decode, decode_quest


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


# ── decode ───────────────────────────────────────────────────


def test_decode_base64():
    assert decode("SGVsbG8gV29ybGQ=") == "Hello World"


@pytest.mark.parametrize("text", ["Rescue the princess", "Hmmm....", "Piece of cake", "", "Ünïcödé ✓"])
def test_decode_reverses_encoding(text):
    assert decode(_b64(text)) == text


@pytest.mark.parametrize("text", ["Walk in the park", "Hmmm....", "not base64!", "abc"])
def test_decode_plain_text_passes_through(text):
    assert decode(text) == text


def test_decode_invalid_utf8_passes_through():
    # valid base64, but the bytes are not UTF-8
    assert decode("////") == "////"


# ── decode_quest ─────────────────────────────────────────────


def test_plain_quest_unchanged(raw_quest):
    q = decode_quest(raw_quest(ad_id="msg-1", probability="Gamble", reward=10,
                               message="Rescue a cat from a tree"))
    assert q.id == "msg-1"
    assert q.description == "Rescue a cat from a tree"
    assert q.reward == 10
    assert q.risk_level == "Gamble"
    assert q.obfuscated is False


def test_obfuscated_quest_decoded_together(raw_quest):
    raw = raw_quest(
        ad_id=_b64("real-id"),
        message=_b64("Rescue the princess"),
        probability=_b64("Quite likely"),
        reward=_b64("120"),
        encrypted=1,
    )
    q = decode_quest(raw)
    assert q.id == "real-id"
    assert q.description == "Rescue the princess"
    assert q.risk_level == "Quite likely"
    assert q.reward == 120
    assert q.obfuscated is True
    assert q.risk_score == 7


def test_obfuscated_quest_with_numeric_reward(raw_quest):
    q = decode_quest(raw_quest(ad_id=_b64("x"), probability=_b64("Risky"), reward=1400, encrypted=1))
    assert q.reward == 1400


def test_obfuscated_reward_decoding_to_text_falls_back_to_raw(raw_quest):
    # "0400" is valid base64 for the UTF-8 text "Ӎ4", which is not a number
    assert decode("0400") == "\u04cd4"
    q = decode_quest(raw_quest(ad_id=_b64("x"), reward="0400", encrypted=1))
    assert q.reward == 400


def test_obfuscated_numeric_reward_that_is_not_utf8_kept(raw_quest):
    # "1400" decodes to bytes that are not UTF-8, so decode() returns it unchanged
    assert decode("1400") == "1400"
    q = decode_quest(raw_quest(ad_id=_b64("x"), reward="1400", encrypted=1))
    assert q.reward == 1400


def test_unreadable_reward_scores_zero(raw_quest):
    q = decode_quest(raw_quest(ad_id=_b64("x"), reward="lots", encrypted=1))
    assert q.reward == 0


def test_obfuscated_quest_with_garbled_fields(raw_quest):
    """Fields that don't decode are kept as they are."""
    q = decode_quest(raw_quest(ad_id="plain-id!", probability="Gamble", encrypted=1))
    assert q.id == "plain-id!"
    assert q.risk_level == "Gamble"


def test_decoded_quest_is_frozen(raw_quest):
    q = decode_quest(raw_quest())
    with pytest.raises(ValidationError):
        q.id = "other"
