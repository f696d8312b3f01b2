import pytest

from mugloar.models import (
    AttemptResponse,
    PurchaseResponse,
    RawQuest,
    Reputation,
    ShopItem,
    StartResponse,
)


class FakeGameApi:
    """Scripted GameApi: canned responses, every call recorded.

    attempt_responses are served in order; the last one repeats once the
    list is down to a single entry. Put an exception in `errors` under an
    operation name to make that operation raise.
    """

    def __init__(self, **start) -> None:
        fields = {"gameId": "test-game-123", "lives": 3, "gold": 0, "level": 1,
                  "score": 0, "highScore": 0, "turn": 0}
        fields.update(start)
        self.start_response = StartResponse.model_validate(fields)
        self.quests: list[RawQuest] = []
        self.shop: list[ShopItem] = []
        self.attempt_responses: list[AttemptResponse] = [
            AttemptResponse(success=True, lives=3, gold=10, score=10, turn=1, message="Done")
        ]
        self.purchase_response = PurchaseResponse(gold=0, lives=3, level=1, turn=1)
        self.reputation = Reputation(people=1, state=2, underworld=3)
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple] = []

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    def args(self, name: str) -> list[tuple]:
        return [c[1:] for c in self.calls if c[0] == name]

    async def start_game(self) -> StartResponse:
        self._record("start_game")
        return self.start_response

    async def list_quests(self, game_id: str) -> list[RawQuest]:
        self._record("list_quests", game_id)
        return list(self.quests)

    async def attempt_quest(self, game_id: str, quest_id: str) -> AttemptResponse:
        self._record("attempt_quest", game_id, quest_id)
        if len(self.attempt_responses) > 1:
            return self.attempt_responses.pop(0)
        return self.attempt_responses[0]

    async def list_shop(self, game_id: str) -> list[ShopItem]:
        self._record("list_shop", game_id)
        return list(self.shop)

    async def buy_item(self, game_id: str, item_id: str) -> PurchaseResponse:
        self._record("buy_item", game_id, item_id)
        return self.purchase_response

    async def get_reputation(self, game_id: str) -> Reputation:
        self._record("get_reputation", game_id)
        return self.reputation


def _raw_quest(ad_id="ad1", probability="Piece of cake", reward=10, expires_in=5,
               message="Easy task for quick gold", encrypted=None) -> RawQuest:
    return RawQuest.model_validate({
        "adId": ad_id,
        "message": message,
        "reward": reward,
        "expiresIn": expires_in,
        "encrypted": encrypted,
        "probability": probability,
    })


@pytest.fixture
def api() -> FakeGameApi:
    return FakeGameApi()


@pytest.fixture
def make_api():
    """Factory for extra FakeGameApi instances, e.g. one per session."""
    return FakeGameApi


@pytest.fixture
def raw_quest():
    """Builder for wire-format quests; defaults to a safe, lasting one."""
    return _raw_quest
