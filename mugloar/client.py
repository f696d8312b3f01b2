"""Game API client: HTTP connection to the Dragons of Mugloar service.

The session state machine is written against the GameApi protocol:

    start_game()                          -> StartResponse
    list_quests(game_id)                  -> list[RawQuest]
    attempt_quest(game_id, quest_id)      -> AttemptResponse
    list_shop(game_id)                    -> list[ShopItem]
    buy_item(game_id, item_id)            -> PurchaseResponse
    get_reputation(game_id)               -> Reputation

GameApiClient is the real implementation. Tests inject a scripted fake
instead.

Every failure (connection refused, timeout, non-2xx status, a payload that
does not match the expected shape) surfaces as GameApiError. Nothing is
retried: the caller decides what a failed call means for the turn.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from mugloar.models import (
    AttemptResponse,
    PurchaseResponse,
    RawQuest,
    Reputation,
    ShopItem,
    StartResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dragonsofmugloar.com/api/v2"

_QUESTS = TypeAdapter(list[RawQuest])
_SHOP_ITEMS = TypeAdapter(list[ShopItem])


# ---------------------------------------------------------------------------
# Protocol: every game API implementation must match these signatures
# ---------------------------------------------------------------------------

class GameApi(Protocol):
    async def start_game(self) -> StartResponse: ...

    async def list_quests(self, game_id: str) -> list[RawQuest]: ...

    async def attempt_quest(self, game_id: str, quest_id: str) -> AttemptResponse: ...

    async def list_shop(self, game_id: str) -> list[ShopItem]: ...

    async def buy_item(self, game_id: str, item_id: str) -> PurchaseResponse: ...

    async def get_reputation(self, game_id: str) -> Reputation: ...


# ---------------------------------------------------------------------------
# GameApiClient: talks to the real service
# ---------------------------------------------------------------------------

class GameApiClient:
    """Async HTTP client for the game service.

    Args:
        base_url: Base URL of the API, e.g. "https://dragonsofmugloar.com/api/v2".
        timeout:  HTTP timeout in seconds. Defaults to 30.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _call(self, method: str, path: str, action: str) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("game api %s %s", method, url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                if method == "GET":
                    resp = await client.get(url)
                else:
                    resp = await client.post(url)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise GameApiError(
                f"{action}: {_error_detail(e.response) or f'HTTP {status}'}", status=status
            ) from e
        except httpx.TimeoutException as e:
            raise GameApiError(f"{action}: timed out after {self._timeout}s") from e
        except httpx.ConnectError as e:
            raise GameApiError(f"{action}: cannot connect to {self._base_url}") from e
        except httpx.HTTPError as e:
            raise GameApiError(f"{action}: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise GameApiError(f"{action}: response is not JSON") from e

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def start_game(self) -> StartResponse:
        data = await self._call("POST", "/game/start", "Failed to start game")
        return _parse(StartResponse.model_validate, data, "Failed to start game")

    async def list_quests(self, game_id: str) -> list[RawQuest]:
        action = "Failed to get messages"
        data = await self._call("GET", f"/{game_id}/messages", action)
        return _parse(_QUESTS.validate_python, data or [], action)

    async def attempt_quest(self, game_id: str, quest_id: str) -> AttemptResponse:
        action = "Failed to solve message"
        data = await self._call("POST", f"/{game_id}/solve/{quest_id}", action)
        return _parse(AttemptResponse.model_validate, data, action)

    async def list_shop(self, game_id: str) -> list[ShopItem]:
        action = "Failed to get shop"
        data = await self._call("GET", f"/{game_id}/shop", action)
        return _parse(_SHOP_ITEMS.validate_python, _shop_entries(data), action)

    async def buy_item(self, game_id: str, item_id: str) -> PurchaseResponse:
        action = "Failed to buy item"
        data = await self._call("POST", f"/{game_id}/shop/buy/{item_id}", action)
        return _parse(PurchaseResponse.model_validate, data, action)

    async def get_reputation(self, game_id: str) -> Reputation:
        action = "Failed to get reputation"
        data = await self._call("POST", f"/{game_id}/investigate/reputation", action)
        return _parse(Reputation.model_validate, data, action)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _shop_entries(data: Any) -> Any:
    """The shop is listed either as a bare array or as {"items": [...]}."""
    if isinstance(data, dict):
        return data.get("items") or []
    return data or []


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or "")
    return ""


def _parse(validate, data: Any, action: str):
    try:
        return validate(data)
    except ValidationError as e:
        raise GameApiError(f"{action}: unexpected response format") from e


# ---------------------------------------------------------------------------
# GameApiError: raised by GameApiClient for all connection and protocol failures
# ---------------------------------------------------------------------------

class GameApiError(RuntimeError):
    """Raised when the game service cannot be reached or returns an error.

    `status` carries the HTTP status code when the server answered with one.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
