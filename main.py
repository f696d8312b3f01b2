"""Mugloar Bot launcher. Plays one game in the console, or serves the API."""

import argparse
import asyncio
import logging
import os
import sys

from mugloar.client import GameApiClient, GameApiError
from mugloar.config import Settings
from mugloar.models import TARGET_SCORE
from mugloar.session import GameSession


async def play_once(settings: Settings) -> int:
    session = GameSession(GameApiClient(settings.api_url, timeout=settings.timeout))

    print("Starting new game...")
    try:
        await session.start()
    except GameApiError as e:
        print(f"Could not start a game: {e}", file=sys.stderr)
        return 1

    final = await session.play(max_turns=settings.max_turns, delay=settings.turn_delay)

    print("\n=== GAME SUMMARY ===")
    print(f"Final Score: {final.score}")
    print(f"Lives Remaining: {final.lives}")
    print(f"Gold Remaining: {final.gold}")
    print(f"Turns Played: {final.turn}")
    print(f"Items Owned: {len(final.owned_item_ids)}")
    print(f"Ended because: {session.end_reason}")
    if final.score >= TARGET_SCORE:
        print(f"SUCCESS! Target score of {TARGET_SCORE} reached.")
    else:
        print(f"Game ended before reaching the target score of {TARGET_SCORE}.")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Dragons of Mugloar bot")
    parser.add_argument("--api-url", default=None,
                        help="Game API base URL (default: MUGLOAR_API_URL or the public API)")
    parser.add_argument("--max-turns", type=int, default=None,
                        help="Stop after this many turns (default: MUGLOAR_MAX_TURNS or 300)")
    parser.add_argument("--delay", type=float, default=None,
                        help="Seconds to wait between turns (default: MUGLOAR_TURN_DELAY or 0.5)")
    parser.add_argument("--serve", action="store_true",
                        help="Run the HTTP API instead of playing in the console")
    args = parser.parse_args()

    overrides = {
        "api_url": args.api_url,
        "max_turns": args.max_turns,
        "turn_delay": args.delay,
    }
    settings = Settings.from_env().model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.serve:
        import uvicorn

        # backend.app reads its settings from the environment
        os.environ["MUGLOAR_API_URL"] = settings.api_url
        os.environ["MUGLOAR_MAX_TURNS"] = str(settings.max_turns)
        os.environ["MUGLOAR_TURN_DELAY"] = str(settings.turn_delay)

        print(f"Starting API on http://localhost:{settings.port} ...")
        uvicorn.run("backend.app:app", host=settings.host, port=settings.port)
        return

    try:
        sys.exit(asyncio.run(play_once(settings)))
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
