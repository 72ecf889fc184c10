"""Handling of game state updates posted to the server."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import astuple, dataclass
from typing import Any, Mapping, Optional, Set

from aiohttp import web

from .sound import play_audio
from .state import AppState

logger = logging.getLogger(__name__)

APP_STATE = web.AppKey("state", AppState)

_background: Set["asyncio.Future[Any]"] = set()


class BodyError(ValueError):
    """An update body does not have the expected shape."""


@dataclass(frozen=True)
class KillEvent:
    """A new kill that should be announced."""

    player_name: str
    sound_num: int
    current_kills: int
    origin_hs_kills: int
    current_hs_kills: int
    sound_num_max: int


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key) or ""
    if not isinstance(value, str):
        raise BodyError(f"field `{key}` must be a string")
    return value


def _counter(data: Mapping[str, Any], key: str, bits: int) -> int:
    value = data.get(key)
    if type(value) is not int or not 0 <= value < 1 << bits:
        raise BodyError(f"field `{key}` must be an unsigned {bits}-bit integer")
    return value


def evaluate(state: AppState, body: Any) -> Optional[KillEvent]:
    """Update the kill counters from ``body``; return an event for a new kill."""
    if not isinstance(body, Mapping):
        raise BodyError("body must be a JSON object")
    player = body.get("player")
    if body.get("map") is None or player is None:
        logger.warning("map or player data is missing")
        return None
    if not isinstance(player, Mapping):
        raise BodyError("field `player` must be an object")
    steamid = _text(player, "steamid")
    if state.args.steamid is not None and steamid != state.args.steamid:
        return None

    ply_state = player.get("state")
    if not isinstance(ply_state, Mapping):
        raise BodyError("player state is missing")
    kills = _counter(ply_state, "round_kills", 16)
    hs_kills = _counter(ply_state, "round_killhs", 64)

    previous = state.snapshot()
    event = None
    if kills > previous.ply_kills and previous.steamid in (steamid, ""):
        end = state.preset.end
        event = KillEvent(_text(player, "name"), min(kills, end), kills,
                          previous.ply_hs_kills, hs_kills, end)
        logger.info("player: %s, kills: %d", event.player_name, kills)

    state.record(steamid, kills, hs_kills)
    return event


def _play(state: AppState, event: KillEvent) -> None:
    try:
        play_audio(state, *astuple(event)[1:])
    except Exception as exc:  # playback failures must not reach the server
        logger.error("Failed to play audio: %s", exc)


async def update(request: web.Request) -> web.Response:
    """Accept a game state update and play sounds for new kills."""
    state = request.app[APP_STATE]
    try:
        event = evaluate(state, await request.json())
    except BodyError as exc:
        logger.warning("unexpected update body: %s", exc)
        return web.Response(status=422)
    except (ValueError, UnicodeDecodeError) as exc:
        logger.warning("malformed update: %s", exc)
        return web.Response(status=400)
    if event is not None:
        future = asyncio.get_running_loop().run_in_executor(None, _play, state, event)
        _background.add(future)
        future.add_done_callback(_background.discard)
    return web.Response(status=200)