"""HTTP server that receives game state updates."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from typing import Awaitable, Callable, Optional, Sequence

from aiohttp import web

from .args import parse_args
from .handler import APP_STATE, update
from .playback import get_output_stream, list_host_devices
from .preset import PresetError, load_preset
from .state import AppState

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
REQUEST_TIMEOUT = 10.0
LOG_ENV = "KILLCHIME_LOG"


@web.middleware
async def _timeout(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    try:
        return await asyncio.wait_for(handler(request), REQUEST_TIMEOUT)
    except asyncio.TimeoutError:
        return web.Response(status=408)


def create_app(state: AppState) -> web.Application:
    """Build the web application that serves ``state``."""
    app = web.Application(middlewares=[_timeout])
    app[APP_STATE] = state
    app.router.add_post("/", update)
    return app


async def _shutdown_signal() -> None:
    """Wait until the process is asked to stop."""
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    installed = []
    for sig in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
        if sig is None:
            continue
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            continue
        installed.append(sig)
    try:
        await stop.wait()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


async def serve(
    state: AppState, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
) -> None:
    """Serve updates on ``host:port`` until interrupted."""
    runner = web.AppRunner(create_app(state))
    await runner.setup()
    try:
        site = web.TCPSite(runner, host, port)
        await site.start()
        logger.info("listening on %s:%d", host, port)
        await _shutdown_signal()
    finally:
        await runner.cleanup()


def _setup_logging() -> None:
    level_name = os.environ.get(LOG_ENV, "INFO").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; return the exit status."""
    _setup_logging()
    args = parse_args(argv)

    if args.list_devices:
        list_host_devices()
        return 0

    try:
        stream = get_output_stream(args.device)
    except RuntimeError as exc:
        logger.error("failed to get output stream: %s", exc)
        return 1

    with stream:
        try:
            preset = load_preset(args.preset)
        except PresetError as exc:
            logger.error("failed to parse preset '%s': %s", args.preset, exc)
            return 1
        logger.info("preset '%s' loaded successfully", args.preset)
        logger.info("variant: %s", args.variant if args.variant is not None else "none")

        state = AppState(args=args, preset=preset, stream=stream)
        try:
            asyncio.run(serve(state))
        except KeyboardInterrupt:
            pass
        except OSError as exc:
            logger.error("server failed: %s", exc)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())