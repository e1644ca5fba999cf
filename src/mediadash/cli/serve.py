"""CLI serve command.

Runs the dashboard JSON API until interrupted.
"""

from __future__ import annotations

import asyncio
import logging
import signal

import click

from mediadash.cli.exit_codes import ExitCode
from mediadash.config.models import Settings

logger = logging.getLogger(__name__)


async def run_server(settings: Settings) -> int:
    """Run the API server until SIGINT/SIGTERM.

    Returns:
        Exit code (0 for clean shutdown).
    """
    from aiohttp import web

    from mediadash.server.app import create_app

    app = create_app(settings.configs_dir)
    runner = web.AppRunner(app, shutdown_timeout=settings.server.shutdown_timeout)
    await runner.setup()

    site = web.TCPSite(runner, settings.server.bind, settings.server.port)
    try:
        await site.start()
    except OSError as e:
        logger.error(
            "Cannot bind to %s:%d: %s", settings.server.bind, settings.server.port, e
        )
        await runner.cleanup()
        return int(ExitCode.GENERAL_ERROR)

    logger.info(
        "Serving dashboard API on http://%s:%d (configs: %s)",
        settings.server.bind,
        settings.server.port,
        settings.configs_dir,
    )

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown_event.set)

    try:
        await shutdown_event.wait()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
        logger.info("Shutting down")
        await runner.cleanup()

    return int(ExitCode.SUCCESS)


@click.command("serve")
@click.option("--bind", default=None, help="Address to bind (default 127.0.0.1).")
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Port.")
@click.pass_context
def serve_command(ctx: click.Context, bind: str | None, port: int | None) -> None:
    """Serve the dashboard JSON API."""
    settings: Settings = ctx.obj["settings"]
    if bind is not None:
        settings.server.bind = bind
    if port is not None:
        settings.server.port = port

    exit_code = asyncio.run(run_server(settings))
    ctx.exit(exit_code)
