"""CLI module for mediadash."""

import logging
from pathlib import Path

import click

from mediadash.config.loader import get_settings
from mediadash.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="mediadash")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--config-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding configuration sets (default ~/.mediadash/configs).",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_dir: Path | None,
) -> None:
    """mediadash - Dashboard integrations for self-hosted media services."""
    ctx.ensure_object(dict)

    # Preserve settings injected by tests
    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = get_settings(
                configs_dir=config_dir,
                log_level=log_level,
                log_format="json" if log_json else None,
                log_file=log_file,
            )
        except ValueError as e:
            raise click.UsageError(str(e)) from e

    configure_logging(ctx.obj["settings"].logging)
    logger.debug("Using configs from %s", ctx.obj["settings"].configs_dir)


def _register_commands():
    from mediadash.cli.serve import serve_command
    from mediadash.cli.tdarr import tdarr_group

    main.add_command(serve_command)
    main.add_command(tdarr_group)


_register_commands()
