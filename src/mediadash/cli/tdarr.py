"""CLI commands for querying a Tdarr app.

Examples:

    mediadash tdarr statistics --app 2f1c6e5a --config default
    mediadash tdarr workers --app 2f1c6e5a --config default --format json
    mediadash tdarr queue --app 2f1c6e5a --config default --page 1 --health-checks
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from mediadash.cli.exit_codes import ExitCode
from mediadash.cli.output import echo_json, error_exit, format_size
from mediadash.config.loader import ConfigError
from mediadash.integrations.errors import IntegrationInputError
from mediadash.integrations.tdarr import (
    AppQuery,
    QueueQuery,
    TdarrError,
    get_queue,
    get_statistics,
    get_workers,
)

logger = logging.getLogger(__name__)

_app_options = [
    click.option(
        "--app",
        "app_id",
        required=True,
        help="App id in the configuration set.",
    ),
    click.option(
        "--config",
        "config_name",
        default="default",
        show_default=True,
        help="Configuration set name.",
    ),
    click.option(
        "--format",
        "output_format",
        type=click.Choice(["table", "json"], case_sensitive=False),
        default="table",
        show_default=True,
        help="Output format.",
    ),
]


def app_options(func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(_app_options):
        func = option(func)
    return func


def handle_integration_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Map integration exceptions to CLI exit codes."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        json_output = kwargs.get("output_format") == "json"
        try:
            return func(*args, **kwargs)
        except (IntegrationInputError, ConfigError) as e:
            error_exit(str(e), ExitCode.INPUT_ERROR, json_output)
        except TdarrError as e:
            logger.debug("Tdarr command failed", exc_info=True)
            error_exit(str(e), ExitCode.UPSTREAM_ERROR, json_output)

    return wrapper


@click.group("tdarr")
def tdarr_group() -> None:
    """Query a Tdarr app registered in a configuration set."""


@tdarr_group.command("statistics")
@app_options
@click.pass_context
@handle_integration_errors
def statistics_command(
    ctx: click.Context, app_id: str, config_name: str, output_format: str
) -> None:
    """Show library statistics."""
    settings = ctx.obj["settings"]
    stats = get_statistics(
        AppQuery(app_id=app_id, config_name=config_name),
        configs_dir=settings.configs_dir,
    )

    if output_format == "json":
        echo_json(stats.to_dict())
        return

    click.echo(f"Files:          {stats.total_file_count}")
    click.echo(f"Transcodes:     {stats.total_transcode_count}")
    click.echo(f"Health checks:  {stats.total_health_check_count}")
    click.echo(
        f"Staged:         {stats.staged_transcode_count} transcode, "
        f"{stats.staged_health_check_count} health check"
    )
    click.echo(
        f"Failed:         {stats.failed_transcode_count} transcode, "
        f"{stats.failed_health_check_count} health check"
    )
    if not stats.pies:
        return

    click.echo("")
    click.echo(f"{'Library':<30} {'Files':>8} {'Transcodes':>11} {'Saved':>10}")
    for pie in stats.pies:
        click.echo(
            f"{pie.library_name[:30]:<30} {pie.total_files:>8} "
            f"{pie.total_transcodes:>11} {format_size(pie.saved_space):>10}"
        )


@tdarr_group.command("workers")
@app_options
@click.pass_context
@handle_integration_errors
def workers_command(
    ctx: click.Context, app_id: str, config_name: str, output_format: str
) -> None:
    """Show workers currently running on Tdarr nodes."""
    settings = ctx.obj["settings"]
    workers = get_workers(
        AppQuery(app_id=app_id, config_name=config_name),
        configs_dir=settings.configs_dir,
    )

    if output_format == "json":
        echo_json([w.to_dict() for w in workers])
        return

    if not workers:
        click.echo("No active workers.")
        return

    for worker in workers:
        step = f" [{worker.step}]" if worker.step else ""
        click.echo(
            f"{worker.job_type:<12} {worker.percentage:>6.1f}% "
            f"{worker.fps:>6.1f} fps  ETA {worker.eta:<10} "
            f"{worker.status}{step}  {worker.file}"
        )


@tdarr_group.command("queue")
@app_options
@click.option("--page", type=click.IntRange(min=0), default=0, show_default=True)
@click.option(
    "--page-size", type=click.IntRange(min=1), default=20, show_default=True
)
@click.option(
    "--health-checks/--no-health-checks",
    default=False,
    show_default=True,
    help="Append the health-check queue after the transcode queue.",
)
@click.pass_context
@handle_integration_errors
def queue_command(
    ctx: click.Context,
    app_id: str,
    config_name: str,
    output_format: str,
    page: int,
    page_size: int,
    health_checks: bool,
) -> None:
    """Show one page of the Tdarr queue."""
    settings = ctx.obj["settings"]
    queue_page = get_queue(
        QueueQuery(
            app_id=app_id,
            config_name=config_name,
            show_health_checks_in_queue=health_checks,
            page_size=page_size,
            page=page,
        ),
        configs_dir=settings.configs_dir,
    )

    if output_format == "json":
        echo_json(queue_page.to_dict())
        return

    if not queue_page.entries:
        click.echo(f"No queued files on page {page} ({queue_page.total_count} total).")
        return

    click.echo(
        f"Showing {queue_page.start_index + 1}-{queue_page.end_index + 1} "
        f"of {queue_page.total_count}"
    )
    for entry in queue_page.entries:
        click.echo(
            f"{entry.type.value:<13} {entry.codec:<6} {entry.resolution:<8} "
            f"{format_size(entry.file_size):>10}  {entry.file}"
        )
