"""CLI output helpers shared by mediadash commands."""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click

from mediadash.cli.exit_codes import ExitCode


def error_exit(
    message: str,
    code: ExitCode,
    json_output: bool = False,
) -> NoReturn:
    """Print an error in the requested format and exit.

    Args:
        message: Error message to display.
        code: Exit code to use.
        json_output: Whether to format output as JSON.
    """
    if json_output:
        payload = {"error": {"code": code.name, "message": message}}
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2))


def format_size(size_bytes: float) -> str:
    """Format a byte count with decimal (SI) units, e.g. "4.2 GB"."""
    if size_bytes >= 1000**4:
        return f"{size_bytes / 1000**4:.1f} TB"
    elif size_bytes >= 1000**3:
        return f"{size_bytes / 1000**3:.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / 1000**2:.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes:.0f} B"
