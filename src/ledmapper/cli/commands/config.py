"""Settings file commands."""

from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from ledmapper.exceptions import wrap_pydantic_error
from ledmapper.models import AppConfig
from ledmapper.models.config import DEFAULT_CONFIG_PATH

from ..common import handle_cli_errors, load_config


@click.group(name="config")
def config_group():
    """Show or change ledmapper settings."""
    pass


@config_group.command(name="show")
@click.option("--field", "-f", type=str, default=None, help="Show a single field")
@click.pass_context
@handle_cli_errors
def show_config(ctx, field: Optional[str]):
    """Display the current settings."""
    config = load_config(ctx)
    values = config.model_dump()

    if field:
        if field not in values:
            raise click.BadParameter(f"unknown field '{field}'", param_hint="--field")
        click.echo(f"{field}: {values[field]}")
        return

    path = ctx.obj.get("config_path") or DEFAULT_CONFIG_PATH
    click.echo(f"Settings ({path}):\n")
    for name, value in values.items():
        click.echo(f"  {name}: {value}")


@config_group.command(name="set")
@click.option("--host", type=str, default=None, help="Controller address (IP or hostname)")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds")
@click.option("--segment-id", type=int, default=None, help="Segment used for highlighting")
@click.option("--spacing", type=int, default=None, help="Preview slot spacing")
@click.pass_context
@handle_cli_errors
def set_config(
    ctx,
    host: Optional[str],
    timeout: Optional[float],
    segment_id: Optional[int],
    spacing: Optional[int],
):
    """Update settings and save them."""
    config = load_config(ctx)
    updates = {
        "host": host,
        "request_timeout": timeout,
        "highlight_segment_id": segment_id,
        "layout_spacing": spacing,
    }
    updates = {name: value for name, value in updates.items() if value is not None}
    if not updates:
        click.echo("Nothing to change. See 'ledmapper config set --help'.")
        return

    path: Optional[Path] = ctx.obj.get("config_path")
    try:
        updated = AppConfig.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        raise wrap_pydantic_error(e, str(path or DEFAULT_CONFIG_PATH)) from e

    updated.save(path)
    for name, value in updates.items():
        click.echo(f"{name} = {getattr(updated, name)}")
