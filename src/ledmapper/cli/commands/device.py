"""Commands that talk to a mapping device."""

import warnings

import click

from ledmapper.devices import DeviceType, describe_device
from ledmapper.exceptions import CommitPending
from ledmapper.mapping import group_rows
from ledmapper.services import MappingSession

from ..common import handle_cli_errors, run, with_session


def format_rows(session: MappingSession) -> list[str]:
    """Render the preview rows as text, one slot per logical position."""
    total = session.model.total
    width = max(len(str(max(total - 1, 0))), 1) + 1
    lines = []
    for row in group_rows(session.layout()):
        cells = [" " * width] * total
        for node in row:
            cells[node.pos_index] = str(node.led_index).rjust(width)
        lines.append("".join(cells).rstrip())
    return lines


@click.command()
@click.pass_context
@handle_cli_errors
def info(ctx):
    """Show the device, its pixel count and its stored LED map."""
    async def _info(session: MappingSession) -> None:
        device = session.device
        click.echo(describe_device(device))
        click.echo(f"Pixels: {device.total_pixels}")

        if device.type == DeviceType.WLED:
            for i, output in enumerate(device.config.outputs):
                click.echo(f"  Output {i}: start={output.start} len={output.length}")

        if device.ledmap is None:
            click.echo("Stored map: none (identity order)")
        else:
            click.echo(f"Stored map: {device.ledmap.map}")

    run(with_session(ctx, _info))


@click.command()
@click.pass_context
@handle_cli_errors
def show(ctx):
    """Print the current order as preview rows (physical index per slot)."""
    async def _show(session: MappingSession) -> None:
        for line in format_rows(session):
            click.echo(line)

    run(with_session(ctx, _show))


@click.command()
@click.argument("led_index", type=int)
@click.argument("position", type=int)
@click.option("--dry-run", is_flag=True, help="Show the new map without writing it")
@click.pass_context
@handle_cli_errors
def move(ctx, led_index: int, position: int, dry_run: bool):
    """
    Move physical pixel LED_INDEX to logical POSITION and save the map.

    \b
    Examples:
      ledmapper --host 192.168.1.50 move 4 0
      ledmapper --leds 5 move 4 0 --dry-run
    """
    async def _move(session: MappingSession) -> None:
        final = session.move(led_index, position)
        click.echo(f"Pixel {led_index} -> position {final}")
        click.echo(f"Map: {session.to_ledmap().map}")

        if dry_run:
            click.echo("Dry run, nothing written")
            return

        with warnings.catch_warnings():
            warnings.simplefilter("ignore", CommitPending)
            result = await session.save()

        click.echo("Map written" if result.written else "Map unchanged, nothing written")
        if result.commit_pending and session.device.type == DeviceType.WLED:
            click.echo(session.device.commit_hint)

    run(with_session(ctx, _move))


@click.command()
@click.argument("led_index", type=int)
@click.pass_context
@handle_cli_errors
def highlight(ctx, led_index: int):
    """Light physical pixel LED_INDEX on the controller."""
    async def _highlight(session: MappingSession) -> None:
        sent = await session.highlight(led_index)
        if sent:
            click.echo(f"Highlighted pixel {led_index}")
        else:
            click.echo("Nothing to highlight on this device")

    run(with_session(ctx, _highlight))


@click.command()
@click.pass_context
@handle_cli_errors
def export(ctx):
    """Print the current map as ledmap.json content."""
    async def _export(session: MappingSession) -> None:
        click.echo(session.to_ledmap().to_json())

    run(with_session(ctx, _export))
