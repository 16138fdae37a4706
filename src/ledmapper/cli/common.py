"""Helpers shared by CLI commands."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable, Coroutine
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click

from ledmapper.devices import create_device
from ledmapper.exceptions import LedMapperError, format_error_for_display
from ledmapper.models import AppConfig
from ledmapper.services import MappingSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


def load_config(ctx: click.Context) -> AppConfig:
    """Load the settings file selected on the command line."""
    config_path: Path | None = ctx.obj.get("config_path")
    return AppConfig.load_or_default(config_path)


def open_session(ctx: click.Context) -> MappingSession:
    """Create an (unstarted) session for the device selected on the command line."""
    config = load_config(ctx)
    device = create_device(
        config,
        host=ctx.obj.get("host"),
        pixel_count=ctx.obj.get("leds"),
        mapping=ctx.obj.get("mapping"),
    )
    return MappingSession(device, config)


async def with_session(
    ctx: click.Context, action: Callable[[MappingSession], Awaitable[T]]
) -> T:
    """Start a session, run an action on it and always close the device."""
    session = open_session(ctx)
    try:
        await session.start()
        return await action(session)
    finally:
        await session.close()


def echo_error(error: Exception) -> None:
    """Print an error the way every command does."""
    user_message, recovery_hint = format_error_for_display(error)
    click.echo(f"ERROR: {user_message}", err=True)
    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)


def handle_cli_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Show LedMapperError without a traceback and exit with status 1."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except LedMapperError as e:
            logger.error(f"Command failed: {e.technical_message}")
            echo_error(e)
            sys.exit(1)
    return wrapper


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from synchronous click code."""
    return asyncio.run(coro)
