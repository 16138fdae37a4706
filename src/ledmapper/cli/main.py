"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from ledmapper import __version__

from .commands import config_group, export, highlight, info, move, show

logger = logging.getLogger(__name__)


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for a custom log file (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file in use
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file:
        level = getattr(logging, log_level.upper())

    if debug and not log_file:
        log_path = Path.cwd() / "ledmapper-debug.log"
    elif log_file:
        log_path = log_file
    else:
        log_dir = Path.home() / ".ledmapper" / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "ledmapper.log"

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Rotating file handler (keeps last 5 files, max 10MB each)
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.version_option(version=__version__, prog_name="ledmapper")
@click.option(
    '--host',
    '-H',
    type=str,
    default=None,
    help='Controller address (overrides the configured host)'
)
@click.option(
    '--leds',
    '-n',
    type=str,
    default=None,
    help='Use a standalone simulator with this many pixels'
)
@click.option(
    '--mapping',
    '-m',
    type=str,
    default=None,
    help='Use a standalone simulator seeded with ledmap.json content, e.g. \'{"map":[2,0,1]}\''
)
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Settings file (default: ~/.ledmapper/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./ledmapper-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for a custom log file (default: INFO)'
)
@click.pass_context
def cli(
    ctx,
    host: Optional[str],
    leds: Optional[str],
    mapping: Optional[str],
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    LED Mapper - reorder the pixels of a WLED controller into display order.

    The device is picked from the options: --mapping or --leds select an
    offline simulator, otherwise --host (or the configured host) selects a
    controller.

    \b
    Examples:
      # Show controller details and the stored map
      ledmapper --host 192.168.1.50 info

      # Move physical pixel 4 to the front and upload the map
      ledmapper --host 192.168.1.50 move 4 0

      # Try the same offline
      ledmapper --leds 5 move 4 0 --dry-run

      # Remember the controller address
      ledmapper config set --host 192.168.1.50

    After uploading, the controller only uses the new map once its LED
    settings page has been saved.
    """
    ctx.ensure_object(dict)
    ctx.obj.update(host=host, leds=leds, mapping=mapping, config_path=config_path)
    ctx.obj["log_path"] = setup_logging(verbose, debug, log_file, log_level)


cli.add_command(info)
cli.add_command(show)
cli.add_command(move)
cli.add_command(highlight)
cli.add_command(export)
cli.add_command(config_group)

if __name__ == "__main__":
    cli()
