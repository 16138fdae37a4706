"""Main entry point for ledmapper."""

from ledmapper.cli import cli

if __name__ == "__main__":
    cli()
