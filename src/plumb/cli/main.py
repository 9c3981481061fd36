"""plumb CLI - Main entry point."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from plumb import __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="plumb")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """plumb - plugin resolution and caching for build configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


from .plugin_commands import plugins  # noqa: E402

cli.add_command(plugins)


def main():
    cli()


if __name__ == "__main__":
    main()
