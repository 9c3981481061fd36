"""Plugin management CLI commands."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

DEFAULT_CONFIG = "plumb.yaml"

config_argument = click.argument(
    "config_path",
    default=DEFAULT_CONFIG,
    type=click.Path(dir_okay=False, path_type=Path),
)
cache_dir_option = click.option(
    "--cache-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Override the plugin cache root",
)


def _build_service(config_path: Path, cache_dir: Path | None):
    """Load the plugin configuration and build a service for it."""
    from plumb.cache.directories import CacheDirectoriesProvider
    from plumb.config.loader import ConfigError, load_plugins_config
    from plumb.plugins.fetcher import RemotePluginFetcher
    from plumb.plugins.service import PluginService

    try:
        config = load_plugins_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    cache = CacheDirectoriesProvider(cache_dir or config.cache_dir)
    service = PluginService(
        fetcher=RemotePluginFetcher(cache_directories=cache),
        root_directory=config_path.parent.resolve(),
    )
    return config, service


@click.group()
def plugins():
    """Fetch and inspect configured plugins."""


@plugins.command()
@config_argument
@cache_dir_option
@click.option("--jobs", "-j", default=1, show_default=True, help="Parallel fetches")
def fetch(config_path, cache_dir, jobs):
    """Fetch every remote plugin into the cache."""
    from plumb.plugins.errors import PluginError

    config, service = _build_service(config_path, cache_dir)
    remote = config.git_locations
    if not remote:
        console.print("No remote plugins configured.")
        return

    try:
        paths = service.fetch_remote_plugins(remote, max_workers=jobs)
    except PluginError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    for location, resolved in zip(remote, paths):
        console.print(f"[green]Fetched[/green] {location.url}@{location.reference}")
        console.print(f"  repository: {resolved.repository_path}")
        if resolved.release_path:
            console.print(f"  release:    {resolved.release_path}")


@plugins.command("list")
@config_argument
@cache_dir_option
def list_plugins(config_path, cache_dir):
    """Load all plugins and list what they contribute."""
    from plumb.plugins.errors import PluginError

    config, service = _build_service(config_path, cache_dir)

    try:
        loaded = service.load_plugins(config.plugins)
    except PluginError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    if loaded.is_empty:
        console.print("No plugin artifacts found.")
        return

    if loaded.project_description_helpers:
        table = Table(title="Project Description Helpers")
        table.add_column("Name", style="cyan")
        table.add_column("Origin")
        table.add_column("Path")
        for helper in loaded.project_description_helpers:
            table.add_row(helper.name, helper.origin.value, str(helper.path))
        console.print(table)

    if loaded.resource_synthesizers:
        table = Table(title="Resource Synthesizers")
        table.add_column("Name", style="cyan")
        table.add_column("Path")
        for synthesizer in loaded.resource_synthesizers:
            table.add_row(synthesizer.name, str(synthesizer.path))
        console.print(table)

    if loaded.template_paths:
        table = Table(title="Templates")
        table.add_column("Template", style="cyan")
        table.add_column("Path")
        for template in loaded.template_paths:
            table.add_row(template.name, str(template))
        console.print(table)


@plugins.command()
@config_argument
@cache_dir_option
def paths(config_path, cache_dir):
    """Show cache locations of remote plugins without fetching."""
    from plumb.plugins.fingerprint import location_fingerprint

    config, service = _build_service(config_path, cache_dir)
    remote = config.git_locations
    if not remote:
        console.print("No remote plugins configured.")
        return

    table = Table(title="Remote Plugin Cache")
    table.add_column("Plugin", style="cyan")
    table.add_column("Fingerprint")
    table.add_column("Repository")
    table.add_column("Cached")
    table.add_column("Release")

    for location, resolved in zip(remote, service.remote_plugin_paths(remote)):
        table.add_row(
            f"{location.url}@{location.reference}",
            location_fingerprint(location),
            str(resolved.repository_path),
            "yes" if resolved.repository_path.exists() else "no",
            str(resolved.release_path) if resolved.release_path else "-",
        )
    console.print(table)


@plugins.command("fingerprint")
@click.argument("url")
@click.argument("reference")
def fingerprint_command(url, reference):
    """Print the cache key for URL at REFERENCE."""
    from plumb.plugins.fingerprint import fingerprint

    click.echo(fingerprint(url, reference))
