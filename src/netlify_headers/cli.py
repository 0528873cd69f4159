"""netlify-headers CLI - Tyro implementation."""

import json
import logging
import sys
from builtins import print as builtin_print
from pathlib import Path
from typing import Annotated

import attrs
import tyro
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from netlify_headers.build import build_headers, build_headers_program
from netlify_headers.config import CONFIG_FILENAME, BuildSettings
from netlify_headers.errors import NetlifyHeadersError
from netlify_headers.links import PublicFolder
from netlify_headers.pipeline import Context, PipelineExecutor
from netlify_headers.serializer import transform_to_string

logger = logging.getLogger(__name__)


# Subcommand definitions using attrs
@attrs.define
class Build:
    """Build the _headers file and write it into the public directory."""

    dry_run: Annotated[bool, tyro.conf.arg(aliases=["-n"])] = False
    """Print the file instead of writing it."""

    public_dir: Path | None = None
    """Override the public directory from the config file."""

    path_prefix: str | None = None
    """Override the deploy path prefix from the config file."""


@attrs.define
class Show:
    """Show the final headers per path without writing anything."""

    json: bool = False
    """Output the header table as JSON."""


@attrs.define
class Stages:
    """List the pipeline stages in execution order."""


# Type alias for all subcommands
Command = (
    Annotated[Build, tyro.conf.subcommand(name="build")]
    | Annotated[Show, tyro.conf.subcommand(name="show")]
    | Annotated[Stages, tyro.conf.subcommand(name="stages")]
)


def setup_logging(debug: bool = False) -> None:
    """Configure logging with 100-character text width."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)-20s - %(levelname)-8s - %(message).100s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_settings(config: Path | None, **overrides: object) -> BuildSettings:
    """Load build settings from the config file (default: ./netlify_headers.yaml)."""
    config_path = config or Path.cwd() / CONFIG_FILENAME
    return BuildSettings.from_yaml(config_path, **overrides)


def handle_build(settings: BuildSettings, dry_run: bool = False) -> None:
    """Handle the build subcommand."""
    ctx = Context.from_settings(settings)

    if dry_run:
        builtin_print(transform_to_string(build_headers(ctx)), end="")
        return

    target = build_headers_program(ctx)
    Console().print(f"[green]Written to:[/green] {target}")


def handle_show(settings: BuildSettings, json_output: bool = False) -> None:
    """Handle the show subcommand."""
    table_data = build_headers(Context.from_settings(settings))

    if json_output:
        builtin_print(json.dumps(table_data, indent=2))
        return

    console = Console()
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path", style="cyan")
    table.add_column("Headers", style="green")
    for path, header_list in table_data.items():
        table.add_row(escape(path), "\n".join(escape(h) for h in header_list) or "[dim]-[/dim]")

    console.print(Panel(table, title="[bold]Headers[/bold]", border_style="blue"))


def handle_stages(settings: BuildSettings) -> None:
    """Handle the stages subcommand."""
    executor = PipelineExecutor()
    ctx = Context(pages=(), manifest={}, public_folder=PublicFolder(settings.public_dir), options=settings.plugin)

    console = Console()
    console.print("\n[bold]Execution Order:[/bold]")
    console.print(f"  {' → '.join(executor.get_execution_order())}\n")

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Enabled")
    table.add_column("Description", style="dim")
    for i, (spec, enabled) in enumerate(executor.describe(ctx), start=1):
        table.add_row(
            str(i),
            spec.name,
            "[green]yes[/green]" if enabled else "[yellow]no[/yellow]",
            spec.description,
        )
    console.print(table)


def main(
    cmd: Annotated[Command, tyro.conf.arg(name="")],
    *,
    config: Annotated[Path | None, tyro.conf.arg(help="Path to netlify_headers.yaml")] = None,
    debug: Annotated[bool, tyro.conf.arg(help="Enable debug logging")] = False,
) -> None:
    """netlify-headers - build the Netlify _headers file for a static site.

    Merges user headers, security defaults, caching rules and per-page
    preload hints into one deterministic headers file.
    """
    setup_logging(debug)
    err_console = Console(stderr=True)

    try:
        if isinstance(cmd, Build):
            settings = load_settings(config, public_dir=cmd.public_dir, path_prefix=cmd.path_prefix)
        else:
            settings = load_settings(config)

        # debug: true in the config file raises the level set up from the flag
        if settings.debug and not debug:
            logging.getLogger().setLevel(logging.DEBUG)

        if isinstance(cmd, Build):
            handle_build(settings, dry_run=cmd.dry_run)

        elif isinstance(cmd, Show):
            handle_show(settings, json_output=cmd.json)

        elif isinstance(cmd, Stages):
            handle_stages(settings)

    except (NetlifyHeadersError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        sys.exit(1)


def entry_point() -> None:
    """Entry point for the netlify-headers command."""
    tyro.cli(main)


if __name__ == "__main__":
    entry_point()
