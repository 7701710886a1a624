"""CLI commands for appgather.

This module implements all user-facing CLI commands:
- gather: walk one or more source trees and report the classified files.
- config get/set: inspect and persist settings in config.toml.
- version: print the package version.

Design:
- Typer app and Console are instantiated at module level for reuse across
  commands.
- Annotated is used for CLI argument/option definitions.
- Exit codes are defined as an Enum for clarity and maintainability.
"""

import asyncio
import json
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.traceback import install as install_traceback

from appgather.cli.renderer import render_result
from appgather.core.walker import Source, Walker, gather_sources
from appgather.utils import config as cfg
from appgather.utils.debug import debug, enable_debug
from appgather.utils.json import GatherEncoder

# Install rich traceback handler
install_traceback(show_locals=False)

app = typer.Typer(
    name="appgather",
    help="Classify app source trees into packaging buckets.",
    add_completion=False,
)
config_app = typer.Typer(help="Read and write persistent settings.")
app.add_typer(config_app, name="config")

console = Console()


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


ROOTS = Annotated[
    List[Path],
    typer.Argument(
        help="Source directories to gather, lowest priority first. Later roots "
        "override earlier ones on identical relative paths.",
    ),
]

DEST = Annotated[
    Path,
    typer.Option("--dest", "-d", help="Destination directory for the package"),
]

PREFIX = Annotated[
    Optional[str],
    typer.Option("--prefix", help="Replace the root directory in relative paths"),
]

APP_ICON = Annotated[
    Optional[str],
    typer.Option("--icon", help="App icon filename (default: appicon.png)"),
]

APP_THINNING = Annotated[
    Optional[bool],
    typer.Option(
        "--app-thinning/--no-app-thinning",
        help="Route images to the asset catalog bucket",
        show_default=False,
    ),
]

IGNORE = Annotated[
    Optional[str],
    typer.Option(
        "--ignore", help="Regex of entry names to skip at each root's top level"
    ),
]

IGNORE_DIRS = Annotated[
    Optional[str],
    typer.Option("--ignore-dirs", help="Regex of directory names to prune"),
]

IGNORE_FILES = Annotated[
    Optional[str],
    typer.Option("--ignore-files", help="Regex of file names to skip"),
]

KEEP_HTML_SCRIPTS = Annotated[
    bool,
    typer.Option(
        "--keep-html-scripts",
        help="Leave scripts referenced by HTML in the script bucket",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option("--json", help="Output results in JSON format"),
]

LIST_FILES = Annotated[
    bool,
    typer.Option("--list", "-l", help="List the files of every bucket"),
]

NO_COLOR = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output"),
]

DEBUG = Annotated[
    bool,
    typer.Option("--debug", help="Enable debug logging"),
]


@app.command()
def gather(  # noqa: PLR0913
    roots: ROOTS,
    dest: DEST = Path("build"),
    prefix: PREFIX = None,
    app_icon: APP_ICON = None,
    app_thinning: APP_THINNING = None,
    ignore: IGNORE = None,
    ignore_dirs: IGNORE_DIRS = None,
    ignore_files: IGNORE_FILES = None,
    keep_html_scripts: KEEP_HTML_SCRIPTS = False,
    json_output: JSON_OUTPUT = False,
    list_files: LIST_FILES = False,
    no_color: NO_COLOR = False,
    debug_output: DEBUG = False,
) -> None:
    """Walk source directories and classify their files into buckets."""
    out = Console(no_color=no_color) if no_color else console
    if debug_output:
        enable_debug()

    try:
        options = cfg.resolve_walker_options(
            app_icon=app_icon,
            app_thinning=app_thinning,
            ignore_dirs=ignore_dirs,
            ignore_files=ignore_files,
        )
    except ValidationError as e:
        out.print(f"[red]Error: Invalid walker options: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    for root in roots:
        if not root.exists():
            out.print(
                "[yellow]Source directory does not exist, skipping: "
                f"{escape(str(root))}[/yellow]"
            )

    walker = Walker(options)
    sources = [
        Source(root=root.absolute(), dest=dest.absolute(), prefix=prefix, ignore=ignore)
        for root in roots
    ]
    debug(f"Gathering {len(sources)} source tree(s) into {dest}")
    try:
        result = asyncio.run(
            gather_sources(walker, sources, reclassify=not keep_html_scripts)
        )
    except OSError as e:
        out.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    if json_output:
        json_str = json.dumps(result.model_dump(), cls=GatherEncoder, indent=2)
        sys.stdout.write(json_str + "\n")
    else:
        render_result(result, console=out, show_files=list_files)


def _parse_value(raw: str) -> bool | str:
    """Interpret a CLI string as a TOML boolean or string."""
    lowered = raw.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    return raw


@config_app.command("get")
def config_get(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. walker.app_icon")],
) -> None:
    """Show the value stored for KEY in config.toml."""
    value = cfg.get_setting(key)
    if value is None:
        console.print(f"[yellow]{key} is not set[/yellow]")
        raise typer.Exit(ExitCode.ERROR)
    console.print(f"{key} = {value!r}")


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Dotted key, e.g. walker.app_thinning")],
    value: Annotated[str, typer.Argument(help="Value (true/false or a string)")],
) -> None:
    """Store VALUE under KEY in config.toml."""
    parsed = _parse_value(value)
    cfg.set_setting(key, parsed)
    console.print(f"Saved {key} = {parsed!r} to {cfg.CONFIG_FILE}")


@app.command()
def version() -> None:
    """Show the version of appgather."""
    from appgather.__about__ import __version__

    console.print(f"AppGather version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
