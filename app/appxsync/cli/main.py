"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from appxsync import __version__
from appxsync.cli.commands import manifest, settings, sources, sync
from appxsync.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="appxsync",
    help="Keep Windows Store projects in sync with the app descriptor.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"appxsync version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich on stderr.

    Verbose mode shows debug output from every module; otherwise only
    warnings and errors are shown.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """appxsync - Windows Store project synchronization.

    Applies the app descriptor (config.xml or app.toml) to the appx
    manifest and keeps the project file's www list in sync with disk.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(sync.app, name="sync")
app.add_typer(manifest.app, name="manifest")
app.add_typer(sources.app, name="sources")
app.add_typer(settings.app, name="settings")


if __name__ == "__main__":
    app()
