"""Entry point for fitlog."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from fitlog import __version__
from fitlog.commands import exercises as exercise_commands
from fitlog.commands import sets as set_commands
from fitlog.commands.export import export_command, import_command
from fitlog.commands.workouts import (
    add_command,
    delete_command,
    edit_command,
    list_command,
    seed_command,
    show_command,
)
from fitlog.core.config import ConfigError, default_config_path, load_config
from fitlog.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Personal workout log",
    invoke_without_command=True,
)


def configure_logging(config: Dict[str, Any], verbose: bool, quiet: bool) -> None:
    """Route the fitlog logger through Rich on stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.getLevelName(str(config.get("logging", {}).get("level", "WARNING")).upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger("fitlog")
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_path=False,
            show_time=verbose,
            markup=False,
        )
    )
    logger.setLevel(level)
    logger.propagate = False


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Directory holding workouts.data"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    configure_logging(cfg, verbose=verbose, quiet=quiet)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    state = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        data_dir=data_dir,
    )
    ctx.obj = state

    def _close_store() -> None:
        if state.app is not None:
            state.app.shutdown()

    ctx.call_on_close(_close_store)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


# Top-level commands
app.command("list")(list_command)
app.command("show")(show_command)
app.command("add")(add_command)
app.command("edit")(edit_command)
app.command("delete")(delete_command)
app.command("seed")(seed_command)
app.command("export")(export_command)
app.command("import")(import_command)
app.add_typer(exercise_commands.app, name="exercise")
app.add_typer(set_commands.app, name="set")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
