"""CLI for the calcpad calculator.

Usage:
    python -m calcpad keys                     # Show the keypad and key aliases
    python -m calcpad press 100 + 50 % =       # Replay keys, show the display
    python -m calcpad press "12x3=" --trace    # Per-key table
    python -m calcpad press "1/0=" --json      # Final display as JSON
    python -m calcpad repl                     # Interactive session
"""

from __future__ import annotations

import json
import logging
import sys

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from calcpad.engine import CalculatorEngine
from calcpad.environment import EngineSettings, SettingsError, load_settings
from calcpad.keypad import UnknownKeyError, tokenize
from calcpad.session import render_display, render_keypad, render_trace, replay

app = typer.Typer(
    name="calcpad",
    help="Four-function calculator driven by key presses",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = {"q", "quit", "exit"}


def _configure_logging(level: int) -> None:
    """Filter structlog at ``level`` and send it to stderr."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every state transition"),
) -> None:
    """Four-function calculator driven by key presses."""
    try:
        settings = load_settings()
    except SettingsError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    _configure_logging(logging.DEBUG if verbose else settings.log_level_number)
    ctx.obj = settings


@app.command("keys")
def cmd_keys() -> None:
    """Show the keypad and the aliases each key accepts."""
    render_keypad(console)


@app.command("press")
def cmd_press(
    ctx: typer.Context,
    keys: list[str] = typer.Argument(help="Keys to press, e.g. '100+50%=' or 100 + 50 % ="),
    trace: bool = typer.Option(False, "--trace", "-t", help="Show the display after every key"),
    as_json: bool = typer.Option(False, "--json", help="Print the final display as JSON on stdout"),
) -> None:
    """Press keys on a fresh calculator and show the result."""
    try:
        parsed = tokenize(" ".join(keys))
    except UnknownKeyError as e:
        console.print(f"[red]{escape(str(e))}[/red]. Run 'calcpad keys' to list valid keys.")
        raise typer.Exit(1)

    settings: EngineSettings = ctx.obj
    engine = CalculatorEngine(settings)
    steps = replay(parsed, engine)

    if as_json:
        typer.echo(json.dumps(engine.display.to_dict(), ensure_ascii=False))
        return
    if trace:
        render_trace(steps, console)
    render_display(engine.display, console)


@app.command("repl")
def cmd_repl(ctx: typer.Context) -> None:
    """Type keys line by line; 'q' or end of input quits."""
    engine = CalculatorEngine(ctx.obj)
    render_display(engine.display, console)

    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except EOFError:
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        try:
            keys = tokenize(line)
        except UnknownKeyError as e:
            console.print(f"[yellow]{escape(str(e))}[/yellow]")
            continue
        replay(keys, engine)
        render_display(engine.display, console)


if __name__ == "__main__":
    app()
