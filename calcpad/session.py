"""Key replay and terminal rendering for calcpad.

replay() presses a sequence of keys and records the display after each one;
render_display() and render_trace() draw those displays with Rich.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from calcpad.engine import CalculatorEngine
from calcpad.keypad import KEYPAD, Key, KeyKind, press
from calcpad.models import Display

_KIND_STYLES = {
    KeyKind.NUMBER: "bright_white",
    KeyKind.SPECIAL: "grey50",
    KeyKind.OPERATOR: "orange1",
    KeyKind.EQUALS: "orange1",
}


@dataclass(frozen=True)
class Step:
    """The display right after one key press."""

    key: Key
    display: Display


def replay(keys: Iterable[Key], engine: Optional[CalculatorEngine] = None) -> list[Step]:
    """Press each key in order and record the resulting displays.

    Args:
        keys: Keys to press, e.g. from keypad.tokenize().
        engine: Engine to drive. A fresh one is used when omitted.
    """
    engine = engine or CalculatorEngine()
    return [Step(key=key, display=press(engine, key)) for key in keys]


def render_display(display: Display, console: Console) -> None:
    """Draw the calculator screen: operand line above the current value."""
    body = Text(justify="right")
    body.append(display.operand_line or "", style="dim")
    body.append("\n")
    body.append(display.current_value, style="bold red" if display.is_error else "bold")
    console.print(Panel(body, width=30))


def render_trace(steps: list[Step], console: Console) -> None:
    """Render a Rich table with one row per key press."""
    if not steps:
        console.print("[yellow]No keys pressed.[/yellow]")
        return

    table = Table(title="Key trace", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", justify="center")
    table.add_column("Operand", style="dim", justify="right", min_width=12)
    table.add_column("Display", justify="right", min_width=15)
    table.add_column("New operand", justify="center")

    for i, step in enumerate(steps, 1):
        d = step.display
        value = f"[red]{d.current_value}[/red]" if d.is_error else d.current_value
        table.add_row(
            str(i),
            Text(step.key.label, style=_KIND_STYLES[step.key.kind]),
            d.operand_line or "--",
            value,
            "yes" if d.awaiting_new_operand else "no",
        )

    console.print(table)


def render_keypad(console: Console) -> None:
    """Render the keypad grid with each key's kind and aliases."""
    table = Table(title="Keypad", show_header=False, show_lines=True)
    for _ in range(max(len(row) for row in KEYPAD)):
        table.add_column(justify="center", min_width=8)

    for row in KEYPAD:
        cells = []
        for key in row:
            cell = Text(key.label, style=f"bold {_KIND_STYLES[key.kind]}")
            cell.append("\n" + key.kind.value, style="italic")
            if key.aliases:
                cell.append("\n" + " ".join(key.aliases), style="dim")
            cells.append(cell)
        table.add_row(*cells)

    console.print(table)
