"""Data models for the calcpad state machine.

Operator enum, EngineState, Display — the typed structures that flow through
engine → keypad → session → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Sentinel shown in place of a number after a failed computation.
ERROR = "Error"

INITIAL_VALUE = "0"


class Operator(str, Enum):
    """Binary operators. The value is canonical; the symbol is presentation."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def aliases(self) -> tuple[str, ...]:
        """Every token that parses to this operator, canonical value first."""
        return (self.value,) + tuple(k for k, v in _ALIASES.items() if v is self)

    @classmethod
    def parse(cls, token: str) -> Operator:
        """Resolve a canonical value or a symbol alias ('*', 'x', '÷', ...).

        Raises:
            ValueError: if the token names no operator.
        """
        try:
            return cls(token.strip().lower())
        except ValueError:
            pass
        op = _ALIASES.get(token.strip().lower())
        if op is None:
            raise ValueError(f"Unknown operator: {token!r}")
        return op


_SYMBOLS: dict[Operator, str] = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}

_ALIASES: dict[str, Operator] = {
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "−": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "×": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    "÷": Operator.DIVIDE,
}


@dataclass
class EngineState:
    """Mutable state of one calculator session.

    ``operator`` and ``previous_value`` are set and cleared together.
    ``awaiting_new_operand`` means the next digit starts a fresh numeral.
    """

    current_value: str = INITIAL_VALUE
    previous_value: Optional[str] = None
    operator: Optional[Operator] = None
    awaiting_new_operand: bool = True

    @property
    def is_error(self) -> bool:
        return self.current_value == ERROR

    @property
    def has_pending(self) -> bool:
        """True when a left operand and operator are waiting for a right operand."""
        return self.previous_value is not None and self.operator is not None

    def reset(self) -> None:
        self.current_value = INITIAL_VALUE
        self.previous_value = None
        self.operator = None
        self.awaiting_new_operand = True


@dataclass(frozen=True)
class Display:
    """Read-only projection of an EngineState for the UI."""

    current_value: str
    previous_value: Optional[str] = None
    operator: Optional[Operator] = None
    awaiting_new_operand: bool = True

    @classmethod
    def of(cls, state: EngineState) -> Display:
        return cls(
            current_value=state.current_value,
            previous_value=state.previous_value,
            operator=state.operator,
            awaiting_new_operand=state.awaiting_new_operand,
        )

    @property
    def operand_line(self) -> Optional[str]:
        """The "previous operand + operator" line, or None when hidden.

        Only shown while a second operand is actively being typed.
        """
        if self.previous_value is None or self.operator is None:
            return None
        if self.awaiting_new_operand:
            return None
        return f"{self.previous_value} {self.operator.symbol}"

    @property
    def is_error(self) -> bool:
        return self.current_value == ERROR

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "current_value": self.current_value,
            "previous_value": self.previous_value,
            "operator": self.operator.value if self.operator else None,
            "awaiting_new_operand": self.awaiting_new_operand,
            "operand_line": self.operand_line,
        }
