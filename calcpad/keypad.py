"""Keypad definitions and key-token parsing.

The grid mirrors the classic four-function layout:

    C    +/-  %    ÷
    7    8    9    ×
    4    5    6    -
    1    2    3    +
    0    .    =

Key strings typed at the terminal ("100+50%=", "12 x 3 enter") are split into
Keys here and dispatched to a CalculatorEngine with press().
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from calcpad.engine import CalculatorEngine
from calcpad.models import Display, Operator


class KeyKind(str, Enum):
    """Key groups, used for colouring."""

    NUMBER = "number"
    SPECIAL = "special"
    OPERATOR = "operator"
    EQUALS = "equals"


class UnknownKeyError(ValueError):
    """A token that matches no key on the keypad."""

    def __init__(self, token: str, position: Optional[int] = None) -> None:
        self.token = token
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Unknown key {token!r}{where}")


@dataclass(frozen=True)
class Key:
    """One keypad button."""

    label: str
    kind: KeyKind
    aliases: tuple[str, ...] = ()
    operator: Optional[Operator] = None

    @property
    def tokens(self) -> tuple[str, ...]:
        return (self.label,) + self.aliases


def _digit(label: str) -> Key:
    return Key(label, KeyKind.NUMBER)


def _operator(op: Operator) -> Key:
    aliases = tuple(a for a in op.aliases if a != op.symbol)
    return Key(op.symbol, KeyKind.OPERATOR, aliases=aliases, operator=op)


CLEAR = Key("C", KeyKind.SPECIAL, aliases=("ac", "clear", "esc"))
SIGN = Key("+/-", KeyKind.SPECIAL, aliases=("±", "neg"))
PERCENT = Key("%", KeyKind.SPECIAL)
EQUALS = Key("=", KeyKind.EQUALS, aliases=("enter",))

KEYPAD: list[list[Key]] = [
    [CLEAR, SIGN, PERCENT, _operator(Operator.DIVIDE)],
    [_digit("7"), _digit("8"), _digit("9"), _operator(Operator.MULTIPLY)],
    [_digit("4"), _digit("5"), _digit("6"), _operator(Operator.SUBTRACT)],
    [_digit("1"), _digit("2"), _digit("3"), _operator(Operator.ADD)],
    [_digit("0"), _digit("."), EQUALS],
]

KEYS: list[Key] = [key for row in KEYPAD for key in row]

_BY_TOKEN: dict[str, Key] = {
    token.lower(): key for key in KEYS for token in key.tokens
}

# Longest first so "+/-" wins over "+" and "clear" over "c".
_TOKEN_RE = re.compile(
    "|".join(re.escape(t) for t in sorted(_BY_TOKEN, key=len, reverse=True)),
    re.IGNORECASE,
)


def parse_key(token: str) -> Key:
    """Look up a single key by label or alias (case-insensitive).

    Raises:
        UnknownKeyError: if nothing on the keypad answers to ``token``.
    """
    key = _BY_TOKEN.get(token.strip().lower())
    if key is None:
        raise UnknownKeyError(token)
    return key


def tokenize(text: str) -> list[Key]:
    """Split a key string into Keys. Whitespace only separates.

    Raises:
        UnknownKeyError: naming the first unrecognised character and its
            position; no keys are returned in that case.
    """
    keys: list[Key] = []
    pos = 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise UnknownKeyError(text[pos], pos)
        keys.append(_BY_TOKEN[match.group(0).lower()])
        pos = match.end()
    return keys


def press(engine: CalculatorEngine, key: Key) -> Display:
    """Dispatch a key to the matching engine operation."""
    if key.kind is KeyKind.NUMBER:
        return engine.input_digit_or_point(key.label)
    if key.kind is KeyKind.OPERATOR:
        return engine.input_operator(key.operator)
    if key.kind is KeyKind.EQUALS:
        return engine.input_equals()
    if key is CLEAR:
        return engine.clear()
    if key is SIGN:
        return engine.toggle_sign()
    return engine.apply_percent()
