"""Shared fixtures for the calcpad tests."""

import pytest
import structlog

from calcpad.engine import CalculatorEngine
from calcpad.keypad import tokenize
from calcpad.session import replay


@pytest.fixture(autouse=True)
def _reset_structlog():
    """The CLI reconfigures structlog onto a captured stream; undo it."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def engine():
    """A fresh calculator in its initial state."""
    return CalculatorEngine()


@pytest.fixture
def run():
    """Press a key string on a fresh engine and return that engine."""

    def _run(keys: str, engine=None):
        engine = engine or CalculatorEngine()
        replay(tokenize(keys), engine)
        return engine

    return _run
