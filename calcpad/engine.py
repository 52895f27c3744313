"""Calculator input state machine.

One CalculatorEngine owns one EngineState and exposes one method per user
event. Every method runs to completion, never raises for a reachable state,
and returns the resulting Display:

    Initial → EnteringFirstOperand → OperatorChosen → EnteringSecondOperand
        → Result (equals) or OperatorChosen (chained operator)

Failed computations land in the "Error" sentinel, which only a digit or
clear leaves.
"""

from __future__ import annotations

from typing import Optional

import structlog

from calcpad.environment import EngineSettings
from calcpad.formatting import ComputationError, evaluate, negate, percent_of
from calcpad.models import ERROR, INITIAL_VALUE, Display, EngineState, Operator

logger = structlog.get_logger()

DIGIT_TOKENS = frozenset("0123456789.")


class CalculatorEngine:
    """Four-function calculator driven by discrete key events."""

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self.settings = settings or EngineSettings()
        self.state = EngineState()

    @property
    def display(self) -> Display:
        return Display.of(self.state)

    # --- Entry ---

    def input_digit_or_point(self, token: str) -> Display:
        """Type a digit or the decimal point.

        Raises:
            ValueError: if ``token`` is not '0'-'9' or '.'; keys are validated
                before they reach the engine.
        """
        if len(token) != 1 or token not in DIGIT_TOKENS:
            raise ValueError(f"Not a digit or point: {token!r}")
        s = self.state
        fresh = "0." if token == "." else token

        if s.is_error or s.awaiting_new_operand or s.current_value == INITIAL_VALUE:
            s.current_value = fresh
            s.awaiting_new_operand = False
            logger.debug("Numeral started", key=token, value=fresh)
            return self.display

        if len(s.current_value) + 1 > self.settings.max_input_length:
            logger.debug("Digit rejected", reason="length", value=s.current_value)
            return self.display
        if token == "." and "." in s.current_value:
            logger.debug("Digit rejected", reason="point", value=s.current_value)
            return self.display
        s.current_value += token
        logger.debug("Digit appended", key=token, value=s.current_value)
        return self.display

    # --- Operators ---

    def input_operator(self, op: Operator) -> Display:
        """Choose a binary operator, computing any pending operation first."""
        s = self.state
        if s.is_error:
            return self.display

        # Pressed twice in a row: last operator wins.
        if s.awaiting_new_operand and s.previous_value is not None:
            s.operator = op
            logger.debug("Operator replaced", operator=op.value)
            return self.display

        if s.has_pending:
            result = self._compute()
            if result == ERROR:
                self._enter_error()
                return self.display
            s.current_value = result
            s.previous_value = result
            logger.debug("Operator chained", operator=op.value, result=result)
        else:
            s.previous_value = s.current_value
            logger.debug("Operator chosen", operator=op.value, left=s.previous_value)

        s.operator = op
        s.awaiting_new_operand = True
        return self.display

    def input_equals(self) -> Display:
        """Finish the pending operation. No-op without a typed second operand."""
        s = self.state
        if not s.has_pending or s.is_error or s.awaiting_new_operand:
            return self.display

        result = self._compute()
        s.current_value = result
        s.previous_value = None
        s.operator = None
        s.awaiting_new_operand = True
        logger.debug("Equals", result=result)
        return self.display

    # --- Special keys ---

    def clear(self) -> Display:
        self.state.reset()
        logger.debug("Cleared")
        return self.display

    def toggle_sign(self) -> Display:
        """Negate the current value; entry mode is left as it was."""
        s = self.state
        if s.is_error or s.current_value == INITIAL_VALUE:
            return self.display
        try:
            s.current_value = negate(s.current_value)
        except ComputationError as e:
            logger.info("Sign toggle rejected", value=s.current_value, error=str(e))
            return self.display
        logger.debug("Sign toggled", value=s.current_value)
        return self.display

    def apply_percent(self) -> Display:
        """Percent of the pending left operand, or of one when none is pending."""
        s = self.state
        if s.is_error or s.current_value == INITIAL_VALUE:
            return self.display
        previous = s.previous_value if s.has_pending else None
        try:
            s.current_value = percent_of(
                s.current_value,
                previous,
                fraction_digits=self.settings.fraction_digits,
                max_length=self.settings.max_input_length,
            )
        except ComputationError as e:
            logger.info("Percent rejected", value=s.current_value, error=str(e))
        else:
            logger.debug("Percent applied", value=s.current_value, left=previous)
        s.awaiting_new_operand = False
        return self.display

    # --- Internals ---

    def _compute(self) -> str:
        """Evaluate previous ⟨operator⟩ current, or return the error sentinel."""
        s = self.state
        try:
            return evaluate(
                s.previous_value,
                s.operator,
                s.current_value,
                fraction_digits=self.settings.fraction_digits,
                max_length=self.settings.max_input_length,
            )
        except ComputationError as e:
            logger.info(
                "Computation error",
                left=s.previous_value,
                operator=s.operator.value,
                right=s.current_value,
                error=str(e),
            )
            return ERROR

    def _enter_error(self) -> None:
        s = self.state
        s.current_value = ERROR
        s.previous_value = None
        s.operator = None
        s.awaiting_new_operand = True
