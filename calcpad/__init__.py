"""calcpad — input state machine for a four-function calculator.

Digit entry, chained operators, percent and sign keys, equals and error
recovery, driven one key event at a time. The terminal front end only forwards
keys and draws the two display strings.

Usage:
    python -m calcpad keys                  # Show the keypad
    python -m calcpad press 100 + 50 % =    # Replay keys
    python -m calcpad repl                  # Interactive session

Logging:
    The engine logs every transition through structlog at debug level. The
    CLI filters it (CALCPAD_LOG_LEVEL, --verbose); calcpad never configures
    structlog on import, so a program using CalculatorEngine directly gets
    structlog's defaults, which print every event to stdout. To quiet it:

        import logging, structlog
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING)
        )
"""
