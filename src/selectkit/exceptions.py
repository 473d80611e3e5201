"""Custom exception hierarchy for selectkit.

All exceptions that leave the engine must inherit from
:class:`SelectKitError`.  Raw OS-level exceptions (``termios.error``,
``OSError``, ``UnicodeDecodeError``) must NEVER propagate beyond the
infrastructure layer — they are caught there and re-raised as a typed
subclass defined here, chained with ``raise ... from``.

Hierarchy
---------
SelectKitError
├── InvalidPromptError
├── ConfigurationError
├── DependencyError
├── CancelledError
│   └── TerminatedError
├── EmptySelectionError
└── EngineError
    ├── NotATTYError
    ├── TerminalStateError
    └── DecodeError
"""

from __future__ import annotations


class SelectKitError(Exception):
    """Base exception for all selectkit errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Caller input ----------------------------------------------------------

class InvalidPromptError(SelectKitError):
    """Raised when a prompt specification cannot be displayed."""


class ConfigurationError(SelectKitError):
    """Raised when an environment setting holds an invalid value."""


class DependencyError(SelectKitError):
    """Raised when an optional UI dependency is not installed."""


# --- User outcomes ---------------------------------------------------------

class CancelledError(SelectKitError):
    """Raised when the user cancels a prompt (Escape / Ctrl+C).

    This is an expected outcome, not a bug: callers should not log it
    as an error.
    """


class TerminatedError(CancelledError):
    """Raised when SIGTERM or SIGHUP arrives while a terminal is in raw mode.

    ``signum`` holds the signal number; the CLI exits with ``128 + signum``.
    """

    def __init__(self, message: str, *, signum: int, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.signum: int = signum


class EmptySelectionError(SelectKitError):
    """Raised when a multi-select commit is attempted with no choices.

    Recoverable — both the interactive widget and the line-mode
    fallback catch it and re-prompt in place.
    """


# --- Engine failures -------------------------------------------------------

class EngineError(SelectKitError):
    """Base class for terminal and input failures.

    The underlying cause is always available as ``__cause__``.
    """


class NotATTYError(EngineError):
    """Raised when a descriptor is not an interactive terminal.

    The prompt service treats this as a signal to use line mode, not as
    a failure.
    """


class TerminalStateError(EngineError):
    """Raised when querying or changing terminal attributes fails."""


class DecodeError(EngineError):
    """Raised on malformed input bytes, a failed read, or end of input."""
