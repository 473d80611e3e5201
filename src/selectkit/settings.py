"""Runtime settings for the selectkit engine, read from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from selectkit.exceptions import ConfigurationError

ESCAPE_TIMEOUT_VAR = "SELECTKIT_ESCAPE_TIMEOUT_MS"
PAGE_SIZE_VAR = "SELECTKIT_PAGE_SIZE"
NO_COLOR_VAR = "NO_COLOR"

DEFAULT_ESCAPE_TIMEOUT_MS = 50


@dataclass(frozen=True, slots=True)
class EngineSettings:
    escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT_MS / 1000
    """Seconds to wait after ``ESC`` before reporting a bare Escape."""

    page_size: int | None = None
    """Visible option rows; ``None`` shows every option."""

    no_color: bool = False


def _read_int(environ: Mapping[str, str], name: str, *, minimum: int) -> int | None:
    raw = environ.get(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}.",
            hint=f"Unset {name} or set it to a whole number >= {minimum}.",
        ) from exc
    if value < minimum:
        raise ConfigurationError(
            f"{name} must be >= {minimum}, got {value}.",
            hint=f"Unset {name} or set it to a whole number >= {minimum}.",
        )
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> EngineSettings:
    """Build :class:`EngineSettings` from ``environ`` (default ``os.environ``).

    Raises
    ------
    ConfigurationError
        If a numeric variable is not a valid number.
    """
    env = os.environ if environ is None else environ

    timeout_ms = _read_int(env, ESCAPE_TIMEOUT_VAR, minimum=0)
    if timeout_ms is None:
        timeout_ms = DEFAULT_ESCAPE_TIMEOUT_MS

    return EngineSettings(
        escape_timeout=timeout_ms / 1000,
        page_size=_read_int(env, PAGE_SIZE_VAR, minimum=1),
        no_color=bool(env.get(NO_COLOR_VAR, "")),
    )
