"""Debug switch for the conjugate gradient engine.

With debug mode on, every gradient an objective returns is checked for the
right shape and for NaN/inf entries, so a broken objective fails at the call
that produced the bad value instead of several line searches later.

The initial state is read from the ``CGDESCENT_DEBUG`` environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

ENV_VAR = "CGDESCENT_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env() -> bool:
    return os.getenv(ENV_VAR, "").strip().lower() in _TRUTHY


_debug_enabled = _flag_from_env()


def is_debug_enabled() -> bool:
    """Return True if every objective gradient is validated."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> bool:
    """
    Turn per-gradient validation on or off.

    Parameters
    ----------
    enabled:
        New state of the switch.

    Returns
    -------
    bool
        The previous state, so callers can restore it.
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    return previous


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily set debug mode, restoring the previous state on exit.

    Example
    -------
    >>> from cgdescent import FletcherReevesCG
    >>> with debug_context():
    ...     solver = FletcherReevesCG()
    """
    previous = set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)


__all__ = ["ENV_VAR", "debug_context", "is_debug_enabled", "set_debug_enabled"]
