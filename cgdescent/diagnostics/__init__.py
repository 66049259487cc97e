"""Diagnostics and debugging utilities for cgdescent."""

from .core import (
    assert_descent_direction,
    assert_finite,
    assert_gradient_shape,
    check_gradient,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "assert_descent_direction",
    "assert_finite",
    "assert_gradient_shape",
    "check_gradient",
    "debug_context",
    "is_debug_enabled",
    "set_debug_enabled",
]
