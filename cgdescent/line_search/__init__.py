"""Line searches used by the conjugate gradient engine."""

from .base import LineSearch
from .hager_zhang import Bracket, HagerZhangLineSearch, LineFunction
from .secant import SecantMethod

__all__ = [
    "Bracket",
    "HagerZhangLineSearch",
    "LineFunction",
    "LineSearch",
    "SecantMethod",
]
