"""cgdescent - nonlinear conjugate gradient minimization with Hager–Zhang line search."""

__version__ = "0.1.0"

# Configuration
from .config import CGConfig, HagerZhangConfig, SecantConfig

# Conjugate gradient methods
from .conjugate import (
    BetaStrategy,
    ConjugateGradientDescent,
    FletcherReeves,
    FletcherReevesCG,
    HagerZhang,
    HagerZhangCG,
    PolakRibiere,
    PolakRibiereCG,
    create_line_search,
    create_solver,
    minimize,
)

# Core abstractions
from .core import FunctionObjective, Objective, OptimizationResult, Problem

# Diagnostics
from .diagnostics import (
    check_gradient,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

# Hypotheses and objectives
from .hypotheses import (
    DataPoint,
    FunctionValueObjective,
    LinearHypothesis,
    ResidualSumOfSquares,
    RosenbrockHypothesis,
    UnivariateExponentialHypothesis,
)

# Line searches
from .line_search import Bracket, HagerZhangLineSearch, LineFunction, LineSearch, SecantMethod

# Logging
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    # Configuration
    "CGConfig",
    "HagerZhangConfig",
    "SecantConfig",
    # Conjugate gradient methods
    "BetaStrategy",
    "ConjugateGradientDescent",
    "FletcherReeves",
    "FletcherReevesCG",
    "HagerZhang",
    "HagerZhangCG",
    "PolakRibiere",
    "PolakRibiereCG",
    "create_line_search",
    "create_solver",
    "minimize",
    # Core abstractions
    "FunctionObjective",
    "Objective",
    "OptimizationResult",
    "Problem",
    # Diagnostics
    "check_gradient",
    "debug_context",
    "is_debug_enabled",
    "set_debug_enabled",
    # Hypotheses and objectives
    "DataPoint",
    "FunctionValueObjective",
    "LinearHypothesis",
    "ResidualSumOfSquares",
    "RosenbrockHypothesis",
    "UnivariateExponentialHypothesis",
    # Line searches
    "Bracket",
    "HagerZhangLineSearch",
    "LineFunction",
    "LineSearch",
    "SecantMethod",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
]
