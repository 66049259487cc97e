"""Tests for the cgdescent logger namespace."""

import logging
from io import StringIO

import numpy as np

from cgdescent.conjugate import FletcherReevesCG
from cgdescent.core import FunctionObjective, Problem
from cgdescent.line_search import HagerZhangLineSearch
from cgdescent.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


def own_handlers(logger):
    # pytest attaches its own capture handlers to non-propagating loggers
    return [handler for handler in logger.handlers if type(handler) is logging.StreamHandler]


def test_names_are_placed_under_package():
    assert get_logger("experiments").name == "cgdescent.experiments"
    assert get_logger("cgdescent.line_search.secant").name == "cgdescent.line_search.secant"
    assert get_logger().name == "cgdescent"
    assert get_logger("") is get_logger()


def test_loggers_are_cached_per_name():
    first = get_logger("experiments")
    assert get_logger("experiments") is first
    assert get_logger("cgdescent.experiments") is first
    assert get_logger("other") is not first


def test_package_loggers_are_isolated_from_root():
    logger = get_logger("experiments")
    assert isinstance(logger, logging.Logger)
    assert logger.propagate is False
    assert len(own_handlers(logger)) == 1


def test_set_log_level_accepts_names():
    logger = get_logger("experiments")

    try:
        set_log_level("debug")
        assert logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in own_handlers(logger))

        set_log_level(logging.ERROR)
        assert logger.level == logging.ERROR
        # created after the change
        assert get_logger("late_comer").level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)
        get_logger("late_comer").setLevel(logging.WARNING)


def test_configure_logging_redirects_existing_loggers():
    logger = get_logger("experiments")
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)

    try:
        logger.debug("alpha=%g", 0.25)
        assert "[DEBUG] cgdescent.experiments: alpha=0.25" in stream.getvalue()
        handlers = own_handlers(logger)
        assert len(handlers) == 1
        assert handlers[0].stream is stream
    finally:
        configure_logging(level=logging.WARNING)


def test_custom_format_string():
    logger = get_logger("experiments")
    stream = StringIO()
    configure_logging(level=logging.INFO, format_string="%(levelname)s|%(message)s", stream=stream)

    try:
        logger.info("restart")
        assert stream.getvalue().strip() == "INFO|restart"
    finally:
        configure_logging(level=logging.WARNING)


def test_engine_reports_convergence_at_info():
    """The engine logs its termination reason at INFO."""
    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream)

    try:
        objective = FunctionObjective(lambda x: float(x @ x), lambda x: 2.0 * x)
        FletcherReevesCG().minimize(Problem(objective, [1.0, 2.0]))
        output = stream.getvalue()
        assert "[INFO] cgdescent.conjugate.engine: Converged" in output
        assert "Iteration" not in output
    finally:
        configure_logging(level=logging.WARNING)


def test_line_search_warns_about_uphill_direction():
    """A non-descent direction is recovered with a WARNING."""
    stream = StringIO()
    configure_logging(level=logging.WARNING, stream=stream)

    try:
        objective = FunctionObjective(lambda x: float(x @ x), lambda x: 2.0 * x)
        step = HagerZhangLineSearch().minimize(objective, np.array([1.0]), np.array([1.0]))
        assert step == 0.0
        assert "not a descent direction" in stream.getvalue()
    finally:
        configure_logging(level=logging.WARNING)
