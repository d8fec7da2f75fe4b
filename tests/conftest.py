"""Root pytest configuration for mkappa tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import numpy as np
import pytest

from mkappa.config.logging import PACKAGE_LOGGER
from mkappa.reporting import NullReporter


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove MKAPPA_ variables inherited from the shell.

    Parameters
    ----------
    monkeypatch : pytest.MonkeyPatch
        Pytest monkeypatch fixture.
    """
    for key in list(os.environ):
        if key.startswith("MKAPPA_"):
            monkeypatch.delenv(key)


@pytest.fixture
def restore_package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger's level and handlers after a test.

    Yields
    ------
    logging.Logger
        The ``mkappa`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)


@pytest.fixture
def null_reporter() -> NullReporter:
    """Reporter that discards diagnostics.

    Returns
    -------
    NullReporter
        Silent reporter.
    """
    return NullReporter()


@pytest.fixture
def balanced_ratings() -> list[list[float]]:
    """Two raters, four items: two agreements, two disagreements.

    Returns
    -------
    list[list[float]]
        Ratings where each rater splits 50/50 between 0 and 1.
    """
    return [[1, 1], [1, 0], [0, 0], [0, 1]]


@pytest.fixture
def ordinal_ratings() -> np.ndarray:
    """Three raters rating six items on a 1-5 scale, with gaps.

    Returns
    -------
    np.ndarray
        Items × raters array with NaN for missing ratings.
    """
    return np.array(
        [
            [1, 2, 1],
            [2, 2, 3],
            [3, 3, 3],
            [4, 5, np.nan],
            [5, 5, 4],
            [2, np.nan, 2],
        ],
        dtype=float,
    )


@pytest.fixture
def two_rater_ratings() -> tuple[list[int], list[int]]:
    """Two raters, ten items, three nominal categories.

    Returns
    -------
    tuple[list[int], list[int]]
        Ratings of the first and second rater.
    """
    rater1 = [0, 1, 2, 0, 1, 2, 0, 1, 2, 0]
    rater2 = [0, 1, 2, 0, 1, 1, 0, 2, 2, 1]
    return rater1, rater2
