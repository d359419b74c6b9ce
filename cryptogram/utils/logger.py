"""Logging utilities for the cryptogram engine and CLI."""

from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "cryptogram"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Attach one stderr handler to the ``cryptogram`` logger tree.

    Every keystroke is logged at DEBUG, so interactive sessions usually run at
    WARNING. Only the package namespace is touched; the host's root logger is
    left alone.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    package = logging.getLogger(PACKAGE_LOGGER)
    package.handlers.clear()
    package.addHandler(handler)
    package.setLevel(level)
    package.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``cryptogram`` namespace.

    Module names outside the package (``main``, tests) are nested below it so
    the CLI log level applies to them too.
    """

    if not logging.getLogger(PACKAGE_LOGGER).handlers:
        configure_logging()
    if not name or name == PACKAGE_LOGGER:
        return logging.getLogger(PACKAGE_LOGGER)
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
