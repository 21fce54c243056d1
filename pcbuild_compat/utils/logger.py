"""
Logger factory for the compatibility engine.

All loggers live under the ``pcbuild_compat`` namespace so applications can
tune them with a single ``logging.getLogger("pcbuild_compat")`` call.
"""
from __future__ import annotations

import logging
import os

ROOT_LOGGER_NAME = "pcbuild_compat"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    level_name = os.getenv("PCBUILD_LOG_LEVEL", "WARNING").upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a namespaced logger, e.g. get_logger("processing.compatibility").
    """
    _configure_root()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
