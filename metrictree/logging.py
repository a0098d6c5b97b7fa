"""Project-wide logging utilities that honour `RuntimeConfig`."""

from __future__ import annotations

import logging
from typing import Optional

from . import config as mt_config

_PACKAGE = "metrictree"


def _qualified(name: Optional[str]) -> str:
    if not name or name == _PACKAGE:
        return _PACKAGE
    if name.startswith(_PACKAGE + "."):
        return name
    return f"{_PACKAGE}.{name}"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a package logger at the configured level.

    ``name`` is either a path below the package (``"algo.insert"``) or a
    module's ``__name__`` (``"metrictree.algo.insert"``); both give the same
    logger, so records always propagate to the single ``metrictree`` handler.
    """

    runtime = mt_config.runtime_config()
    logger = logging.getLogger(_qualified(name))
    logger.setLevel(runtime.log_level)
    return logger
