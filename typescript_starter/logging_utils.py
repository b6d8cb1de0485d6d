"""
Logging setup for the typescript-starter CLI.

Only the `typescript_starter` logger tree is configured; the HTTP stack
underneath requests stays at WARNING unless the user asks for -vvv.
"""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "typescript_starter"

_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def configure_logging(verbosity: int) -> int:
    """
    Attach a stderr handler to the package logger and return the level used.

    -v shows each pipeline step, -vv every spawned command and HTTP
    request, -vvv also urllib3's connection logging.
    """
    level = _LEVELS[max(0, min(verbosity, len(_LEVELS) - 1))]

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(getattr(h, "_typescript_starter", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        handler._typescript_starter = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.propagate = False

    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbosity >= 3 else logging.WARNING)
    return level
