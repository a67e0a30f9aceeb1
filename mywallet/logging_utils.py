"""Mini README: Logging setup and redaction helpers for MyWallet.

Structure:
    * configure_root_logger - one-shot handler setup, level from settings.
    * get_logger - module logger that guarantees the baseline setup.
    * redact - shorten a secret so it can be correlated but not replayed.

What gets logged: account, session and entry state changes at INFO, lookups
at DEBUG, rejected passwords and unknown or expired tokens at WARNING, store
failures at ERROR. Passwords and hashes are never passed to a logger; session
tokens only go through ``redact``.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False
_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Attach one stream handler to the root logger and set its level.

    Later calls only change the level, so the CLI can apply the configured
    level after modules have already asked for their loggers.
    """

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)


def redact(secret: str, visible: int = 8) -> str:
    """Keep the first ``visible`` characters of ``secret`` and mask the rest."""

    if len(secret) <= visible:
        return "***"
    return f"{secret[:visible]}***"
