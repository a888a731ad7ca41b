import functools
import logging
import time
from typing import Optional

# Root of every logger created by the equip event packages
PACKAGE_LOGGER_NAME = "equip_events"

# Niveau de log
LOG_LEVELS = {"NONE": logging.CRITICAL + 10, "BASIC": logging.INFO, "DETAILED": logging.DEBUG}

_PACKAGE_LOGGER: Optional[logging.Logger] = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or one of its children when ``name`` is given."""

    if not name:
        return logging.getLogger(PACKAGE_LOGGER_NAME)
    if name.startswith(PACKAGE_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")


def configure_logging(level: int | str = "BASIC") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    ``level`` accepts either a ``logging`` level number or one of the keys of
    :data:`LOG_LEVELS`.  Calling this more than once only updates the level.
    """

    global _PACKAGE_LOGGER
    if isinstance(level, str):
        resolved = LOG_LEVELS.get(level.upper())
        if resolved is None:
            resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'.")
        level = resolved

    logger = get_logger()
    logger.setLevel(level)

    if _PACKAGE_LOGGER is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
        logger.addHandler(handler)
        _PACKAGE_LOGGER = logger

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def log_calls(func):
    """Décorateur pour logger les appels de fonctions et mesurer leur temps d'exécution."""
    call_logger = get_logger(f"calls.{func.__module__}")

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not call_logger.isEnabledFor(logging.DEBUG):
            return func(*args, **kwargs)

        call_logger.debug("Appel %s args=%r kwargs=%r", func.__qualname__, args, kwargs)
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time
        call_logger.debug("Retour %s: %r", func.__qualname__, result)
        call_logger.debug("Temps d'exécution %s: %.6f s", func.__qualname__, elapsed)
        return result

    return wrapper
