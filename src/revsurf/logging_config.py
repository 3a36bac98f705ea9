"""
Logging Configuration
Installs handlers on the ``revsurf`` namespace logger. Library modules only
create child loggers with ``logging.getLogger(__name__)``; applications and
the scripts under ``tools/`` call ``setup_logging`` once at start-up.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "revsurf"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: Union[int, str]) -> int:
    """Return the numeric level for ``level``, given as a number or a name."""
    if isinstance(level, str):
        name = level.strip().upper()
        if name not in LEVEL_NAMES:
            raise ValueError(f"unknown log level: {level!r}")
        return getattr(logging, name)
    return int(level)


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'revsurf' namespace.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Logging level as a number (logging.DEBUG) or a name ("debug")
        log_file: Optional path to save logs to a file.
    """
    level = resolve_level(level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized at %s.", logging.getLevelName(level))
    return logger
