"""
Configuration du logging via loguru.

Deux sorties :
- stderr : lisible, colorée, au niveau choisi dans les Settings
- fichier : JSON avec rotation, niveau DEBUG (redirections, hits de cache)

Les loggers de la bibliothèque standard utilisés par httpx et uvicorn sont
redirigés vers loguru pour que tout arrive dans les mêmes sorties.
"""

import logging
import sys

from loguru import logger

from .config import Settings

# Loggers stdlib redirigés vers loguru
_STDLIB_LOGGERS = ("httpx", "httpcore", "uvicorn", "uvicorn.error", "uvicorn.access")

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


class _InterceptHandler(logging.Handler):
    """Transmet un enregistrement logging standard à loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(settings: Settings) -> None:
    """Installe les sorties loguru décrites par les Settings.

    Peut être appelée plusieurs fois (CLI puis serveur) : les handlers
    précédents sont retirés à chaque appel.
    """
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level, format=_CONSOLE_FORMAT, colorize=True)

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        settings.log_file,
        level="DEBUG",
        serialize=True,
        rotation=settings.log_rotation_size,
        retention=settings.log_retention_count,
        compression="zip",
        enqueue=True,
    )

    handler = _InterceptHandler()
    for name in _STDLIB_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False

    logger.debug(f"Logging configuré: {settings.log_file} (rotation {settings.log_rotation_size})")
