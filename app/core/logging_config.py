"""Configuração de logging"""
import logging
import logging.handlers
import sys
from pathlib import Path
from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Bibliotecas que só interessam em WARNING ou acima
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "celery.app.trace")


def setup_logging():
    """
    Configura o logging da API e dos workers Celery.

    Sempre loga em stdout; fora de DEBUG e com LOG_FILE definido também grava
    em arquivo rotativo (LOG_MAX_BYTES, LOG_BACKUP_COUNT).
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if settings.LOG_FILE and not settings.DEBUG:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        ))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configurado ({settings.LOG_LEVEL.upper()}, ambiente {settings.ENVIRONMENT}"
        f"{', arquivo ' + settings.LOG_FILE if len(handlers) > 1 else ''})"
    )

    return logger
