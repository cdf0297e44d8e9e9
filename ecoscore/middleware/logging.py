import logging
from logging.config import dictConfig
from pydantic import BaseModel
from typing import Any, Dict

from ecoscore.core.config import settings

LOG_FORMAT = "%(levelprefix)s | %(asctime)s | %(name)s | %(lineno)d | %(message)s"


def _logger(level: str) -> Dict[str, Any]:
    return {"handlers": ["default"], "level": level, "propagate": False}


class LogConfig(BaseModel):
    """
    Configuration dictConfig de l'application

    Les loggers du paquet ecoscore suivent LOG_LEVEL ; httpx et uvicorn
    restent silencieux sauf en cas d'avertissement. En mode DEBUG les
    requêtes SQL sont journalisées.
    """

    version: int = 1
    disable_existing_loggers: bool = False
    formatters: Dict[str, Any] = {}
    handlers: Dict[str, Any] = {}
    loggers: Dict[str, Any] = {}

    @classmethod
    def from_settings(cls) -> "LogConfig":
        level = settings.LOG_LEVEL.upper()
        loggers = {
            "ecoscore": _logger(level),
            "httpx": _logger("WARNING"),
            "uvicorn": _logger("WARNING"),
            "uvicorn.error": {"level": "INFO", "propagate": False},
            "uvicorn.access": _logger("WARNING"),
        }
        if settings.DEBUG:
            loggers["sqlalchemy.engine"] = _logger("INFO")

        return cls(
            formatters={
                "default": {
                    "()": "uvicorn.logging.DefaultFormatter",
                    "fmt": LOG_FORMAT,
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            handlers={
                "default": {
                    "formatter": "default",
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "level": level,
                },
            },
            loggers=loggers,
        )


def configure_logging():
    dictConfig(LogConfig.from_settings().dict())
    logging.getLogger("ecoscore").debug("Logging configured")
