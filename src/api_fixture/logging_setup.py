"""Central logging configuration for step runs.

Applies a root stderr handler so all module loggers emit through one console
format without per-module setup. Debug mode lowers the level to DEBUG.
"""

import logging
from logging.config import dictConfig

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        }
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "urllib3": {"level": "WARNING"},
    },
}


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the session.

    If the root logger already has handlers (a runner capturing logs, or an
    earlier call) only the level is changed, to avoid duplicate output.
    """
    level = logging.DEBUG if debug else logging.INFO
    root = logging.getLogger()
    if not root.handlers:
        dictConfig(_DICT_CONFIG)
    root.setLevel(level)
