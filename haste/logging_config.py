import logging
import logging.config

from haste.config import Settings, get_settings


def setup_logging(settings: Settings | None = None):
    """
    Configure global log format
    Standardize log output format for the service, uvicorn and the store clients.
    """
    settings = settings or get_settings()
    log_level = "DEBUG" if settings.DEBUG else "INFO"

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "root": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": True,
            },
            "uvicorn": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            # Handled by root's console handler
            "haste": {
                "level": log_level,
                "propagate": True,
            },
            # Keep SQL echo and botocore chatter out of INFO logs
            "sqlalchemy.engine": {
                "level": "WARNING",
            },
            "botocore": {
                "level": "WARNING",
            },
        },
    }

    logging.config.dictConfig(logging_config)
