import logging
import logging.config
from main.config import settings


def setup_logging():
    settings.LOG_DIR.mkdir(exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
        },
        "handlers": {
            "console": {
                "level": settings.LOG_LEVEL,
                "class": "logging.StreamHandler",
                "formatter": "standard",
            },
            "file": {
                "level": settings.LOG_LEVEL,
                "class": "logging.FileHandler",
                "filename": settings.LOG_DIR / "markt_search.log",
                "formatter": "standard",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console", "file"],
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "werkzeug": {
                "handlers": ["console", "file"],
                "level": "INFO",
                "propagate": False,
            },
            # Search API traffic is noisy at DEBUG; keep urllib3 quieter.
            "urllib3": {
                "handlers": ["console", "file"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(config)
