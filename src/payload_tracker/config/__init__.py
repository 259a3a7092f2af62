import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; development is the default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "payload_tracker.config.production"

    if env in {"test", "testing"}:
        return "payload_tracker.config.testing"

    return "payload_tracker.config.development"


def logging_config(level: str) -> dict:
    """dictConfig payload shared by every settings module."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "{levelname} {asctime} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "verbose",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
        "loggers": {
            "payload_tracker": {
                "level": level,
            },
        },
    }
