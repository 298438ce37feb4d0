"""
Logging configuration that keeps registry build chatter out of normal output
"""

import logging
import logging.config
from typing import Any, Dict


class RegistryNoiseFilter(logging.Filter):
    """Filter to suppress per-method registration logs."""

    def __init__(self, suppress: bool = True):
        super().__init__()
        self.suppress = suppress

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out the one-line-per-method records of a registry build."""
        if not self.suppress:
            return True
        if record.name == "scriptlayer.registry" and record.levelno <= logging.DEBUG:
            if record.getMessage().startswith("Registered RPC"):
                return False  # Suppress registration lines
        return True  # Allow all other logs


def get_logging_config(level: str = "INFO", registry_debug: bool = False) -> Dict[str, Any]:
    """Get logging configuration with registry noise suppression."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "registry_noise_filter": {
                "()": RegistryNoiseFilter,
                "suppress": not registry_debug
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
                "filters": ["registry_noise_filter"]
            }
        },
        "loggers": {
            "scriptlayer": {
                "handlers": ["default"],
                "level": level.upper(),
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO", registry_debug: bool = False) -> None:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config(level, registry_debug))
