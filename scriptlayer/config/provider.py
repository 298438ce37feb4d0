"""Configuration provider following Black Box Design principles."""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml

logger = logging.getLogger("scriptlayer.config")

MIN_PLATFORM_VERSION = 0


class CollisionPolicy(str, Enum):
    """What the registry does when two facades expose the same method name."""

    OVERRIDE = "override"
    REJECT = "reject"


@dataclass(frozen=True)
class RegistryConfig:
    """Registry configuration."""
    platform_version: int = MIN_PLATFORM_VERSION
    collision_policy: CollisionPolicy = CollisionPolicy.OVERRIDE


def parse_platform_version(raw: Any) -> int:
    """
    Parse a platform (SDK) version.

    Unparsable or negative values are logged and mapped to the minimum
    version so that fewer optional facades are included.
    """
    if raw is None:
        return MIN_PLATFORM_VERSION
    if isinstance(raw, bool):
        logger.error(f"Invalid platform version {raw!r}, using {MIN_PLATFORM_VERSION}")
        return MIN_PLATFORM_VERSION
    try:
        version = int(str(raw).strip())
    except ValueError as e:
        logger.error(f"Invalid platform version {raw!r}: {e}")
        return MIN_PLATFORM_VERSION
    if version < MIN_PLATFORM_VERSION:
        logger.error(f"Negative platform version {version}, using {MIN_PLATFORM_VERSION}")
        return MIN_PLATFORM_VERSION
    return version


def parse_collision_policy(raw: Any) -> CollisionPolicy:
    """Parse a collision policy name, falling back to OVERRIDE."""
    if raw is None:
        return CollisionPolicy.OVERRIDE
    try:
        return CollisionPolicy(str(raw).strip().lower())
    except ValueError:
        logger.error(f"Unknown collision policy {raw!r}, using {CollisionPolicy.OVERRIDE.value}")
        return CollisionPolicy.OVERRIDE


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_registry_config(self) -> RegistryConfig:
        """Get method registry configuration."""
        ...

    def get_content_db_path(self) -> Optional[str]:
        """Get the SQLite database backing the content resolver."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider with optional YAML file."""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def _load_file(self) -> Dict[str, Any]:
        """Load the YAML configuration file named by SCRIPTLAYER_CONFIG_FILE."""
        path = self._environ.get("SCRIPTLAYER_CONFIG_FILE")
        if not path:
            return {}

        config_path = Path(path)
        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            return {}

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config file {config_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Config file {config_path} must contain a mapping")
            return {}
        return data

    def get_registry_config(self) -> RegistryConfig:
        """Get registry configuration; environment values win over the file."""
        file_config = self._load_file()

        raw_version = self._environ.get(
            "SCRIPTLAYER_PLATFORM_VERSION", file_config.get("platformVersion")
        )
        raw_policy = self._environ.get(
            "SCRIPTLAYER_COLLISION_POLICY", file_config.get("collisionPolicy")
        )

        return RegistryConfig(
            platform_version=parse_platform_version(raw_version),
            collision_policy=parse_collision_policy(raw_policy),
        )

    def get_content_db_path(self) -> Optional[str]:
        """Get content database path from environment or file."""
        return (
            self._environ.get("SCRIPTLAYER_CONTENT_DB")
            or self._load_file().get("contentDb")
        )

    def get_log_level(self) -> str:
        """Get logging level from environment."""
        return self._environ.get("LOG_LEVEL", "INFO")
