"""
Config - Black Box Interface

Purpose: Registry and platform configuration
Interface: EnvConfigProvider.get_registry_config(), parse_platform_version()
Hidden: Environment parsing, YAML file loading, defaulting rules
"""

from .provider import (
    MIN_PLATFORM_VERSION,
    CollisionPolicy,
    ConfigProvider,
    EnvConfigProvider,
    RegistryConfig,
    parse_collision_policy,
    parse_platform_version,
)

__all__ = [
    "MIN_PLATFORM_VERSION",
    "CollisionPolicy",
    "ConfigProvider",
    "EnvConfigProvider",
    "RegistryConfig",
    "parse_collision_policy",
    "parse_platform_version",
]
