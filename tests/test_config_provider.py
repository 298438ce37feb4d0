"""
Tests for configuration parsing and the environment/YAML provider.
"""

import logging
import os
import sys

import pytest
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from scriptlayer.config import (
    MIN_PLATFORM_VERSION,
    CollisionPolicy,
    EnvConfigProvider,
    RegistryConfig,
    parse_collision_policy,
    parse_platform_version,
)


class TestParsePlatformVersion:
    """Test platform version parsing."""

    @pytest.mark.parametrize("raw,expected", [("7", 7), (" 4 ", 4), (5, 5), ("0", 0)])
    def test_valid(self, raw, expected):
        assert parse_platform_version(raw) == expected

    @pytest.mark.parametrize("raw", ["cupcake", "", "4.1", "-3", True, [4]])
    def test_invalid_defaults_to_minimum(self, raw, caplog):
        with caplog.at_level(logging.ERROR, logger="scriptlayer.config"):
            assert parse_platform_version(raw) == MIN_PLATFORM_VERSION
        assert caplog.records

    def test_missing_is_minimum_without_error(self, caplog):
        with caplog.at_level(logging.ERROR, logger="scriptlayer.config"):
            assert parse_platform_version(None) == MIN_PLATFORM_VERSION
        assert not caplog.records


class TestParseCollisionPolicy:
    """Test collision policy parsing."""

    def test_known_values(self):
        assert parse_collision_policy("reject") is CollisionPolicy.REJECT
        assert parse_collision_policy("OVERRIDE") is CollisionPolicy.OVERRIDE

    def test_unknown_falls_back(self):
        assert parse_collision_policy("explode") is CollisionPolicy.OVERRIDE

    def test_missing(self):
        assert parse_collision_policy(None) is CollisionPolicy.OVERRIDE


class TestEnvConfigProvider:
    """Test EnvConfigProvider."""

    def setup_method(self):
        """Setup test fixtures."""
        import tempfile

        self.temp_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.temp_dir, "scriptlayer.yaml")

    def teardown_method(self):
        """Cleanup test fixtures."""
        import shutil

        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, config_dict):
        """Helper to write config to file."""
        with open(self.config_path, "w") as f:
            yaml.safe_dump(config_dict, f)

    def test_defaults(self):
        config = EnvConfigProvider(environ={}).get_registry_config()
        assert config == RegistryConfig()
        assert config.platform_version == 0
        assert config.collision_policy is CollisionPolicy.OVERRIDE

    def test_from_environment(self):
        provider = EnvConfigProvider(
            environ={
                "SCRIPTLAYER_PLATFORM_VERSION": "7",
                "SCRIPTLAYER_COLLISION_POLICY": "reject",
            }
        )
        config = provider.get_registry_config()
        assert config.platform_version == 7
        assert config.collision_policy is CollisionPolicy.REJECT

    def test_from_file(self):
        self._write_config({"platformVersion": 5, "collisionPolicy": "reject", "contentDb": "/tmp/c.db"})
        provider = EnvConfigProvider(environ={"SCRIPTLAYER_CONFIG_FILE": self.config_path})

        config = provider.get_registry_config()
        assert config.platform_version == 5
        assert config.collision_policy is CollisionPolicy.REJECT
        assert provider.get_content_db_path() == "/tmp/c.db"

    def test_environment_overrides_file(self):
        self._write_config({"platformVersion": 5})
        provider = EnvConfigProvider(
            environ={
                "SCRIPTLAYER_CONFIG_FILE": self.config_path,
                "SCRIPTLAYER_PLATFORM_VERSION": "8",
            }
        )
        assert provider.get_registry_config().platform_version == 8

    def test_missing_file_uses_defaults(self):
        provider = EnvConfigProvider(environ={"SCRIPTLAYER_CONFIG_FILE": "/nonexistent/path.yaml"})
        assert provider.get_registry_config() == RegistryConfig()

    def test_invalid_yaml_uses_defaults(self):
        with open(self.config_path, "w") as f:
            f.write("platformVersion: [unclosed")
        provider = EnvConfigProvider(environ={"SCRIPTLAYER_CONFIG_FILE": self.config_path})
        assert provider.get_registry_config() == RegistryConfig()

    def test_non_mapping_file_uses_defaults(self):
        self._write_config(["not", "a", "mapping"])
        provider = EnvConfigProvider(environ={"SCRIPTLAYER_CONFIG_FILE": self.config_path})
        assert provider.get_registry_config() == RegistryConfig()

    def test_unparsable_version_from_environment(self):
        provider = EnvConfigProvider(environ={"SCRIPTLAYER_PLATFORM_VERSION": "donut"})
        assert provider.get_registry_config().platform_version == 0

    def test_content_db_from_environment(self):
        provider = EnvConfigProvider(environ={"SCRIPTLAYER_CONTENT_DB": "/data/contacts.db"})
        assert provider.get_content_db_path() == "/data/contacts.db"

    def test_content_db_unset(self):
        assert EnvConfigProvider(environ={}).get_content_db_path() is None

    def test_log_level(self):
        assert EnvConfigProvider(environ={}).get_log_level() == "INFO"
        assert EnvConfigProvider(environ={"LOG_LEVEL": "DEBUG"}).get_log_level() == "DEBUG"

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.delenv("SCRIPTLAYER_CONFIG_FILE", raising=False)
        monkeypatch.setenv("SCRIPTLAYER_PLATFORM_VERSION", "6")
        assert EnvConfigProvider().get_registry_config().platform_version == 6
