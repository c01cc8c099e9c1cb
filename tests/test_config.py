"""Tests for configuration system."""

import pytest

from marytts_client.client.factory import create_client
from marytts_client.core.config import AppConfig, RequestDefaults, ServerConfig, deep_merge
from marytts_client.core.exceptions import ConfigError


class TestDeepMerge:
    def test_simple_merge(self):
        base = {"a": 1, "b": 2}
        override = {"b": 3, "c": 4}
        result = deep_merge(base, override)
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_nested_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        override = {"a": {"y": 99, "z": 100}}
        result = deep_merge(base, override)
        assert result == {"a": {"x": 1, "y": 99, "z": 100}, "b": 3}

    def test_override_replaces_non_dict(self):
        base = {"a": 1}
        override = {"a": {"nested": True}}
        result = deep_merge(base, override)
        assert result == {"a": {"nested": True}}

    def test_empty_override(self):
        base = {"a": 1}
        result = deep_merge(base, {})
        assert result == {"a": 1}


class TestServerConfig:
    def test_defaults(self):
        cfg = ServerConfig()
        assert cfg.host == "localhost"
        assert cfg.port == 59125
        assert cfg.timeout == 30


class TestAppConfig:
    def test_default_values(self):
        cfg = AppConfig()
        assert cfg.defaults == RequestDefaults()
        assert cfg.defaults.locale == "en_US"
        assert cfg.max_workers == 4

    def test_from_dict(self):
        data = {
            "server": {"host": "tts.local", "port": 8080, "unknown": True},
            "defaults": {"locale": "de", "voice": "bits1-hsmm"},
            "max_workers": 8,
            "logging": {"level": "DEBUG"},
        }
        cfg = AppConfig._from_dict(data)
        assert cfg.server.host == "tts.local"
        assert cfg.server.port == 8080
        assert cfg.server.timeout == 30
        assert cfg.defaults.voice == "bits1-hsmm"
        assert cfg.max_workers == 8
        assert cfg.logging["level"] == "DEBUG"

    def test_invalid_max_workers(self):
        with pytest.raises(ConfigError):
            AppConfig._from_dict({"max_workers": 0})
        with pytest.raises(ConfigError):
            AppConfig._from_dict({"max_workers": "many"})

    def test_load_user_override(self, tmp_path):
        user = tmp_path / "mary.yaml"
        user.write_text("server:\n  host: tts.local\n", encoding="utf-8")
        cfg = AppConfig.load(config_path=str(user))
        assert cfg.server.host == "tts.local"
        assert cfg.server.port == 59125

    def test_load_missing_user_file(self, tmp_path):
        with pytest.raises(ConfigError):
            AppConfig.load(config_path=str(tmp_path / "nope.yaml"))

    def test_load_invalid_yaml(self, tmp_path):
        user = tmp_path / "bad.yaml"
        user.write_text("server: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            AppConfig.load(config_path=str(user))

    def test_load_non_mapping(self, tmp_path):
        user = tmp_path / "list.yaml"
        user.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            AppConfig.load(config_path=str(user))


class TestFactory:
    def test_create_client(self, mock_config):
        client = create_client(mock_config)
        try:
            assert client.base_url == "http://mary.test:59125/"
            assert client.timeout == 5
        finally:
            client.cleanup()
