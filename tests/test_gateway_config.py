"""Tests for gateway configuration loading."""

import json

import pytest

from erp_gateway.config import (
    FallbackMode,
    FallbackPolicy,
    GatewayConfig,
    load_config,
    load_config_strict,
    save_config,
)
from erp_gateway.constants import DEFAULT_BACKEND_URL, DEFAULT_PORT
from erp_gateway.exceptions import ConfigurationError


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.json"


def write(path, data) -> None:
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")


class TestGatewayConfigModel:
    def test_defaults(self):
        config = GatewayConfig()

        assert config.backend_url == DEFAULT_BACKEND_URL
        assert config.port == DEFAULT_PORT
        assert config.fallback_mode is FallbackMode.ENDPOINT
        assert config.tunnel_bypass is True

    def test_trailing_slashes_stripped(self):
        assert GatewayConfig(backend_url=" https://erp.example.com/// ").backend_url == "https://erp.example.com"

    @pytest.mark.parametrize("field,value", [("backend_url", "erp.example.com"), ("port", 0), ("log_level", "TRACE")])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            GatewayConfig(**{field: value})

    def test_log_level_normalized(self):
        assert GatewayConfig(log_level="debug").log_level == "DEBUG"

    def test_resolve_policy(self):
        config = GatewayConfig(fallback_overrides={"customers.get": "transparent"})

        assert config.resolve_policy("customers.get", FallbackPolicy.MASK_ERRORS) is FallbackPolicy.TRANSPARENT
        assert config.resolve_policy("customers.list", FallbackPolicy.MASK_ERRORS) is FallbackPolicy.MASK_ERRORS


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, config_file):
        assert load_config(config_file, environ={}) == GatewayConfig()

    def test_file_values(self, config_file):
        write(config_file, {"backend_url": "http://erp.local/", "port": 8080, "unknown": 1})

        config = load_config(config_file, environ={})

        assert config.backend_url == "http://erp.local"
        assert config.port == 8080

    def test_environment_overrides_file(self, config_file):
        write(config_file, {"backend_url": "http://erp.local", "port": 8080})
        environ = {
            "ERP_GATEWAY_BACKEND_URL": "http://other.local",
            "ERP_GATEWAY_PORT": "9000",
            "ERP_GATEWAY_FALLBACK_MODE": "transparent",
        }

        config = load_config(config_file, environ=environ)

        assert config.backend_url == "http://other.local"
        assert config.port == 9000
        assert config.fallback_mode is FallbackMode.TRANSPARENT

    def test_invalid_json_falls_back(self, config_file):
        write(config_file, "{not json")

        config = load_config(config_file, environ={"ERP_GATEWAY_PORT": "4000"})

        assert config.port == 4000
        assert config.backend_url == DEFAULT_BACKEND_URL

    def test_invalid_values_fall_back(self, config_file):
        write(config_file, {"port": "not-a-port"})

        assert load_config(config_file, environ={}) == GatewayConfig()


class TestLoadConfigStrict:
    def test_missing_file_allowed(self, config_file):
        assert load_config_strict(config_file, environ={}) == GatewayConfig()

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", json.dumps({"port": -1})])
    def test_raises(self, config_file, content):
        write(config_file, content)

        with pytest.raises(ConfigurationError):
            load_config_strict(config_file, environ={})


class TestSaveConfig:
    def test_written_config_loads_back(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = GatewayConfig(
            backend_url="https://erp.example.com",
            fallback_overrides={"users.list": FallbackPolicy.MASK_UNREACHABLE},
        )

        assert save_config(config, path) == path
        assert load_config_strict(path, environ={}) == config
