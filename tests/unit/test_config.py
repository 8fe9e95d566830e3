"""
Unit tests for configuration and CLI argument handling.
"""

import pytest

from httpdemo.config import ServerConfig, ClientConfig
from httpdemo.__main__ import build_parser, server_config_from_args, client_config_from_args, main


ENV_VARS = (
    "HTTP_HOST",
    "HTTP_PORT",
    "HTTP_TIMEOUT",
    "HTTP_LOG_LEVEL",
    "HTTP_CLIENT_BASE_URL",
    "HTTP_CLIENT_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.timeout == 30.0
        assert config.log_level == "INFO"
        config.validate()

    def test_from_env_defaults(self):
        assert ServerConfig.from_env() == ServerConfig()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTP_HOST", "0.0.0.0")
        monkeypatch.setenv("HTTP_PORT", "4000")
        monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("HTTP_LOG_LEVEL", "DEBUG")

        config = ServerConfig.from_env()

        assert (config.host, config.port, config.timeout, config.log_level) == (
            "0.0.0.0", 4000, 2.5, "DEBUG",
        )

    def test_from_env_timeout_disabled(self, monkeypatch):
        monkeypatch.setenv("HTTP_TIMEOUT", "none")

        assert ServerConfig.from_env().timeout is None

    def test_from_env_bad_port(self, monkeypatch):
        monkeypatch.setenv("HTTP_PORT", "eighty")

        with pytest.raises(ValueError):
            ServerConfig.from_env()

    @pytest.mark.parametrize("overrides", [
        {"port": 70000},
        {"port": -1},
        {"backlog": 0},
        {"timeout": 0},
        {"timeout": -5.0},
        {"max_headers": 0},
        {"max_line_size": 10},
        {"log_level": "LOUD"},
    ])
    def test_validate_rejects(self, overrides):
        with pytest.raises(ValueError):
            ServerConfig(**overrides).validate()

    def test_port_zero_allowed(self):
        """Test that port 0 (OS-assigned) passes validation."""
        ServerConfig(port=0).validate()


class TestClientConfig:
    """Tests for ClientConfig."""

    def test_defaults(self):
        config = ClientConfig()

        assert config.base_url == "https://jsonplaceholder.typicode.com"
        assert config.timeout == 10.0
        assert config.user_agent == "Python HTTP Client"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("HTTP_CLIENT_BASE_URL", "http://127.0.0.1:3000/api")
        monkeypatch.setenv("HTTP_CLIENT_TIMEOUT", "3")

        config = ClientConfig.from_env()

        assert config.base_url == "http://127.0.0.1:3000/api"
        assert config.timeout == 3.0

    @pytest.mark.parametrize("base_url", [
        "http://127.0.0.1:3000/api",
        "http://127.0.0.1:3000/api/",
    ])
    def test_url_joins_single_slash(self, base_url):
        assert ClientConfig(base_url=base_url).url("/users/1") == "http://127.0.0.1:3000/api/users/1"

    def test_validate_rejects_scheme(self):
        with pytest.raises(ValueError):
            ClientConfig(base_url="ftp://example.com").validate()

    def test_validate_rejects_timeout(self):
        with pytest.raises(ValueError):
            ClientConfig(timeout=0).validate()


class TestCommandLine:
    """Tests for argument parsing and precedence."""

    def test_no_command_runs_both(self):
        assert build_parser().parse_args([]).command is None

    def test_flags_override_env(self, monkeypatch):
        """Test CLI > environment > defaults."""
        monkeypatch.setenv("HTTP_PORT", "4000")
        monkeypatch.setenv("HTTP_HOST", "0.0.0.0")

        args = build_parser().parse_args(["serve", "--port", "5000", "--log-level", "debug"])
        config = server_config_from_args(args)

        assert config.port == 5000
        assert config.host == "0.0.0.0"
        assert config.log_level == "DEBUG"
        assert config.timeout == 30.0

    def test_client_flags(self, monkeypatch):
        monkeypatch.setenv("HTTP_CLIENT_TIMEOUT", "7")

        args = build_parser().parse_args(["client", "--base-url", "http://localhost:3000/api"])
        config = client_config_from_args(args)

        assert config.base_url == "http://localhost:3000/api"
        assert config.timeout == 7.0

    def test_invalid_config_exits_1(self, capsys):
        assert main(["serve", "--port", "70000"]) == 1
        assert "Invalid port" in capsys.readouterr().err

    def test_bad_log_level_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["serve", "--log-level", "LOUD"])
