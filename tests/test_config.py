import sys

import pytest

from core.config import AppSettings, candidate_servers, load_server_config, parse_server_config
from core.domain.models import ServerConfig, ServerEntry
from core.errors import ConfigurationError

CONFIG = """
[[servers]]
addr = "edit.example.com"
key = "s3cret"

[[servers]]
addr = "http://localhost:8080"
"""


def test_parse_server_list():
    config = parse_server_config(CONFIG)

    assert config.servers == [
        ServerEntry(address="edit.example.com", api_key="s3cret"),
        ServerEntry(address="http://localhost:8080"),
    ]


def test_empty_file_has_no_servers():
    assert parse_server_config("").servers == []


def test_invalid_toml_is_configuration_error():
    with pytest.raises(ConfigurationError):
        parse_server_config("[[servers]\naddr = ")


def test_wrong_shape_is_configuration_error():
    with pytest.raises(ConfigurationError):
        parse_server_config('servers = "edit.example.com"')


def test_explicit_config_path_is_used_first(tmp_path):
    path = tmp_path / "remdit.toml"
    path.write_text(CONFIG, encoding="utf-8")
    settings = AppSettings(_env_file=None, config_path=path)

    config = load_server_config(settings)

    assert [server.address for server in config.servers] == ["edit.example.com", "http://localhost:8080"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX home layout")
def test_no_config_file_gives_empty_list(tmp_path, monkeypatch):
    monkeypatch.setattr("core.config.SYSTEM_CONFIG_FILE", tmp_path / "missing.toml")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    config = load_server_config(AppSettings(_env_file=None))

    assert config.servers == []


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX home layout")
def test_user_config_file_is_found(tmp_path, monkeypatch):
    monkeypatch.setattr("core.config.SYSTEM_CONFIG_FILE", tmp_path / "missing.toml")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".remdit").mkdir()
    (tmp_path / ".remdit" / "config.toml").write_text(CONFIG, encoding="utf-8")

    config = load_server_config(AppSettings(_env_file=None))

    assert len(config.servers) == 2


def test_default_server_fills_in_when_list_has_no_valid_entry():
    settings = AppSettings(_env_file=None, default_server="fallback.example.com", default_api_key="k")

    servers = candidate_servers(ServerConfig(servers=[ServerEntry(address="")]), settings)

    assert servers == [ServerEntry(address="fallback.example.com", api_key="k")]


def test_configured_servers_win_over_default():
    settings = AppSettings(_env_file=None, default_server="fallback.example.com")
    config = parse_server_config(CONFIG)

    assert candidate_servers(config, settings) == config.servers


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("REMDIT_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("REMDIT_DEFAULT_SERVER", "env.example.com")

    settings = AppSettings(_env_file=None)

    assert settings.http_timeout_seconds == 5.0
    assert settings.default_server == "env.example.com"
