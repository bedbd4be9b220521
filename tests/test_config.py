import pytest

from core.config import Config


def test_defaults_are_valid():
    config = Config()
    config.validate()
    assert config.http_prefix == ""
    assert config.runtime_config_file is None


def test_http_prefix_is_normalized():
    config = Config(http_prefix="/api/")
    config.validate()
    assert config.http_prefix == "/api"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"env": "staging"},
        {"http_port": 0},
        {"http_port": 70000},
        {"http_prefix": "api"},
        {"service_name": " "},
        {"shutdown_timeout": 0},
        {"service_call_timeout": -1},
        {"log_format": "xml"},
    ],
)
def test_invalid_values_raise(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs).validate()


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("RUNTIME_SERVICE_NAME", "Querier")
    monkeypatch.setenv("RUNTIME_HTTP_PORT", "9009")
    monkeypatch.setenv("RUNTIME_HTTP_PREFIX", "/api/")
    monkeypatch.setenv("RUNTIME_HTTP_ENABLED", "false")
    monkeypatch.setenv("RUNTIME_CONFIG_FILE", str(tmp_path / "runtime.yaml"))
    monkeypatch.setenv("RUNTIME_LOG_FORMAT", "JSON")

    config = Config.from_env()

    assert config.service_name == "Querier"
    assert config.http_port == 9009
    assert config.http_prefix == "/api"
    assert config.http_enabled is False
    assert config.runtime_config_file == str(tmp_path / "runtime.yaml")
    assert config.log_format == "json"


def test_from_env_empty_runtime_config_file(monkeypatch):
    monkeypatch.setenv("RUNTIME_CONFIG_FILE", "")
    assert Config.from_env().runtime_config_file is None
