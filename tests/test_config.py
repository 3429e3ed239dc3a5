import pytest

from user_sync.config import (
    API_TIMEOUT_SECONDS,
    DEFAULT_DB_PORT,
    USERS_QUERY,
    Settings,
    load_settings,
    resolve_api_config,
    resolve_database_config,
)
from user_sync.core import ConfigurationException


def test_database_config_keeps_values_and_default_port(make_settings):
    config = resolve_database_config(make_settings())

    assert config.host == "db.internal"
    assert config.user == "sync"
    assert config.password == "s3cret"
    assert config.database == "app"
    assert config.port == DEFAULT_DB_PORT == 3306


@pytest.mark.parametrize("raw, expected", [("5432", 5432), (" 3307 ", 3307), ("", 3306), ("0", 0)])
def test_database_port_parsing(make_settings, raw, expected):
    config = resolve_database_config(make_settings(db_port=raw))
    assert config.port == expected


@pytest.mark.parametrize("raw", ["abc", "-1", "3.5", "33o6", "70000"])
def test_malformed_port_is_rejected(make_settings, raw):
    with pytest.raises(ConfigurationException, match="DB_PORT"):
        resolve_database_config(make_settings(db_port=raw))


@pytest.mark.parametrize(
    "overrides",
    [
        {"db_user": None},
        {"db_user": ""},
        {"db_password": None},
        {"db_password": ""},
        {"db_user": "", "db_password": ""},
    ],
)
def test_missing_credentials_raise(make_settings, overrides):
    with pytest.raises(ConfigurationException) as exc_info:
        resolve_database_config(make_settings(**overrides))

    assert exc_info.value.message == "Database credentials must be set via environment variables"


def test_host_and_database_are_not_required(make_settings):
    config = resolve_database_config(make_settings(db_host=None, db_name=None))

    assert config.host == ""
    assert config.database == ""


def test_password_is_hidden_from_repr(make_settings):
    config = resolve_database_config(make_settings())
    assert "s3cret" not in repr(config)


def test_api_config_with_key(make_settings):
    config = resolve_api_config(make_settings(api_key="k-123"))

    assert config.url == "https://api.example.com/users"
    assert config.api_key == "k-123"
    assert "k-123" not in repr(config)


@pytest.mark.parametrize("api_key", [None, ""])
def test_api_key_is_optional(make_settings, api_key):
    config = resolve_api_config(make_settings(api_key=api_key))
    assert config.api_key is None


@pytest.mark.parametrize("api_url", [None, ""])
def test_missing_api_url_raises(make_settings, api_url):
    with pytest.raises(ConfigurationException, match="API_URL environment variable is required"):
        resolve_api_config(make_settings(api_url=api_url))


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("DB_HOST", "mysql")
    monkeypatch.setenv("DB_USER", "etl")
    monkeypatch.setenv("DB_PASSWORD", "pw")
    monkeypatch.setenv("DB_NAME", "crm")
    monkeypatch.setenv("DB_PORT", "3310")
    monkeypatch.setenv("API_URL", "https://hooks.example.com")
    monkeypatch.setenv("API_KEY", "token")

    settings = Settings(_env_file=None)
    db_config = resolve_database_config(settings)
    api_config = resolve_api_config(settings)

    assert (db_config.host, db_config.user, db_config.password) == ("mysql", "etl", "pw")
    assert (db_config.database, db_config.port) == ("crm", 3310)
    assert api_config.url == "https://hooks.example.com"
    assert api_config.api_key == "token"


def test_settings_read_from_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text(
        "DB_USER=dotenv-user\nDB_PASSWORD=dotenv-pw\nAPI_URL=https://dotenv.example.com\n"
    )

    settings = load_settings()

    assert resolve_database_config(settings).user == "dotenv-user"
    assert resolve_api_config(settings).url == "https://dotenv.example.com"


def test_invalid_log_level_is_a_configuration_error(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ConfigurationException, match="Invalid settings"):
        load_settings()


def test_log_level_is_normalized(make_settings):
    assert make_settings(log_level="debug").log_level == "DEBUG"


def test_fixed_query_and_deadline():
    assert USERS_QUERY == "SELECT id, name, email, created_at FROM users"
    assert API_TIMEOUT_SECONDS == 5.0
