import os

from babbler.config import load_config
from babbler.utils import parse_bool_env, parse_int_env, parse_optional_int_env, resolve_path


def test_resolve_path_handles_relative_and_absolute(tmp_path):
    base_dir = str(tmp_path)
    relative = "nested/file.sqlite3"
    absolute = str(tmp_path / "absolute.sqlite3")

    assert resolve_path(relative, base_dir) == os.path.join(base_dir, relative)
    assert resolve_path(absolute, base_dir) == absolute


def test_parse_int_env_applies_default_and_bounds(monkeypatch):
    monkeypatch.setenv("INT_ENV_TEST", "not-a-number")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 7

    monkeypatch.setenv("INT_ENV_TEST", "100")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 10

    monkeypatch.setenv("INT_ENV_TEST", "-5")
    assert parse_int_env("INT_ENV_TEST", 7, min_value=1, max_value=10) == 1


def test_parse_optional_int_env(monkeypatch):
    monkeypatch.delenv("OPT_INT_TEST", raising=False)
    assert parse_optional_int_env("OPT_INT_TEST") is None

    monkeypatch.setenv("OPT_INT_TEST", "  ")
    assert parse_optional_int_env("OPT_INT_TEST") is None

    monkeypatch.setenv("OPT_INT_TEST", "seed")
    assert parse_optional_int_env("OPT_INT_TEST") is None

    monkeypatch.setenv("OPT_INT_TEST", "-3")
    assert parse_optional_int_env("OPT_INT_TEST") == -3


def test_load_config_reads_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("FILE_LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("BABBLER_STORAGE", "MEMORY")
    monkeypatch.setenv("BABBLER_DB_PATH", str(tmp_path / "data" / "b.sqlite3"))
    monkeypatch.setenv("BABBLER_DB_TABLE_PREFIX", "chat_")
    monkeypatch.setenv("BABBLER_QUOTES_ENABLED", "no")
    monkeypatch.setenv("BABBLER_QUOTES_DB_PATH", str(tmp_path / "quotes.sqlite3"))
    monkeypatch.setenv("BABBLER_QUOTES_TABLE", "facts")
    monkeypatch.setenv("BABBLER_RANDOM_SEED", "42")
    monkeypatch.setenv("BABBLER_MAX_WORDS", "0")  # below min -> clamped
    monkeypatch.setenv("BABBLER_DEFAULT_USER", "seabass")
    monkeypatch.setenv("UI_SERVER_NAME", "0.0.0.0")
    monkeypatch.setenv("UI_SERVER_PORT", "99999")  # above max -> clamped

    config = load_config()

    assert config.log_level == "WARNING"
    assert config.file_log_level == "ERROR"
    assert config.log_dir == str(tmp_path / "logs")
    assert os.path.isdir(config.log_dir)
    assert config.log_file.startswith(os.path.join(config.log_dir, "babbler_"))
    assert config.storage_backend == "memory"
    assert config.db_path == str(tmp_path / "data" / "b.sqlite3")
    assert config.db_table_prefix == "chat_"
    assert config.quotes_enabled is False
    assert config.quotes_db_path == str(tmp_path / "quotes.sqlite3")
    assert config.quotes_table == "facts"
    assert config.random_seed == 42
    assert config.max_words == 1
    assert config.default_user == "seabass"
    assert config.ui_server_name == "0.0.0.0"
    assert config.ui_server_port == 65535


def test_load_config_defaults(monkeypatch, tmp_path):
    for name in (
        "BABBLER_STORAGE",
        "BABBLER_DB_PATH",
        "BABBLER_DB_TABLE_PREFIX",
        "BABBLER_QUOTES_ENABLED",
        "BABBLER_QUOTES_DB_PATH",
        "BABBLER_QUOTES_TABLE",
        "BABBLER_RANDOM_SEED",
        "BABBLER_MAX_WORDS",
        "BABBLER_DEFAULT_USER",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

    config = load_config()

    assert config.storage_backend == "sqlite"
    assert config.db_path.endswith(os.path.join("data", "babbler.sqlite3"))
    assert config.db_table_prefix == "babbler_"
    assert config.quotes_enabled is True
    assert config.quotes_db_path == config.db_path
    assert config.quotes_table == "factoid"
    assert config.random_seed is None
    assert config.max_words == 200
    assert config.default_user == "anonymous"


def test_load_config_falls_back_on_unknown_backend(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("BABBLER_STORAGE", "redis")

    assert load_config().storage_backend == "sqlite"


def test_parse_bool_env(monkeypatch):
    monkeypatch.delenv("BOOL_ENV_TEST", raising=False)
    assert parse_bool_env("BOOL_ENV_TEST") is False
    assert parse_bool_env("BOOL_ENV_TEST", True) is True

    for raw in ("1", "TRUE", " yes ", "on"):
        monkeypatch.setenv("BOOL_ENV_TEST", raw)
        assert parse_bool_env("BOOL_ENV_TEST") is True

    for raw in ("0", "off", "nope"):
        monkeypatch.setenv("BOOL_ENV_TEST", raw)
        assert parse_bool_env("BOOL_ENV_TEST", True) is False
