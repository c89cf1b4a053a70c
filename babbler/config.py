"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .utils import parse_bool_env, parse_int_env, parse_optional_int_env, resolve_path

STORAGE_BACKENDS = ("sqlite", "memory")


@dataclass(frozen=True)
class BabblerConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    storage_backend: str
    db_path: str
    db_table_prefix: str
    quotes_enabled: bool
    quotes_db_path: str
    quotes_table: str
    random_seed: Optional[int]
    max_words: int
    default_user: str
    ui_server_name: str = "127.0.0.1"
    ui_server_port: int = 7860


def load_config() -> BabblerConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    file_log_level = os.getenv("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(os.getenv("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"babbler_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    storage_backend = os.getenv("BABBLER_STORAGE", "sqlite").strip().lower()
    if storage_backend not in STORAGE_BACKENDS:
        storage_backend = "sqlite"
    db_path = resolve_path(
        os.getenv("BABBLER_DB_PATH", "data/babbler.sqlite3").strip(),
        base_dir,
    )
    db_table_prefix = os.getenv("BABBLER_DB_TABLE_PREFIX", "babbler_").strip()
    quotes_enabled = parse_bool_env("BABBLER_QUOTES_ENABLED", True)
    quotes_db_raw = os.getenv("BABBLER_QUOTES_DB_PATH", "").strip()
    quotes_db_path = resolve_path(quotes_db_raw, base_dir) if quotes_db_raw else db_path
    quotes_table = os.getenv("BABBLER_QUOTES_TABLE", "factoid").strip() or "factoid"
    random_seed = parse_optional_int_env("BABBLER_RANDOM_SEED")
    max_words = parse_int_env("BABBLER_MAX_WORDS", 200, min_value=1, max_value=10000)
    default_user = os.getenv("BABBLER_DEFAULT_USER", "anonymous").strip() or "anonymous"
    ui_server_name = os.getenv("UI_SERVER_NAME", "127.0.0.1").strip() or "127.0.0.1"
    ui_server_port = parse_int_env("UI_SERVER_PORT", 7860, min_value=1, max_value=65535)
    return BabblerConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        storage_backend=storage_backend,
        db_path=db_path,
        db_table_prefix=db_table_prefix,
        quotes_enabled=quotes_enabled,
        quotes_db_path=quotes_db_path,
        quotes_table=quotes_table,
        random_seed=random_seed,
        max_words=max_words,
        default_user=default_user,
        ui_server_name=ui_server_name,
        ui_server_port=ui_server_port,
    )
