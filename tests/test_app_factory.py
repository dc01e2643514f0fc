from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Garante que o pacote frontdesk seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frontdesk.app import build_storage, create_roster_store  # noqa: E402
from frontdesk.core import config as core_config  # noqa: E402
from frontdesk.core.logging import setup_logging  # noqa: E402
from frontdesk.db import session as db_session  # noqa: E402
from frontdesk.repositories import JsonFileStorage, MemoryStorage  # noqa: E402
from frontdesk.repositories.sql_storage import SQLStorage  # noqa: E402
from frontdesk.services.view_service import project  # noqa: E402

ENV_VARS = (
    "APP_ENV",
    "FRONTDESK_STORAGE",
    "FRONTDESK_DATA_FILE",
    "DATABASE_URL",
    "FRONTDESK_LOG_LEVEL",
    "FRONTDESK_LOG_FILE",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    yield monkeypatch
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


def test_settings_defaults(clean_env):
    settings = core_config.get_settings()

    assert settings.app_env == "dev"
    assert settings.storage_backend == "json"
    assert settings.data_file == core_config.DEFAULT_DATA_DIR / "data.json"
    assert settings.database_url.startswith("sqlite:///")
    assert settings.database_url.endswith("frontdesk.db")
    assert settings.log_level == "INFO"
    assert settings.log_file is None


def test_settings_from_environment(clean_env, tmp_path):
    clean_env.setenv("APP_ENV", "PROD")
    clean_env.setenv("FRONTDESK_STORAGE", " SQL ")
    clean_env.setenv("FRONTDESK_DATA_FILE", str(tmp_path / "desk.json"))
    clean_env.setenv("FRONTDESK_LOG_LEVEL", "debug")
    clean_env.setenv("FRONTDESK_LOG_FILE", str(tmp_path / "logs" / "desk.log"))

    settings = core_config.get_settings()

    assert settings.app_env == "prod"
    assert settings.storage_backend == "sql"
    assert settings.data_file == tmp_path / "desk.json"
    assert settings.database_url == f"sqlite:///{tmp_path / 'frontdesk.db'}"
    assert settings.log_level == "DEBUG"
    assert settings.log_file == tmp_path / "logs" / "desk.log"


def test_unknown_backend_falls_back_to_json(clean_env):
    clean_env.setenv("FRONTDESK_STORAGE", "redis")
    assert core_config.get_settings().storage_backend == "json"


@pytest.mark.parametrize("backend, expected", [("json", JsonFileStorage), ("memory", MemoryStorage), ("sql", SQLStorage)])
def test_build_storage_per_backend(clean_env, tmp_path, backend, expected):
    clean_env.setenv("FRONTDESK_STORAGE", backend)
    clean_env.setenv("FRONTDESK_DATA_FILE", str(tmp_path / "data.json"))

    storage = build_storage(core_config.get_settings())
    assert isinstance(storage, expected)


def test_create_roster_store_loads_existing_data(clean_env, tmp_path):
    clean_env.setenv("FRONTDESK_DATA_FILE", str(tmp_path / "data.json"))

    store = create_roster_store()
    record = store.check_in({"name": "Jane Doe", "contactPerson": "Bob", "reason": "Meeting"})

    again = create_roster_store()
    assert again.snapshot() == (record,)
    assert project(again.snapshot(), "jane") == (record,)


def test_setup_logging_writes_log_file(clean_env, tmp_path):
    log_file = tmp_path / "logs" / "desk.log"
    clean_env.setenv("FRONTDESK_LOG_FILE", str(log_file))
    logger = logging.getLogger("frontdesk")
    saved_handlers = list(logger.handlers)
    saved_flag = getattr(logger, "_frontdesk_configured", False)
    logger.handlers = []
    logger._frontdesk_configured = False  # type: ignore[attr-defined]
    try:
        setup_logging(core_config.get_settings())
        setup_logging(core_config.get_settings())
        assert len(logger.handlers) == 2

        logging.getLogger("frontdesk.services.roster_service").info("visitor checked in id=1")
        for handler in logger.handlers:
            handler.flush()
        assert "visitor checked in id=1" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers = saved_handlers
        logger._frontdesk_configured = saved_flag  # type: ignore[attr-defined]


def test_setup_logging_adds_log_file_after_first_call(clean_env, tmp_path):
    log_file = tmp_path / "later.log"
    logger = logging.getLogger("frontdesk")
    saved_handlers = list(logger.handlers)
    saved_flag = getattr(logger, "_frontdesk_configured", False)
    logger.handlers = []
    logger._frontdesk_configured = False  # type: ignore[attr-defined]
    try:
        setup_logging(core_config.get_settings())
        assert len(logger.handlers) == 1

        clean_env.setenv("FRONTDESK_LOG_FILE", str(log_file))
        core_config.get_settings.cache_clear()
        setup_logging(core_config.get_settings())
        setup_logging(core_config.get_settings())
        assert len(logger.handlers) == 2

        logging.getLogger("frontdesk.app").info("using json storage backend")
        for handler in logger.handlers:
            handler.flush()
        assert "using json storage backend" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers = saved_handlers
        logger._frontdesk_configured = saved_flag  # type: ignore[attr-defined]
