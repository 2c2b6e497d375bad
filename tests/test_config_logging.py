import sys
import os
import logging

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import pytest
from pydantic import ValidationError
from shop_core.config import Settings
from shop_core.logging_config import setup_logging


def test_settings_defaults(monkeypatch):
    """Проверка значений по умолчанию"""
    monkeypatch.delenv("SHOP_SEED_PATH", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    s = Settings(_env_file=None)

    assert s.seed_path.endswith(os.path.join("data", "seed.json"))
    assert s.log_level == "INFO"
    assert s.log_file is None


def test_settings_from_env(monkeypatch):
    """Проверка чтения настроек из окружения"""
    monkeypatch.setenv("SHOP_SEED_PATH", "/tmp/other.json")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FILE", "/tmp/queries.log")
    s = Settings(_env_file=None)

    assert (s.seed_path, s.log_level, s.log_file) == ("/tmp/other.json", "DEBUG", "/tmp/queries.log")


def test_empty_log_file_means_no_file(monkeypatch):
    """Проверка: пустой LOG_FILE равен отсутствию файла"""
    monkeypatch.setenv("LOG_FILE", "")
    assert Settings(_env_file=None).log_file is None


def test_unknown_log_level_rejected(monkeypatch):
    """Проверка: неизвестный уровень логирования не принимается"""
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_level_is_known_to_logging(monkeypatch):
    """Проверка: принятый уровень понимает logging"""
    monkeypatch.setenv("LOG_LEVEL", "warning")
    s = Settings(_env_file=None)
    assert isinstance(logging.getLevelName(s.log_level), int)


def test_setup_logging_configures_once(monkeypatch, tmp_path):
    """Проверка: логирование настраивается один раз, пишет в файл"""
    root = logging.getLogger()
    saved_level = root.level
    monkeypatch.setattr(root, "handlers", [])
    logfile = tmp_path / "queries.log"

    try:
        setup_logging("debug", str(logfile))
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        setup_logging("warning")
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG

        logging.getLogger("shop_core.service").info("matched order: test")
        for handler in root.handlers:
            handler.flush()
        assert "matched order: test" in logfile.read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            handler.close()
        root.setLevel(saved_level)
