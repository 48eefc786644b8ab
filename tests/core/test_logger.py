"""Tests for logger setup."""

from loguru import logger

from jaimetro.config.settings import Settings
from jaimetro.core.logger import setup_logger


def test_log_file_receives_messages(tmp_path):
    log_file = tmp_path / "logs" / "jaimetro.log"

    setup_logger(level="INFO", log_file=log_file)
    logger.info("[CHART] written to file")
    logger.debug("below the configured level")
    logger.remove()

    content = log_file.read_text()
    assert "[CHART] written to file" in content
    assert "below the configured level" not in content


def test_console_only_by_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    setup_logger(level="DEBUG")
    logger.info("console message")
    logger.remove()

    assert list(tmp_path.iterdir()) == []


def test_log_file_setting(monkeypatch):
    monkeypatch.setenv("LOG_FILE", "/var/log/jaimetro/app.log")
    monkeypatch.setenv("LOG_RETENTION", "30 days")

    settings = Settings(database_url="sqlite://")

    assert settings.log_file == "/var/log/jaimetro/app.log"
    assert settings.log_rotation == "10 MB"
    assert settings.log_retention == "30 days"
