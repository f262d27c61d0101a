"""
Tests for logging helpers.
"""
import logging

from applyflow.core.logging_config import setup_logging, sanitize_log_data


def test_sanitize_redacts_secrets():
    data = {
        "database_url": "postgresql://user:pw@host/db",
        "auth_jwt_secret": "s3cret",
        "telegram_chat_id": "42",
        "storage_dir": "storage",
    }
    sanitized = sanitize_log_data(data)

    assert sanitized["database_url"] == "***REDACTED***"
    assert sanitized["auth_jwt_secret"] == "***REDACTED***"
    assert sanitized["telegram_chat_id"] == "***REDACTED***"
    assert sanitized["storage_dir"] == "storage"
    assert data["auth_jwt_secret"] == "s3cret"


def test_setup_logging_writes_rotating_file(tmp_path):
    setup_logging(log_level="DEBUG", log_dir=str(tmp_path))
    logging.getLogger("applyflow.test").info("hello")

    assert (tmp_path / "applyflow.log").exists()
    assert logging.getLogger().level == logging.DEBUG
