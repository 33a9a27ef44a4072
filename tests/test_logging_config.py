"""Tests for structured logging configuration."""

import json
import logging

import structlog

from cli.logging_config import _redact_sensitive, setup_logging


class TestLoggingConfig:
    """Test structlog setup modes."""

    def test_level_filtering(self):
        setup_logging(json_mode=False, level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_default_level_is_info(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_processor_chain(self):
        setup_logging(json_mode=True, level="DEBUG")
        config = structlog.get_config()
        assert _redact_sensitive in config["processors"]

    def test_log_file_gets_json(self, tmp_path):
        log_file = tmp_path / "logs" / "namesync.log"
        setup_logging(json_mode=True, level="INFO", log_file=log_file)
        logging.getLogger("namesync.test").info("hello")
        for h in logging.getLogger().handlers:
            h.flush()
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["event"] == "hello"


class TestRedaction:
    def test_password_keys_masked(self):
        out = _redact_sensitive(None, None, {"event": "x", "password": "hunter2", "password_hash": "h"})
        assert out["password"] == "REDACTED"
        assert out["password_hash"] == "REDACTED"

    def test_bcrypt_hash_in_text_masked(self):
        h = "$2b$12$" + "a" * 53
        out = _redact_sensitive(None, None, {"event": f"stored {h} for user"})
        assert h not in out["event"]
        assert "REDACTED-HASH" in out["event"]

    def test_other_values_untouched(self):
        out = _redact_sensitive(None, None, {"event": "renamed", "new_name": "Alice99", "id": 3})
        assert out == {"event": "renamed", "new_name": "Alice99", "id": 3}
