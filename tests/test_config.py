"""Tests for config loading and validation."""

from pathlib import Path

import pytest

from cli.config import load_config
from cli.config_models import CONFIRM_PERMISSION, NamesyncConfig


def test_defaults():
    cfg = NamesyncConfig()
    assert cfg.reminder.interval_seconds == 600
    assert cfg.reminder.tick_seconds == 1.0
    assert cfg.command.name == "confirmname"
    assert cfg.command.permission == CONFIRM_PERMISSION
    assert cfg.host.default_permissions == [CONFIRM_PERMISSION]
    assert cfg.paths.accounts_db == Path("~/namesync/accounts.db").expanduser()
    assert cfg.logging.level == "INFO"
    assert cfg.logging.json_mode is False


def test_load_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "reminder:\n  interval_seconds: 30\n"
        "command:\n  name: /FixName\n"
        "paths:\n  accounts_db: ~/x/accounts.db\n"
        "logging:\n  level: debug\n  json: true\n"
    )
    cfg = load_config(path)
    assert cfg.reminder.interval_seconds == 30
    assert cfg.command.name == "fixname"
    assert cfg.paths.accounts_db == Path("~/x/accounts.db").expanduser()
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.json_mode is True


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path).reminder.interval_seconds == 600


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("reminder: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(path)


@pytest.mark.parametrize(
    "data",
    [
        {"reminder": {"interval_seconds": 0}},
        {"reminder": {"tick_seconds": -1}},
        {"logging": {"level": "LOUD"}},
        {"command": {"name": "two words"}},
    ],
)
def test_validation_errors(data):
    with pytest.raises(ValueError):
        NamesyncConfig.from_dict(data)


def test_load_config_wraps_validation(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("reminder:\n  interval_seconds: -5\n")
    with pytest.raises(ValueError, match="Config validation failed"):
        load_config(path)
