"""Pydantic configuration models for namesync."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

CONFIRM_PERMISSION = "updateaccountname.confirm"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ReminderConfig(BaseModel):
    """Reminder cadence for unresolved name mismatches."""

    interval_seconds: float = 600.0
    tick_seconds: float = 1.0

    @field_validator("interval_seconds", "tick_seconds")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be positive, got {v}")
        return v


class CommandConfig(BaseModel):
    """Name and permission node of the confirm command."""

    name: str = "confirmname"
    permission: Optional[str] = CONFIRM_PERMISSION

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip().lstrip("/").lower()
        if not v or " " in v:
            raise ValueError(f"Invalid command name: {v!r}")
        return v


class HostConfig(BaseModel):
    """Session host defaults."""

    default_permissions: list[str] = Field(default_factory=lambda: [CONFIRM_PERMISSION])


class PathsConfig(BaseModel):
    """File paths configuration."""

    accounts_db: Path = Path("~/namesync/accounts.db")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.accounts_db = self.accounts_db.expanduser()
        if self.log_file is not None:
            self.log_file = self.log_file.expanduser()
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class NamesyncConfig(BaseModel):
    """Main configuration model."""

    reminder: ReminderConfig = Field(default_factory=ReminderConfig)
    command: CommandConfig = Field(default_factory=CommandConfig)
    host: HostConfig = Field(default_factory=HostConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "NamesyncConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
