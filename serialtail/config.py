"""Configuration loading and validation using Pydantic."""

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from serialtail.domain import (
    DEFAULT_BAUDRATE,
    DEFAULT_READ_TIMEOUT,
    DISPLAY_MAX_LINES,
    HISTORY_MAX_ENTRIES,
    VALID_STOPBITS,
    LineEnding,
    SerialSettings,
)

DEFAULT_CONFIG_PATH = "serialtail.yaml"
CONFIG_PATH_ENV = "SERIALTAIL_CONFIG_PATH"


class SerialConfig(BaseModel):
    """Serial port configuration."""

    port: str = ""
    baudrate: int = Field(default=DEFAULT_BAUDRATE, gt=0)
    bytesize: Literal[5, 6, 7, 8] = 8
    parity: Literal["N", "E", "O", "M", "S"] = "N"
    stopbits: float = 1
    read_timeout: float = Field(default=DEFAULT_READ_TIMEOUT, gt=0)

    @field_validator("parity", mode="before")
    @classmethod
    def normalize_parity(cls, v: object) -> object:
        """Accept lowercase and spelled-out parity names."""
        if isinstance(v, str):
            v = v.strip().upper()
            return {"NONE": "N", "EVEN": "E", "ODD": "O", "MARK": "M", "SPACE": "S"}.get(v, v)
        return v

    @field_validator("stopbits")
    @classmethod
    def validate_stopbits(cls, v: float) -> float:
        """Only 1, 1.5 and 2 stop bits exist."""
        if v not in VALID_STOPBITS:
            raise ValueError(f"Invalid stop bits: {v}")
        return v

    def to_settings(self, port: str | None = None) -> SerialSettings:
        """Build settings for a port (defaults to the configured one)."""
        return SerialSettings(
            port=port or self.port,
            baudrate=self.baudrate,
            bytesize=self.bytesize,
            parity=self.parity,
            stopbits=self.stopbits,
            read_timeout=self.read_timeout,
        )


class DisplayConfig(BaseModel):
    """Live view configuration."""

    max_lines: int = Field(default=DISPLAY_MAX_LINES, ge=1, le=1000)
    refresh_interval: float = Field(default=0.15, gt=0, le=10)


class HistoryConfig(BaseModel):
    """Command history configuration."""

    max_entries: int = Field(default=HISTORY_MAX_ENTRIES, ge=1)


class SendConfig(BaseModel):
    """Outgoing command framing."""

    append_cr: bool = False
    append_lf: bool = True

    def to_line_ending(self) -> LineEnding:
        return LineEnding(append_cr=self.append_cr, append_lf=self.append_lf)


class RecordingConfig(BaseModel):
    """Recording export configuration."""

    output_dir: str = "."


class Config(BaseModel):
    """Application configuration."""

    serial: SerialConfig = Field(default_factory=SerialConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    send: SendConfig = Field(default_factory=SendConfig)
    recording: RecordingConfig = Field(default_factory=RecordingConfig)


def get_config_path() -> Path:
    """Config path from the environment, or the default."""
    return Path(os.environ.get(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    A missing file yields the defaults.
    """
    config_path = Path(config_path) if config_path is not None else get_config_path()

    if not config_path.exists():
        data = {}
    else:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    return Config.model_validate(data)
