"""Configuration management for watchhttp.

Loads settings from an optional YAML configuration file with
environment variable overrides. Command line flags are applied on top
by the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from watchhttp.args import ArgsError, parse_duration

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("watchhttp.yaml")

CONTENT_TYPES = {
    "raw": "",
    "json": "application/json",
    "yaml": "text/yaml",
}
HTML_CONTENT_TYPE = "text/html; charset=utf-8"


class ServerConfig(BaseModel):
    model_config = {"validate_assignment": True}

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=9000, ge=1, le=65535)


class RunnerConfig(BaseModel):
    model_config = {"validate_assignment": True}

    interval: float = Field(default=1.0, gt=0, description="Seconds between command runs")
    command: list[str] = Field(default_factory=list)

    @field_validator("interval", mode="before")
    @classmethod
    def _parse_interval(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                return parse_duration(v)
            except ArgsError as e:
                raise ValueError(str(e)) from e
        return v


class RenderConfig(BaseModel):
    model_config = {"validate_assignment": True}

    format: Literal["raw", "json", "yaml"] = Field(default="raw")
    delta: bool = Field(default=False, description="Render JSON/YAML as delta HTML")
    title: str | None = Field(default=None, description="Page title, defaults to the command")

    @property
    def content_type(self) -> str:
        if self.delta:
            return HTML_CONTENT_TYPE
        return CONTENT_TYPES[self.format]


class LoggingConfig(BaseModel):
    model_config = {"validate_assignment": True}

    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for watchhttp.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "WATCHHTTP_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    server: ServerConfig = Field(default_factory=ServerConfig)
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; the environment wins over them
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    elif config_path:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
