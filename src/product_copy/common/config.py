"""Runtime settings, resolved once at startup and injected into the app."""
from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ValidationError

DEFAULT_CONFIG_PATH = "configs/settings.yaml"

# env var -> settings field
ENV_FIELDS = {
    "OPENAI_API_KEY": "openai_api_key",
    "OPENAI_BASE_URL": "openai_base_url",
    "COPY_MODEL": "default_model",
    "COPY_LANGUAGE": "language",
    "TEMPERATURE_PARAM": "temperature_param",
    "REQUEST_TIMEOUT": "request_timeout",
    "HOST": "host",
    "PORT": "port",
    "LOG_LEVEL": "log_level",
}


class ConfigError(RuntimeError):
    """Raised when the settings file or environment cannot be parsed."""


class Settings(BaseModel):
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    default_model: str = "gpt-5"
    language: str = "Vietnamese"
    temperature_param: Literal["config", "root"] = "config"
    request_timeout: float = 120.0
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key.strip())

    @classmethod
    def from_env(cls, base: dict[str, Any] | None = None) -> "Settings":
        """Build settings from ``base`` values overlaid with environment variables."""
        values: dict[str, Any] = dict(base or {})
        for env_name, field in ENV_FIELDS.items():
            raw = os.getenv(env_name)
            if raw is not None and raw.strip() != "":
                values[field] = raw.strip()
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e

    @classmethod
    def load(cls, path: str | None = None) -> "Settings":
        """
        Resolve settings: defaults < YAML file < environment.

        Args:
            path: YAML config path. Defaults to $PRODUCT_COPY_CONFIG, then
                configs/settings.yaml. A missing default file is not an error.
        """
        explicit = path or os.getenv("PRODUCT_COPY_CONFIG")
        cfg_path = explicit or DEFAULT_CONFIG_PATH
        base: dict[str, Any] = {}
        if Path(cfg_path).exists():
            base = load_cfg(cfg_path)
        elif explicit:
            raise ConfigError(f"Config file not found at {cfg_path}")
        return cls.from_env(base)


def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at top level of {path}")
    return data
