"""Configuration management for the BizDesk API.

Loads from a YAML config file with environment variable overrides.
Pattern: CONFIG__{SECTION}__{KEY} overrides nested YAML keys.
Example: CONFIG__AUTH__TOKEN_EXPIRE_MINUTES=60
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = "config/bizdesk.yml"
DEFAULT_JWT_SECRET = "your-super-secret-jwt-key-change-in-production"


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:5173",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value):
        # env overrides arrive as one comma-separated string
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


class AuthConfig(BaseModel):
    jwt_secret: str = DEFAULT_JWT_SECRET  # from env: JWT_SECRET
    algorithm: str = "HS256"
    token_expire_minutes: int = Field(default=1440, ge=1)  # 24 hours
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    server: ServerConfig = ServerConfig()
    auth: AuthConfig = AuthConfig()
    logging: LoggingConfig = LoggingConfig()


def _apply_env_overrides(config_dict: dict, prefix: str = "CONFIG") -> dict:
    """Apply environment variable overrides to config dict.

    Pattern: CONFIG__SECTION__KEY=value maps to config[section][key] = value

    Values stay strings; the settings models coerce them to the field type.
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}__"):
            continue
        parts = key[len(prefix) + 2 :].lower().split("__")
        target = config_dict
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    return config_dict


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load settings from YAML file with env overrides.

    Priority: env vars > YAML file > defaults
    """
    config_dict = {}

    if config_path is None:
        config_path = os.getenv("BIZDESK_CONFIG", DEFAULT_CONFIG_PATH)
    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            config_dict = yaml.safe_load(f) or {}

    config_dict = _apply_env_overrides(config_dict)

    # Token secret from its dedicated env var
    auth = config_dict.setdefault("auth", {})
    if os.getenv("JWT_SECRET"):
        auth["jwt_secret"] = os.environ["JWT_SECRET"]
    if os.getenv("LOG_LEVEL"):
        config_dict.setdefault("logging", {})["level"] = os.environ["LOG_LEVEL"]

    return Settings(**config_dict)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    global _settings
    _settings = load_settings(config_path)
    return _settings


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.logging.level.upper(),
        format=settings.logging.format,
    )
    if settings.auth.jwt_secret == DEFAULT_JWT_SECRET:
        logging.getLogger(__name__).warning(
            "JWT_SECRET not set, using the built-in development secret"
        )
