"""Configuration management for nest-repl."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ReplConfig(BaseModel):
    """NestJS REPL configuration."""

    command: str = "npx nest repl"
    project_marker: str = Field(
        default="nest-cli.json",
        description="File that marks the root of a NestJS project",
    )
    always_await: bool = Field(
        default=False,
        description="Prefix every invocation with await, not only async methods",
    )

    @field_validator("command", "project_marker")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty strings."""
        if not v.strip():
            msg = "Value must not be blank"
            raise ValueError(msg)
        return v


class ParserConfig(BaseModel):
    """Parser configuration."""

    default_language: str = "typescript"
    include_pattern_parameters: bool = Field(
        default=False,
        description="Keep destructured and rest parameters, named by their pattern text",
    )

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate the language against the grammar registry."""
        from nest_repl.parser.language_config import LanguageRegistry

        config = LanguageRegistry.get_language(v)
        if config is None:
            msg = f"Unsupported language: {v}"
            raise ValueError(msg)
        return config.name


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "text"
    console_colorized: bool = True
    file_enabled: bool = False
    file_path: Path = Path("logs/nest-repl.log")
    file_rotation: str = "daily"
    file_retention_days: int = Field(default=7, ge=1)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level name."""
        if v.upper() not in LOG_LEVELS:
            msg = f"Invalid log level: {v}"
            raise ValueError(msg)
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ("json", "text"):
            msg = f"Invalid log format: {v}"
            raise ValueError(msg)
        return v


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEST_REPL_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # Configuration sections
    repl: ReplConfig = Field(default_factory=ReplConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "Settings":
        """Load settings from YAML configuration file."""
        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        with config_path.open() as f:
            config_data = yaml.safe_load(f)

        # Expand environment variables in configuration
        config_data = cls._expand_env_vars(config_data)

        # Load environment variables
        env_settings = cls()

        if config_data:
            init_data = {}

            # Get values from environment first
            for field_name in cls.model_fields:
                init_data[field_name] = getattr(env_settings, field_name)

            # Override with config file values
            init_data.update(config_data)

            return cls(**init_data)

        return env_settings

    @staticmethod
    def _expand_env_vars(config: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(config, dict):
            return {k: Settings._expand_env_vars(v) for k, v in config.items()}
        if isinstance(config, list):
            return [Settings._expand_env_vars(item) for item in config]
        if isinstance(config, str) and config.startswith("${") and config.endswith("}"):
            env_var = config[2:-1]
            return os.getenv(env_var, config)
        return config


def _config_path() -> Path:
    return Path(os.getenv("NEST_REPL_CONFIG", "nest-repl.yaml"))


class SettingsManager:
    """Manages the singleton settings instance."""

    def __init__(self):
        self._settings: Settings | None = None

    def get(self) -> Settings:
        """Get application settings singleton."""
        if self._settings is None:
            config_path = _config_path()
            if config_path.exists():
                self._settings = Settings.from_yaml(config_path)
            else:
                self._settings = Settings()
        return self._settings

    def reload(self, config_path: Path | None = None) -> Settings:
        """Reload settings from configuration file."""
        if config_path is None:
            config_path = _config_path()
        self._settings = Settings.from_yaml(config_path) if config_path.exists() else Settings()
        return self._settings


# Global settings manager instance
_settings_manager = SettingsManager()


def get_settings() -> Settings:
    """Get application settings singleton."""
    return _settings_manager.get()


def reload_settings(config_path: Path | None = None) -> Settings:
    """Reload settings from configuration file."""
    return _settings_manager.reload(config_path)
