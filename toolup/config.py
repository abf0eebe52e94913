"""Configuration management for toolup with multi-source loading."""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)

ENV_PREFIX = "TOOLUP_"


class LogLevel(str, Enum):
    """Available logging levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ToolupConfig(BaseModel):
    """Main configuration class with validation and multi-source loading."""

    # Environment overrides
    home_dir: Optional[Path] = Field(
        default=None, description="Override for the toolup home directory"
    )
    shell: Optional[str] = Field(
        default=None, description="Path to the user's shell, overrides detection"
    )

    # Network Configuration
    http_timeout: float = Field(
        default=DEFAULT_TIMEOUT, description="HTTP request timeout in seconds"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent sent with requests"
    )

    # Output Configuration
    show_debug: bool = Field(default=False, description="Show debug information")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")

    @field_validator("home_dir", mode="before")
    @classmethod
    def expand_home_dir(cls, v):
        """Accept strings and expand a leading ``~``."""
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("shell", mode="before")
    @classmethod
    def strip_shell(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("http_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("http_timeout must be positive")
        return v


def default_home_dir() -> Path:
    """Platform default home directory for toolup data."""
    return Path.home() / ".toolup"


def get_config_paths() -> List[Path]:
    """Get configuration file paths in priority order."""
    paths = [default_home_dir() / "config.toml"]

    if os.name == "posix":
        paths.append(Path("/etc/toolup/config.toml"))
    elif os.name == "nt":
        paths.append(
            Path(os.environ.get("ProgramData", "C:/ProgramData"))
            / "toolup"
            / "config.toml"
        )

    return paths


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a TOML file, returning {} if unreadable."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
        return {}


def load_environment_variables() -> Dict[str, Any]:
    """Load configuration from TOOLUP_* environment variables."""
    config = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        config_key = key[len(ENV_PREFIX) :].lower()

        if value.lower() in ("true", "1", "yes", "on"):
            config[config_key] = True
        elif value.lower() in ("false", "0", "no", "off"):
            config[config_key] = False
        else:
            try:
                config[config_key] = int(value)
            except ValueError:
                config[config_key] = value

    return config


def load_configuration(
    config_file: Optional[str] = None, debug: bool = False
) -> ToolupConfig:
    """Load configuration from multiple sources with priority handling.

    Priority order (highest to lowest):
    1. Function parameters (config_file, debug)
    2. Environment variables (TOOLUP_*)
    3. User config file (~/.toolup/config.toml)
    4. System config file (/etc/toolup/config.toml)
    5. Default values
    """
    merged_config: Dict[str, Any] = {}

    config_paths = get_config_paths()
    if config_file:
        config_paths.insert(0, Path(config_file))

    for path in reversed(config_paths):
        merged_config.update(load_config_file(path))

    merged_config.update(load_environment_variables())

    if debug:
        merged_config["show_debug"] = True
        merged_config["log_level"] = LogLevel.DEBUG

    try:
        return ToolupConfig(**merged_config)
    except ValidationError as e:
        logger.warning("Invalid configuration, using defaults: %s", e)
        config = ToolupConfig()
        if debug:
            config.show_debug = True
            config.log_level = LogLevel.DEBUG
        return config


def save_config(config: ToolupConfig, config_path: Optional[Path] = None) -> bool:
    """Save configuration to a TOML file."""
    if config_path is None:
        config_path = default_home_dir() / "config.toml"

    config_dict = config.model_dump(exclude_none=True)

    # TOML has no enum or path types
    for key, value in config_dict.items():
        if isinstance(value, Enum):
            config_dict[key] = value.value
        elif isinstance(value, Path):
            config_dict[key] = str(value)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
    except OSError as e:
        logger.warning("Could not save configuration to %s: %s", config_path, e)
        return False

    return True


class ConfigurationError(Exception):
    """Configuration-related errors."""

    pass


def validate_config_file(config_file: Optional[str]) -> None:
    """Ensure an explicitly requested config file exists."""
    if config_file and not Path(config_file).exists():
        raise ConfigurationError(f"Config file not found: {config_file}")
