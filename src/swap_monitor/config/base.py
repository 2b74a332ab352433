"""
Base configuration management for the swap price monitor.
"""

import os
import logging
from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field

import ujson
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord has; anything else came in through `extra=`
_RESERVED_LOG_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line, including structured `extra` fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_ATTRS and not key.startswith("_"):
                payload[key] = value if isinstance(value, (int, float, bool, str)) or value is None else str(value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return ujson.dumps(payload)


@dataclass
class BaseConfig:
    """Base configuration class with environment variable management."""

    # Environment
    ENVIRONMENT: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "local"))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    LOG_FORMAT: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "text"))

    def __post_init__(self):
        """Initialize configuration after dataclass creation."""
        self._validate_config()
        self._setup_logging()

    def _setup_logging(self):
        """Setup logging configuration."""
        if self.LOG_FORMAT.lower() == "json":
            handler = logging.StreamHandler()
            handler.setFormatter(JsonLogFormatter())
            logging.basicConfig(level=getattr(logging, self.LOG_LEVEL.upper()), handlers=[handler])
        else:
            logging.basicConfig(
                level=getattr(logging, self.LOG_LEVEL.upper()),
                format=LOG_FORMAT
            )

    def _validate_config(self):
        """Validate configuration values."""
        if self.ENVIRONMENT not in ["local", "dev", "staging", "production"]:
            raise ConfigError(f"Invalid environment: {self.ENVIRONMENT}")
        if not isinstance(logging.getLevelName(self.LOG_LEVEL.upper()), int):
            raise ConfigError(f"Invalid log level: {self.LOG_LEVEL}")
        if self.LOG_FORMAT.lower() not in ["text", "json"]:
            raise ConfigError(f"Invalid log format: {self.LOG_FORMAT}")

    @staticmethod
    def get_env(key: str, default: Optional[str] = None, required: bool = False) -> str:
        """
        Get environment variable with validation.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            Environment variable value

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key, default)
        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set")
        return value

    @staticmethod
    def get_env_int(key: str, default: Optional[int] = None, required: bool = False) -> int:
        """Get environment variable as integer."""
        value = BaseConfig.get_env(key, str(default) if default is not None else None, required)
        try:
            return int(value)
        except (ValueError, TypeError):
            raise ConfigError(f"Environment variable '{key}' must be an integer, got: {value}")

    @staticmethod
    def get_env_list(key: str, default: Optional[List[str]] = None, separator: str = ",") -> List[str]:
        """Get environment variable as list."""
        value = BaseConfig.get_env(key, separator.join(default) if default else "")
        return [item.strip() for item in value.split(separator) if item.strip()] if value else []

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            field: getattr(self, field)
            for field in self.__dataclass_fields__
            if not field.startswith('_')
        }
