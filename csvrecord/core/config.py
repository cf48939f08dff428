"""Configuration management for csvrecord."""

import codecs
import copy
import logging
import os
import yaml
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from csvrecord.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'CSVRECORD_CONFIG'

DEFAULT_CONFIG: Dict[str, Any] = {
    'csv': {
        'encoding': 'utf-8',
        'strict': False,
    },
    'logging': {
        'level': 'INFO',
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        'file': None,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. Falls back to the
                CSVRECORD_CONFIG environment variable, then to built-in defaults.
        """
        load_dotenv()  # Load environment variables from .env file
        self.config_path = config_path or os.getenv(CONFIG_ENV_VAR)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and merge it over the defaults."""
        if not self.config_path:
            logger.debug("No configuration file given, using defaults")
            return copy.deepcopy(DEFAULT_CONFIG)

        try:
            with open(self.config_path, 'r') as file:
                loaded = yaml.safe_load(file) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML configuration: {e}")

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {self.config_path}"
            )

        logger.debug(f"Loaded configuration from {self.config_path}")
        return _merge(DEFAULT_CONFIG, self._process_env_variables(loaded))

    def _process_env_variables(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Process environment variable placeholders in configuration."""
        def process_value(value):
            if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
                env_var = value[2:-1]
                env_value = os.getenv(env_var)
                if env_value is None:
                    raise ConfigurationError(f"Environment variable not set: {env_var}")
                return env_value
            elif isinstance(value, dict):
                return {k: process_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [process_value(item) for item in value]
            return value

        return process_value(config)  # type: ignore

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key_path: Dot-separated key path (e.g., 'csv.encoding')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    @property
    def csv_config(self) -> Dict[str, Any]:
        """Get CSV configuration section."""
        return self._config.get('csv', {})

    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration section."""
        return self._config.get('logging', {})

    @property
    def encoding(self) -> str:
        return self.csv_config.get('encoding', 'utf-8')

    @property
    def strict(self) -> bool:
        return bool(self.csv_config.get('strict', False))

    def get_all(self) -> Dict[str, Any]:
        """Get entire configuration as dictionary.

        Returns:
            Complete configuration dictionary
        """
        return copy.deepcopy(self._config)

    def validate(self) -> bool:
        """Validate configuration values.

        Returns:
            True if configuration is valid

        Raises:
            ConfigurationError: If configuration is invalid
        """
        encoding = self.csv_config.get('encoding')
        try:
            codecs.lookup(str(encoding))
        except LookupError:
            raise ConfigurationError(f"Unknown CSV encoding: {encoding}")

        if not isinstance(self.csv_config.get('strict'), bool):
            raise ConfigurationError("csv.strict must be true or false")

        level = str(self.logging_config.get('level', '')).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Invalid logging level: {level}")

        return True
