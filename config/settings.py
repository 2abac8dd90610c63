"""Configuration management system."""

from __future__ import annotations

import os
import json
import decimal
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from dotenv import load_dotenv

from .constants import (
    DEFAULT_DECIMAL_PRECISION,
    DEFAULT_ROUNDING,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_VOLATILITY_WINDOW,
    LOG_FILE,
    MWR_DEFAULT_MAX_ITERATIONS,
    MWR_DEFAULT_TOLERANCE,
)

logger = logging.getLogger(__name__)

ROUNDING_MODES = {
    decimal.ROUND_UP,
    decimal.ROUND_DOWN,
    decimal.ROUND_CEILING,
    decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_UP,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_05UP,
}


@dataclass(frozen=True)
class NumericConfig:
    """Precision and rounding used for one calculation.

    Engines never touch the thread's global decimal context; they evaluate
    inside ``decimal.localcontext(config.context())`` so that results do not
    depend on what other code configured before them.
    """
    precision: int = DEFAULT_DECIMAL_PRECISION
    rounding: str = DEFAULT_ROUNDING

    def __post_init__(self):
        if self.precision < 1:
            raise ValueError(f"Decimal precision must be positive, got {self.precision}")
        if self.rounding not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {self.rounding}")

    def context(self) -> decimal.Context:
        """Build a fresh decimal context for this configuration."""
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )


DEFAULT_NUMERIC_CONFIG = NumericConfig()


class Settings:
    """Configuration management class for the analytics engine.

    Defaults are overlaid by an optional JSON file and then by environment
    variables (a ``.env`` file is honoured when present).
    """

    def __init__(self, config_file: Optional[str] = None, env_file: Optional[str] = None):
        """Initialize settings.

        Args:
            config_file: Optional path to configuration file
            env_file: Optional path to a dotenv file
        """
        self._config: Dict[str, Any] = {}
        self._config_file = config_file
        self._load_default_config()

        if config_file:
            self.load_from_file(config_file)

        load_dotenv(env_file) if env_file else load_dotenv()
        self._load_from_environment()

    def _load_default_config(self) -> None:
        """Load default configuration values."""
        self._config = {
            'numeric': {
                'precision': DEFAULT_DECIMAL_PRECISION,
                'rounding': DEFAULT_ROUNDING
            },
            'mwr': {
                'max_iterations': MWR_DEFAULT_MAX_ITERATIONS,
                'tolerance': str(MWR_DEFAULT_TOLERANCE)
            },
            'risk': {
                'volatility_window': DEFAULT_VOLATILITY_WINDOW
            },
            'logging': {
                'level': DEFAULT_LOG_LEVEL,
                'file': None,
                'format': DEFAULT_LOG_FORMAT
            }
        }

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""
        if os.getenv('ANALYTICS_DECIMAL_PRECISION'):
            self._config['numeric']['precision'] = int(os.getenv('ANALYTICS_DECIMAL_PRECISION'))

        if os.getenv('ANALYTICS_ROUNDING'):
            self._config['numeric']['rounding'] = os.getenv('ANALYTICS_ROUNDING').upper()

        if os.getenv('ANALYTICS_LOG_LEVEL'):
            self._config['logging']['level'] = os.getenv('ANALYTICS_LOG_LEVEL').upper()

        if os.getenv('ANALYTICS_LOG_FILE'):
            self._config['logging']['file'] = os.getenv('ANALYTICS_LOG_FILE')

        # Development mode
        if os.getenv('ANALYTICS_DEV', 'false').lower() == 'true':
            self._config['logging']['level'] = 'DEBUG'
            if not self._config['logging']['file']:
                self._config['logging']['file'] = LOG_FILE

    def load_from_file(self, config_file: str) -> None:
        """Load configuration from JSON file.

        Args:
            config_file: Path to configuration file
        """
        config_path = Path(config_file)

        if not config_path.exists():
            logger.warning(f"Configuration file not found: {config_file}")
            return

        try:
            with open(config_path, 'r') as f:
                file_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load configuration file {config_file}: {e}")
            return

        self._merge_config(self._config, file_config)
        logger.info(f"Loaded configuration from: {config_file}")

    def save_to_file(self, config_file: str) -> None:
        """Save configuration to JSON file.

        Args:
            config_file: Path to save configuration file
        """
        config_path = Path(config_file)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w') as f:
            json.dump(self._config, f, indent=2)

        logger.info(f"Saved configuration to: {config_file}")

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Configuration key (supports dot notation, e.g., 'numeric.precision')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by key (dot notation supported)."""
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def get_numeric_config(self) -> NumericConfig:
        """Build the decimal configuration handed to the engines."""
        return NumericConfig(
            precision=int(self.get('numeric.precision', DEFAULT_DECIMAL_PRECISION)),
            rounding=str(self.get('numeric.rounding', DEFAULT_ROUNDING)),
        )

    def get_mwr_config(self) -> Dict[str, Any]:
        """Solver parameters for the money-weighted return.

        Returns:
            Dictionary with ``max_iterations`` (int) and ``tolerance`` (Decimal)
        """
        return {
            'max_iterations': int(self.get('mwr.max_iterations', MWR_DEFAULT_MAX_ITERATIONS)),
            'tolerance': Decimal(str(self.get('mwr.tolerance', MWR_DEFAULT_TOLERANCE))),
        }

    def get_volatility_window(self) -> int:
        return int(self.get('risk.volatility_window', DEFAULT_VOLATILITY_WINDOW))

    def is_development_mode(self) -> bool:
        """Check if development mode is enabled."""
        return os.getenv('ANALYTICS_DEV', 'false').lower() == 'true'

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', {})


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns:
        Global settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_system(config_file: Optional[str] = None, env_file: Optional[str] = None) -> Settings:
    """Configure the system with settings.

    Args:
        config_file: Optional path to configuration file
        env_file: Optional path to a dotenv file

    Returns:
        Configured settings instance
    """
    global _settings
    _settings = Settings(config_file, env_file)
    return _settings
