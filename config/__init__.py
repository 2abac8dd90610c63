"""Configuration management for the analytics engine."""

from .settings import (
    Settings,
    NumericConfig,
    DEFAULT_NUMERIC_CONFIG,
    get_settings,
    configure_system,
)
from .constants import *

__all__ = [
    'Settings',
    'NumericConfig',
    'DEFAULT_NUMERIC_CONFIG',
    'get_settings',
    'configure_system',
    # Constants will be imported via *
]
