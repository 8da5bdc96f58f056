"""Configuration package for the threshold monitor."""

from .loader import load_config
from .models import BusConfig, Config, LoggingConfig, MonitorConfig

__all__ = [
    "BusConfig",
    "Config",
    "LoggingConfig",
    "MonitorConfig",
    "load_config",
]
