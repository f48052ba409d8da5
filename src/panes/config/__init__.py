"""
Configuration helpers for page generation.
"""

from .models import ConfigError, PageConfig, load_config
from .settings import Settings, get_settings

__all__ = ["ConfigError", "PageConfig", "load_config", "Settings", "get_settings"]
