"""Configuration adapters."""

from nextwave.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
