"""Configuration for cmdinvoke."""

from cmdinvoke.config.settings import CommandPathSetting, Settings, settings

__all__ = ["CommandPathSetting", "Settings", "settings"]
