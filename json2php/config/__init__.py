"""Configuration loading and schema."""

from json2php.config.loader import load_config
from json2php.config.schema import AppConfig, AppConfigRoot

__all__ = ["AppConfig", "AppConfigRoot", "load_config"]
