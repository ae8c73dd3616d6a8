"""Configuration management for ggnews."""

from .loader import Config, load_config, load_sources, save_config, save_sources
from .models import (
    ClassifierConfig,
    ConfigModel,
    IngestionConfig,
    LLMConfig,
    LoggingConfig,
    PostgresConfig,
    SourceConfig,
)

__all__ = [
    "ClassifierConfig",
    "Config",
    "ConfigModel",
    "IngestionConfig",
    "LLMConfig",
    "LoggingConfig",
    "PostgresConfig",
    "SourceConfig",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]
