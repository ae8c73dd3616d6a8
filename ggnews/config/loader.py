"""Configuration and source list files."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel, SourceConfig

logger = logging.getLogger(__name__)

CONFIG_ENV = "GGNEWS_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "ggnews" / "config.yaml"
SOURCES_FILENAME = "sources.yaml"


class Config:
    """Lazily loaded config.yaml plus the sources.yaml kept beside it."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if config_path is None:
            config_path = Path(os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH)
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def sources_path(self) -> Path:
        return self.config_path.parent / SOURCES_FILENAME

    def get_db_config(self) -> Dict[str, Any]:
        """Connection settings; ``password_env`` is resolved by the db layer."""
        return self.config.postgres.model_dump()

    def get_llm_config(self) -> Dict[str, Any]:
        """LLM settings with the API key taken from ``api_key_env`` when unset."""
        llm_config = self.config.llm.model_dump()
        if not llm_config.get("api_key") and llm_config.get("api_key_env"):
            llm_config["api_key"] = os.environ.get(llm_config["api_key_env"]) or None
        return llm_config


def _read_yaml(path: Path, what: str) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"{what.capitalize()} file not found: {path}")
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {what} file: {e}")


def _write_yaml(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_config(config_path: Path) -> ConfigModel:
    """Load config.yaml; an empty file yields the defaults."""
    data = _read_yaml(config_path, "config") or {}
    try:
        return ConfigModel.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_sources(sources_path: Path) -> List[SourceConfig]:
    """
    Load the source list.

    Entries that fail validation, or repeat the name or feed URL of an
    earlier entry, are skipped with a warning: source names are unique in
    the database and a feed polled twice would only produce duplicates.
    """
    data = _read_yaml(sources_path, "sources") or {}
    entries = (data.get("sources") or []) if isinstance(data, dict) else []

    sources: List[SourceConfig] = []
    names, urls = set(), set()
    for entry in entries:
        label = entry.get("name", "unknown") if isinstance(entry, dict) else repr(entry)
        try:
            source = SourceConfig.model_validate(entry)
        except ValidationError as e:
            logger.warning("Skipping invalid source %s: %s", label, e)
            continue

        if source.name in names or source.url in urls:
            logger.warning("Skipping duplicate source %s (%s)", source.name, source.url)
            continue

        names.add(source.name)
        urls.add(source.url)
        sources.append(source)

    return sources


def save_config(config: ConfigModel, config_path: Path) -> None:
    _write_yaml(config_path, config.model_dump())


def save_sources(sources: List[SourceConfig], sources_path: Path) -> None:
    _write_yaml(sources_path, {"sources": [s.model_dump(exclude_none=True) for s in sources]})
