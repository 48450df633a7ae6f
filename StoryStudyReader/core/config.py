"""Configuration schema and JSON persistence.

`AppConfig` groups the per-service settings plus the two values that must
survive a restart (API key and last story prompt). `ConfigStore` reads and
writes it as `config/config.json` next to the package unless the
`STORY_READER_CONFIG` environment variable points elsewhere.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from StoryStudyReader.core.errors import ConfigError

logger = logging.getLogger(__name__)

OPENAI_BASE_URL = "https://api.openai.com/v1"


@dataclass
class StoryServiceConfig:
    provider: str = "openai"
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1500
    base_url: str = OPENAI_BASE_URL
    timeout: float = 60.0

@dataclass
class DictionaryConfig:
    provider: str = "openai"  # openai | jisho | mock
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 150
    base_url: str = OPENAI_BASE_URL
    timeout: float = 30.0
    cache_failures: bool = False

@dataclass
class SegmentationConfig:
    extra_particles: List[str] = field(default_factory=list)

@dataclass
class PopupConfig:
    margin: int = 20

@dataclass
class AppConfig:
    story: StoryServiceConfig = field(default_factory=StoryServiceConfig)
    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)
    popup: PopupConfig = field(default_factory=PopupConfig)
    api_key: str = ""
    last_prompt: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "AppConfig":
        if not isinstance(data, dict):
            return cls()
        return cls(
            story=_section(StoryServiceConfig, data.get('story')),
            dictionary=_section(DictionaryConfig, data.get('dictionary')),
            segmentation=_section(SegmentationConfig, data.get('segmentation')),
            popup=_section(PopupConfig, data.get('popup')),
            api_key=str(data.get('api_key') or ''),
            last_prompt=str(data.get('last_prompt') or ''),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _section(kind, raw):
    """Build one config section, ignoring unknown keys and bad values."""
    if not isinstance(raw, dict):
        return kind()
    known = {f.name for f in fields(kind)}
    try:
        return kind(**{k: v for k, v in raw.items() if k in known})
    except TypeError:
        logger.warning("Malformed %s section; using defaults", kind.__name__)
        return kind()


def load_env_file(path: Optional[str] = None) -> bool:
    """Load a `.env` file into the environment (existing variables win).

    Backend selection (`STORY_BACKEND`, `DICTIONARY_BACKEND`), the config path
    and the log level can then live in `.env` instead of the shell.
    """
    loaded = load_dotenv(path or find_dotenv(usecwd=True))
    if loaded:
        logger.debug("Loaded environment from %s", path or ".env")
    return loaded


def default_config_path() -> str:
    env = os.getenv('STORY_READER_CONFIG')
    if env:
        return os.path.abspath(env)
    # config located at ../config/config.json relative to this file
    base = os.path.normpath(os.path.join(os.path.dirname(__file__), '..', 'config'))
    return os.path.abspath(os.path.join(base, 'config.json'))


class ConfigStore:
    def __init__(self, path: Optional[str] = None):
        self.path = path or default_config_path()

    def load(self) -> AppConfig:
        if not os.path.exists(self.path):
            cfg = AppConfig()
            try:
                self.save(cfg)
            except ConfigError:
                logger.warning("Could not create default config at %s", self.path)
            return cfg
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return AppConfig.from_dict(json.load(f))
        except (OSError, ValueError):
            logger.warning("Unreadable config at %s; using defaults", self.path, exc_info=True)
            return AppConfig()

    def save(self, cfg: AppConfig) -> None:
        tmp = self.path + '.tmp'
        try:
            os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(cfg.to_dict(), f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}") from e
        finally:
            if os.path.exists(tmp):
                try:
                    os.remove(tmp)
                except OSError:
                    pass
