"""Dictionary package: lookup backends, factory and the caching resolver.

`create_lookup(cfg, api_key)` prefers the `DICTIONARY_BACKEND` environment
variable, then `cfg.provider`. Supported backends: openai, jisho, mock.
"""
from __future__ import annotations

import logging
import os

from StoryStudyReader.core.config import DictionaryConfig
from StoryStudyReader.core.registry import DICTIONARY_REGISTRY
from .jisho import JishoLookup
from .mock_lookup import MockDefinitionLookup
from .openai_lookup import OpenAIDefinitionLookup
from .resolver import DefinitionCache, DefinitionResolver

logger = logging.getLogger(__name__)

DICTIONARY_REGISTRY.register('openai', lambda cfg, api_key: OpenAIDefinitionLookup(api_key, cfg))
DICTIONARY_REGISTRY.register('jisho', lambda cfg, api_key: JishoLookup(max_senses=3))
DICTIONARY_REGISTRY.register('mock', lambda cfg, api_key: MockDefinitionLookup())

_KEYLESS = {'jisho', 'mock'}


def dictionary_backend_name(cfg: DictionaryConfig) -> str:
    be = os.getenv('DICTIONARY_BACKEND')
    if be:
        return be.strip().lower()
    return (cfg.provider or 'openai').strip().lower()


def requires_api_key(cfg: DictionaryConfig) -> bool:
    return dictionary_backend_name(cfg) not in _KEYLESS


def create_lookup(cfg: DictionaryConfig | None = None, api_key: str = ''):
    cfg = cfg or DictionaryConfig()
    name = dictionary_backend_name(cfg)
    logger.info('Using %s dictionary backend', name)
    return DICTIONARY_REGISTRY.create(name, cfg, api_key)


def create_resolver(cfg: DictionaryConfig | None = None, api_key: str = '') -> DefinitionResolver:
    cfg = cfg or DictionaryConfig()
    return DefinitionResolver(create_lookup(cfg, api_key), cache_failures=cfg.cache_failures)


__all__ = [
    "DefinitionCache",
    "DefinitionResolver",
    "create_lookup",
    "create_resolver",
    "requires_api_key",
]
