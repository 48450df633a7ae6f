"""Story generation package.

`create_story_service(cfg, api_key)` prefers the `STORY_BACKEND` environment
variable, then `cfg.provider`. Supported backends: openai, mock. Every
service exposes `generate(prompt) -> Story`.
"""
from __future__ import annotations

import logging
import os

from StoryStudyReader.core.config import StoryServiceConfig
from StoryStudyReader.core.registry import STORY_REGISTRY
from .mock_story import MockStoryService
from .openai_story import OpenAIStoryService

logger = logging.getLogger(__name__)

STORY_REGISTRY.register('openai', lambda cfg, api_key: OpenAIStoryService(api_key, cfg))
STORY_REGISTRY.register('mock', lambda cfg, api_key: MockStoryService())

_KEYLESS = {'mock'}


def story_backend_name(cfg: StoryServiceConfig) -> str:
    be = os.getenv('STORY_BACKEND')
    if be:
        return be.strip().lower()
    return (cfg.provider or 'openai').strip().lower()


def requires_api_key(cfg: StoryServiceConfig) -> bool:
    return story_backend_name(cfg) not in _KEYLESS


def create_story_service(cfg: StoryServiceConfig | None = None, api_key: str = ''):
    cfg = cfg or StoryServiceConfig()
    name = story_backend_name(cfg)
    logger.info('Using %s story backend', name)
    return STORY_REGISTRY.create(name, cfg, api_key)


__all__ = ["create_story_service", "requires_api_key", "MockStoryService", "OpenAIStoryService"]
