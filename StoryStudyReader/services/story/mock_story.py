"""Offline story service returning the built-in sample story."""
from __future__ import annotations

from StoryStudyReader.core.models import Story
from .sample_story import SAMPLE_ENGLISH, SAMPLE_JAPANESE


class MockStoryService:
    def generate(self, prompt: str) -> Story:
        return Story(source_text=SAMPLE_JAPANESE, translated_text=SAMPLE_ENGLISH)
