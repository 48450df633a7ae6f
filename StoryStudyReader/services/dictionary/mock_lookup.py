"""Offline dictionary backend built on the sample story vocabulary."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from StoryStudyReader.core.errors import LookupFailure
from StoryStudyReader.core.models import Definition
from StoryStudyReader.services.story.sample_story import SAMPLE_VOCABULARY


class MockDefinitionLookup:
    def __init__(self, vocabulary: Optional[Dict[str, Tuple[str, str]]] = None):
        self.vocabulary = dict(SAMPLE_VOCABULARY if vocabulary is None else vocabulary)

    def _match(self, word: str) -> Optional[str]:
        if word in self.vocabulary:
            return word
        # Longest whole entry the word starts with, then conjugated forms
        # compared against the dictionary form minus its last kana.
        prefixed = [k for k in self.vocabulary if word.startswith(k)]
        if not prefixed:
            prefixed = [k for k in self.vocabulary if len(k) > 1 and word.startswith(k[:-1])]
        return max(prefixed, key=len) if prefixed else None

    def __call__(self, word: str) -> Definition:
        key = self._match(word)
        if key is None:
            raise LookupFailure(f'{word!r} is not in the offline vocabulary')
        reading, meaning = self.vocabulary[key]
        return Definition(reading=reading, meaning=meaning)
