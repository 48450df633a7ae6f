"""LLM dictionary backend: asks the chat model for a word's reading and meaning."""
from __future__ import annotations

import logging

from StoryStudyReader.core.config import DictionaryConfig
from StoryStudyReader.core.errors import LookupFailure, StoryGenerationError
from StoryStudyReader.core.models import Definition
from StoryStudyReader.services.openai_chat import chat_completion, parse_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a Japanese language teacher. Provide the reading and meaning for a Japanese word.

Your response must be a valid JSON object with this exact structure:
{
  "reading": "hiragana reading",
  "meaning": "English meaning"
}

If the word is conjugated, provide the dictionary form information."""


class OpenAIDefinitionLookup:
    def __init__(self, api_key: str, cfg: DictionaryConfig | None = None):
        self.api_key = api_key
        self.cfg = cfg or DictionaryConfig()

    def __call__(self, word: str) -> Definition:
        if not self.api_key:
            raise LookupFailure('API key needed to look up word definitions')
        messages = [
            {'role': 'system', 'content': SYSTEM_PROMPT},
            {'role': 'user', 'content': f'What is the reading and meaning of this Japanese word: {word}'},
        ]
        try:
            content = chat_completion(
                self.api_key, messages,
                model=self.cfg.model, temperature=self.cfg.temperature, max_tokens=self.cfg.max_tokens,
                base_url=self.cfg.base_url, timeout=self.cfg.timeout,
            )
            obj = parse_json_object(content)
        except StoryGenerationError as e:
            raise LookupFailure(f'{e.category}: {e}') from e
        definition = Definition.from_dict(obj)
        if not definition.meaning:
            raise LookupFailure(f'No meaning in model output for {word!r}')
        return definition
