"""Story generation via the OpenAI chat-completions API."""
from __future__ import annotations

import logging

from StoryStudyReader.core.config import StoryServiceConfig
from StoryStudyReader.core.errors import AuthFailure, FormatFailure
from StoryStudyReader.core.models import Story
from StoryStudyReader.services.openai_chat import chat_completion, parse_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a Japanese language teacher creating study materials. Generate a Japanese story based on the user's request, along with its English translation.

Your response must be a valid JSON object with this exact structure:
{
  "japanese": "The Japanese story text here",
  "english": "The English translation here"
}

Rules:
- The Japanese story should be appropriate for the requested JLPT level
- Focus on useful vocabulary and grammar patterns
- Keep stories engaging but educational
- Make the story substantial with rich vocabulary"""


class OpenAIStoryService:
    def __init__(self, api_key: str, cfg: StoryServiceConfig | None = None):
        self.api_key = api_key
        self.cfg = cfg or StoryServiceConfig()

    def generate(self, prompt: str) -> Story:
        """Generate a story for `prompt`. Raises a StoryGenerationError subclass on failure."""
        if not self.api_key:
            raise AuthFailure('No API key configured')
        messages = [
            {'role': 'system', 'content': SYSTEM_PROMPT},
            {'role': 'user', 'content': prompt},
        ]
        content = chat_completion(
            self.api_key, messages,
            model=self.cfg.model, temperature=self.cfg.temperature, max_tokens=self.cfg.max_tokens,
            base_url=self.cfg.base_url, timeout=self.cfg.timeout,
        )
        obj = parse_json_object(content)
        japanese, english = obj.get('japanese'), obj.get('english')
        if not isinstance(japanese, str) or not isinstance(english, str) or not japanese.strip():
            raise FormatFailure('Missing "japanese"/"english" fields')
        logger.info('Generated story (%d chars)', len(japanese))
        return Story(source_text=japanese.strip(), translated_text=english.strip())
