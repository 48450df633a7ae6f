"""Minimal OpenAI chat-completions client over requests.

Both the story generator and the LLM dictionary backend ask the model for a
JSON object and read it back from the first choice. HTTP and parsing problems
are mapped onto the story error taxonomy (auth, rate limit, transport, format).
"""
from __future__ import annotations

import json
import logging
import re
from typing import Dict, List

import requests

from StoryStudyReader.core.errors import FormatFailure, TransportFailure, error_for_status

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def chat_completion(api_key: str, messages: List[Dict[str, str]], *, model: str, temperature: float,
                    max_tokens: int, base_url: str, timeout: float) -> str:
    """POST a chat request and return the first choice's message content."""
    url = f"{base_url.rstrip('/')}/chat/completions"
    payload = {
        'model': model,
        'messages': messages,
        'temperature': temperature,
        'max_tokens': max_tokens,
    }
    headers = {'Content-Type': 'application/json', 'Authorization': f'Bearer {api_key}'}
    try:
        resp = requests.post(url, json=payload, headers=headers, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise TransportFailure(f"Request timed out: {e}") from e
    except requests.exceptions.RequestException as e:
        raise TransportFailure(f"Request failed: {e}") from e

    if not resp.ok:
        raise error_for_status(resp.status_code, f"HTTP {resp.status_code}: {resp.reason}")

    try:
        data = resp.json()
        content = data['choices'][0]['message']['content']
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise FormatFailure(f"Unexpected response body: {e}") from e
    if not isinstance(content, str):
        raise FormatFailure("Message content is not text")
    return content


def parse_json_object(content: str) -> dict:
    """Parse model output as a JSON object, tolerating markdown code fences."""
    cleaned = _FENCE_RE.sub('', (content or '').strip())
    if '{' in cleaned and '}' in cleaned:
        cleaned = cleaned[cleaned.index('{'): cleaned.rindex('}') + 1]
    try:
        obj = json.loads(cleaned)
    except ValueError as e:
        logger.debug("Unparseable model output: %r", content)
        raise FormatFailure(f"Model output is not JSON: {e}") from e
    if not isinstance(obj, dict):
        raise FormatFailure("Model output is not a JSON object")
    return obj
