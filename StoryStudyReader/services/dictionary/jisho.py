"""Jisho dictionary.
HTTP client to query the Jisho API for word definitions, plus the lookup
backend that turns the first search hit into a reading/meaning pair.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from StoryStudyReader.core.errors import LookupFailure
from StoryStudyReader.core.models import Definition

logger = logging.getLogger(__name__)

JISHO_SEARCH_URL = 'https://jisho.org/api/v1/search/words'


class JishoClient:
    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def search_jisho(self, keyword: str) -> dict:
        """
        Query Jisho.org API for a word. Returns parsed JSON response or error info.
        """
        if not isinstance(keyword, str):
            return {'error': 'Input must be a string'}
        keyword = keyword.strip()
        if not keyword:
            return {'error': 'Keyword is empty'}
        url = f'{JISHO_SEARCH_URL}?keyword={requests.utils.quote(keyword)}'
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            return {'error': str(e)}


def compact_jisho_item(item: Dict) -> Dict:
    """Return a compact representation of a Jisho API item: slug, readings, senses."""
    slug = item.get('slug') or item.get('word') or ''
    compact: Dict = {'slug': slug}

    jap = []
    seen_j = set()
    for j in item.get('japanese', []) if isinstance(item.get('japanese', []), list) else []:
        if not isinstance(j, dict):
            continue
        key = (j.get('word') or '', j.get('reading') or '')
        if key in seen_j:
            continue
        seen_j.add(key)
        jap.append({'word': j.get('word'), 'reading': j.get('reading')})
    compact['japanese'] = jap

    senses = []
    seen_s = set()
    for s in item.get('senses', []) if isinstance(item.get('senses', []), list) else []:
        defs = [d.strip() for d in (s.get('english_definitions') or []) if isinstance(d, str) and d.strip()]
        norm = tuple(defs)
        if not defs or norm in seen_s:
            continue
        seen_s.add(norm)
        senses.append(defs)
    compact['senses'] = senses
    return compact


def jisho_to_definition(result: dict, max_senses: int = 3) -> Definition:
    """Build a Definition from the first hit of a Jisho search response."""
    if not isinstance(result, dict):
        raise LookupFailure('Unexpected result format')
    if result.get('error'):
        raise LookupFailure(result['error'])
    status = result.get('meta', {}).get('status')
    if status != 200:
        raise LookupFailure(f'API Error: Status {status}')
    data = result.get('data') or []
    if not data:
        raise LookupFailure('No results found')

    main = compact_jisho_item(data[0])
    reading = next((j['reading'] for j in main['japanese'] if j.get('reading')), '') or main['slug']
    meaning = '; '.join(', '.join(defs) for defs in main['senses'][:max_senses])
    if not meaning:
        raise LookupFailure('No meanings available')
    return Definition(reading=reading, meaning=meaning)


class JishoLookup:
    """Lookup backend: word -> Definition via Jisho.org (no API key needed)."""

    def __init__(self, client: Optional[JishoClient] = None, max_senses: int = 3):
        self.client = client or JishoClient()
        self.max_senses = max_senses

    def __call__(self, word: str) -> Definition:
        logger.info("Jisho lookup for %r", word)
        return jisho_to_definition(self.client.search_jisho(word), self.max_senses)
