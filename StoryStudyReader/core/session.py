"""Reader session: the single owner of display state.

Holds the current story, which language is shown, the selected word and
whether the popup is up. The UI feeds user actions in and renders whatever
markup the session hands back; nothing here touches Qt.

Each `select_word` call bumps a request token. A definition that arrives
for an older token, or after the popup was dismissed, is cached by the
resolver but not displayed.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from StoryStudyReader.core.errors import MissingInput
from StoryStudyReader.core.models import Definition, Story, WordSpan
from StoryStudyReader.services.clipboard import format_definition
from StoryStudyReader.services.dictionary.resolver import DefinitionResolver
from StoryStudyReader.services.segmentation.annotator import annotate, render_plain
from StoryStudyReader.services.segmentation.tokenizer import PARTICLES, extract_candidates, unique_surface_forms

logger = logging.getLogger(__name__)


class LanguageMode(Enum):
    SOURCE = 'japanese'
    TRANSLATED = 'english'


@dataclass
class DisplayState:
    language: LanguageMode = LanguageMode.SOURCE
    selected_word: Optional[str] = None
    popup_visible: bool = False
    request_token: int = 0


class ReaderSession:
    def __init__(self, resolver: DefinitionResolver, particles: Optional[Iterable[str]] = None):
        self.resolver = resolver
        self.particles = frozenset(particles) if particles is not None else PARTICLES
        self.state = DisplayState()
        self.story: Optional[Story] = None
        self._spans: List[WordSpan] = []
        self._source_markup = ''
        self._translated_markup = ''

    # ----------------------- Story -----------------------
    @staticmethod
    def validate_request(prompt: str, api_key: str, require_key: bool = True) -> Tuple[str, str]:
        """Trim and check the inputs for a generation request before any network call."""
        prompt = (prompt or '').strip()
        api_key = (api_key or '').strip()
        if require_key and not api_key:
            raise MissingInput('Please enter your OpenAI API key')
        if not prompt:
            raise MissingInput('Please enter a story prompt')
        return prompt, api_key

    def load_story(self, story: Story) -> None:
        self._spans = extract_candidates(story.source_text, self.particles)
        self._source_markup = annotate(story.source_text, self._spans)
        self._translated_markup = render_plain(story.translated_text)
        self.story = story
        self.state = DisplayState(request_token=self.state.request_token)
        logger.info('Loaded story with %d candidate spans (%d unique words)',
                    len(self._spans), len(self.interactive_words()))

    @property
    def has_story(self) -> bool:
        return self.story is not None

    @property
    def spans(self) -> List[WordSpan]:
        return list(self._spans)

    def interactive_words(self) -> List[str]:
        return unique_surface_forms(self._spans)

    # ----------------------- Language -----------------------
    def toggle_language(self) -> LanguageMode:
        if self.state.language is LanguageMode.SOURCE:
            self.state.language = LanguageMode.TRANSLATED
        else:
            self.state.language = LanguageMode.SOURCE
        return self.state.language

    @property
    def interactive(self) -> bool:
        """Only the source-language view carries clickable words."""
        return self.state.language is LanguageMode.SOURCE

    def render(self) -> str:
        if not self.has_story:
            return ''
        return self._source_markup if self.interactive else self._translated_markup

    def toggle_label(self) -> str:
        return 'Show English' if self.interactive else 'Show Japanese'

    # ----------------------- Popup -----------------------
    def select_word(self, word: str) -> Tuple[int, Optional[Definition]]:
        """Target the popup at `word`; returns the request token and any cached definition."""
        self.state.request_token += 1
        self.state.selected_word = word
        self.state.popup_visible = True
        return self.state.request_token, self.resolver.peek(word)

    def apply_definition(self, token: int, word: str) -> bool:
        """True when the result for `word` should be shown, False if the popup moved on."""
        st = self.state
        if not st.popup_visible or token != st.request_token or word != st.selected_word:
            logger.debug('Dropping stale definition for %r (token %d, current %d)', word, token, st.request_token)
            return False
        return True

    def dismiss_popup(self) -> None:
        self.state.popup_visible = False

    def should_dismiss(self, on_word: bool, in_popup: bool) -> bool:
        return self.state.popup_visible and not on_word and not in_popup

    def copy_text(self) -> Optional[str]:
        word = self.state.selected_word
        if not word:
            return None
        definition = self.resolver.peek(word)
        if definition is None:
            return None
        return format_definition(word, definition)
