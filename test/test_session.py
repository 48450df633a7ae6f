import sys
from pathlib import Path

# Add the project root (one level up from 'test') to sys.path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from StoryStudyReader.core.errors import MissingInput
from StoryStudyReader.core.models import Story
from StoryStudyReader.core.session import LanguageMode, ReaderSession
from StoryStudyReader.services.dictionary.mock_lookup import MockDefinitionLookup
from StoryStudyReader.services.dictionary.resolver import DefinitionResolver
from StoryStudyReader.services.segmentation.annotator import count_interactive
from StoryStudyReader.services.story import MockStoryService


def _session(text="猫が好きです。", translation="I like cats."):
    lookup = MockDefinitionLookup({"猫": ("ねこ", "cat"), "好き": ("すき", "liked")})
    session = ReaderSession(DefinitionResolver(lookup))
    session.load_story(Story(text, translation))
    return session


def test_validate_request():
    with pytest.raises(MissingInput, match="API key"):
        ReaderSession.validate_request("a story", "  ")
    with pytest.raises(MissingInput, match="story prompt"):
        ReaderSession.validate_request("   ", "sk-test")
    assert ReaderSession.validate_request(" N5 story ", " sk-test ") == ("N5 story", "sk-test")
    assert ReaderSession.validate_request("N5 story", "", require_key=False) == ("N5 story", "")


def test_load_story_renders_source_view():
    session = _session()
    assert session.interactive_words() == ["猫", "好き"]
    assert session.state.language is LanguageMode.SOURCE
    assert count_interactive(session.render()) == 2
    assert session.toggle_label() == "Show English"


def test_toggle_language_swaps_views():
    session = _session()
    assert session.toggle_language() is LanguageMode.TRANSLATED
    assert not session.interactive
    assert session.render() == "I like cats."
    assert session.toggle_label() == "Show Japanese"
    assert session.toggle_language() is LanguageMode.SOURCE
    assert count_interactive(session.render()) == 2


def test_render_without_story_is_empty():
    session = ReaderSession(DefinitionResolver(MockDefinitionLookup()))
    assert not session.has_story
    assert session.render() == ""


def test_definition_is_shown_for_the_active_request():
    session = _session()
    token, cached = session.select_word("猫")
    assert cached is None
    definition = session.resolver.settle("猫", session.resolver.lookup_fn("猫"))
    assert session.apply_definition(token, "猫")
    assert session.copy_text() == "猫 (ねこ): cat"
    again, cached = session.select_word("猫")
    assert again > token
    assert cached == definition


def test_stale_definitions_are_not_displayed():
    session = _session()
    first, _ = session.select_word("猫")
    second, _ = session.select_word("好き")
    definition = session.resolver.settle("猫", {"reading": "ねこ", "meaning": "cat"})
    assert not session.apply_definition(first, "猫")
    session.dismiss_popup()
    liked = session.resolver.settle("好き", {"reading": "すき", "meaning": "liked"})
    assert not session.apply_definition(second, "好き")
    # Still cached for the next click.
    assert session.resolver.peek("猫") == definition
    assert session.resolver.peek("好き") == liked


def test_answer_for_an_earlier_click_on_the_same_word_is_dropped():
    session = _session()
    first, _ = session.select_word("猫")
    second, _ = session.select_word("猫")
    assert not session.apply_definition(first, "猫")
    assert session.apply_definition(second, "猫")


def test_copy_needs_a_resolved_word():
    session = _session()
    assert session.copy_text() is None
    session.select_word("好き")
    assert session.copy_text() is None


def test_click_outside_dismisses_popup():
    session = _session()
    assert not session.should_dismiss(on_word=False, in_popup=False)
    session.select_word("猫")
    assert not session.should_dismiss(on_word=True, in_popup=False)
    assert not session.should_dismiss(on_word=False, in_popup=True)
    assert session.should_dismiss(on_word=False, in_popup=False)


def test_new_story_resets_display_state():
    session = _session()
    session.toggle_language()
    token, _ = session.select_word("猫")
    session.load_story(MockStoryService().generate("anything"))
    assert session.state.language is LanguageMode.SOURCE
    assert not session.state.popup_visible
    assert session.state.selected_word is None
    assert session.state.request_token == token
    assert "ローマ" in session.interactive_words()
