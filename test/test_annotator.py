import sys
from pathlib import Path

# Add the project root (one level up from 'test') to sys.path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import re

from StoryStudyReader.core.models import Segment
from StoryStudyReader.services.segmentation.annotator import (
    annotate, build_segments, count_interactive, render_plain, word_from_href,
)
from StoryStudyReader.services.segmentation.tokenizer import PARTICLES, extract_candidates


def _words(markup):
    return re.findall(r'data-word="([^"]+)"', markup)


def test_longest_candidate_wins():
    markup = annotate("東京都", ["東京", "京"])
    assert _words(markup) == ["東京"]
    assert count_interactive(markup) == 1
    assert markup.endswith("</a>都")


def test_segments_are_ordered():
    assert build_segments("東京都", ["京", "東京"]) == [Segment("東京", True), Segment("都", False)]


def test_longer_overlapping_candidate_wins_even_when_it_starts_later():
    markup = annotate("東京都府", ["東京", "京都府"])
    assert _words(markup) == ["京都府"]
    assert markup.startswith("東<a ")
    assert build_segments("東京都府", ["東京", "京都府"]) == [Segment("東", False), Segment("京都府", True)]


def test_shorter_candidate_still_wraps_where_it_does_not_overlap():
    markup = annotate("東京都府と東京", ["東京", "京都府"])
    assert _words(markup) == ["京都府", "東京"]


def test_end_to_end_sentence():
    text = "猫が好きです。"
    markup = annotate(text, extract_candidates(text, PARTICLES))
    assert _words(markup) == ["猫", "好き"]
    assert count_interactive(markup) == 2
    assert markup.endswith("です。")


def test_every_occurrence_is_wrapped():
    assert count_interactive(annotate("猫と猫", ["猫"])) == 2


def test_annotating_twice_does_not_double_wrap():
    text = "昔々、ローマという美しい都市があった。\n田中という名前の若い日本人観光客がローマを訪れた。"
    spans = extract_candidates(text, PARTICLES)
    once = annotate(text, spans)
    twice = annotate(once, spans)
    assert twice == once
    assert count_interactive(twice) == count_interactive(once)


def test_line_breaks_are_converted_after_wrapping():
    markup = annotate("猫\n犬", ["猫", "犬"])
    assert "\n" not in markup
    assert _words(markup) == ["猫", "犬"]
    assert "</a><br><a " in markup


def test_plain_text_is_escaped_once():
    markup = annotate("a<b & c &amp; 猫", ["猫"])
    assert markup.startswith("a&lt;b &amp; c &amp; ")
    assert annotate(markup, ["猫"]) == markup


def test_href_carries_the_word():
    markup = annotate("好き", ["好き"])
    href = re.search(r'href="([^"]+)"', markup).group(1)
    assert word_from_href(href) == "好き"
    assert word_from_href("https://example.com") is None
    assert word_from_href("") is None


def test_translated_view_has_no_interactive_words():
    out = render_plain("Long ago,\nthere was a city.")
    assert out == "Long ago,<br>there was a city."
    assert count_interactive(out) == 0
