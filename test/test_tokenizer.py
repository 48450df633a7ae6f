import sys
from pathlib import Path

# Add the project root (one level up from 'test') to sys.path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from StoryStudyReader.services.segmentation.tokenizer import (
    MARK, PARTICLES, char_class, extract_candidates, is_in_script, unique_surface_forms,
)


def _surfaces(text, particles=None):
    return [s.surface_form for s in extract_candidates(text, particles)]


def test_particles_and_punctuation_are_excluded():
    spans = extract_candidates("猫が好きです。", PARTICLES)
    assert [s.surface_form for s in spans] == ["猫", "好き"]
    assert [(s.start, s.end) for s in spans] == [(0, 1), (2, 4)]


def test_no_script_characters_yields_nothing():
    assert extract_candidates("Hello, world! 123", PARTICLES) == []
    assert extract_candidates("", PARTICLES) == []


def test_run_that_is_only_a_particle_is_dropped():
    assert _surfaces("が。は、です") == []


def test_sentence_splits_at_content_word_boundaries():
    text = "田中という名前の若い日本人観光客がローマを訪れた。"
    assert _surfaces(text) == ["田中", "名前", "若い", "日本人観光客", "ローマ", "訪れた"]


def test_duplicates_are_kept_as_separate_spans():
    spans = extract_candidates("猫と猫", PARTICLES)
    assert [(s.surface_form, s.start) for s in spans] == [("猫", 0), ("猫", 2)]
    assert unique_surface_forms(spans) == ["猫"]


def test_iteration_and_prolonged_marks_stay_in_the_word():
    assert _surfaces("昔々、") == ["昔々"]
    assert _surfaces("コーヒー") == ["コーヒー"]


def test_custom_particle_set_is_honoured():
    assert _surfaces("猫が好きです", {"です"}) == ["猫が", "好き"]
    assert _surfaces("猫が好きです", set()) == ["猫が", "好きです"]


def test_char_classes():
    assert char_class("ー") == MARK
    assert char_class("・") is None
    assert char_class("。") is None
    assert is_in_script("漢") and is_in_script("か") and is_in_script("カ")
    assert not is_in_script("a")


def test_spans_are_nonempty_contained_and_never_particles():
    texts = [
        "猫が好きです。",
        "昔々、ローマという美しい都市があった。その都市は古代から続く歴史と文化で有名だった。",
        "「こんなに壮大な建物を見たのは初めてだ」と彼は思った。\nABC では、また。",
        "ではでは、からまで",
    ]
    particle_sets = [PARTICLES, {"の", "は"}, set()]
    for text in texts:
        for particles in particle_sets:
            for span in extract_candidates(text, particles):
                assert span.surface_form
                assert 0 <= span.start < span.end <= len(text)
                assert text[span.start:span.end] == span.surface_form
                assert span.surface_form not in particles
                assert all(is_in_script(ch) for ch in span.surface_form)
