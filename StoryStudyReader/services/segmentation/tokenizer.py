"""Heuristic tokenizer for unsegmented Japanese text.

Not a morphological analyser. Text is scanned for maximal runs of Japanese
script (kanji, hiragana, katakana and their iteration/prolonged marks). Each
run is cut wherever hiragana is followed by kanji or katakana, since that is
where a new content word usually starts, and grammatical particles are
peeled off the end of every piece. What is left are the candidate words.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from StoryStudyReader.core.models import WordSpan

logger = logging.getLogger(__name__)

PARTICLES = frozenset([
    'は', 'が', 'を', 'に', 'で', 'と', 'も', 'の', 'から', 'まで', 'より', 'へ',
    'や', 'か', 'よ', 'ね', 'わ', 'さ', 'ぞ', 'ぜ', 'な', 'だ', 'である',
    'です', 'ます', 'だっ', 'であっ', 'という', 'といった',
])

KANJI = 'kanji'
HIRAGANA = 'hiragana'
KATAKANA = 'katakana'
MARK = 'mark'  # takes the class of the previous character

_KANJI_MARKS = '々〆ヶ'
_PROLONG_MARKS = 'ーゝゞヽヾ'


def char_class(ch: str) -> Optional[str]:
    """Return the script class of `ch`, or None when it is not Japanese script."""
    if ch in _KANJI_MARKS:
        return KANJI
    if ch in _PROLONG_MARKS:
        return MARK
    cp = ord(ch)
    if 0x4E00 <= cp <= 0x9FFF or 0x3400 <= cp <= 0x4DBF or 0xF900 <= cp <= 0xFAFF:
        return KANJI
    if 0x3041 <= cp <= 0x3096:
        return HIRAGANA
    if 0x30A1 <= cp <= 0x30FA or 0xFF66 <= cp <= 0xFF9D:
        return KATAKANA
    return None


def is_in_script(ch: str) -> bool:
    return char_class(ch) is not None


def iter_runs(text: str) -> Iterator[Tuple[int, List[str]]]:
    """Yield (start, classes) for every maximal run of in-script characters."""
    start = None
    classes: List[str] = []
    for i, ch in enumerate(text):
        cls = char_class(ch)
        if cls is None:
            if start is not None:
                yield start, classes
            start, classes = None, []
            continue
        if start is None:
            start = i
        if cls == MARK:
            cls = classes[-1] if classes else KATAKANA
        classes.append(cls)
    if start is not None:
        yield start, classes


def _split_points(classes: List[str]) -> List[int]:
    cuts = [0]
    for i in range(1, len(classes)):
        if classes[i - 1] == HIRAGANA and classes[i] != HIRAGANA:
            cuts.append(i)
    cuts.append(len(classes))
    return cuts


def _strip_trailing(chunk: str, ordered: List[str]) -> int:
    """Return the end index of `chunk` once trailing particles are removed."""
    end = len(chunk)
    while True:
        for p in ordered:
            if len(p) < end and chunk.endswith(p, 0, end):
                end -= len(p)
                break
        else:
            return end


def extract_candidates(text: str, particles: Optional[Iterable[str]] = None) -> List[WordSpan]:
    """Extract candidate word spans from `text` in left-to-right order.

    Duplicates are kept as separate spans. A piece whose whole text is a
    particle is dropped; particles inside a word are left alone unless they
    end it.
    """
    if not text:
        return []
    pset = PARTICLES if particles is None else frozenset(p for p in particles if p)
    ordered = sorted(pset, key=len, reverse=True)
    spans: List[WordSpan] = []
    for run_start, classes in iter_runs(text):
        cuts = _split_points(classes)
        for a, b in zip(cuts, cuts[1:]):
            chunk = text[run_start + a:run_start + b]
            end = _strip_trailing(chunk, ordered)
            surface = chunk[:end]
            if not surface or surface in pset:
                continue
            spans.append(WordSpan(surface, run_start + a, run_start + a + end))
    logger.debug("Extracted %d candidate spans", len(spans))
    return spans


def unique_surface_forms(spans: Iterable[WordSpan]) -> List[str]:
    """Surface forms in order of first appearance, without duplicates."""
    seen = set()
    out: List[str] = []
    for s in spans:
        if s.surface_form not in seen:
            seen.add(s.surface_form)
            out.append(s.surface_form)
    return out
