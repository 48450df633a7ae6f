"""Rewrite story text into rich-text markup with clickable words.

Candidate surface forms claim their occurrences longest first: a form only
gets characters no longer form has already taken. So "東京" wins over a
separate "京", and in "東京都府" the candidate "京都府" wins over "東京".
The claimed spans are then emitted in text order. Plain stretches are HTML
escaped and line breaks become `<br>` only after wrapping.

Anchors and `<br>` markers already present in the input are copied through
unchanged, which makes annotating the output a second time a no-op.
"""
from __future__ import annotations

import html
import re
from typing import Dict, Iterable, List, Union
from urllib.parse import quote, unquote

from StoryStudyReader.core.models import Segment, WordSpan

WORD_CLASS = "clickable-word"
HREF_SCHEME = "word:"

_MARKUP_RE = re.compile(r'<a class="%s"[^>]*>.*?</a>|<br\s*/?>' % WORD_CLASS, re.DOTALL)
_ANCHOR_RE = re.compile(r'<a class="%s"' % WORD_CLASS)
_BARE_AMP_RE = re.compile(r'&(?!#?\w+;)')

Candidate = Union[WordSpan, str]


def _ordered_forms(candidates: Iterable[Candidate]) -> List[str]:
    """Unique surface forms, longest first (ties broken alphabetically)."""
    forms = set()
    for c in candidates:
        form = c.surface_form if isinstance(c, WordSpan) else c
        if form:
            forms.add(form)
    return sorted(forms, key=lambda f: (-len(f), f))


def _claim(text: str, forms: List[str]) -> Dict[int, str]:
    """Map start offset -> form for every occurrence that wins its characters.

    Forms are placed longest first; an occurrence touching a character that a
    longer (or earlier placed) form already owns is skipped.
    """
    taken = [False] * len(text)
    starts: Dict[int, str] = {}
    for form in forms:
        n = len(form)
        i = text.find(form)
        while i != -1:
            if any(taken[i:i + n]):
                i = text.find(form, i + 1)
                continue
            taken[i:i + n] = [True] * n
            starts[i] = form
            i = text.find(form, i + n)
    return starts


def _segments(text: str, forms: List[str]) -> List[Segment]:
    starts = _claim(text, forms)
    segments: List[Segment] = []
    buf: List[str] = []
    i = 0
    while i < len(text):
        match = starts.get(i)
        if match is None:
            buf.append(text[i])
            i += 1
            continue
        if buf:
            segments.append(Segment(''.join(buf)))
            buf = []
        segments.append(Segment(match, True))
        i += len(match)
    if buf:
        segments.append(Segment(''.join(buf)))
    return segments


def build_segments(text: str, candidates: Iterable[Candidate]) -> List[Segment]:
    """Split raw `text` into an ordered list of plain and interactive segments."""
    return _segments(text, _ordered_forms(candidates))


def escape_text(text: str) -> str:
    # Existing entities are kept so escaped output can be fed back in.
    text = _BARE_AMP_RE.sub('&amp;', text)
    return text.replace('<', '&lt;').replace('>', '&gt;')


def _line_breaks(text: str) -> str:
    return text.replace('\r\n', '\n').replace('\n', '<br>')


def word_tag(word: str) -> str:
    attr = html.escape(word, quote=True)
    return f'<a class="{WORD_CLASS}" data-word="{attr}" href="{HREF_SCHEME}{quote(word)}">{attr}</a>'


def render_segments(segments: Iterable[Segment]) -> str:
    out = []
    for seg in segments:
        if seg.interactive:
            out.append(word_tag(seg.text))
        else:
            out.append(_line_breaks(escape_text(seg.text)))
    return ''.join(out)


def annotate(text: str, candidates: Iterable[Candidate]) -> str:
    """Return markup for `text` with every candidate occurrence made clickable."""
    forms = _ordered_forms(candidates)
    out: List[str] = []
    pos = 0
    for m in _MARKUP_RE.finditer(text):
        out.append(render_segments(_segments(text[pos:m.start()], forms)))
        out.append(m.group(0))
        pos = m.end()
    out.append(render_segments(_segments(text[pos:], forms)))
    return ''.join(out)


def render_plain(text: str) -> str:
    """Markup for the translated view: escaped, line breaks kept, nothing clickable."""
    return _line_breaks(escape_text(text))


def word_from_href(href: str) -> str | None:
    if not href or not href.startswith(HREF_SCHEME):
        return None
    word = unquote(href[len(HREF_SCHEME):])
    return word or None


def count_interactive(markup: str) -> int:
    return len(_ANCHOR_RE.findall(markup))
