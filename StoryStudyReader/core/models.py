"""Core data model.

Plain dataclasses shared by the segmentation, dictionary, story and layout
services. No operational logic lives here.
"""
from __future__ import annotations
from dataclasses import dataclass


# ---- Story ----
@dataclass(frozen=True)
class Story:
    source_text: str  # Japanese
    translated_text: str  # English


# ---- Segmentation ----
@dataclass(frozen=True)
class WordSpan:
    surface_form: str
    start: int  # inclusive char offset
    end: int    # exclusive char offset

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Segment:
    text: str
    interactive: bool = False


# ---- Dictionary ----
@dataclass(frozen=True)
class Definition:
    reading: str
    meaning: str
    available: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "Definition":
        return cls(reading=str(data.get('reading') or '').strip(), meaning=str(data.get('meaning') or '').strip())


# Placeholder shown when a lookup fails.
UNAVAILABLE = Definition(reading="?", meaning="Definition unavailable", available=False)
