"""Popup placement.

Computes where a word popup goes so it stays inside the viewport. The box is
centred horizontally on the trigger point and sits above it; if that clips
the top edge it flips below the trigger, and if that clips the bottom edge it
is centred vertically. All coordinates are viewport-relative; callers convert
touch (page) coordinates with `normalize_point` first.
"""
from __future__ import annotations
from dataclasses import dataclass

DEFAULT_MARGIN = 20

POINTER = 'pointer'
TOUCH = 'touch'


@dataclass(frozen=True)
class Point:
    x: float
    y: float

@dataclass(frozen=True)
class Size:
    width: float
    height: float

@dataclass(frozen=True)
class Placement:
    top: float
    left: float


def normalize_point(x: float, y: float, source: str = POINTER, scroll_x: float = 0, scroll_y: float = 0) -> Point:
    """Convert an event position to viewport coordinates.

    Pointer positions are already viewport-relative. Touch positions are
    page-relative and get the current scroll offset subtracted.
    """
    if source == TOUCH:
        return Point(x - scroll_x, y - scroll_y)
    if source != POINTER:
        raise ValueError(f"Unknown event source: {source}")
    return Point(x, y)


def place(trigger: Point, content: Size, viewport: Size, margin: float = DEFAULT_MARGIN) -> Placement:
    left = trigger.x - content.width / 2
    top = trigger.y - content.height - margin

    # Horizontal: keep the right edge inside, then the left edge.
    if left + content.width > viewport.width - margin:
        left = viewport.width - content.width - margin
    if left < margin:
        left = margin

    # Vertical: above -> below -> centred.
    if top < margin:
        top = trigger.y + margin
    if top + content.height > viewport.height - margin:
        top = max(margin, (viewport.height - content.height) / 2)

    return Placement(top=top, left=left)
