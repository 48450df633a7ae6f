"""Clipboard helpers for copying a word's definition.

`copy_text` writes through the platform clipboard when one is available and
otherwise falls back to selecting the text in a hidden line edit and
issuing a synchronous copy.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from StoryStudyReader.core.models import Definition

logger = logging.getLogger(__name__)

CLIPBOARD = 'clipboard'
FALLBACK = 'fallback'


def format_definition(word: str, definition: Definition) -> str:
    return f"{word} ({definition.reading}): {definition.meaning}"


def _platform_clipboard():
    from PyQt6.QtGui import QGuiApplication
    return QGuiApplication.clipboard()


def select_and_copy(text: str) -> None:
    """Synchronous fallback: put `text` in a hidden line edit, select it, copy."""
    from PyQt6.QtWidgets import QLineEdit
    edit = QLineEdit()
    edit.setText(text)
    edit.selectAll()
    edit.copy()
    edit.deleteLater()


def copy_text(text: str, clipboard=None, fallback: Optional[Callable[[str], None]] = None) -> str:
    """Copy `text`; returns CLIPBOARD or FALLBACK depending on the path taken."""
    try:
        cb = clipboard if clipboard is not None else _platform_clipboard()
        if cb is None:
            raise RuntimeError('No clipboard available')
        cb.setText(text)
        return CLIPBOARD
    except Exception as e:
        logger.error('Failed to copy: %s', e)
    (fallback or select_and_copy)(text)
    return FALLBACK
