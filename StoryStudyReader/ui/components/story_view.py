from __future__ import annotations
from typing import Optional

from PyQt6.QtCore import QEvent, QPoint, Qt, pyqtSignal
from PyQt6.QtWidgets import QTextBrowser, QWidget

from StoryStudyReader.services.layout.popup_placement import POINTER, normalize_point
from StoryStudyReader.services.segmentation.annotator import word_from_href

WORD_STYLE = """
a.clickable-word { color: #1a1a1a; text-decoration: none; }
.story { font-size: 18pt; line-height: 160%; }
"""


class StoryView(QTextBrowser):
    """Read-only story display.

    The whole document is re-rendered from session markup on every language
    toggle. Clicking or tapping an interactive word emits
    `wordActivated(word, x, y)` with the point in window coordinates.
    """
    wordActivated = pyqtSignal(str, float, float)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setOpenLinks(False)
        self.setOpenExternalLinks(False)
        self.document().setDefaultStyleSheet(WORD_STYLE)
        self.viewport().setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self._interactive = False

    def setStory(self, markup: str, interactive: bool):
        self._interactive = interactive
        self.setHtml(f'<div class="story">{markup}</div>')

    def wordAt(self, pos: QPoint) -> Optional[str]:
        """Word under a viewport position, or None (always None in the translated view)."""
        if not self._interactive:
            return None
        return word_from_href(self.anchorAt(pos))

    def _emitWord(self, word: str, viewport_pos: QPoint):
        win_pos = self.viewport().mapTo(self.window(), viewport_pos)
        self.wordActivated.emit(word, float(win_pos.x()), float(win_pos.y()))

    def mouseReleaseEvent(self, event):  # noqa: D401 - Qt override
        if event.button() == Qt.MouseButton.LeftButton:
            p = event.position()
            pt = normalize_point(p.x(), p.y(), POINTER)
            pos = QPoint(int(pt.x), int(pt.y))
            word = self.wordAt(pos)
            if word:
                event.accept()
                self._emitWord(word, pos)
                return
        super().mouseReleaseEvent(event)

    def _touchPos(self, event) -> QPoint:
        # Touch points reach viewportEvent already relative to the viewport,
        # the same space anchorAt() expects.
        vp = event.points()[0].position()
        pt = normalize_point(vp.x(), vp.y(), POINTER)
        return QPoint(int(pt.x), int(pt.y))

    def viewportEvent(self, event):
        etype = event.type()
        if etype in (QEvent.Type.TouchBegin, QEvent.Type.TouchEnd) and event.points():
            pos = self._touchPos(event)
            word = self.wordAt(pos)
            if word:
                event.accept()
                if etype == QEvent.Type.TouchEnd:
                    self._emitWord(word, pos)
                return True
        return super().viewportEvent(event)
