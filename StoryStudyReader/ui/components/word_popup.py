from __future__ import annotations
import html
from typing import Optional

from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from StoryStudyReader.core.models import Definition
from StoryStudyReader.services.layout.popup_placement import DEFAULT_MARGIN, Point, Size, place


class WordPopup(QFrame):
    """Floating definition bubble shown over the story.

    Lives as a child of the main window so its geometry is in window
    coordinates; `popupAt` measures the box and clamps it with `place()`.
    """
    copyRequested = pyqtSignal()
    closeRequested = pyqtSignal()

    def __init__(self, parent: QWidget, margin: int = DEFAULT_MARGIN):
        super().__init__(parent)
        self.margin = margin
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setStyleSheet("WordPopup{background:#ffffff;border:1px solid #ccc;border-radius:8px}")
        self.setMaximumWidth(360)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)

        header = QHBoxLayout()
        self.wordLabel = QLabel(self)
        self.wordLabel.setStyleSheet('font-size:16pt;font-weight:700')
        self.wordLabel.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        header.addWidget(self.wordLabel, 1)
        self.closeBtn = QPushButton('×', self)
        self.closeBtn.setFlat(True)
        self.closeBtn.setFixedWidth(28)
        header.addWidget(self.closeBtn)
        layout.addLayout(header)

        self.meaningLabel = QLabel(self)
        self.meaningLabel.setTextFormat(Qt.TextFormat.RichText)
        self.meaningLabel.setWordWrap(True)
        self.meaningLabel.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse | Qt.TextInteractionFlag.TextSelectableByKeyboard)
        layout.addWidget(self.meaningLabel)

        self.copyBtn = QPushButton('Copy', self)
        self.copyBtn.setStyleSheet('background:#28a745;color:white;border-radius:4px;padding:4px 10px')
        layout.addWidget(self.copyBtn, 0, Qt.AlignmentFlag.AlignRight)

        self.copyBtn.clicked.connect(self.copyRequested)
        self.closeBtn.clicked.connect(self.closeRequested)
        self._copyLabel = self.copyBtn.text()
        self.hide()

    def showLoading(self, word: str):
        self.wordLabel.setText(word)
        self.meaningLabel.setText('<div>📚 Looking up definition...</div>')
        self.copyBtn.setEnabled(False)

    def showDefinition(self, word: str, definition: Definition):
        self.wordLabel.setText(word)
        self.meaningLabel.setText(
            f"<div><b>Reading:</b> {html.escape(definition.reading)}</div>"
            f"<div><b>Meaning:</b> {html.escape(definition.meaning)}</div>"
        )
        self.copyBtn.setEnabled(True)

    def popupAt(self, x: float, y: float, viewport: Optional[Size] = None):
        self.adjustSize()
        self.show()
        self.raise_()
        if viewport is None:
            parent = self.parentWidget()
            viewport = Size(parent.width(), parent.height())
        hint = self.sizeHint()
        pos = place(Point(x, y), Size(hint.width(), hint.height()), viewport, self.margin)
        self.move(int(pos.left), int(pos.top))

    def flashCopied(self, ms: int = 1500):
        self.copyBtn.setText('✓ Copied!')
        QTimer.singleShot(ms, lambda: self.copyBtn.setText(self._copyLabel))
