"""Primary application window.

API key and prompt inputs, story generation, the story view with clickable
words and the floating definition popup. All session state lives in
`ReaderSession`; this module only wires Qt events to it and renders what it
returns. Network work runs in QThread workers whose results come back to the
GUI thread as signals.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QEvent, QObject, Qt, pyqtSlot
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from StoryStudyReader.core.config import AppConfig, ConfigStore
from StoryStudyReader.core.errors import ConfigError, MissingInput
from StoryStudyReader.core.models import Definition, Story
from StoryStudyReader.core.session import ReaderSession
from StoryStudyReader.services import dictionary, story
from StoryStudyReader.services.clipboard import copy_text
from StoryStudyReader.services.segmentation.tokenizer import PARTICLES
from StoryStudyReader.ui.components.async_workers import DefinitionLookupWorker, StoryGenerationWorker, WorkerPool
from StoryStudyReader.ui.components.story_view import StoryView
from StoryStudyReader.ui.components.word_popup import WordPopup

logger = logging.getLogger(__name__)


def show_selectable_message(parent, title, text, icon=QMessageBox.Icon.Information):
    dlg = QMessageBox(parent)
    dlg.setWindowTitle(title)
    dlg.setText(text)
    dlg.setIcon(icon)
    dlg.setStandardButtons(QMessageBox.StandardButton.Ok)
    dlg.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse | Qt.TextInteractionFlag.TextSelectableByKeyboard)
    dlg.activateWindow()
    dlg.exec()

def show_info_message(parent, title, text):
    show_selectable_message(parent, title, text, QMessageBox.Icon.Information)


class MainWindow(QMainWindow):
    """Main application window: inputs on top, story below, popup floating over."""

    def __init__(self, store: Optional[ConfigStore] = None):
        super().__init__()
        self.setWindowTitle("Japanese Story Study")
        self.resize(900, 800)
        self._store = store or ConfigStore()
        self._cfg: AppConfig = self._store.load()
        resolver = dictionary.create_resolver(self._cfg.dictionary, self._cfg.api_key)
        particles = PARTICLES | frozenset(self._cfg.segmentation.extra_particles)
        self.session = ReaderSession(resolver, particles)
        self._workers = WorkerPool()
        self._generating = False
        self._anchor = (0.0, 0.0)
        self._createLayout()
        self._connectSignals()
        QApplication.instance().installEventFilter(self)

    # ----------------------- UI Construction -----------------------
    def _createLayout(self):
        central = QWidget(self)
        layout = QVBoxLayout(central)

        key_row = QHBoxLayout()
        key_row.addWidget(QLabel("OpenAI API key:"))
        self.apiKeyEdit = QLineEdit(central)
        self.apiKeyEdit.setEchoMode(QLineEdit.EchoMode.Password)
        self.apiKeyEdit.setText(self._cfg.api_key)
        key_row.addWidget(self.apiKeyEdit, 1)
        layout.addLayout(key_row)

        self.promptEdit = QPlainTextEdit(central)
        self.promptEdit.setPlaceholderText("e.g. A JLPT N4 story about a trip to Rome (Ctrl+Enter to generate)")
        self.promptEdit.setPlainText(self._cfg.last_prompt)
        self.promptEdit.setMaximumHeight(90)
        layout.addWidget(self.promptEdit)

        btn_row = QHBoxLayout()
        self.generateBtn = QPushButton("Generate Story", central)
        btn_row.addWidget(self.generateBtn)
        self.loadingLabel = QLabel("Generating your story...", central)
        self.loadingLabel.hide()
        btn_row.addWidget(self.loadingLabel)
        btn_row.addStretch(1)
        self.toggleBtn = QPushButton("Show English", central)
        self.toggleBtn.hide()
        btn_row.addWidget(self.toggleBtn)
        layout.addLayout(btn_row)

        self.storyView = StoryView(central)
        self.storyView.hide()
        layout.addWidget(self.storyView, 1)

        self.setCentralWidget(central)
        self.popup = WordPopup(self, margin=self._cfg.popup.margin)

    def _connectSignals(self):
        self.generateBtn.clicked.connect(self._onGenerate)
        self.toggleBtn.clicked.connect(self._onToggleLanguage)
        self.apiKeyEdit.textChanged.connect(self._onApiKeyChanged)
        self.promptEdit.textChanged.connect(self._onPromptChanged)
        self.storyView.wordActivated.connect(self._onWordActivated)
        self.popup.copyRequested.connect(self._onCopy)
        self.popup.closeRequested.connect(self._hidePopup)
        for seq in ("Ctrl+Return", "Ctrl+Enter"):
            sc = QShortcut(QKeySequence(seq), self.promptEdit)
            sc.setContext(Qt.ShortcutContext.WidgetShortcut)
            sc.activated.connect(self._onGenerate)

    # ----------------------- Persisted settings -----------------------
    def _persist(self):
        try:
            self._store.save(self._cfg)
        except ConfigError as e:
            logger.warning("%s", e)

    def _onApiKeyChanged(self, text: str):
        self._cfg.api_key = text
        self._persist()
        self.session.resolver.lookup_fn = dictionary.create_lookup(self._cfg.dictionary, text.strip())

    def _onPromptChanged(self):
        self._cfg.last_prompt = self.promptEdit.toPlainText()
        self._persist()

    # ----------------------- Story generation -----------------------
    def _setLoading(self, loading: bool):
        self._generating = loading
        self.generateBtn.setEnabled(not loading)
        self.loadingLabel.setVisible(loading)
        self.storyView.setVisible(not loading and self.session.has_story)
        self.toggleBtn.setVisible(not loading and self.session.has_story)

    def _onGenerate(self):
        if self._generating:
            return
        try:
            prompt, key = self.session.validate_request(
                self.promptEdit.toPlainText(), self.apiKeyEdit.text(),
                require_key=story.requires_api_key(self._cfg.story),
            )
            service = story.create_story_service(self._cfg.story, key)
        except MissingInput as e:
            show_info_message(self, "Story", str(e))
            return
        except KeyError as e:
            show_selectable_message(self, "Story", str(e), QMessageBox.Icon.Warning)
            return
        self._hidePopup()
        self._setLoading(True)
        worker = StoryGenerationWorker(service, prompt)
        worker.finished.connect(self._onStoryReady)
        worker.failed.connect(self._onStoryFailed)
        worker.done.connect(self._onGenerationDone)
        self._workers.start(worker)

    @pyqtSlot(object)
    def _onStoryReady(self, new_story: Story):
        self.session.load_story(new_story)
        self._renderStory()

    @pyqtSlot(str, str)
    def _onStoryFailed(self, category: str, message: str):
        logger.info("Story generation failed: %s", category)
        show_selectable_message(self, "Story Generation", message, QMessageBox.Icon.Warning)

    @pyqtSlot()
    def _onGenerationDone(self):
        self._setLoading(False)

    # ----------------------- Story display -----------------------
    def _renderStory(self):
        self.storyView.setStory(self.session.render(), self.session.interactive)
        self.toggleBtn.setText(self.session.toggle_label())

    def _onToggleLanguage(self):
        self.session.toggle_language()
        self._renderStory()

    # ----------------------- Word popup -----------------------
    def _showPopup(self):
        self.popup.popupAt(*self._anchor)

    def _hidePopup(self):
        self.session.dismiss_popup()
        self.popup.hide()

    def _onWordActivated(self, word: str, x: float, y: float):
        self._anchor = (x, y)
        token, cached = self.session.select_word(word)
        if cached is not None:
            self.popup.showDefinition(word, cached)
            self._showPopup()
            return
        if dictionary.requires_api_key(self._cfg.dictionary) and not self.apiKeyEdit.text().strip():
            self.session.dismiss_popup()
            show_info_message(self, "Dictionary", "API key needed to look up word definitions")
            return
        self.popup.showLoading(word)
        self._showPopup()
        worker = DefinitionLookupWorker(self.session.resolver.lookup_fn, token, word)
        worker.finished.connect(self._onDefinitionReady)
        worker.failed.connect(self._onDefinitionFailed)
        self._workers.start(worker)

    def _applyDefinition(self, token: int, word: str, definition: Definition):
        if self.session.apply_definition(token, word):
            self.popup.showDefinition(word, definition)
            self._showPopup()

    @pyqtSlot(int, str, object)
    def _onDefinitionReady(self, token: int, word: str, result):
        self._applyDefinition(token, word, self.session.resolver.settle(word, result))

    @pyqtSlot(int, str, str)
    def _onDefinitionFailed(self, token: int, word: str, error: str):
        self._applyDefinition(token, word, self.session.resolver.settle(word, error=error))

    def _onCopy(self):
        text = self.session.copy_text()
        if not text:
            return
        copy_text(text)
        self.popup.flashCopied()

    # ----------------------- Qt overrides -----------------------
    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        # Dismiss the popup on clicks outside it and outside clickable words.
        if event.type() == QEvent.Type.MouseButtonPress and isinstance(obj, QWidget) and obj.window() is self:
            in_popup = obj is self.popup or self.popup.isAncestorOf(obj)
            on_word = obj is self.storyView.viewport() and \
                self.storyView.wordAt(event.position().toPoint()) is not None
            if self.session.should_dismiss(on_word, in_popup):
                self._hidePopup()
        return super().eventFilter(obj, event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self.popup.isVisible():
            self._showPopup()

    def closeEvent(self, event):
        QApplication.instance().removeEventFilter(self)
        self._workers.shutdown()
        super().closeEvent(event)


def create_app_window() -> MainWindow:
    return MainWindow()
