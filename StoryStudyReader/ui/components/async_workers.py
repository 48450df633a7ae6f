from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Callable, List, Tuple

from PyQt6.QtCore import QObject, QThread, pyqtSignal, pyqtSlot

from StoryStudyReader.core.errors import StoryGenerationError

logger = logging.getLogger(__name__)


class StoryGenerationWorker(QObject):
    """Runs `service.generate(prompt)` in a background QThread.

    Emits:
        - finished(story): generated Story
        - failed(category, message): user-facing message for the error category
        - done(): always, after either of the above
    """
    finished = pyqtSignal(object)
    failed = pyqtSignal(str, str)
    done = pyqtSignal()

    def __init__(self, service, prompt: str):
        super().__init__()
        self._service = service
        self._prompt = prompt

    @pyqtSlot()
    def run(self):
        try:
            story = self._service.generate(self._prompt)
        except StoryGenerationError as e:
            logger.warning("Story generation failed (%s): %s", e.category, e)
            self.failed.emit(e.category, e.user_message)
        except Exception:
            logger.exception("Unexpected error generating story")
            self.failed.emit(StoryGenerationError.category, StoryGenerationError.user_message)
        else:
            self.finished.emit(story)
        finally:
            self.done.emit()


class DefinitionLookupWorker(QObject):
    """Calls a blocking lookup function for one word in a background QThread.

    The result is handed back untouched; the resolver settles it on the GUI
    thread so the cache is only ever written from there.
    """
    finished = pyqtSignal(int, str, object)  # token, word, raw result
    failed = pyqtSignal(int, str, str)       # token, word, error message
    done = pyqtSignal()

    def __init__(self, lookup_fn: Callable, token: int, word: str):
        super().__init__()
        self._lookup_fn = lookup_fn
        self._token = token
        self._word = word

    @pyqtSlot()
    def run(self):
        try:
            result = self._lookup_fn(self._word)
            if inspect.iscoroutine(result):
                # No event loop lives in this thread; drive the coroutine here.
                result = asyncio.run(result)
        except Exception as e:
            self.failed.emit(self._token, self._word, str(e))
        else:
            self.finished.emit(self._token, self._word, result)
        finally:
            self.done.emit()


class WorkerPool:
    """Keeps (thread, worker) pairs alive until their threads finish."""

    def __init__(self):
        self._running: List[Tuple[QThread, QObject]] = []

    def start(self, worker: QObject) -> QThread:
        self._running = [(t, w) for t, w in self._running if not t.isFinished()]
        thread = QThread()
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        worker.done.connect(thread.quit)
        thread.finished.connect(worker.deleteLater)
        self._running.append((thread, worker))
        thread.start()
        return thread

    def shutdown(self, timeout_ms: int = 2000) -> None:
        for thread, _ in self._running:
            if thread.isRunning():
                thread.quit()
                thread.wait(timeout_ms)
        self._running = []
