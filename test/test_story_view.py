import sys
from pathlib import Path

# Add the project root (one level up from 'test') to sys.path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtCore import QPoint, QPointF

from StoryStudyReader.ui.components.story_view import StoryView


class FakeTouchPoint:
    def __init__(self, x, y):
        self._pos = QPointF(x, y)

    def position(self):
        return self._pos


class FakeTouchEvent:
    def __init__(self, x, y):
        self._points = [FakeTouchPoint(x, y)]

    def points(self):
        return self._points


@pytest.fixture(scope="module")
def app():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


def test_touch_points_stay_in_viewport_space(app):
    view = StoryView()
    view.resize(200, 100)
    view.setStory("<br>".join(["猫"] * 200), interactive=True)
    view.verticalScrollBar().setValue(view.verticalScrollBar().maximum())
    assert view._touchPos(FakeTouchEvent(10.4, 20.7)) == QPoint(10, 20)
