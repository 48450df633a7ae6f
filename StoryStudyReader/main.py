"""Application entry point launching the PyQt6 story reader.

Environment (a `.env` file in the working directory is loaded first):
  STORY_READER_LOG_LEVEL  logging level (default INFO)
  STORY_READER_CONFIG     path of the JSON config file
  STORY_BACKEND           openai | mock
  DICTIONARY_BACKEND      openai | jisho | mock
"""
from __future__ import annotations

import logging
import os
import sys

try:
    from PyQt6.QtWidgets import QApplication
except Exception as e:  # pragma: no cover - environment guard
    raise RuntimeError("PyQt6 is required to run the UI. Ensure it is installed.") from e

from StoryStudyReader.core.config import load_env_file
from StoryStudyReader.ui.main_window import create_app_window


def configure_logging() -> None:
    level = os.getenv('STORY_READER_LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def main() -> None:
    load_env_file()
    configure_logging()
    app = QApplication(sys.argv)
    win = create_app_window()
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
