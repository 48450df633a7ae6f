import sys
from pathlib import Path

# Add the project root (one level up from 'test') to sys.path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import pytest

from StoryStudyReader.core.registry import Registry


def test_register_and_create_is_case_insensitive():
    reg = Registry("story")
    reg.register("Mock", lambda n: ("mock", n))
    assert "MOCK" in reg
    assert reg.create(" mock ", 3) == ("mock", 3)
    assert reg.names() == ["mock"]


def test_duplicate_registration_rejected():
    reg = Registry("dictionary")
    reg.register("jisho", object)
    with pytest.raises(ValueError):
        reg.register("JISHO", object)


def test_unknown_backend_lists_supported():
    reg = Registry("dictionary")
    reg.register("jisho", object)
    reg.register("mock", object)
    with pytest.raises(KeyError) as info:
        reg.create("wiktionary")
    assert "jisho, mock" in str(info.value)
