import sys
from pathlib import Path

# Add the project root (one level up from 'test') to sys.path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import json

import pytest

from StoryStudyReader.core.config import AppConfig, ConfigStore, DictionaryConfig, StoryServiceConfig, default_config_path, load_env_file
from StoryStudyReader.core.errors import ConfigError
from StoryStudyReader.services import dictionary, story


def test_load_creates_default_file(tmp_path):
    path = tmp_path / "config" / "config.json"
    cfg = ConfigStore(str(path)).load()
    assert cfg == AppConfig()
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8"))["popup"]["margin"] == 20


def test_save_then_load_keeps_key_and_prompt(tmp_path):
    store = ConfigStore(str(tmp_path / "config.json"))
    cfg = AppConfig(api_key="sk-abc", last_prompt="N5 猫の話")
    cfg.dictionary.provider = "jisho"
    store.save(cfg)
    loaded = store.load()
    assert loaded.api_key == "sk-abc"
    assert loaded.last_prompt == "N5 猫の話"
    assert loaded.dictionary.provider == "jisho"
    assert not (tmp_path / "config.json.tmp").exists()


def test_unknown_keys_and_bad_sections_fall_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "story": {"model": "gpt-4o", "colour": "blue"},
        "popup": "wide",
        "api_key": None,
    }), encoding="utf-8")
    cfg = ConfigStore(str(path)).load()
    assert cfg.story.model == "gpt-4o"
    assert cfg.popup.margin == 20
    assert cfg.api_key == ""


def test_unreadable_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert ConfigStore(str(path)).load() == AppConfig()


def test_save_failure_raises_config_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigStore(str(blocker / "config.json")).save(AppConfig())


def test_env_overrides_config_path(monkeypatch, tmp_path):
    target = tmp_path / "elsewhere.json"
    monkeypatch.setenv("STORY_READER_CONFIG", str(target))
    assert default_config_path() == str(target)
    assert ConfigStore().path == str(target)


def test_env_file_selects_backends(monkeypatch, tmp_path):
    for name in ("STORY_BACKEND", "DICTIONARY_BACKEND"):
        # Recorded so the values loaded from the file are undone afterwards.
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    env = tmp_path / ".env"
    env.write_text("STORY_BACKEND=mock\nDICTIONARY_BACKEND=jisho\n", encoding="utf-8")
    assert load_env_file(str(env))
    assert story.story_backend_name(StoryServiceConfig()) == "mock"
    assert not dictionary.requires_api_key(DictionaryConfig())


def test_shell_environment_wins_over_env_file(monkeypatch, tmp_path):
    monkeypatch.setenv("STORY_BACKEND", "openai")
    env = tmp_path / ".env"
    env.write_text("STORY_BACKEND=mock\n", encoding="utf-8")
    load_env_file(str(env))
    assert story.story_backend_name(StoryServiceConfig()) == "openai"
