"""Service registry.
Simple factory mapping used to pick story and dictionary backends by name.
"""
from __future__ import annotations
from typing import Dict, Callable, Any

class Registry:
    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._factories: Dict[str, Callable[..., Any]] = {}

    def register(self, name: str, factory: Callable[..., Any]) -> None:
        name = name.strip().lower()
        if name in self._factories:
            raise ValueError(f"{self.kind} factory already registered for {name}")
        self._factories[name] = factory

    def create(self, name: str, *args, **kwargs) -> Any:
        key = name.strip().lower()
        if key not in self._factories:
            raise KeyError(f"Unknown {self.kind} backend '{name}'. Supported: {', '.join(sorted(self._factories))}")
        return self._factories[key](*args, **kwargs)

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name.strip().lower() in self._factories

STORY_REGISTRY = Registry("story")
DICTIONARY_REGISTRY = Registry("dictionary")
