from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


def qualified_type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


@dataclass(frozen=True)
class ViewModelEntry:
    name: str
    factory: Callable[[], Any]
    view_model_type: Optional[type] = None


class ViewModelRegistry:
    """In-process registry resolving view-model names to fresh instances."""

    def __init__(self) -> None:
        self._entries: Dict[str, ViewModelEntry] = {}
        self._names_by_type: Dict[type, str] = {}

    def register(self, name: str, factory: Callable[[], Any]) -> None:
        view_model_type = factory if isinstance(factory, type) else None
        self._entries[name] = ViewModelEntry(name=name, factory=factory, view_model_type=view_model_type)
        if view_model_type is not None:
            self._names_by_type[view_model_type] = name

    def unregister(self, name: str) -> None:
        entry = self._entries.pop(name, None)
        if entry and entry.view_model_type is not None:
            self._names_by_type.pop(entry.view_model_type, None)

    def list_names(self) -> List[str]:
        return list(self._entries.keys())

    def resolve(self, name: str) -> Optional[Any]:
        entry = self._entries.get(name)
        if not entry:
            return None
        return entry.factory()

    def type_name(self, cls: type) -> str:
        return self._names_by_type.get(cls) or qualified_type_name(cls)


class ViewRegistry:
    """In-process registry resolving view names to view types."""

    def __init__(self) -> None:
        self._types: Dict[str, type] = {}

    def register(self, name: str, view_type: type) -> None:
        self._types[name] = view_type

    def unregister(self, name: str) -> None:
        self._types.pop(name, None)

    def list_names(self) -> List[str]:
        return list(self._types.keys())

    def resolve(self, view_name: str) -> Optional[type]:
        return self._types.get(view_name)

    def type_name(self, cls: type) -> str:
        for name, view_type in self._types.items():
            if view_type is cls:
                return name
        return qualified_type_name(cls)
