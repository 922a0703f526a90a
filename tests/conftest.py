from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from module_injection.locators import ViewModelRegistry, ViewRegistry  # noqa: E402
from module_injection.region import Region  # noqa: E402
from module_injection.serializer import JsonStateSerializer  # noqa: E402
from module_injection.types import MessageBoxResult  # noqa: E402


class NullAdapter:
    """Headless surface: keeps view-models in a list and reports selection."""

    def __init__(
        self,
        region_name: str,
        journal: Optional[List[Tuple[str, str, Any]]] = None,
        on_selection_changed: Optional[Callable[[str, Any, Any], None]] = None,
        label: str = "",
    ) -> None:
        self.region_name = region_name
        self.label = label or region_name
        self.journal = journal if journal is not None else []
        self.on_selection_changed = on_selection_changed
        self._view_models: List[Any] = []
        self.view_types: List[Optional[type]] = []
        self._selected: Any = None
        self._result: Optional[MessageBoxResult] = None

    @property
    def view_models(self) -> List[Any]:
        return list(self._view_models)

    @property
    def selected_view_model(self) -> Any:
        return self._selected

    @selected_view_model.setter
    def selected_view_model(self, value: Any) -> None:
        self.journal.append((self.label, "select", value))
        if value is self._selected:
            return
        old = self._selected
        self._selected = value
        if self.on_selection_changed is not None:
            self.on_selection_changed(self.region_name, old, value)

    def inject(self, view_model: Any, view_type: Optional[type]) -> None:
        self.journal.append((self.label, "inject", view_model))
        if view_model is None or any(vm is view_model for vm in self._view_models):
            return
        self._view_models.append(view_model)
        self.view_types.append(view_type)

    def remove(self, view_model: Any) -> None:
        self.journal.append((self.label, "remove", view_model))
        self._view_models = [vm for vm in self._view_models if vm is not view_model]

    def clear(self) -> None:
        self.journal.append((self.label, "clear", None))
        self._view_models.clear()
        self._selected = None


class NullWindowAdapter(NullAdapter):
    @property
    def result(self) -> Optional[MessageBoxResult]:
        return self._result

    def set_result(self, result: MessageBoxResult) -> None:
        self._result = result


@pytest.fixture()
def journal() -> List[Tuple[str, str, Any]]:
    return []


@pytest.fixture()
def make_adapter(journal):
    def _make(region_name: str = "main", label: str = "", window: bool = False, **kwargs) -> NullAdapter:
        cls = NullWindowAdapter if window else NullAdapter
        return cls(region_name, journal=journal, label=label, **kwargs)

    return _make


@pytest.fixture()
def view_model_locator() -> ViewModelRegistry:
    return ViewModelRegistry()


@pytest.fixture()
def view_locator() -> ViewRegistry:
    return ViewRegistry()


@pytest.fixture()
def serializer() -> JsonStateSerializer:
    return JsonStateSerializer()


@pytest.fixture()
def make_region(view_model_locator, view_locator, serializer):
    def _make(name: str = "main", **kwargs) -> Region:
        return Region(name, view_model_locator, view_locator, serializer, **kwargs)

    return _make
