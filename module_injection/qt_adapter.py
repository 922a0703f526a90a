from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from PyQt6 import QtCore

from .types import MessageBoxResult

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[str, Any, Any], None]


class QtRegionAdapter(QtCore.QObject):
    """Qt-side surface for a region.

    Widgets bind to the signals; user-driven selection goes through
    ``selected_view_model`` and is reported to ``on_selection_changed``
    (normally ``ModuleManager.on_selection_changed``).
    """

    view_model_injected = QtCore.pyqtSignal(object, object)
    view_model_removed = QtCore.pyqtSignal(object)
    cleared = QtCore.pyqtSignal()
    selection_changed = QtCore.pyqtSignal(object, object)

    def __init__(
        self,
        region_name: str,
        on_selection_changed: Optional[SelectionCallback] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.region_name = region_name
        self._on_selection_changed = on_selection_changed
        self._view_models: List[Any] = []
        self._view_types: List[Optional[type]] = []
        self._selected: Any = None

    @property
    def view_models(self) -> List[Any]:
        return list(self._view_models)

    def view_type_for(self, view_model: Any) -> Optional[type]:
        index = self._index_of(view_model)
        return self._view_types[index] if index is not None else None

    @property
    def selected_view_model(self) -> Any:
        return self._selected

    @selected_view_model.setter
    def selected_view_model(self, value: Any) -> None:
        if value is self._selected:
            return
        old = self._selected
        self._selected = value
        self.selection_changed.emit(old, value)
        if self._on_selection_changed is not None:
            self._on_selection_changed(self.region_name, old, value)

    def inject(self, view_model: Any, view_type: Optional[type]) -> None:
        if view_model is None or self._index_of(view_model) is not None:
            return
        self._view_models.append(view_model)
        self._view_types.append(view_type)
        self.view_model_injected.emit(view_model, view_type)

    def remove(self, view_model: Any) -> None:
        index = self._index_of(view_model)
        if index is None:
            return
        del self._view_models[index]
        del self._view_types[index]
        if view_model is self._selected:
            self._selected = None
        self.view_model_removed.emit(view_model)

    def clear(self) -> None:
        self._view_models.clear()
        self._view_types.clear()
        self._selected = None
        self.cleared.emit()

    def _index_of(self, view_model: Any) -> Optional[int]:
        for index, candidate in enumerate(self._view_models):
            if candidate is view_model:
                return index
        return None


class QtWindowRegionAdapter(QtRegionAdapter):
    """Adapter for a modal surface; the first result set sticks."""

    result_set = QtCore.pyqtSignal(object)

    def __init__(
        self,
        region_name: str,
        on_selection_changed: Optional[SelectionCallback] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(region_name, on_selection_changed, parent)
        self._result: Optional[MessageBoxResult] = None

    @property
    def result(self) -> Optional[MessageBoxResult]:
        return self._result

    def set_result(self, result: MessageBoxResult) -> None:
        if self._result is not None:
            logger.debug("window region %s result already set to %s", self.region_name, self._result)
            return
        self._result = MessageBoxResult(result)
        self.result_set.emit(self._result)
