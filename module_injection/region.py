from __future__ import annotations

import copy
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, TypeVar

from .capabilities import visual_state_services
from .info import RegionInfo, RegionItemVisualInfo, RegionVisualInfo
from .module import Module
from .region_item import RegionItem
from .types import (
    LogicalSerializationMode,
    StateSerializer,
    UIRegion,
    UIWindowRegion,
    ViewLocator,
    ViewModelLocator,
    VisualSerializationMode,
)
from .weak_refs import WeakReferenceManager

logger = logging.getLogger(__name__)

M = TypeVar("M", LogicalSerializationMode, VisualSerializationMode)

_NOTHING_REPORTED = object()


class NavigationState(str, Enum):
    IDLE = "idle"
    PENDING_KEY = "pending_key"
    PENDING_CLEAR = "pending_clear"


class Region:
    """Keeps the items of one named region in sync across its adapters.

    Adapters and realized view-models are held weakly. Anything that must
    reach every adapter walks the live snapshot newest-first, so the most
    recently registered surface reacts before older ones.
    """

    def __init__(
        self,
        name: str,
        view_model_locator: ViewModelLocator,
        view_locator: ViewLocator,
        serializer: StateSerializer,
        *,
        logical_serialization_mode: LogicalSerializationMode = LogicalSerializationMode.ENABLED,
        visual_serialization_mode: VisualSerializationMode = VisualSerializationMode.PER_VIEW_TYPE,
    ) -> None:
        self.name = name
        self._view_model_locator = view_model_locator
        self._view_locator = view_locator
        self._serializer = serializer

        self._items: List[RegionItem] = []
        self._adapters: WeakReferenceManager[UIRegion] = WeakReferenceManager()
        self._selected_key: Optional[str] = None
        self._navigation_state = NavigationState.IDLE
        self._navigation_key: Optional[str] = None
        self._broadcasting = False
        self._broadcast_serial = 0
        self._broadcast_view_model: Any = None
        self._reported_view_model: Any = _NOTHING_REPORTED

        self.logical_serialization_mode = logical_serialization_mode
        self.visual_serialization_mode = visual_serialization_mode
        self._custom_logical_modes: Dict[str, LogicalSerializationMode] = {}
        self._custom_visual_modes: Dict[str, VisualSerializationMode] = {}
        self._visual_state = RegionVisualInfo(region_name=name)
        self._restore_selected_key: Optional[str] = None

    # --- queries ---------------------------------------------------------

    @property
    def ui_regions(self) -> List[UIRegion]:
        return self._adapters.get()

    @property
    def keys(self) -> List[str]:
        return [item.key for item in self._items]

    @property
    def view_models(self) -> List[Any]:
        result = []
        for item in self._items:
            view_model = item.view_model
            if view_model is not None:
                result.append(view_model)
        return result

    @property
    def selected_key(self) -> Optional[str]:
        return self._selected_key

    @property
    def selected_view_model(self) -> Any:
        return self.get_view_model(self._selected_key)

    @property
    def navigation_state(self) -> NavigationState:
        return self._navigation_state

    @property
    def pending_navigation_key(self) -> Optional[str]:
        return self._navigation_key

    def get_key(self, view_model: Any) -> Optional[str]:
        item = self._get_item_by_view_model(view_model)
        return item.key if item else None

    def get_view_model(self, key: Optional[str]) -> Any:
        item = self._get_item(key)
        return item.view_model if item else None

    def contains(self, key: Optional[str]) -> bool:
        return self._get_item(key) is not None

    def get_ui_window_region(self) -> Optional[UIWindowRegion]:
        windows = [adapter for adapter in self.ui_regions if isinstance(adapter, UIWindowRegion)]
        return windows[-1] if windows else None

    # --- adapters --------------------------------------------------------

    def register_adapter(self, adapter: UIRegion) -> None:
        if self._adapters.contains(adapter):
            return
        # Unnamed adapters are accepted; routing by name belongs to the owner.
        adapter_region = getattr(adapter, "region_name", None)
        if adapter_region is not None and adapter_region != self.name:
            logger.warning(
                "region %s ignored adapter registered for region %s", self.name, adapter_region
            )
            return
        for item in self._items:
            item.inject(adapter)
        self._adapters.add(adapter)
        if not self.try_resolve_navigation() and self._selected_key is not None:
            self._broadcast_selection(self.selected_view_model, [adapter])

    def unregister_adapter(self, adapter: UIRegion) -> None:
        if not self._adapters.contains(adapter):
            return
        self._adapters.remove(adapter)

    # --- items -----------------------------------------------------------

    def inject(self, module: Module, parameter: Any = None) -> None:
        if self.contains(module.key):
            logger.warning("region %s already contains key %s; inject ignored", self.name, module.key)
            return
        item = RegionItem.from_module(
            module,
            parameter,
            view_model_locator=self._view_model_locator,
            view_locator=self._view_locator,
            serializer=self._serializer,
        )
        self._items.append(item)
        self._for_each_adapter(item.inject)
        self.try_resolve_navigation()

    def remove(self, key: Optional[str]) -> None:
        item = self._get_item(key)
        if item is None:
            return
        view_model = item.view_model
        if view_model is not None:
            self._for_each_adapter(lambda adapter: adapter.remove(view_model))
        self._items.remove(item)

    def clear(self) -> None:
        self._for_each_adapter(lambda adapter: adapter.clear())
        self._items.clear()
        self._set_idle()
        self._selected_key = None

    # --- navigation ------------------------------------------------------

    def navigate(self, key: Optional[str]) -> bool:
        if key is None:
            self._navigation_state = NavigationState.PENDING_CLEAR
            self._navigation_key = None
        else:
            self._navigation_state = NavigationState.PENDING_KEY
            self._navigation_key = key
        return self.try_resolve_navigation()

    def try_resolve_navigation(self) -> bool:
        if self._navigation_state is NavigationState.IDLE or not self.ui_regions:
            return False
        if self._navigation_state is NavigationState.PENDING_CLEAR:
            self._set_idle()
            self._broadcast_selection(None)
            logger.debug("region %s navigation cleared", self.name)
            return True
        key = self._navigation_key
        item = self._get_item(key)
        view_model = item.view_model if item else None
        if view_model is None:
            logger.debug("region %s navigation to %s deferred", self.name, key)
            return False
        self._set_idle()
        self._selected_key = key
        logger.debug("region %s navigated to %s", self.name, key)
        self._broadcast_selection(view_model)
        return True

    def on_navigation(self, key: Optional[str], view_model: Any) -> None:
        self._selected_key = key
        if self._broadcasting:
            if view_model is not self._broadcast_view_model:
                self._reported_view_model = view_model
            return
        self._broadcast_selection(view_model)

    # --- serialization ---------------------------------------------------

    @property
    def logical_serialization_mode(self) -> LogicalSerializationMode:
        return self._logical_serialization_mode

    @logical_serialization_mode.setter
    def logical_serialization_mode(self, mode: LogicalSerializationMode) -> None:
        self._logical_serialization_mode = LogicalSerializationMode(mode)

    @property
    def visual_serialization_mode(self) -> VisualSerializationMode:
        return self._visual_serialization_mode

    @visual_serialization_mode.setter
    def visual_serialization_mode(self, mode: VisualSerializationMode) -> None:
        self._visual_serialization_mode = VisualSerializationMode(mode)

    def set_logical_serialization_mode(self, key: str, mode: Optional[LogicalSerializationMode]) -> None:
        _set_custom_mode(
            self._custom_logical_modes, key, None if mode is None else LogicalSerializationMode(mode)
        )

    def set_visual_serialization_mode(self, key: str, mode: Optional[VisualSerializationMode]) -> None:
        _set_custom_mode(
            self._custom_visual_modes, key, None if mode is None else VisualSerializationMode(mode)
        )

    def get_logical_serialization_mode(self, key: Optional[str]) -> LogicalSerializationMode:
        return _get_mode(self._custom_logical_modes, key, self.logical_serialization_mode)

    def get_visual_serialization_mode(self, key: Optional[str]) -> VisualSerializationMode:
        return _get_mode(self._custom_visual_modes, key, self.visual_serialization_mode)

    def get_info(self) -> Tuple[RegionInfo, RegionVisualInfo]:
        logical = RegionInfo(region_name=self.name)
        if self.logical_serialization_mode is LogicalSerializationMode.ENABLED:
            logical.selected_key = self._selected_key
        for item in self._items:
            if self.get_logical_serialization_mode(item.key) is LogicalSerializationMode.DISABLED:
                continue
            item_info = item.capture_logical_info()
            if item_info is not None:
                logical.items.append(item_info)

        self._flush_visual_state()
        return logical, copy.deepcopy(self._visual_state)

    def set_info(self, logical: Optional[RegionInfo], visual: Optional[RegionVisualInfo]) -> None:
        if visual is None:
            self._visual_state = RegionVisualInfo(region_name=self.name)
        elif visual.region_name != self.name:
            logger.debug(
                "region %s kept visual state; payload tagged %s", self.name, visual.region_name
            )
        else:
            self._visual_state = copy.deepcopy(visual)

        if logical is None:
            return
        for item_info in logical.items:
            if self.get_logical_serialization_mode(item_info.key) is LogicalSerializationMode.DISABLED:
                continue
            if self.contains(item_info.key):
                logger.warning("region %s already contains key %s; restore skipped", self.name, item_info.key)
                continue
            self._items.append(
                RegionItem.from_info(
                    item_info,
                    view_model_locator=self._view_model_locator,
                    view_locator=self._view_locator,
                    serializer=self._serializer,
                )
            )
        self._restore_selected_key = logical.selected_key

    def apply_info(self, inject: bool, navigate: bool) -> None:
        if not self._items:
            return
        if inject:
            for item in list(self._items):
                self._for_each_adapter(item.inject)
        if navigate:
            key, self._restore_selected_key = self._restore_selected_key, None
            self.navigate(key)

    def save_visual_state(self, view_model: Any, view_part: Optional[str], state: Optional[str]) -> None:
        item = self._get_item_by_view_model(view_model)
        if item is None:
            return
        info = self._get_visual_info(item, view_part, create=True)
        if info is None:
            return
        info.state = state

    def get_saved_visual_state(self, view_model: Any, view_part: Optional[str]) -> Optional[str]:
        item = self._get_item_by_view_model(view_model)
        if item is None:
            return None
        info = self._get_visual_info(item, view_part, create=False)
        return info.state if info else None

    # --- helpers ---------------------------------------------------------

    def _get_visual_info(
        self, item: RegionItem, view_part: Optional[str], *, create: bool
    ) -> Optional[RegionItemVisualInfo]:
        mode = self.get_visual_serialization_mode(item.key)
        if mode is VisualSerializationMode.DISABLED:
            return None
        entry_key = item.key if mode is VisualSerializationMode.PER_KEY else None
        view_name = item.get_view_name()
        info = self._visual_state.find(entry_key, view_name, view_part)
        if info is None and create:
            info = RegionItemVisualInfo(view_name=view_name, view_part=view_part, key=entry_key)
            self._visual_state.items.append(info)
        return info

    def _flush_visual_state(self) -> None:
        services = []
        for view_model in self.view_models:
            services.extend(visual_state_services(view_model))
        for service in services:
            service.enforce_save_state()

    def _broadcast_selection(
        self, view_model: Any, adapters: Optional[List[UIRegion]] = None, *, follow_report: bool = True
    ) -> None:
        """Push ``view_model`` into every adapter, newest first.

        A navigation started by an adapter mid-broadcast supersedes this one,
        and the remaining adapters are left to it. An adapter that reports a
        different selection while the broadcast runs gets that selection
        pushed to everyone once the loop ends.
        """
        self._broadcast_serial += 1
        serial = self._broadcast_serial
        self._reported_view_model = _NOTHING_REPORTED
        targets = list(reversed(self.ui_regions)) if adapters is None else adapters
        with self._selection_broadcast(view_model):
            for adapter in targets:
                if serial != self._broadcast_serial:
                    return
                adapter.selected_view_model = view_model
        reported, self._reported_view_model = self._reported_view_model, _NOTHING_REPORTED
        if follow_report and reported is not _NOTHING_REPORTED and serial == self._broadcast_serial:
            logger.debug("region %s following selection reported during broadcast", self.name)
            self._broadcast_selection(reported, follow_report=False)

    @contextmanager
    def _selection_broadcast(self, view_model: Any) -> Iterator[None]:
        previous = self._broadcasting, self._broadcast_view_model
        self._broadcasting = True
        self._broadcast_view_model = view_model
        try:
            yield
        finally:
            self._broadcasting, self._broadcast_view_model = previous

    def _for_each_adapter(self, action: Callable[[UIRegion], None]) -> None:
        for adapter in reversed(self.ui_regions):
            action(adapter)

    def _set_idle(self) -> None:
        self._navigation_state = NavigationState.IDLE
        self._navigation_key = None

    def _get_item(self, key: Optional[str]) -> Optional[RegionItem]:
        if key is None:
            return None
        for item in self._items:
            if item.key == key:
                return item
        return None

    def _get_item_by_view_model(self, view_model: Any) -> Optional[RegionItem]:
        if view_model is None:
            return None
        for item in self._items:
            if item.view_model is view_model:
                return item
        return None

    def __repr__(self) -> str:
        return f"Region(name={self.name!r}, keys={self.keys!r}, selected_key={self._selected_key!r})"


def _set_custom_mode(storage: Dict[str, M], key: str, mode: Optional[M]) -> None:
    if mode is None:
        storage.pop(key, None)
        return
    storage[key] = mode


def _get_mode(storage: Dict[str, M], key: Optional[str], default: M) -> M:
    if key is not None and key in storage:
        return storage[key]
    return default
