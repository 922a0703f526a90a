from __future__ import annotations

import logging
import weakref
from typing import Any, Callable, Optional

from . import capabilities
from .errors import CapabilityError, NullResolutionError
from .info import RegionItemInfo
from .module import Module
from .serializer import resolve_type_tag, type_tag
from .types import StateSerializer, UIRegion, ViewLocator, ViewModelLocator

logger = logging.getLogger(__name__)


class RegionItem:
    """One logical (key, view-model) binding owned by a region.

    The view-model is created on first injection and held weakly afterwards;
    whoever the adapters are keeps it alive. Realization happens once.
    """

    def __init__(
        self,
        key: str,
        *,
        view_model_locator: ViewModelLocator,
        view_locator: ViewLocator,
        serializer: StateSerializer,
        factory: Optional[Callable[[], Any]] = None,
        view_model_name: Optional[str] = None,
        view_type: Optional[type] = None,
        view_name: Optional[str] = None,
        parameter: Any = None,
    ) -> None:
        self.key = key
        self._view_model_locator = view_model_locator
        self._view_locator = view_locator
        self._serializer = serializer

        self._factory = factory
        self._view_model_name = None if factory is not None else view_model_name
        self._view_type = view_type
        self._view_name = None if view_type is not None else view_name
        self._parameter = parameter
        self._pending_state: Any = None
        self._view_model_ref: Optional[weakref.ref] = None
        self._realized = False

    @classmethod
    def from_module(
        cls,
        module: Module,
        parameter: Any,
        *,
        view_model_locator: ViewModelLocator,
        view_locator: ViewLocator,
        serializer: StateSerializer,
    ) -> "RegionItem":
        return cls(
            module.key,
            view_model_locator=view_model_locator,
            view_locator=view_locator,
            serializer=serializer,
            factory=module.view_model_factory,
            view_model_name=module.view_model_name,
            view_type=module.view_type,
            view_name=module.view_name,
            parameter=parameter,
        )

    @classmethod
    def from_info(
        cls,
        info: RegionItemInfo,
        *,
        view_model_locator: ViewModelLocator,
        view_locator: ViewLocator,
        serializer: StateSerializer,
    ) -> "RegionItem":
        item = cls(
            info.key,
            view_model_locator=view_model_locator,
            view_locator=view_locator,
            serializer=serializer,
            view_model_name=info.view_model_name,
            view_name=info.view_name,
        )
        item._load_state(info.view_model_state, info.view_model_state_type)
        return item

    @property
    def view_model(self) -> Any:
        if self._view_model_ref is None:
            return None
        return self._view_model_ref()

    @property
    def view_model_name(self) -> Optional[str]:
        return self._view_model_name

    @property
    def view_type(self) -> Optional[type]:
        return self._view_type

    @property
    def is_realized(self) -> bool:
        return self._realized

    def get_view_name(self) -> Optional[str]:
        self._init_view_name()
        return self._view_name

    def realize(self) -> Any:
        if self._realized:
            return self.view_model
        if self._factory is not None:
            view_model = self._factory()
            source = "factory"
        elif self._view_model_name:
            view_model = self._view_model_locator.resolve(self._view_model_name)
            source = f"locator '{self._view_model_name}'"
        else:
            view_model = None
            source = "descriptor"
        if view_model is None:
            raise NullResolutionError(self.key, source)

        self._apply_parameter(view_model)
        self._view_model_ref = weakref.ref(view_model)
        self._realized = True
        if not self._view_model_name:
            self._view_model_name = self._view_model_locator.type_name(type(view_model))
        self._init_view_type()
        self._init_view_name()
        logger.debug("region item realized key=%s view_model=%s", self.key, self._view_model_name)
        return view_model

    def inject(self, adapter: UIRegion) -> None:
        if not self._realized:
            view_model = self.realize()
        else:
            view_model = self.view_model
            if view_model is None:
                logger.debug("region item view-model collected key=%s; skipping inject", self.key)
                return
        if self._pending_state is not None:
            state, self._pending_state = self._pending_state, None
            capabilities.restore_state(view_model, state)
        adapter.inject(view_model, self._view_type)

    def capture_logical_info(self) -> Optional[RegionItemInfo]:
        view_model = self.view_model
        if view_model is None:
            return None
        info = RegionItemInfo(
            key=self.key,
            view_model_name=self._view_model_name,
            view_name=self._view_name,
        )
        state = capabilities.capture_state(view_model)
        if state is not None:
            info.view_model_state = self._serializer.serialize(state, type(state))
            info.view_model_state_type = type_tag(type(state))
        return info

    def _apply_parameter(self, view_model: Any) -> None:
        if self._parameter is None:
            return
        if not capabilities.detect_capabilities(view_model).accepts_parameter:
            raise CapabilityError(self.key, view_model)
        parameter, self._parameter = self._parameter, None
        view_model.set_parameter(parameter)

    def _load_state(self, state: Optional[str], state_type: Optional[str]) -> None:
        if not state or not state_type:
            return
        self._pending_state = self._serializer.deserialize(state, resolve_type_tag(state_type))

    def _init_view_type(self) -> None:
        if self._view_type is not None or not self._view_name:
            return
        self._view_type = self._view_locator.resolve(self._view_name)

    def _init_view_name(self) -> None:
        if self._view_name:
            return
        if self._view_type is None:
            self._view_name = None
            return
        self._view_name = self._view_locator.type_name(self._view_type)

    def __repr__(self) -> str:
        return f"RegionItem(key={self.key!r}, realized={self._realized})"
