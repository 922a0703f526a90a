from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import RegionConfig, load_region_config
from .errors import ModuleInjectionError
from .events import NavigationBus, NavigationEventArgs, NavigationHandler
from .info import RegionInfo, RegionVisualInfo
from .locators import ViewModelRegistry, ViewRegistry
from .logging_setup import configure_logging
from .module import Module
from .region import Region
from .serializer import JsonStateSerializer
from .types import StateSerializer, UIRegion, ViewLocator, ViewModelLocator

logger = logging.getLogger(__name__)


class ModuleManager:
    """Owns the regions of one application shell.

    Supplies locators and the state serializer to every region, keeps a
    per-region catalog of injectable modules and routes adapters to their
    region by name. Adapters are handed in explicitly.
    """

    def __init__(
        self,
        view_model_locator: Optional[ViewModelLocator] = None,
        view_locator: Optional[ViewLocator] = None,
        serializer: Optional[StateSerializer] = None,
        *,
        bus: Optional[NavigationBus] = None,
        config: Optional[RegionConfig] = None,
    ) -> None:
        self.view_model_locator = view_model_locator or ViewModelRegistry()
        self.view_locator = view_locator or ViewRegistry()
        self.serializer = serializer or JsonStateSerializer()
        self.bus = bus or NavigationBus()
        self.config = config or RegionConfig()
        self._regions: Dict[str, Region] = {}
        self._modules: Dict[str, Dict[str, Module]] = {}

    @classmethod
    def from_config(
        cls,
        config_path: Optional[Path] = None,
        *,
        log_path: Optional[Path] = None,
        **kwargs: Any,
    ) -> "ModuleManager":
        """Load the region config, set up package logging at its level and build a manager."""
        config = load_region_config(config_path)
        info = configure_logging(log_path, level=config.log_level)
        logger.info("module manager bootstrapped level=%s handlers=%s", info["level"], info["handlers"])
        return cls(config=config, **kwargs)

    @property
    def regions(self) -> List[Region]:
        return list(self._regions.values())

    def get_region(self, region_name: str) -> Region:
        region = self._regions.get(region_name)
        if region is None:
            region = Region(
                region_name,
                self.view_model_locator,
                self.view_locator,
                self.serializer,
                logical_serialization_mode=self.config.logical_serialization_mode,
                visual_serialization_mode=self.config.visual_serialization_mode,
            )
            self._regions[region_name] = region
            logger.debug("region created name=%s", region_name)
        return region

    # --- module catalog --------------------------------------------------

    def register(self, region_name: str, module: Module) -> None:
        self._modules.setdefault(region_name, {})[module.key] = module

    def unregister(self, region_name: str, key: str) -> None:
        modules = self._modules.get(region_name, {})
        if modules.pop(key, None) is None:
            return
        if region_name in self._regions:
            self._regions[region_name].remove(key)

    def get_module(self, region_name: str, key: str) -> Optional[Module]:
        return self._modules.get(region_name, {}).get(key)

    def is_registered(self, region_name: str, key: str) -> bool:
        return self.get_module(region_name, key) is not None

    # --- region operations -----------------------------------------------

    def inject(self, region_name: str, key: str, parameter: Any = None) -> None:
        module = self.get_module(region_name, key)
        if module is None:
            raise ModuleInjectionError(f"Module '{key}' is not registered in region '{region_name}'")
        self.get_region(region_name).inject(module, parameter)

    def navigate(self, region_name: str, key: Optional[str]) -> bool:
        return self.get_region(region_name).navigate(key)

    def remove(self, region_name: str, key: str) -> None:
        self.get_region(region_name).remove(key)

    def clear(self, region_name: str) -> None:
        self.get_region(region_name).clear()

    # --- adapters --------------------------------------------------------

    def register_adapter(self, adapter: UIRegion) -> Region:
        region = self.get_region(adapter.region_name)
        region.register_adapter(adapter)
        return region

    def unregister_adapter(self, adapter: UIRegion) -> None:
        region = self._regions.get(adapter.region_name)
        if region is not None:
            region.unregister_adapter(adapter)

    # --- navigation events -----------------------------------------------

    def subscribe(self, region_name: str, handler: NavigationHandler) -> str:
        return self.bus.subscribe(region_name, handler)

    def unsubscribe(self, sub_id: str) -> None:
        self.bus.unsubscribe(sub_id)

    def on_selection_changed(self, region_name: str, old_view_model: Any, new_view_model: Any) -> None:
        region = self.get_region(region_name)
        self.on_navigation(
            region_name,
            NavigationEventArgs(
                region_name=region_name,
                old_view_model=old_view_model,
                new_view_model=new_view_model,
                old_key=region.get_key(old_view_model),
                new_key=region.get_key(new_view_model),
            ),
        )

    def on_navigation(self, region_name: str, event: NavigationEventArgs) -> None:
        self.get_region(region_name).on_navigation(event.new_key, event.new_view_model)
        self.bus.publish(event)

    # --- persistence -----------------------------------------------------

    def save_state(self) -> Tuple[Dict[str, Dict[str, object]], Dict[str, Dict[str, object]]]:
        logical: Dict[str, Dict[str, object]] = {}
        visual: Dict[str, Dict[str, object]] = {}
        for name, region in self._regions.items():
            region_logical, region_visual = region.get_info()
            logical[name] = region_logical.to_dict()
            visual[name] = region_visual.to_dict()
        return logical, visual

    def restore_state(
        self,
        logical: Optional[Dict[str, Dict[str, object]]],
        visual: Optional[Dict[str, Dict[str, object]]],
        *,
        inject: bool = True,
        navigate: bool = True,
    ) -> None:
        logical = logical or {}
        visual = visual or {}
        names = list(logical.keys()) + [name for name in visual.keys() if name not in logical]
        for name in names:
            region = self.get_region(name)
            region.set_info(
                RegionInfo.from_dict(logical.get(name), region_name=name),
                RegionVisualInfo.from_dict(visual.get(name)),
            )
            region.apply_info(inject, navigate)
