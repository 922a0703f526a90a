"""Region-based navigation and view-model injection for multi-surface UIs."""

from .config import RegionConfig, load_region_config, save_region_config
from .errors import CapabilityError, ModuleInjectionError, NullResolutionError
from .events import NavigationBus, NavigationEventArgs
from .info import RegionInfo, RegionItemInfo, RegionItemVisualInfo, RegionVisualInfo
from .locators import ViewModelRegistry, ViewRegistry
from .manager import ModuleManager
from .module import Module
from .region import NavigationState, Region
from .region_item import RegionItem
from .serializer import JsonStateSerializer
from .types import (
    LogicalSerializationMode,
    MessageBoxResult,
    UIRegion,
    UIWindowRegion,
    VisualSerializationMode,
)
from .weak_refs import WeakReferenceManager

__all__ = [
    "RegionConfig",
    "load_region_config",
    "save_region_config",
    "CapabilityError",
    "ModuleInjectionError",
    "NullResolutionError",
    "NavigationBus",
    "NavigationEventArgs",
    "RegionInfo",
    "RegionItemInfo",
    "RegionItemVisualInfo",
    "RegionVisualInfo",
    "ViewModelRegistry",
    "ViewRegistry",
    "ModuleManager",
    "Module",
    "NavigationState",
    "Region",
    "RegionItem",
    "JsonStateSerializer",
    "LogicalSerializationMode",
    "MessageBoxResult",
    "UIRegion",
    "UIWindowRegion",
    "VisualSerializationMode",
    "WeakReferenceManager",
]
