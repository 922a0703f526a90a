from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class RegionItemInfo:
    """Persisted identity and captured data of one region item."""

    key: str
    view_model_name: Optional[str] = None
    view_name: Optional[str] = None
    view_model_state_type: Optional[str] = None
    view_model_state: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "key": self.key,
            "viewModelName": self.view_model_name,
            "viewName": self.view_name,
            "viewModelStateType": self.view_model_state_type,
            "viewModelState": self.view_model_state,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> Optional["RegionItemInfo"]:
        if not isinstance(data, dict):
            return None
        key = _optional_key(data.get("key"))
        if not key:
            return None
        return cls(
            key=key,
            view_model_name=_optional_key(data.get("viewModelName")),
            view_name=_optional_key(data.get("viewName")),
            view_model_state_type=_optional_key(data.get("viewModelStateType")),
            view_model_state=_optional_raw_str(data.get("viewModelState")),
        )


@dataclass
class RegionInfo:
    region_name: str
    selected_key: Optional[str] = None
    items: List[RegionItemInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "regionName": self.region_name,
            "selectedKey": self.selected_key,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object], region_name: Optional[str] = None) -> Optional["RegionInfo"]:
        if not isinstance(data, dict):
            return None
        name = _optional_key(data.get("regionName")) or region_name or ""
        items: List[RegionItemInfo] = []
        raw_items = data.get("items")
        if isinstance(raw_items, list):
            for raw in raw_items:
                item = RegionItemInfo.from_dict(raw)
                if item is not None:
                    items.append(item)
        return cls(
            region_name=name,
            selected_key=_optional_key(data.get("selectedKey")),
            items=items,
        )


@dataclass
class RegionItemVisualInfo:
    """Layout state for a (view, part) pair; ``key`` is set only per key."""

    view_name: Optional[str]
    view_part: Optional[str]
    key: Optional[str] = None
    state: Optional[str] = None

    def matches(self, key: Optional[str], view_name: Optional[str], view_part: Optional[str]) -> bool:
        return self.key == key and self.view_name == view_name and self.view_part == view_part

    def to_dict(self) -> Dict[str, object]:
        return {
            "key": self.key,
            "viewName": self.view_name,
            "viewPart": self.view_part,
            "state": self.state,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> Optional["RegionItemVisualInfo"]:
        if not isinstance(data, dict):
            return None
        return cls(
            view_name=_optional_key(data.get("viewName")),
            view_part=_optional_key(data.get("viewPart")),
            key=_optional_key(data.get("key")),
            state=_optional_raw_str(data.get("state")),
        )


@dataclass
class RegionVisualInfo:
    region_name: str
    items: List[RegionItemVisualInfo] = field(default_factory=list)

    def find(
        self, key: Optional[str], view_name: Optional[str], view_part: Optional[str]
    ) -> Optional[RegionItemVisualInfo]:
        for item in self.items:
            if item.matches(key, view_name, view_part):
                return item
        return None

    def to_dict(self) -> Dict[str, object]:
        return {
            "regionName": self.region_name,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> Optional["RegionVisualInfo"]:
        if not isinstance(data, dict):
            return None
        items: List[RegionItemVisualInfo] = []
        raw_items = data.get("items")
        if isinstance(raw_items, list):
            for raw in raw_items:
                item = RegionItemVisualInfo.from_dict(raw)
                if item is not None:
                    items.append(item)
        return cls(region_name=_optional_key(data.get("regionName")) or "", items=items)


def _optional_key(value) -> Optional[str]:
    # Identity fields round-trip verbatim; anything but a string is dropped.
    return value if isinstance(value, str) else None


def _optional_raw_str(value) -> Optional[str]:
    # Blobs are opaque: keep whitespace untouched.
    if value is None:
        return None
    return str(value)
