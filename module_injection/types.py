from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional, Protocol, runtime_checkable


class LogicalSerializationMode(str, Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"


class VisualSerializationMode(str, Enum):
    DISABLED = "disabled"
    PER_VIEW_TYPE = "per_view_type"
    PER_KEY = "per_key"


class MessageBoxResult(str, Enum):
    NONE = "none"
    OK = "ok"
    CANCEL = "cancel"
    YES = "yes"
    NO = "no"


@runtime_checkable
class UIRegion(Protocol):
    """A UI surface that displays the view-models of one region."""

    region_name: str

    @property
    def view_models(self) -> Iterable[Any]:
        ...

    @property
    def selected_view_model(self) -> Any:
        ...

    @selected_view_model.setter
    def selected_view_model(self, value: Any) -> None:
        ...

    def inject(self, view_model: Any, view_type: Optional[type]) -> None:
        ...

    def remove(self, view_model: Any) -> None:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class UIWindowRegion(UIRegion, Protocol):
    """Window-flavored surface carrying a one-shot dialog result."""

    @property
    def result(self) -> Optional[MessageBoxResult]:
        ...

    def set_result(self, result: MessageBoxResult) -> None:
        ...


class ViewModelLocator(Protocol):
    def resolve(self, name: str) -> Optional[Any]:  # pragma: no cover - interface
        ...

    def type_name(self, cls: type) -> str:  # pragma: no cover - interface
        ...


class ViewLocator(Protocol):
    def resolve(self, view_name: str) -> Optional[type]:  # pragma: no cover - interface
        ...

    def type_name(self, cls: type) -> str:  # pragma: no cover - interface
        ...


class StateSerializer(Protocol):
    def serialize(self, state: Any, cls: type) -> str:  # pragma: no cover - interface
        ...

    def deserialize(self, text: str, cls: type) -> Any:  # pragma: no cover - interface
        ...
