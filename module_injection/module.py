from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class Module:
    """Live descriptor of something that can be injected into a region.

    The view-model comes from ``view_model_factory`` when given, otherwise it
    is resolved by ``view_model_name``. The view is either a concrete
    ``view_type`` or a ``view_name`` resolved through the view locator.
    """

    key: str
    view_model_factory: Optional[Callable[[], Any]] = None
    view_model_name: Optional[str] = None
    view_name: Optional[str] = None
    view_type: Optional[type] = None

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key:
            raise ValueError("Module key must be a non-empty string")
        if self.view_model_factory is None and not self.view_model_name:
            raise ValueError(f"Module '{self.key}' needs a view_model_factory or a view_model_name")
