from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class AcceptsParameter(Protocol):
    def set_parameter(self, parameter: Any) -> None:
        ...


@runtime_checkable
class CapturesState(Protocol):
    def get_state(self) -> Any:
        ...


@runtime_checkable
class RestoresState(Protocol):
    def restore_state(self, state: Any) -> None:
        ...


@runtime_checkable
class FlushesVisualState(Protocol):
    """View-side helper that pushes pending layout state into its region."""

    def enforce_save_state(self) -> None:
        ...


@dataclass(frozen=True)
class Capabilities:
    accepts_parameter: bool = False
    captures_state: bool = False
    restores_state: bool = False


def detect_capabilities(view_model: Any) -> Capabilities:
    if view_model is None:
        return Capabilities()
    return Capabilities(
        accepts_parameter=isinstance(view_model, AcceptsParameter),
        captures_state=isinstance(view_model, CapturesState),
        restores_state=isinstance(view_model, RestoresState),
    )


def capture_state(view_model: Any) -> Optional[Any]:
    if not detect_capabilities(view_model).captures_state:
        return None
    return view_model.get_state()


def restore_state(view_model: Any, state: Any) -> bool:
    if state is None or not detect_capabilities(view_model).restores_state:
        return False
    view_model.restore_state(state)
    return True


def visual_state_services(view_model: Any) -> List[FlushesVisualState]:
    """Collect the visual-state helpers a view-model exposes.

    A view-model either flushes its own visual state or lists helpers in a
    ``visual_state_services`` attribute.
    """
    services: List[FlushesVisualState] = []
    if isinstance(view_model, FlushesVisualState):
        services.append(view_model)
    extra: Iterable[Any] = getattr(view_model, "visual_state_services", None) or ()
    for service in extra:
        if isinstance(service, FlushesVisualState) and not any(s is service for s in services):
            services.append(service)
    return services
