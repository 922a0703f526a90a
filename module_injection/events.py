from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

ANY_REGION = "*"


@dataclass(frozen=True, slots=True)
class NavigationEventArgs:
    """Selection change reported by an adapter."""

    region_name: str
    old_view_model: Any = None
    new_view_model: Any = None
    old_key: Optional[str] = None
    new_key: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "region_name": self.region_name,
            "old_key": self.old_key,
            "new_key": self.new_key,
        }


NavigationHandler = Callable[[NavigationEventArgs], None]


class NavigationBus:
    """In-process fan-out of navigation events, filtered by region name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscribers: Dict[str, tuple[str, NavigationHandler]] = {}

    def subscribe(self, region_name: str, handler: NavigationHandler) -> str:
        sub_id = str(uuid.uuid4())
        with self._lock:
            self._subscribers[sub_id] = (region_name, handler)
        return sub_id

    def unsubscribe(self, sub_id: str) -> None:
        with self._lock:
            self._subscribers.pop(sub_id, None)

    def publish(self, event: NavigationEventArgs) -> int:
        handlers = self._copy_handlers(event.region_name)
        for handler in handlers:
            try:
                handler(event)
            except Exception as exc:
                logger.error("navigation handler error on %s: %s", event.region_name, exc)
        return len(handlers)

    def _copy_handlers(self, region_name: str) -> List[NavigationHandler]:
        with self._lock:
            return [
                handler
                for name, handler in self._subscribers.values()
                if name == region_name or name == ANY_REGION
            ]
