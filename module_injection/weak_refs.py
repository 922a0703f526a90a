from __future__ import annotations

import logging
import weakref
from typing import Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WeakReferenceManager(Generic[T]):
    """Non-owning registry; dead entries are swept on every access."""

    def __init__(self) -> None:
        self._refs: List[weakref.ref] = []

    def add(self, target: Optional[T]) -> None:
        self._prune()
        if target is None or self._find(target) is not None:
            return
        self._refs.append(weakref.ref(target))

    def remove(self, target: Optional[T]) -> None:
        self._prune()
        if target is None:
            return
        ref = self._find(target)
        if ref is not None:
            self._refs.remove(ref)

    def contains(self, target: Optional[T]) -> bool:
        self._prune()
        if target is None:
            return False
        return self._find(target) is not None

    def get(self) -> List[T]:
        self._prune()
        alive: List[T] = []
        for ref in self._refs:
            target = ref()
            if target is not None:
                alive.append(target)
        return alive

    def __len__(self) -> int:
        return len(self.get())

    def _find(self, target: T) -> Optional[weakref.ref]:
        for ref in self._refs:
            if ref() is target:
                return ref
        return None

    def _prune(self) -> None:
        before = len(self._refs)
        self._refs = [ref for ref in self._refs if ref() is not None]
        dropped = before - len(self._refs)
        if dropped:
            logger.debug("weak registry pruned %d dead entries", dropped)
