import gc

import pytest

from module_injection.weak_refs import WeakReferenceManager


class Target:
    def __init__(self, name: str) -> None:
        self.name = name


def test_add_is_idempotent_and_ignores_none() -> None:
    manager = WeakReferenceManager()
    target = Target("a")
    manager.add(target)
    manager.add(target)
    manager.add(None)
    assert manager.get() == [target]
    assert len(manager) == 1


def test_get_returns_registration_order_snapshot() -> None:
    manager = WeakReferenceManager()
    targets = [Target(str(i)) for i in range(3)]
    for target in targets:
        manager.add(target)
    snapshot = manager.get()
    for target in snapshot:
        manager.remove(target)
    assert [t.name for t in snapshot] == ["0", "1", "2"]
    assert manager.get() == []


def test_contains_is_identity_based() -> None:
    manager = WeakReferenceManager()
    first = Target("same")
    second = Target("same")
    manager.add(first)
    assert manager.contains(first)
    assert not manager.contains(second)
    assert not manager.contains(None)


def test_remove_unknown_is_noop() -> None:
    manager = WeakReferenceManager()
    kept = Target("kept")
    manager.add(kept)
    manager.remove(Target("other"))
    manager.remove(None)
    assert manager.get() == [kept]


def test_dead_targets_never_returned() -> None:
    manager = WeakReferenceManager()
    survivors = []
    for index in range(6):
        target = Target(str(index))
        manager.add(target)
        if index % 2 == 0:
            survivors.append(target)
        del target
    gc.collect()
    assert [t.name for t in manager.get()] == ["0", "2", "4"]

    survivors.pop(1)
    gc.collect()
    assert [t.name for t in manager.get()] == ["0", "4"]
    assert len(manager) == 2


def test_dead_entry_does_not_block_readding() -> None:
    manager = WeakReferenceManager()
    target = Target("x")
    manager.add(target)
    del target
    gc.collect()
    fresh = Target("x")
    manager.add(fresh)
    assert manager.get() == [fresh]


def test_rejects_objects_without_weakref_support() -> None:
    manager = WeakReferenceManager()
    with pytest.raises(TypeError):
        manager.add(42)
